"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout: the chat list fills the screen, the optional log panel sits
under it, and the input bar is docked at the bottom.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History - Scrolling Message List
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

.message-header {
    height: auto;
    text-style: bold;
}

.message-content {
    height: auto;
    color: $foreground;
}

.user-message {
    border-left: tall $primary;
    background: $primary 8%;

    & .message-header {
        color: $primary;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }
}

.error-message {
    border-left: tall $error;
    background: $error 10%;

    & .message-header {
        color: $error;
    }
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* ============================================
   Input Bar - Prompt + Mic + Send
   ============================================ */
ChatInputBar {
    dock: bottom;
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

#input-row {
    height: 3;
}

#chat-input {
    width: 1fr;

    &.-invalid {
        border: tall $error;
    }
}

#mic-btn {
    width: 7;
    min-width: 7;
    margin: 0 0 0 1;
}

#send-btn {
    width: 10;
    min-width: 8;
    margin: 0 0 0 1;
}

#input-error {
    height: auto;
    color: $error;
    padding: 0 1;
    display: none;

    &.-visible {
        display: block;
    }
}

Toast.-error {
    border: tall $error;
    background: $error 12%;
}
"""
