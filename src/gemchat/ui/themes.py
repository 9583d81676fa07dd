"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark slate palette with Gemini-style blue and violet accents
GEMCHAT_DARK = Theme(
    name="gemchat-dark",
    primary="#8ab4f8",      # Blue - main accent, user messages
    secondary="#c58af9",    # Violet - assistant messages
    accent="#fdd663",       # Amber - highlights
    foreground="#e8eaed",   # Light text
    background="#131314",   # Deepest background
    success="#81c995",      # Green - send button
    warning="#fcad70",      # Orange - log panel, warnings
    error="#f28b82",        # Red - error entries and toasts
    surface="#1e1f20",      # Main surface
    panel="#202124",        # Panel backgrounds
    dark=True,
    variables={
        "input-cursor-background": "#e8eaed",
        "input-cursor-foreground": "#131314",
        "input-selection-background": "#8ab4f8 30%",

        "border": "#3c4043",
        "border-blurred": "#2d2e30",

        "scrollbar": "#2d2e30",
        "scrollbar-hover": "#3c4043",
        "scrollbar-active": "#8ab4f8",
        "scrollbar-background": "#202124",

        "footer-key-foreground": "#fdd663",
        "footer-description-foreground": "#9aa0a6",

        "text-muted": "#9aa0a6",
    },
)
