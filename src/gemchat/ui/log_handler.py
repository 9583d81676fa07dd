"""Routes standard logging records into the TUI log panel.

Records may be emitted from any thread; lines are handed to the app's
event loop with call_from_thread when needed.
"""

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .widgets import DebugPanel


class PanelLogHandler(logging.Handler):
    """logging.Handler that writes to a DebugPanel."""

    def __init__(self, panel: "DebugPanel", level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._panel = panel
        self._thread_id = threading.get_ident()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            component = record.name.rsplit(".", 1)[-1]
            if threading.get_ident() == self._thread_id:
                self._panel.log_line(component, message, record.levelno)
            else:
                self._panel.app.call_from_thread(
                    self._panel.log_line, component, message, record.levelno
                )
        except Exception:
            self.handleError(record)
