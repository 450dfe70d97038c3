"""Logging handlers for TUI integration."""

import logging
import threading
from typing import TYPE_CHECKING

from textual.message import Message

if TYPE_CHECKING:
    from g1c.tui.app import DashboardApp

logger = logging.getLogger(__name__)


class TuiLogMessage(Message):
    """Message delivering a log line to the dashboard status bar."""

    def __init__(self, text: str, levelno: int) -> None:
        self.text = text
        self.levelno = levelno
        super().__init__()


class TuiLogHandler(logging.Handler):
    """Logging handler that forwards records to the dashboard app.

    Parameters
    ----------
    app : DashboardApp
        Textual app instance
    level : int
        Minimum level forwarded (default: WARNING)
    """

    def __init__(self, app: "DashboardApp", level: int = logging.WARNING) -> None:
        super().__init__(level=level)
        self.app = app

    def emit(self, record: logging.LogRecord) -> None:
        """Emit log record to the TUI.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to emit
        """
        msg = self.format(record)

        try:
            if not getattr(self.app, "_running", False):
                return

            if self.app._thread_id == threading.get_ident():
                self.app.show_log_message(msg, record.levelno)
                return

            self.app.post_message(TuiLogMessage(msg, record.levelno))
        except (RuntimeError, AttributeError) as e:
            logger.debug("Error emitting log message to TUI: %s", e)
