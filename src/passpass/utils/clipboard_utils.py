import logging
import threading
import time

import pyperclip

from passpass.config.config_vault import CLIPBOARD_TIMEOUT
from passpass.config.logging_config import timestamp

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str, timeout: int = CLIPBOARD_TIMEOUT) -> bool:
    """
    Copy sensitive text to the system clipboard with optional auto-clear.

    If a timeout is specified, a background daemon thread clears the
    clipboard after the delay to reduce exposure of sensitive data.

    Args:
        text: Text to copy to the clipboard.
        timeout: Number of seconds before the clipboard is cleared.
            A value of 0 or less disables auto-clear.

    Returns:
        True if the text was copied, False if no clipboard is available.

    Security Notes:
        - Clipboard failures are logged, never fatal.
        - Some clipboard managers keep their own history.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.error(f"[{timestamp()}] Clipboard unavailable: {e}\n")
        return False

    if timeout > 0:
        def auto_clear():
            time.sleep(timeout)
            reset_clipboard()

        threading.Thread(target=auto_clear, daemon=True).start()

    return True


def reset_clipboard() -> None:
    """Overwrite the clipboard with an empty string."""
    try:
        pyperclip.copy("")
    except pyperclip.PyperclipException as e:
        logger.error(f"[{timestamp()}] Could not clear clipboard: {e}\n")
