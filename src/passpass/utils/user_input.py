import getpass
import re
import sys

from passpass.config.config_vault import UTF8


def read_label_val(label: str) -> str:
    """Print a label and read one line of input."""
    return input(f"{label}: ")


def prompt_passphrase(label: str = "master password") -> bytes:
    """
    Read a passphrase without echo.

    Falls back to a plain line read when stdin is not a terminal, e.g.
    when input is piped.

    Args:
        label: Text displayed to the user.

    Returns:
        The passphrase as UTF-8 bytes.
    """
    if sys.stdin is not None and sys.stdin.isatty():
        pw = getpass.getpass(f"{label}: ")
    else:
        pw = read_label_val(label)
    return pw.encode(UTF8)


def confirm_passphrase(label: str = "repeat master password") -> bytes:
    """Second read of a passphrase, used on vault creation and rekeying."""
    return prompt_passphrase(label)


def get_int(prompt: str, default=None, cancel: str = "c"):
    """
    Prompt the user until a valid non-negative integer is entered.

    Allows the user to press Enter to accept a default value if provided.
    Rejects any input containing non-digit characters.

    Args:
        prompt: Text displayed to the user.
        default: Value returned if the user submits empty input. If None,
            the prompt repeats until a valid integer is entered.
        cancel: Input that aborts the prompt.

    Returns:
        An integer parsed from user input, the default value if accepted,
        or None if the user enters the cancel string.
    """
    while True:
        val = input(prompt).strip()

        # User hit enter for default value
        if not val and default is not None:
            return default
        if re.fullmatch(r"[0-9]+", val):
            return int(val)
        if val == cancel:
            return None

        print(f"   Invalid - numbers only  ({cancel}) to cancel")
