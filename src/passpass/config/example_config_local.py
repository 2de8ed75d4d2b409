# Local configuration file overrides standard config values - never commit this file!
# Used for changing user defaults
from pathlib import Path

VAULT_FILE = Path.home() / "vaults" / "personal.passpass"
PASSWORD_LENGTH = 32
CLIPBOARD_TIMEOUT = 20

# Rename this file to config_local.py to enable it
