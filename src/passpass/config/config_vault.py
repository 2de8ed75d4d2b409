# config_vault.py
"""
Configuration constants
"""
import os
from pathlib import Path
# ==============================================================
# Vault settings
# ==============================================================
# Software version
VERSION = "0.1.0"

# Encrypted vault file. PASSPASS_VAULT overrides the home directory default.
VAULT_FILE = Path(os.environ.get("PASSPASS_VAULT",
                                 Path(os.environ.get("HOME", Path.home())) / ".__passpass"))

# SHA-256 rounds applied to the master password.
# Changing this will invalidate existing vaults!
KDF_ITERATIONS = 1000 * 1000

# AES-256 key size. DO NOT CHANGE
KEY_LEN = 32

# AES block size, used as CBC IV length. DO NOT CHANGE
IV_LEN = 16

# ==============================================================
# Password generation defaults
# ==============================================================
PASSWORD_LENGTH = 72               # Length of generated passwords
CHAR_CHOICES = {
    "numbers":      "0123456789",
    "lowers":       "abcdefghijklmnopqrstuvwxyz",
    "uppers":       "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "punctuations": ".!?,;-_",
    "spaces":       " ",
}

# ==============================================================
# Clipboard security
# ==============================================================
CLIPBOARD_TIMEOUT = 0              # Seconds before auto-clear, 0 = wait for Enter

# ==============================================================
# Display & formatting
# ==============================================================
UTF8 = "utf-8"
SEP_LG = "=" * 50
SEP_SM = "-" * 50

# ==============================================================
# Logging
# ==============================================================
LOG_FILE = Path(os.environ.get("HOME", Path.home())) / ".passpass_error.log"

# ==============================================================
# Optional: local overrides
# Local configuration file overrides standard config values
# ==============================================================
try:
    from passpass.config.config_local import *
except ImportError:
    pass  # No local config - use defaults above
