"""
passpass - a terminal password vault kept in a single encrypted file
"""
from passpass.config.config_vault import VERSION

__version__ = VERSION
