"""Shared constants for keyring-ctl."""

APP_NAME = "keyring-ctl"
APP_VERSION = "0.1.0"

# Status lines
SECRET_CREATED_MSG = "secret created"
SECRET_UPDATED_MSG = "secret updated"
SECRET_DELETED_MSG = "secret deleted"

# Prompts and confirmation questions
SECRET_PROMPT = "enter secret: "
OVERWRITE_QUESTION = "secret exists, overwrite?"
DELETE_QUESTION = "delete secret?"
CONFIRM_SUFFIX = " [y/N] "

# Exit codes (sysexits.h)
EXIT_FAILURE = 1
EXIT_USAGE = 64
EXIT_IOERR = 74
EXIT_CONFIG = 78
EXIT_INTERRUPTED = 130

# Configuration
CONFIG_ENV_VAR = "KEYRING_CTL_CONFIG"
LOG_LEVEL_ENV_VAR = "KEYRING_CTL_LOG_LEVEL"
CONFIG_DIR_NAME = "keyring-ctl"
CONFIG_FILE_NAME = "config.yaml"

# Logging defaults
DEFAULT_LOG_LEVEL = "WARNING"
