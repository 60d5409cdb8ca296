"""Configuration file discovery and loading.

Resolution order for the file path: ``--config`` flag, then the
``KEYRING_CTL_CONFIG`` environment variable, then
``$XDG_CONFIG_HOME/keyring-ctl/config.yaml`` if it exists.  With no file
the built-in defaults apply.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from keyring_ctl.config.schema import CtlConfig
from keyring_ctl.constants import CONFIG_DIR_NAME, CONFIG_ENV_VAR, CONFIG_FILE_NAME
from keyring_ctl.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Recognised config file extensions.
_YAML_EXTS = frozenset({".yaml", ".yml"})


def default_config_path() -> str:
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def find_config_file(cli_path: Optional[str] = None) -> Optional[str]:
    """Return the config file to load, or ``None`` to use defaults.

    Explicitly named files (flag or env var) are returned even if missing
    so the loader can report them.
    """
    if cli_path:
        return cli_path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    candidate = default_config_path()
    if os.path.isfile(candidate):
        return candidate
    return None


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Read and parse a YAML config file from *cfg_fpath*.

    Raises :class:`ConfigurationError` on I/O or parse errors.  An empty
    file yields an empty mapping.
    """
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _YAML_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}'. "
            "Only YAML files (.yaml, .yml) are supported."
        )

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            "Top-level configuration content must be a YAML mapping (dictionary)."
        )
    return raw_data


def load_config(cli_path: Optional[str] = None) -> CtlConfig:
    """Locate, read and validate the configuration."""
    cfg_fpath = find_config_file(cli_path)
    if cfg_fpath is None:
        logger.debug("No configuration file found; using defaults.")
        return CtlConfig()

    raw_data = _read_config_file(cfg_fpath)
    try:
        config = CtlConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {cfg_fpath}:\n{exc}") from exc
    logger.debug("Configuration loaded from %s", os.path.abspath(cfg_fpath))
    return config
