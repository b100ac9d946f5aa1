"""Provides functions for loading and accessing cache configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.tiercache/config.yaml). Values are read lazily on the
first lookup.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".tiercache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_CACHE_DIR = DEFAULT_CONFIG_DIR / "cache"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "TIERCACHE_"

DEFAULT_BACKEND = "file"
DEFAULT_SERIALIZER = "pickle"
DEFAULT_LOG_LEVEL = "INFO"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from a YAML file and a .env file.

    Priority order (highest to lowest):
    1. Test overrides
    2. Environment Variables (TIERCACHE_<KEY>)
    3. .env file
    4. YAML configuration file
    5. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above current directory.")

    # 3. Environment Variables (Highest priority) are handled in get_config
    _loaded = True


def _flatten(data: Dict[str, Any], parent: str = "") -> Dict[str, Any]:
    """Flattens nested YAML sections into dotted keys ('cache': {'dir': x} -> 'cache.dir')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{parent}.{key}" if parent else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


def env_var_name(key: str) -> str:
    """Maps a dotted config key to its environment variable ('cache.dir' -> 'TIERCACHE_CACHE_DIR')."""
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable
    3. YAML config
    4. Default value

    Args:
        key: The dotted configuration key (e.g. 'cache.dir')
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    if not _loaded:
        load_configuration()

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_cache_backend() -> str:
    """Gets the cache tier to build: 'memory' or 'file'."""
    return str(get_config('cache.backend', DEFAULT_BACKEND)).lower()


def get_cache_dir() -> str:
    """Gets the base directory for cache files.

    Defaults to ~/.tiercache/cache. Only an explicitly empty setting maps to
    the system temp dir.
    """
    value = get_config('cache.dir', str(DEFAULT_CACHE_DIR))
    return str(Path(value).expanduser()) if value else ""


def get_cache_prefix() -> str:
    value = get_config('cache.prefix', "")
    return str(value) if value is not None else ""


def get_security_key() -> str:
    """Gets the salt for cache file names."""
    value = get_config('cache.security_key', "")
    return str(value) if value is not None else ""


def get_serializer_name() -> str:
    return str(get_config('cache.serializer', DEFAULT_SERIALIZER)).lower()


def get_log_level() -> str:
    return str(get_config('logging.level', DEFAULT_LOG_LEVEL)).upper()


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")


def reset_configuration() -> None:
    """Forget loaded values so the next lookup reloads from disk."""
    global _config, _loaded
    _config = {}
    _loaded = False
