# mindmap_editor/config.py
# Description: Configuration management for the mindmap editor.
#
# Imports
import copy
import os
import sys
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
from pathlib import Path
from typing import Any, Dict, Optional
#
# Third-Party Imports
import toml
from loguru import logger
#
# Local Imports
from mindmap_editor.Tools.Mind_Map.layout_adapter import LayoutSettings
from mindmap_editor.Tools.Mind_Map.mindmap_graph import DEFAULT_LABEL, LayoutOrientation
#
#######################################################################################################################
#
# Functions:

# --- Path to the configuration file ---
CONFIG_PATH_ENV = "MINDMAP_EDITOR_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mindmap_editor" / "config.toml"

# --- Default Configuration (used when the TOML file lacks a value) ---
DEFAULT_CONFIG: Dict[str, Any] = {
    "layout": {
        "node_width": 180,
        "node_height": 50,
        "node_separation": 30,
        "rank_separation": 120,
    },
    "editor": {
        "default_label": DEFAULT_LABEL,
        "default_orientation": LayoutOrientation.HORIZONTAL.value,
        "reset_on_orientation_change": True,
    },
    "export": {
        "csv_filename": "mindmap.csv",
        "export_dir": ".",
    },
    "ads": {
        "unit": "",
        "width": 320,
        "height": 50,
        "disabled": True,
    },
    "logging": {
        "level": "INFO",
        "log_file": str(DEFAULT_CONFIG_PATH.parent / "mindmap_editor.log"),
    },
}

_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def get_config_path() -> Path:
    """Config file location, MINDMAP_EDITOR_CONFIG wins over the default."""
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merges update_dict into base_dict."""
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(force_reload: bool = False) -> Dict[str, Any]:
    """
    Loads settings from the TOML config file, merged over DEFAULT_CONFIG.
    A missing or unreadable file leaves the defaults in place.
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload:
        return _CONFIG_CACHE

    loaded_config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if not config_path.exists():
        logger.info(f"Config file not found at {config_path}. Using defaults.")
    else:
        try:
            with open(config_path, "rb") as f:
                user_config_from_file = tomllib.load(f)
            loaded_config = deep_merge_dicts(loaded_config, user_config_from_file)
            logger.info(f"Loaded config from {config_path}")
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML config file {config_path}: {e}. Using defaults.")
        except OSError as e:
            logger.error(f"Could not read config file {config_path}: {e}. Using defaults.")

    _CONFIG_CACHE = loaded_config
    return _CONFIG_CACHE


def get_setting(section: str, key: str, default: Any = None) -> Any:
    """Helper to get a specific setting from the loaded configuration."""
    section_data = load_settings().get(section)
    if isinstance(section_data, dict):
        return section_data.get(key, default)
    return default


def _get_typed_value(data_dict: Dict, key: str, default: Any, target_type: type = str) -> Any:
    """Helper to get value from dict and cast to type, with logging for type errors."""
    value = data_dict.get(key, default)
    if value is None:
        return default
    try:
        if target_type == bool:
            if isinstance(value, bool):
                return value
            return str(value).lower() in ['true', '1', 't', 'y', 'yes']
        return target_type(value)
    except (ValueError, TypeError) as e:
        logger.warning(f"Config key '{key}' has value '{value}' which could not be converted to {target_type}. Using default: '{default}'. Error: {e}")
        return default


def get_layout_settings() -> LayoutSettings:
    """Layout constants from the [layout] section."""
    section = load_settings().get("layout", {})
    defaults = LayoutSettings()
    return LayoutSettings(
        node_width=_get_typed_value(section, "node_width", defaults.node_width, float),
        node_height=_get_typed_value(section, "node_height", defaults.node_height, float),
        node_separation=_get_typed_value(section, "node_separation", defaults.node_separation, float),
        rank_separation=_get_typed_value(section, "rank_separation", defaults.rank_separation, float),
    )


def get_default_orientation() -> LayoutOrientation:
    value = get_setting("editor", "default_orientation", LayoutOrientation.HORIZONTAL.value)
    try:
        return LayoutOrientation(value)
    except ValueError:
        logger.warning(f"Unknown default_orientation '{value}' in config. Using horizontal.")
        return LayoutOrientation.HORIZONTAL


def save_setting_to_config(section: str, key: str, value: Any) -> bool:
    """
    Saves a specific setting to the user's TOML configuration file.

    Args:
        section: The name of the TOML section (e.g., "editor", "layout").
        key: The key within the section to update.
        value: The new value for the key.

    Returns:
        True if the setting was saved successfully, False otherwise.
    """
    global _CONFIG_CACHE
    config_path = get_config_path()
    logger.info(f"Attempting to save setting: [{section}].{key} = {repr(value)}")

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create config directory {config_path.parent}: {e}")
        return False

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Corrupted config file at {config_path}. Cannot save. Please fix or delete it. Error: {e}")
            return False

    current_level = config_data
    try:
        for part in section.split('.'):
            current_level = current_level.setdefault(part, {})
        current_level[key] = value
    except (TypeError, AttributeError):
        logger.error(f"Configuration structure conflict. Could not set '{key}' in section '{section}'.")
        return False

    try:
        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)
    except OSError as e:
        logger.error(f"Failed to write updated config to {config_path}: {e}")
        return False

    logger.success(f"Saved setting to {config_path}")
    _CONFIG_CACHE = None
    load_settings(force_reload=True)
    return True

#
# End of config.py
#######################################################################################################################
