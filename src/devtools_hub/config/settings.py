"""
Configuration loading.

The JSON config file is looked up in the directory named by
``DEVTOOLS_HUB_CONFIG_DIR`` first and then under ``config/`` in the working
directory. A missing or unreadable file yields the defaults.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = 'DEVTOOLS_HUB_CONFIG_DIR'
CONFIG_FILE_NAME = 'config.json'

DEFAULT_CONFIG: Dict[str, Any] = {
    'tools': {},
    'data_limits': {},
    'favorites_limit': 50,
    'log_level': 'INFO',
    'max_input_size': 1024 * 1024,
}


def get_config_directory() -> Path:
    """Get the config directory path."""
    config_dir = os.environ.get(CONFIG_DIR_ENV)
    if config_dir:
        return Path(config_dir)

    # Default to ~/.config/devtools-hub
    return Path.home() / '.config' / 'devtools-hub'


def find_config_file() -> Optional[Path]:
    candidates = []
    if os.environ.get(CONFIG_DIR_ENV):
        candidates.append(get_config_directory() / CONFIG_FILE_NAME)
    candidates.append(Path.cwd() / 'config' / CONFIG_FILE_NAME)

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from config.json merged over the defaults"""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_file = path or find_config_file()
    if config_file is None:
        return config

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
        return config

    if not isinstance(loaded, dict):
        logger.warning("Ignoring config file %s: top level is not an object", config_file)
        return config

    config.update(loaded)
    return config


def is_tool_enabled(config: Dict[str, Any], tool_id: str) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = config.get('tools', {}).get(tool_id, {})
    return tool_conf.get('enabled', True)


def get_enabled_tools(config: Dict[str, Any], tools_list: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Filter tools list to only include enabled tools."""
    return [tool for tool in tools_list if is_tool_enabled(config, tool.get('id', ''))]
