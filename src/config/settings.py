"""
Application settings loaded from config/config.json.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

APP_ROOT = Path(__file__).parent.parent.parent
CONFIG_ENV_VAR = 'TOOLBOX_CONFIG_FILE'

DEFAULTS: Dict[str, Any] = {
    'tools': {},
    'history_limit': 20,
    'display_precision': 6
}


def get_config_path() -> Path:
    """Config file path, overridable through TOOLBOX_CONFIG_FILE."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return APP_ROOT / "config" / "config.json"


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration, falling back to defaults for missing keys or files"""
    config_file = Path(config_file) if config_file else get_config_path()
    config = dict(DEFAULTS)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                config.update(loaded)
            else:
                logger.warning("Ignoring %s: top level must be an object", config_file)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Could not read %s, using defaults: %s", config_file, e)
    return config


def is_tool_enabled(config: Dict[str, Any], tool_id: str) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = config.get('tools', {}).get(tool_id, {})
    return tool_conf.get('enabled', True)


def get_enabled_tools(config: Dict[str, Any], tools_list):
    """Filter tools list to only include enabled tools."""
    return [tool for tool in tools_list if is_tool_enabled(config, tool.get('id', ''))]
