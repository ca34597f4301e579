# tersify/config/loader.py
"""
Loads tersify settings from TOML files: the user's global config first, then
the first project-level config found in the current directory.
"""
import toml
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

from tersify.exceptions import ConfigError

from .settings import TersifyConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".tersify.toml", "tersify.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "tersify"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TYPES: Dict[str, type] = {
    "builtin_plugins": bool,
    "entry_points": bool,
    "plugins": list,
    "log_level": str,
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (OSError, toml.TomlDecodeError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name != "pyproject.toml":
        return data
    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        raise ConfigError(f"'tool' in {file_path} must be a table, got {type(tool_table).__name__}")
    section = tool_table.get("tersify", {})
    if not isinstance(section, dict):
        raise ConfigError(f"'tool.tersify' in {file_path} must be a table, got {type(section).__name__}")
    return section

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    base_dir = project_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base_dir / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if project_settings:
                log.info("loading_project_local_config", path=str(candidate))
                merged_toml_data.update(project_settings)
                break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def build_config(raw: Dict[str, Any]) -> TersifyConfig:
    # validates raw TOML values and builds a TersifyConfig from them.
    known = {f.name for f in dataclass_fields(TersifyConfig)}
    kwargs: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            log.warning("unknown_config_key_ignored", key=key)
            continue
        expected = CONFIG_KEY_TYPES[key]
        if not isinstance(value, expected):
            raise ConfigError(f"config key '{key}' must be a {expected.__name__}, got {type(value).__name__}")
        if key == "plugins" and not all(isinstance(p, str) for p in value):
            raise ConfigError("config key 'plugins' must be a list of 'module:ClassName' strings")
        kwargs[key] = value
    return TersifyConfig(**kwargs)

def load_config(project_dir: Optional[Path] = None) -> TersifyConfig:
    return build_config(load_and_merge_configs(project_dir))
