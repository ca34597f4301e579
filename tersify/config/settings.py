from dataclasses import dataclass, field
from typing import List

DEFAULT_LOG_LEVEL = "warning"
ENTRY_POINT_GROUP = "tersify.plugins"

@dataclass
class TersifyConfig:
    # holds the settings that decide which plugins get registered.
    builtin_plugins: bool = True
    entry_points: bool = True
    plugins: List[str] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL
