"""
Configuration parser for rangetree.

Handles TOML file parsing for tree construction defaults and the demo's
sample entries.
"""

import tomllib
import os
import sys
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Optional

from .collision import get_handler
from .diagnostics import is_debug, set_debug
from .timezone_utils import set_timezone


@dataclass
class TreeConfig:
    """Defaults used by IntervalTree.from_config."""
    policy: str = "replace"   # "replace" or "append"
    reverse: bool = False     # Descending natural order
    timezone: str = "UTC"     # Timezone for naive datetime keys
    debug: bool = False
    verify: bool = False      # Check invariants after every mutation


@dataclass
class Config:
    """Main configuration container for rangetree."""

    tree: TreeConfig = field(default_factory=TreeConfig)
    entries: dict[str, list[Any]] = field(default_factory=dict)
    source: Optional[Path] = None

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'rangetree' / 'rangetree.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file and apply its global settings.

        Raises:
            FileNotFoundError: if the file does not exist.
            ValueError: for an unknown policy or timezone.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        general = data.get('General', {})
        tree = TreeConfig(
            policy=general.get('policy', TreeConfig.policy),
            reverse=bool(general.get('reverse', TreeConfig.reverse)),
            timezone=general.get('timezone', TreeConfig.timezone),
            debug=bool(general.get('debug', TreeConfig.debug)),
            verify=bool(general.get('verify', TreeConfig.verify)),
        )
        # Fail on a bad policy name here rather than at tree construction
        get_handler(tree.policy)
        set_timezone(tree.timezone)
        if tree.debug:
            set_debug(True)

        # [Entries] accepts `key = value` and `key = [value, ...]`
        entries = {}
        for key, value in data.get('Entries', {}).items():
            entries[key] = list(value) if isinstance(value, list) else [value]

        if is_debug():
            print(f"DEBUG: Loaded {config_path}: policy={tree.policy} reverse={tree.reverse} "
                  f"timezone={tree.timezone} entries={len(entries)}", file=sys.stderr)

        return cls(tree=tree, entries=entries, source=config_path)
