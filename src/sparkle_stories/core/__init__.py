"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Preference storage (SQLite)
- JSON data file reading
- Console management (Rich)
"""

from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
    ensure_directories,
)

from .preferences import (
    PreferenceStore,
    MemoryPreferenceStore,
    get_database_path,
    init_database,
)

from .data import read_json_array, parse_records

from .console import get_console, safe_print, print_table

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    "ensure_directories",
    # Preferences
    "PreferenceStore",
    "MemoryPreferenceStore",
    "get_database_path",
    "init_database",
    # Data files
    "read_json_array",
    "parse_records",
    # Console
    "get_console",
    "safe_print",
    "print_table",
]
