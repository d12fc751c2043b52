"""
Config package for salary_explorer.

Responsible for:
- config models (GlobalConfig, ExplorerConfig)
- config I/O helpers (load_global_config)
"""

from .model import ExplorerConfig, GlobalConfig, Margin
from .loader import load_global_config

__all__ = ["ExplorerConfig", "GlobalConfig", "Margin", "load_global_config"]
