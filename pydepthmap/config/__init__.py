from __future__ import annotations

from .export import ExportConfig
from .io import load_config

__all__ = ["ExportConfig", "load_config"]
