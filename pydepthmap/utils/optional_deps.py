"""Optional dependency helpers.

The core `pydepthmap` install only needs numpy, Pillow and OpenCV. PyYAML
config files and torch tensor results come from the `yaml` and `torch`
extras; `require` imports them and names the extra to install when missing.
"""

from __future__ import annotations

from importlib import import_module
from types import ModuleType

# Importable root module -> `pydepthmap[...]` extra that provides it.
OPTIONAL_EXTRAS = {
    "yaml": "yaml",
    "torch": "torch",
}


def require(module_name: str, *, purpose: str) -> ModuleType:
    """Import an optional dependency, raising ImportError with an install hint."""

    root = str(module_name).split(".", 1)[0]
    extra = OPTIONAL_EXTRAS.get(root)
    if extra is None:
        raise ValueError(
            f"{module_name!r} is not an optional dependency of pydepthmap. "
            f"Known: {', '.join(sorted(OPTIONAL_EXTRAS))}."
        )

    try:
        return import_module(module_name)
    except ImportError as exc:
        raise ImportError(
            f"Optional dependency '{module_name}' is required for {purpose}.\n"
            f"Install it via:\n  pip install 'pydepthmap[{extra}]'"
        ) from exc
