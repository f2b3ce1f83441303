from .optional_deps import OPTIONAL_EXTRAS, require

__all__ = ["OPTIONAL_EXTRAS", "require"]
