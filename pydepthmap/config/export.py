from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from pydepthmap.io.tiff import TiffCompressionMode, parse_compression_mode

_KNOWN_KEYS = frozenset({"compression", "output_suffix", "output_dir", "overwrite"})


def _parse_suffix(value: Any) -> str:
    suffix = str(value)
    if "/" in suffix or "\\" in suffix:
        raise ValueError(f"output_suffix must not contain path separators, got {suffix!r}")
    return suffix


def _parse_bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{name} must be true/false, got {value!r}")


@dataclass(frozen=True)
class ExportConfig:
    """Export defaults shared by the CLI and `pydepthmap.api`."""

    compression: TiffCompressionMode = TiffCompressionMode.NONE
    output_suffix: str = "_depth"
    output_dir: Optional[str] = None
    overwrite: bool = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ExportConfig":
        if not isinstance(raw, Mapping):
            raise ValueError(f"export config must be a dict/object, got {type(raw).__name__}")

        # Allow either a bare mapping or one nested under "export".
        payload = raw.get("export", raw)
        if not isinstance(payload, Mapping):
            raise ValueError(f"export must be a dict/object, got {type(payload).__name__}")

        unknown = sorted(set(payload) - _KNOWN_KEYS)
        if unknown:
            raise ValueError(
                f"Unknown export config keys: {unknown}. Allowed: {sorted(_KNOWN_KEYS)}"
            )

        out_dir = payload.get("output_dir", None)
        return cls(
            compression=parse_compression_mode(payload.get("compression", "none")),
            output_suffix=_parse_suffix(payload.get("output_suffix", "_depth")),
            output_dir=(str(out_dir) if out_dir is not None else None),
            overwrite=_parse_bool(payload.get("overwrite", True), name="overwrite"),
        )

    def with_overrides(self, **overrides: Any) -> "ExportConfig":
        """Return a copy with every non-None override applied."""

        changes = {k: v for k, v in overrides.items() if v is not None}
        if "compression" in changes:
            changes["compression"] = parse_compression_mode(changes["compression"])
        if "output_suffix" in changes:
            changes["output_suffix"] = _parse_suffix(changes["output_suffix"])
        if "output_dir" in changes:
            changes["output_dir"] = str(Path(changes["output_dir"]))
        return replace(self, **changes)
