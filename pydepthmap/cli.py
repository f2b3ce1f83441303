from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from pydepthmap.api import default_output_path, export_tiff, normalize_depth
from pydepthmap.config.export import ExportConfig
from pydepthmap.config.io import load_config
from pydepthmap.inputs.pixel_format import PixelFormatKind
from pydepthmap.io.samples import SAMPLE_SUFFIXES, load_depth_sample

logger = logging.getLogger(__name__)

_TIFF_SUFFIXES = {".tif", ".tiff"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pydepthmap-export",
        description="Convert saved depth model outputs into 16-bit grayscale TIFF files.",
    )
    parser.add_argument(
        "--input",
        action="append",
        required=True,
        help="Depth output file (.npy/.npz/.raw/.bin) or directory (repeatable). "
        "Directories are scanned recursively.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output .tiff path (single input) or directory. Default: <input>_depth.tiff beside each input",
    )
    parser.add_argument(
        "--compression",
        default=None,
        choices=["none", "lzw"],
        help="TIFF compression. Default: none (or the config file value)",
    )
    parser.add_argument(
        "--pixel-format",
        default=None,
        choices=[fmt.value for fmt in PixelFormatKind if fmt is not PixelFormatKind.UNKNOWN],
        help="Pixel format of .raw/.bin buffers",
    )
    parser.add_argument("--width", type=int, default=None, help="Width of .raw/.bin buffers")
    parser.add_argument("--height", type=int, default=None, help="Height of .raw/.bin buffers")
    parser.add_argument(
        "--row-stride",
        type=int,
        default=None,
        help="Row stride in bytes of .raw/.bin buffers (default: tightly packed)",
    )
    parser.add_argument("--config", default=None, help="Optional JSON/YAML export config")
    parser.add_argument(
        "--overwrite",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Replace existing output files (default: true)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _collect_sample_paths(raw: str | Path) -> list[str]:
    path = Path(raw)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    if path.is_file():
        if path.suffix.lower() not in SAMPLE_SUFFIXES:
            raise ValueError(f"Unsupported depth file type: {path}")
        return [str(path)]

    out: list[str] = []
    for p in sorted(path.rglob("*")):
        if p.is_file() and p.suffix.lower() in SAMPLE_SUFFIXES:
            out.append(str(p))
    return out


def _resolve_output(input_path: str, *, output: str | None, single: bool, cfg: ExportConfig) -> Path:
    if output is not None:
        out = Path(output)
        if out.suffix.lower() in _TIFF_SUFFIXES:
            if not single:
                raise ValueError("--output must be a directory when converting multiple inputs")
            return out
        return default_output_path(input_path, suffix=cfg.output_suffix, output_dir=out)
    return default_output_path(input_path, suffix=cfg.output_suffix, output_dir=cfg.output_dir)


def _plan_outputs(inputs: list[str], *, output: str | None, cfg: ExportConfig) -> list[tuple[str, Path]]:
    """Pair each input with its output path, refusing collisions before any write."""

    plan: list[tuple[str, Path]] = []
    claimed: dict[Path, str] = {}
    for input_path in inputs:
        out_path = _resolve_output(input_path, output=output, single=len(inputs) == 1, cfg=cfg)
        key = out_path.resolve()
        if key in claimed:
            raise ValueError(
                f"Inputs {claimed[key]!r} and {input_path!r} both map to output {str(out_path)!r}"
            )
        claimed[key] = input_path
        if out_path.exists() and not cfg.overwrite:
            raise FileExistsError(f"Output exists and overwrite is disabled: {out_path}")
        plan.append((input_path, out_path))
    return plan


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level)),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = ExportConfig()
        if args.config is not None:
            cfg = ExportConfig.from_mapping(load_config(args.config))
        cfg = cfg.with_overrides(compression=args.compression, overwrite=args.overwrite)

        inputs: list[str] = []
        for raw in args.input:
            inputs.extend(_collect_sample_paths(raw))
        if not inputs:
            raise ValueError("No depth inputs found.")

        plan = _plan_outputs(inputs, output=args.output, cfg=cfg)
        for input_path, out_path in plan:
            sample = load_depth_sample(
                input_path,
                pixel_format=args.pixel_format,
                width=args.width,
                height=args.height,
                row_stride_bytes=args.row_stride,
            )
            image = normalize_depth(sample)
            export_tiff(image, cfg.compression, out_path)
            record: dict[str, Any] = {
                "input": str(input_path),
                "output": str(out_path),
                "width": int(image.width),
                "height": int(image.height),
                "compression": cfg.compression.value,
            }
            print(json.dumps(record, sort_keys=True))
        return 0
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        import sys

        logger.debug("Export failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
