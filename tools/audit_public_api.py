from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any


def _ensure_repo_root_on_sys_path() -> None:
    # `python tools/audit_public_api.py` puts `tools/` first on sys.path.
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


def _audit_lazy_tables(package: Any) -> list[str]:
    issues: list[str] = []
    listed = set(getattr(package, "__all__", []))
    lazy = set(getattr(package, "_LAZY_SUBMODULES", set())) | set(
        getattr(package, "_LAZY_EXPORTS", {})
    )
    for name in sorted(lazy - listed):
        issues.append(f"{name}: lazy-loaded but not listed in __all__")
    for name in sorted(listed - lazy):
        issues.append(f"{name}: listed in __all__ but has no lazy target")
    return issues


def _audit_error_taxonomy(errors: Any) -> list[str]:
    issues: list[str] = []
    exported = set(getattr(errors, "__all__", []))
    for name, value in sorted(vars(errors).items()):
        if isinstance(value, type) and issubclass(value, errors.DepthError):
            if name not in exported:
                issues.append(f"errors.{name}: DepthError subclass missing from __all__")
    return issues


def audit_public_api() -> list[str]:
    """Return a list of human-readable issues with the public API."""

    _ensure_repo_root_on_sys_path()
    import pydepthmap
    import pydepthmap.errors

    issues = _audit_lazy_tables(pydepthmap)
    for name in list(getattr(pydepthmap, "__all__", [])):
        try:
            getattr(pydepthmap, name)
        except Exception as exc:  # noqa: BLE001 - tool boundary
            issues.append(f"{name}: {exc}")

    for module_name in sorted(getattr(pydepthmap, "_LAZY_SUBMODULES", ())):
        module = getattr(pydepthmap, module_name, None)
        for name in getattr(module, "__all__", []):
            if not hasattr(module, name):
                issues.append(f"{module_name}.{name}: listed in __all__ but missing")

    issues.extend(_audit_error_taxonomy(pydepthmap.errors))
    return issues


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="audit_public_api")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    args = parser.parse_args(argv)

    issues = audit_public_api()
    ok = not issues

    if args.json:
        payload: dict[str, Any] = {"ok": ok, "issues": issues}
        print(json.dumps(payload, indent=2, sort_keys=True))
    elif ok:
        print("OK: pydepthmap public API looks consistent.")
    else:
        print("ERROR: pydepthmap public API issues detected:", file=sys.stderr)
        for issue in issues:
            print(f"- {issue}", file=sys.stderr)

    return 0 if ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
