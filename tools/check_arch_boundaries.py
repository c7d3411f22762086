"""Run the architecture boundary check outside pytest (core must not import orchestrators)."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    test_path = repo_root / "tests" / "test_arch_boundaries.py"
    if not test_path.is_file():
        print("ERROR: tests/test_arch_boundaries.py not found.", file=sys.stderr)
        return 3

    spec = importlib.util.spec_from_file_location("_arch_boundaries", test_path)
    if spec is None or spec.loader is None:
        print(f"ERROR: cannot load {test_path}", file=sys.stderr)
        return 3
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)

    try:
        mod.test_core_does_not_import_orchestrators()
    except AssertionError as e:
        print(str(e), file=sys.stderr)
        return 2
    print("OK: architecture boundaries respected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
