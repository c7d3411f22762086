#!/usr/bin/env python3
"""Generate docs/exit_codes.md from src/text_huffman/errors.py (single source of truth).

--check: do not write, exit 1 if the committed file is stale (for CI).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--check", action="store_true", help="Fail if docs/exit_codes.md is out of date")
    ns = ap.parse_args(argv)

    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    from text_huffman.errors import render_exit_codes_markdown  # noqa: E402

    out = repo / "docs" / "exit_codes.md"
    content = render_exit_codes_markdown()

    if ns.check:
        current = out.read_text(encoding="utf-8") if out.is_file() else ""
        if current != content:
            print(f"[text-huffman] {out} is stale, run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print("[text-huffman] exit codes doc up to date")
        return 0

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"[text-huffman] wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
