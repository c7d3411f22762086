"""text-huffman CLI.

This is the stable CLI entrypoint (console-script: ``text-huffman``).

The codec itself lives in ``text_huffman.core`` and never prints; this module is
the host program around it (input reading, rendering, exit codes).

Notes:
  - --version is supported at top-level.
  - verify supports --json (machine-readable output).
  - input is a positional TEXT, or --input PATH ('-' = stdin).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from text_huffman.codec_spec import CodecSpecError, CodecSpecV1, load_codec_spec
from text_huffman.core.codec_huffman import CodecHuffman, HuffmanResult
from text_huffman.core.codes import render_code_table
from text_huffman.errors import EXIT_GENERIC, EXIT_USAGE, HuffmanError, UsageError

PROG = "text-huffman"
DEFAULT_TEXT = "This is a sample text."


def _pkg_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(PROG)
    except PackageNotFoundError:
        # script invoked from source, metadata missing
        return "0+unknown"


def _diag(msg: str) -> None:
    print(f"[{PROG}] {msg}", file=sys.stderr)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", nargs="?", default=None, help=f"Input text (default: {DEFAULT_TEXT!r})")
    p.add_argument("--input", type=Path, default=None, help="Read input from file ('-' = stdin)")
    p.add_argument(
        "--config",
        default=None,
        help="Codec spec JSON. Use '@file.json' to load from file, or pass JSON inline.",
    )
    p.add_argument(
        "--symbols",
        choices=["bytes", "chars"],
        default=None,
        help="Symbol alphabet (overrides --config; default: chars)",
    )
    p.add_argument("--verbose", action="store_true", help="Print pipeline diagnostics on stderr")
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _resolve_spec(ns: argparse.Namespace) -> CodecSpecV1:
    spec = load_codec_spec(ns.config) if ns.config else CodecSpecV1()
    # precedence: CLI --symbols > spec.symbols > default
    if ns.symbols is not None and ns.symbols != spec.symbols:
        spec = CodecSpecV1(
            name=spec.name, symbols=ns.symbols, encoding=spec.encoding, baselines=spec.baselines
        )
    return spec


def _read_input(ns: argparse.Namespace, spec: CodecSpecV1) -> bytes:
    if ns.input is not None and ns.text is not None:
        raise UsageError("pass either TEXT or --input, not both")
    if ns.input is not None:
        if str(ns.input) == "-":
            return sys.stdin.buffer.read()
        if not ns.input.is_file():
            raise UsageError(f"input file not found: {ns.input}")
        return ns.input.read_bytes()
    text = DEFAULT_TEXT if ns.text is None else ns.text
    return text.encode(spec.encoding)


def _compress(ns: argparse.Namespace) -> tuple[CodecSpecV1, CodecHuffman, bytes, HuffmanResult]:
    spec = _resolve_spec(ns)
    codec = spec.make_codec()
    data = _read_input(ns, spec)
    res = codec.compress(data)
    if ns.verbose:
        _diag(f"symbols={res.n} distinct={len(res.freq)} bits={len(res.bits)}")
    return spec, codec, data, res


def _render_original(codec: CodecHuffman, value: bytes | str) -> str:
    if isinstance(value, str):
        return value
    return value.decode(codec.encoding, errors="backslashreplace")


def _cmd_show(ns: argparse.Namespace) -> int:
    _, codec, data, res = _compress(ns)
    decoded = codec.decompress(res.tree, res.bits, res.n)

    print("Huffman Codes are:\n")
    sys.stdout.write(render_code_table(res.codes))
    print("\nThe original string is:")
    print(_render_original(codec, codec.prepare(data)))
    print("\nThe encoded string is:")
    print(res.bits.to_text())
    print("\nThe decoded string is:")
    print(_render_original(codec, decoded))
    return 0


def _cmd_codes(ns: argparse.Namespace) -> int:
    _, _, _, res = _compress(ns)
    if ns.json:
        # JSON keys are strings; in byte mode the symbol is the decimal byte value
        obj = {str(sym): code for sym, code in sorted(res.codes.items(), key=lambda kv: kv[0])}
        print(json.dumps(obj, ensure_ascii=False, separators=(",", ":")))
        return 0
    sys.stdout.write(render_code_table(res.codes))
    return 0


def _cmd_encode(ns: argparse.Namespace) -> int:
    _, _, _, res = _compress(ns)
    print(res.bits.to_text())
    return 0


def _verify_json(ok: bool, spec: CodecSpecV1 | None, res: HuffmanResult | None, **extra: object) -> str:
    obj: dict[str, object] = {
        "schema": f"{PROG}.verify.v1",
        "ok": ok,
        "symbols": spec.symbols if spec else None,
        "n": res.n if res else None,
        "bits": len(res.bits) if res else None,
        "version": _pkg_version(),
    }
    obj.update(extra)
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _verify_fail(spec: CodecSpecV1 | None, e: Exception, code: int) -> int:
    err = {"type": type(e).__name__, "message": str(e)}
    print(_verify_json(False, spec, None, error=err), file=sys.stderr)
    return code


def _cmd_verify(ns: argparse.Namespace) -> int:
    spec: CodecSpecV1 | None = None
    try:
        spec = _resolve_spec(ns)
        data = _read_input(ns, spec)
        res = spec.make_codec().roundtrip(data)
    except CodecSpecError as e:
        if not ns.json or ns.debug:
            raise
        return _verify_fail(spec, e, EXIT_USAGE)
    except HuffmanError as e:
        if not ns.json or ns.debug:
            raise
        return _verify_fail(spec, e, int(e.exit_code))
    except Exception as e:
        if not ns.json or ns.debug:
            raise
        return _verify_fail(spec, e, EXIT_GENERIC)
    if ns.verbose:
        _diag(f"symbols={res.n} distinct={len(res.freq)} bits={len(res.bits)}")
    if ns.json:
        print(_verify_json(True, spec, res))
    else:
        print("OK")
    return 0


def _cmd_stats(ns: argparse.Namespace) -> int:
    from text_huffman.report import build_report, render_report

    spec = _resolve_spec(ns)
    data = _read_input(ns, spec)
    report = build_report(data, spec.make_codec(), baselines=spec.baselines)
    if ns.json:
        print(json.dumps(report, ensure_ascii=False, separators=(",", ":"), sort_keys=True))
    else:
        sys.stdout.write(render_report(report))
    return 0


def _cmd_config_validate(ns: argparse.Namespace) -> int:
    # load is the validation
    load_codec_spec(str(ns.spec))
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Deterministic Huffman coding over bytes and text")
    p.add_argument("--version", action="version", version=f"%(prog)s {_pkg_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show", help="Show codes, original, encoded and decoded text")
    _add_common_args(p_show)

    p_codes = sub.add_parser("codes", help="Print the code table")
    _add_common_args(p_codes)
    p_codes.add_argument("--json", action="store_true", help="Print the table as a JSON object")

    p_enc = sub.add_parser("encode", help="Print the encoded bit string")
    _add_common_args(p_enc)

    p_ver = sub.add_parser("verify", help="Round-trip the input and check it decodes back")
    _add_common_args(p_ver)
    p_ver.add_argument("--json", action="store_true", help="Machine-readable result")

    p_stats = sub.add_parser("stats", help="Compression report (with zlib/zstd baselines)")
    _add_common_args(p_stats)
    p_stats.add_argument("--json", action="store_true", help="Machine-readable report")

    p_cv = sub.add_parser("config-validate", help="Validate a codec spec (v1)")
    p_cv.add_argument("spec", help="Codec spec JSON (@file.json or inline JSON)")
    p_cv.add_argument("--debug", action="store_true", help="Show stack traces on errors")

    return p


_COMMANDS = {
    "show": _cmd_show,
    "codes": _cmd_codes,
    "encode": _cmd_encode,
    "verify": _cmd_verify,
    "stats": _cmd_stats,
    "config-validate": _cmd_config_validate,
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        return _COMMANDS[ns.cmd](ns)
    except SystemExit:
        raise
    except CodecSpecError as e:
        # usage/config error
        if getattr(ns, "debug", False):
            raise
        _diag(str(e))
        return EXIT_USAGE
    except HuffmanError as e:
        if getattr(ns, "debug", False):
            raise
        _diag(str(e))
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        _diag(f"error: {e}")
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
