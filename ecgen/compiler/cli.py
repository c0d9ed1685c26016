"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from ecgen.internals.version import print_banner


def _resolve_config(args, source_dir: Path):
    """Load ecgen.toml (explicit, or next to the source) and apply CLI flags."""
    from ecgen.compiler.config import find_config, load_config

    config_path = Path(args.config) if args.config else find_config(source_dir)
    config = load_config(config_path)
    return config.with_overrides(
        max_pairs=args.max_pairs,
        prefix=args.prefix,
        string_type=args.string_type,
        macro_name=args.macro_name,
    )


def _output_path(cli_value: Optional[str], config_value: Optional[str],
                 project_root: Path) -> Optional[Path]:
    """CLI paths are relative to the cwd, config paths to the source directory."""
    if cli_value:
        return Path(cli_value).resolve()
    if config_value:
        path = Path(config_value)
        return path if path.is_absolute() else project_root / path
    return None


def _write(path: Path, text: str, fingerprint: str, cache, args, reporter) -> bool:
    """Write one output through the cache; False (with a diagnostic) on failure."""
    from ecgen.internals import errors as er

    try:
        if cache is None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            written = True
        else:
            written = cache.write_if_changed(path, text, fingerprint)
    except OSError as e:
        er.emit(reporter, er.ERR.EG1005, None, path=path, reason=e.strerror or e)
        return False
    if args.verbose:
        print(f"{'Wrote' if written else 'Up to date'}: {path}")
    return True


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ecgen",
        description="Generate a C error-code enum and its message table",
    )
    ap.add_argument("source", nargs="?", help="Path to an .ecgen source file")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("-o", "--out", metavar="OUT",
                    help="Output header path (default: source filename with .h)")
    ap.add_argument("--header", metavar="OUT",
                    help="Also write the preprocessor macro header to OUT")
    ap.add_argument("--stdout", action="store_true",
                    help="Print generated declarations instead of writing a file")
    ap.add_argument("--config", metavar="PATH",
                    help="Config file (default: ecgen.toml next to the source)")
    ap.add_argument("--max-pairs", type=int, metavar="N",
                    help="Largest number of (name, message) pairs per invocation")
    ap.add_argument("--prefix", help="Identifier prefix for generated names")
    ap.add_argument("--string-type", metavar="TYPE", help="Table element type")
    ap.add_argument("--macro-name", metavar="NAME", help="Invocation macro name")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST")
    ap.add_argument("--no-incremental", action="store_true",
                    help="Always rewrite outputs, ignoring cached fingerprints")
    ap.add_argument("--clean-cache", action="store_true",
                    help="Remove __ecgen_cache__/ directory and exit")
    ap.add_argument("--cache-dir", metavar="PATH",
                    help="Custom cache directory location (default: __ecgen_cache__/)")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Print per-invocation progress")
    ap.add_argument("--traceback", action="store_true",
                    help="Print full traceback on internal errors (for debugging)")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    """Main generator entry point. Returns 0 on success, 2 on errors."""
    ap = build_parser()
    args = ap.parse_args(argv)

    if not args.stdout:
        print_banner()

    if args.version:
        return 0

    from ecgen.compiler.cache import CacheManager
    from ecgen.compiler.config import ConfigError
    from ecgen.compiler.fingerprint import compute_fingerprint
    from ecgen.compiler.pipeline import compile_source, render_header
    from ecgen.compiler.facade import render_units
    from ecgen.backend.macro_header import MacroHeaderEmitter
    from ecgen.internals import errors as er
    from ecgen.internals.report import Reporter

    src_path = Path(args.source).resolve() if args.source else None
    project_root = src_path.parent if src_path else Path.cwd()
    cache_dir = Path(args.cache_dir) if args.cache_dir else None

    if args.clean_cache:
        cm = CacheManager(project_root, cache_dir=cache_dir)
        if cm.cache_path.exists():
            cm.wipe()
            print(f"Removed cache: {cm.cache_path}")
        else:
            print("No cache found.")
        if not args.source and not args.header:
            return 0

    try:
        config = _resolve_config(args, project_root)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    header_out = args.header or config.header
    if src_path is None and header_out is None:
        print("error: source file required (unless using --header)", file=sys.stderr)
        return 2

    cache = None
    if not args.no_incremental and not args.stdout:
        cache = CacheManager(project_root, cache_dir=cache_dir)
        cache.prepare()

    reporter = Reporter(filename=str(src_path) if src_path else "<input>")
    outputs = []

    try:
        if src_path is not None:
            try:
                src = src_path.read_text(encoding="utf-8")
            except OSError as e:
                er.emit(reporter, er.ERR.EG1004, None, path=src_path, reason=e.strerror or e)
                reporter.print()
                return 2
            reporter.source = src

            if args.verbose:
                print(f"Generating from {src_path.name}:")
            units = compile_source(src, reporter, config,
                                   dump_parse=args.dump_parse,
                                   dump_ast=args.dump_ast,
                                   verbose=args.verbose)
            if units is None:
                reporter.print()
                return 2

            if args.stdout:
                sys.stdout.write(render_units(units))
            else:
                out_path = _output_path(args.out, config.output, project_root) \
                    or src_path.with_suffix(".h")
                text = render_header(units, out_path, config)
                outputs.append((out_path, text, compute_fingerprint("declarations", config, src)))

        if header_out is not None:
            header_path = _output_path(args.header, config.header, project_root)
            emitter = MacroHeaderEmitter(
                macro_name=config.macro_name,
                max_pairs=config.max_pairs,
                prefix=config.prefix,
                string_type=config.string_type,
                guard=None,
            )
            outputs.append((header_path, emitter.render(), compute_fingerprint("macro_header", config)))

    except RuntimeError as e:
        if args.traceback:
            raise
        print(f"internal error: {e}", file=sys.stderr)
        return 2

    # Only write once every output rendered cleanly
    for path, text, fingerprint in outputs:
        if not _write(path, text, fingerprint, cache, args, reporter):
            reporter.print()
            return 2

    if reporter.has_warnings:
        reporter.print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
