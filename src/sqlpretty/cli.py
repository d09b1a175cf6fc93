"""Command-line interface for sqlpretty."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import colorlog

from sqlpretty.config import DEFAULT_INDENT, DEFAULT_LANGUAGE, Parameters
from sqlpretty.errors import ConfigError, UnknownDialectError

logger = logging.getLogger(__name__)

CONFIG_NAME = "sqlpretty.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    language: str
    indent: str
    params: Parameters | None
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="sqlpretty",
        description="Reformat SQL into consistently indented text",
    )
    p.add_argument("input", nargs="?", default="-", help="Input .sql file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-l",
        "--language",
        default=None,
        metavar="DIALECT",
        help="SQL dialect: sql, db2, n1ql, pl/sql (default: sql)",
    )
    indent = p.add_mutually_exclusive_group()
    indent.add_argument("--indent", metavar="STR", help="Indent unit (default: two spaces)")
    indent.add_argument("--spaces", type=int, metavar="N", help="Indent with N spaces")
    indent.add_argument("--tabs", action="store_true", help="Indent with tabs")
    p.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Named placeholder value (repeatable)",
    )
    p.add_argument(
        "-a",
        "--arg",
        action="append",
        default=[],
        metavar="VALUE",
        help="Positional placeholder value, used in order (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    return p


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route log records to a coloured stderr handler."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)s:%(name)s: %(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )
    root.addHandler(handler)
    if quiet:
        root.setLevel(logging.ERROR)
    elif verbose:
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(logging.WARNING)


def parse_param_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid param format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    return name, value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file.

    An auto-discovered file that does not exist yields an empty dict; an
    explicit path that does not exist, or any unreadable or malformed file,
    raises ConfigError.
    """
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        if config_path is not None:
            raise ConfigError("config file not found", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"config file is not valid UTF-8: {exc}", path) from exc
    except OSError as exc:
        raise ConfigError(f"cannot read config file: {exc.strerror or exc}", path) from exc
    logger.debug("loaded config from %s", path)
    return config


def _resolve_indent(args: argparse.Namespace, config: dict[str, Any]) -> str:
    if args.tabs:
        return "\t"
    if args.spaces is not None:
        if args.spaces < 0:
            raise argparse.ArgumentTypeError(f"--spaces must not be negative: {args.spaces}")
        return " " * args.spaces
    if args.indent is not None:
        return args.indent
    cfg_indent = config.get("indent", DEFAULT_INDENT)
    if isinstance(cfg_indent, str):
        return cfg_indent
    # bool is an int subclass; TOML true/false is not a width
    if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool) and cfg_indent >= 0:
        return " " * cfg_indent
    raise argparse.ArgumentTypeError(
        f"config indent must be a string or a non-negative integer: {cfg_indent!r}"
    )


def _resolve_params(args: argparse.Namespace, config: dict[str, Any]) -> Parameters | None:
    named: dict[str, str] = {}
    cfg_params = config.get("params")
    if isinstance(cfg_params, dict):
        for k, v in cfg_params.items():
            named[str(k)] = str(v)
    for raw in args.param:
        name, value = parse_param_arg(raw)
        named[name] = value

    positional: list[str] = []
    cfg_args = config.get("args")
    if isinstance(cfg_args, list):
        positional = [str(v) for v in cfg_args]
    if args.arg:
        positional = list(args.arg)

    if named and positional:
        raise argparse.ArgumentTypeError(
            "named (-p) and positional (-a) parameters cannot be combined"
        )
    if named:
        return named
    if positional:
        return positional
    return None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    language = DEFAULT_LANGUAGE
    cfg_language = config.get("language")
    if isinstance(cfg_language, str):
        language = cfg_language
    if args.language is not None:
        language = args.language

    return CliOptions(
        input_file=input_file,
        output_file=Path(args.output) if args.output else None,
        language=language,
        indent=_resolve_indent(args, config),
        params=_resolve_params(args, config),
        debug=args.debug,
    )


def format_source(options: CliOptions, source: str) -> str:
    """Format SQL source text according to options."""
    import sqlpretty
    from sqlpretty.debug import dump_tokens
    from sqlpretty.dialects import get_lexer

    if options.debug:
        dump_tokens(get_lexer(options.language).tokenize(source), file=sys.stderr)

    return sqlpretty.format(
        source,
        indent=options.indent,
        language=options.language,
        params=options.params,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    try:
        if options.input_file is None:
            source = sys.stdin.read()
        else:
            source = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("cannot read input: %s", exc)
        return 1

    try:
        result = format_source(options, source)
    except UnknownDialectError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    output = result + "\n" if result else ""
    try:
        if options.output_file:
            options.output_file.write_text(output, encoding="utf-8")
            logger.info("wrote %s", options.output_file)
        else:
            sys.stdout.write(output)
    except OSError as exc:
        logger.error("cannot write output: %s", exc)
        return 1

    return 0
