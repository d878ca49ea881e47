"""Command line entry point: dump in, name-based wordlist out."""

import argparse
import logging
import os
import sys
import time
from contextlib import closing
from pathlib import Path
from shutil import get_terminal_size
from typing import Any, Dict, List, Optional, Sequence, TextIO

from names_dict import __version__
from names_dict.config import ConfigError, Settings, load_settings
from names_dict.dump import read_dump
from names_dict.pipeline import PipelineStats, run_pipeline


logger = logging.getLogger("names_dict")

BANNER_TONES = [51, 45, 81, 135, 201]


def use_color(stream: TextIO) -> bool:
    return stream.isatty() and "NO_COLOR" not in os.environ


def build_banner_lines() -> List[str]:
    return [
        "                                          __ __      __    ",
        ".-.--..---.-.--.-.--.-----.-----._____.--|  |__|----|  |_  ",
        "|  .  |  -  |  . .  |  -__|__ --|_____|  -  |  |  --|   _| ",
        "|__|__|___._|__|-|__|_____|_____|     |_____|__|____|_____|",
        "                                                           ",
    ]


def print_banner(stream: Optional[TextIO] = None) -> None:
    """Logo centred on the terminal, cyan to magenta when the stream is a colour tty."""
    stream = stream or sys.stderr
    lines = build_banner_lines()
    width = max(get_terminal_size(fallback=(80, 20)).columns, len(lines[0]))
    tones = BANNER_TONES if use_color(stream) else [None] * len(lines)
    for line, tone in zip(lines, tones):
        text = line.center(width).rstrip()
        print(text if tone is None else f"\033[38;5;{tone}m{text}\033[0m", file=stream)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="names-dict",
        description="Create a password dictionary based on names.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Write more.")
    parser.add_argument("-q", "--quiet", action="store_true", default=None, help="No banner and no summary.")
    parser.add_argument("-u", "--dump-url", help="Overwrite the default dump URL (German Wikipedia).")
    parser.add_argument("-i", "--input", dest="input_path", help="Read a local dump file instead of the URL.")
    parser.add_argument("-o", "--output", help="Write the wordlist to this file (default: stdout).")
    parser.add_argument("--config", type=Path, help="JSON config file (default: first config.json found).")
    parser.add_argument("-t", "--threshold", type=int, help="Emit a name once it occurred this many times (default: 1).")
    parser.add_argument("-c", "--count", type=int, help="Take the top N names only, ranked at end of input (0 means 'stream all').")
    parser.add_argument("-d", "--digits", type=int, help="Append up to N digits after the name (default: 4).")
    parser.add_argument("-s", "--special-chars", help='Append special characters from this set (default: "!$@_").')
    parser.add_argument("--template", help="Biography template to scan (default: Personendaten).")
    parser.add_argument("--capacity", type=int, help="Names buffered between scanning and writing (default: 100).")
    parser.add_argument("--fold-case", action="store_true", default=None, help="Count names case-insensitively.")
    parser.add_argument(
        "--exact-dedupe",
        action="store_true",
        default=None,
        help="Drop variant lines already written (more memory).",
    )
    return parser


def open_sink(output: Optional[str]) -> TextIO:
    if output is None or output == "-":
        return sys.stdout
    return open(output, "w", encoding="utf-8", newline="")


def print_summary(stats: PipelineStats, settings: Settings, elapsed: float) -> None:
    print("\nGeneration complete:", file=sys.stderr)
    print(f"- records scanned: {stats.records}", file=sys.stderr)
    print(f"- name candidates: {stats.candidates}", file=sys.stderr)
    print(f"- names emitted: {stats.names}", file=sys.stderr)
    print(f"- variants written: {stats.variants}", file=sys.stderr)
    if settings.exact_dedupe:
        print(f"- duplicates dropped: {stats.duplicates}", file=sys.stderr)
    print(f"- output: {settings.output or 'stdout'}", file=sys.stderr)
    print(f"- elapsed time: {elapsed:.2f}s", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides: Dict[str, Any] = {k: v for k, v in vars(args).items() if k != "config"}

    try:
        settings = load_settings(overrides, config_path=args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    setup_logging(settings.verbose)
    if not settings.quiet:
        print_banner()

    start_time = time.time()
    try:
        sink = open_sink(settings.output)
    except OSError as exc:
        print(f"Filesystem error: {exc}", file=sys.stderr)
        return 1
    try:
        with closing(read_dump(settings.source)) as records:
            stats = run_pipeline(records, settings, sink)
        sink.flush()
    except (RuntimeError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        if sink is not sys.stdout:
            sink.close()
    elapsed = time.time() - start_time

    logger.debug("%d names, %d variants", stats.names, stats.variants)
    if not settings.quiet:
        print_summary(stats, settings, elapsed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
