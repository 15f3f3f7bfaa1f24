# bitpic_lint/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Sequence

from .__about__ import APP_NAME, APP_TITLE, about_text
from .render import Result, display_width, validate
from .source import DEFAULT_NAME, iter_pictures

logger = logging.getLogger(__name__)

ARG_FILE = "<arg>"


@dataclass
class Tally:
    files: int = 0
    seen: int = 0
    errors: int = 0

    @property
    def exit_code(self) -> int:
        return 1 if self.errors or not self.seen or not self.files else 0


# ---------- helpers ----------
def _print_err(message: str, quiet: bool) -> None:
    if not quiet:
        print(f"{'_' * len(message)}\n{message}", file=sys.stderr)

def banner(name: str, filename: str, line: int, result: Result) -> str:
    """``--- Pic: "name" in file line n -`` padded with dashes to the report width."""
    head = f'--- Pic: "{name}" in {filename} line {line} -'
    widest = max(display_width(r) for r in result)
    width = display_width(head)
    fill = widest - width if width < widest else 2
    return head + "-" * fill

def format_report(name: str, filename: str, line: int, result: Result) -> str:
    return "\n".join((banner(name, filename, line, result),) + tuple(result)) + "\n"

def check_picture(picture: str, name: str, filename: str, line: int,
                  tally: Tally, quiet: bool) -> Result:
    result = validate(picture)
    tally.seen += 1
    if result[0] != "OK.":
        tally.errors += 1
    logger.debug("%s:%d %r -> %s", filename, line, name, result[0])
    if not quiet:
        print(format_report(name, filename, line, result))
    return result

def lint_file(path: str, tally: Tally, match: str = "", quiet: bool = False) -> None:
    try:
        with open(path, encoding="utf-8") as fh:
            source = fh.read()
    except OSError as exc:
        _print_err(f"Can not open {path}: {exc.strerror or exc}", quiet)
        tally.errors += 1
        return
    tally.files += 1
    for pic in iter_pictures(source, match):
        check_picture(pic.text, pic.name, path, pic.line, tally, quiet)


# ---------- parser ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_TITLE}: check bitpeek picture strings and map them to bits.",
        epilog="Pictures in Go files are marked with a //bitpeek[:tag[:skip]] "
               "comment above the literal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=about_text())
    p.add_argument("files", nargs="*", metavar="FILE", help="Go source files to scan")
    p.add_argument(
        "-q", "--quiet", action="store_true",
        help="suppress terminal output; exit status tells the result"
    )
    p.add_argument(
        "-m", "--match", default="", metavar="TAG",
        help="check only pictures whose tag contains TAG"
    )
    p.add_argument(
        "-p", "--pic", action="append", default=[], metavar="PICTURE",
        help="check a picture string given on the command line (repeatable)"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    tally = Tally()
    for picture in args.pic:
        tally.files += 1
        check_picture(picture, DEFAULT_NAME, ARG_FILE, 1, tally, args.quiet)
    for path in args.files:
        lint_file(path, tally, args.match, args.quiet)

    if not tally.files:
        _print_err("Error: no files given and/or no files checked!", args.quiet)
        if not args.quiet:
            parser.print_usage(sys.stderr)
    elif not tally.seen:
        _print_err("Error: no matching picstrings found!", args.quiet)
    return tally.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
