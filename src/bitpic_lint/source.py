# bitpic_lint/source.py

"""Locate marked picture strings in Go source.

A picture is marked with a line comment right above the literal holding it:

    //bitpeek:tag:skip
    {`Example`, `Type:'F 'EXT=.ACK= Id:0xFHH from IPv4.Address32@:D.16@`},

``tag`` is optional and matched against the ``-m`` filter. ``skip`` (0..7)
is the number of string literals to pass over before the picture; here 1
skips `Example`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

MARKER = "//bitpeek"
DEFAULT_NAME = "unnamed"
MAX_SKIP = 7

_TOKEN_RE = re.compile(
    r"""
      (?P<comment>//[^\n]*)
    | (?P<block>/\*.*?\*/)
    | (?P<raw>`[^`]*`)
    | (?P<string>"(?:\\.|[^"\\\n])*")
    | (?P<rune>'(?:\\.|[^'\\\n])*')
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True)
class Picture:
    name: str
    line: int
    text: str


def parse_marker(comment: str, match: str = "") -> Optional[Tuple[str, int]]:
    """
    Parse a ``//bitpeek[:tag[:skip]]`` comment.

    Returns ``(name, skip)``, or None when the comment is not a marker or its
    tag does not contain ``match``. An invalid skip counts as 0.
    """
    parts = comment.rstrip().split(":")
    if parts[0] != MARKER:
        return None
    tag = parts[1] if len(parts) > 1 else ""
    if match and tag and match not in tag:
        return None
    name = tag or DEFAULT_NAME
    digit = parts[2][:1] if len(parts) > 2 else ""
    skip = int(digit) if digit and "0" <= digit <= str(MAX_SKIP) else 0
    return name, skip


def iter_pictures(source: str, match: str = "") -> Iterator[Picture]:
    """Yield every marked picture of ``source`` in file order."""
    name = DEFAULT_NAME
    skip = -1  # -1: no pending marker
    line = 1
    last = 0
    for m in _TOKEN_RE.finditer(source):
        line += source.count("\n", last, m.start())
        last = m.start()
        kind = m.lastgroup
        if kind == "comment":
            marker = parse_marker(m.group(), match)
            if marker is not None:
                name, skip = marker
                logger.debug("marker %r at line %d, skip %d", name, line, skip)
            continue
        if kind not in ("raw", "string") or skip < 0:
            continue
        if skip > 0:
            skip -= 1
            continue
        # reported at the line the literal ends on
        yield Picture(name, line + m.group().count("\n"), m.group()[1:-1])
        name, skip = DEFAULT_NAME, -1
