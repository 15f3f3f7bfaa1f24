# bitpic_lint/logic.py

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)

MAX_BITS = 64
MAX_FIELDS = 256

START = "?"          # sentinel put in front of every picture
FLAG_MARKS = "<=>?"  # single-bit marks, each one opens the label shield
QUOTE = "'"
ESCAPE = "\\"
SUPPRESS = "*"
SKIP_LEAD = "!"
DECIMAL_LEAD = "D"
IPV4_SHORTHAND = "IPv4.Address32@"
DECIMAL_MIN_LEAD = 4
DIGITS = "0123456789"

FIXED_WIDTHS = {"A": 7, "C": 8, "G": 5}
COMPLETING_WIDTHS = {"F": 3, "E": 2, "B": 1}

MSG_MISLEADING = "Misleading use of B/E/F number. See section 'Valid Numbers' in docs."
MSG_BAD_HEX = "Bad shape of a Hex number. See section 'Valid Numbers' in docs."
MSG_BAD_BITCOUNT = "Bad bitcount."
MSG_MISPLACED_AT = "Misplaced @"
MSG_BAD_IPV4 = "Invalid pic for IPv4."
MSG_NO_LEAD_IN = "Can't find valid start command for this dd@."
MSG_OVERFLOW = f"Pic string takes more than {MAX_BITS} bits!"
MSG_TOO_MANY = f"Pic string has more than {MAX_FIELDS} fields."


class PicStringError(ValueError):
    """Raised by a command validator; ``pos`` indexes the padded picture."""

    def __init__(self, message: str, pos: int):
        super().__init__(message)
        self.message = message
        self.pos = pos


class FieldKind(enum.Enum):
    SINGLE_BIT = "single-bit"
    FIXED_RANGE = "fixed-range"
    HEX_CHAIN = "hex-chain"
    OCTAL_CHAIN = "octal-chain"
    DIBIT_CHAIN = "dibit-chain"
    DECIMAL_NUMBER = "decimal-number"
    SKIP = "skip"
    IPV4_ADDRESS = "ipv4-address"
    LITERAL_TAIL = "literal-tail"


@dataclass(frozen=True)
class Field:
    low_bit: int
    width: int
    label: str
    kind: FieldKind

    @property
    def high_bit(self) -> int:
        return self.low_bit + self.width - 1


@dataclass(frozen=True)
class Diagnostic:
    """Why a picture failed.

    Positional diagnostics carry ``pos`` (validator position) and ``end``
    (offending command), both indexing the sentinel-padded picture.
    The overflow diagnostic is not positional and leaves both at -1.
    """
    message: str
    pos: int = -1
    end: int = -1
    positional: bool = True


@dataclass
class Layout:
    """Outcome of a scan: fields in scan order (lowest bit first)."""
    picture: str
    fields: List[Field] = field(default_factory=list)
    tail: Field | None = None
    bits: int = 0
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    def display_order(self) -> list[Field]:
        return self.fields[::-1]


# ---------------- Character classes ----------------
def is_command(ch: str) -> bool:
    """True for characters the scanner hands over to a validator."""
    return "<" <= ch <= "H" and ch != DECIMAL_LEAD

def is_command_letter(ch: str) -> bool:
    return "A" <= ch <= "H"

def is_digit_like(ch: str) -> bool:
    # 1..9, the flag marks, @ and A..H; ':' and ';' sit inside that range
    return "1" <= ch <= "H" and ch not in ":;"

def _before(pic: str, pi: int) -> str:
    """Character left of ``pi``; empty at the start of the picture."""
    return pic[pi - 1] if pi > 1 else ""


# ---------------- Bit accounting ----------------
class BitAccountant:
    """Hands out consecutive bit ranges starting at bit 0."""

    def __init__(self) -> None:
        self.offset = 0

    def commit(self, width: int) -> int:
        """Reserve ``width`` bits; return the low bit of the reservation."""
        if width < 1:
            raise ValueError("width must be positive")
        low = self.offset
        self.offset += width
        return low

    @property
    def overflowed(self) -> bool:
        return self.offset > MAX_BITS


# ---------------- Command validators ----------------
# Every validator takes the padded picture and the index of the command
# character, and returns (new_index, width, kind) where new_index is the
# leftmost character consumed by the command.
def check_single_bit(pic: str, pi: int) -> Tuple[int, int, FieldKind]:
    """Flag marks and ``B``. A ``B`` may follow another ``B`` only."""
    if pic[pi] == "B":
        prev = _before(pic, pi)
        if prev != "B" and is_digit_like(prev):
            raise PicStringError(MSG_MISLEADING, pi)
    return pi, 1, FieldKind.SINGLE_BIT

def check_ranges(pic: str, pi: int) -> Tuple[int, int, FieldKind]:
    """
    Fixed letters (A, C, G) and the chainable E/F/H runs.

    Valid numbers:
      - H run, optionally completed on its left by a single F, E or B
        (BH 5b, EH 6b, FH 7b, HH 8b, BHH 9b ...).
      - EFF octal byte, prepended by something that is not digit-like.
      - lone F or lone E not glued to another command letter.
    A ``*`` right after a run turns the checks off for that run.
    """
    ch = pic[pi]
    if ch in FIXED_WIDTHS:
        return pi, FIXED_WIDTHS[ch], FieldKind.FIXED_RANGE

    off = pic[pi + 1]
    if ch == "H":
        width = 4
        while pic[pi - 1] == "H":
            pi -= 1
            width += 4
        completer = pic[pi - 1]
        if completer in COMPLETING_WIDTHS:
            pi -= 1
            width += COMPLETING_WIDTHS[completer]
        if off != SUPPRESS and pic[pi - 1] in "HFEB":
            raise PicStringError(MSG_BAD_HEX, pi)
        return pi, width, FieldKind.HEX_CHAIN

    if ch == "F":
        run = 1
        while pic[pi - 1] == "F":
            pi -= 1
            run += 1
        width = 3 * run
        octal = False
        if run == 2 and pic[pi - 1] == "E":
            pi -= 1
            width += 2
            octal = True
        prev = _before(pic, pi)
        if not (off == SUPPRESS
                or (run == 1 and not is_command_letter(prev))
                or (octal and not is_digit_like(prev))):
            raise PicStringError(MSG_MISLEADING, pi)
        return pi, width, FieldKind.OCTAL_CHAIN

    if ch == "E":
        run = 1
        while pic[pi - 1] == "E":
            pi -= 1
            run += 1
        if off != SUPPRESS and not (run == 1 and not is_command_letter(_before(pic, pi))):
            raise PicStringError(MSG_MISLEADING, pi)
        return pi, 2 * run, FieldKind.DIBIT_CHAIN

    raise ValueError(f"Not a range command: {ch!r}")

def check_varbits(pic: str, pi: int) -> Tuple[int, int, FieldKind]:
    """
    ``dd@`` fields. The two digits give the width (1..64); the lead-in
    decides the kind:
      !dd@             skip dd bits
      D.dd@            decimal, D four places left of @ (dd > 16: dd//3 places)
      IPv4.Address32@  32 bit address
    """
    if pi < 3:
        raise PicStringError(MSG_MISPLACED_AT, 0)
    tens, ones = pic[pi - 2], pic[pi - 1]
    if tens not in DIGITS or ones not in DIGITS:
        raise PicStringError(MSG_BAD_BITCOUNT, pi - 2)
    k = int(tens + ones)
    if k == 0 or k > MAX_BITS:
        raise PicStringError(MSG_BAD_BITCOUNT, pi - 2)

    lead = DECIMAL_MIN_LEAD if k <= 16 else k // 3
    if pic[pi - 3] == SKIP_LEAD:
        return pi - 3, k, FieldKind.SKIP
    if pi >= lead and pic[pi - lead] == DECIMAL_LEAD:
        return pi - lead, k, FieldKind.DECIMAL_NUMBER
    start = pi - len(IPV4_SHORTHAND) + 1
    if start > 0 and pic[start] == IPV4_SHORTHAND[0]:
        if pic[start:pi + 1] != IPV4_SHORTHAND:
            raise PicStringError(MSG_BAD_IPV4, start)
        return start, 32, FieldKind.IPV4_ADDRESS
    raise PicStringError(MSG_NO_LEAD_IN, pi - 2)

def check_command(pic: str, pi: int) -> Tuple[int, int, FieldKind]:
    ch = pic[pi]
    if ch in FLAG_MARKS or ch == "B":
        return check_single_bit(pic, pi)
    if ch == "@":
        return check_varbits(pic, pi)
    return check_ranges(pic, pi)


# ---------------- Shielding scanner ----------------
class Shield(enum.Enum):
    NONE = "none"
    QUOTED = "quoted"
    LABEL = "label"


def _next_command(pic: str, pi: int, shield: Shield) -> tuple[int, Shield]:
    """Walk left from ``pi`` to the next command (or the sentinel at 0)."""
    while pi > 0:
        pi -= 1
        if pi == 0:
            break
        ch = pic[pi]
        if pic[pi - 1] == ESCAPE:
            pi -= 1
        elif ch == QUOTE:
            shield = Shield.QUOTED if shield is Shield.NONE else Shield.NONE
        elif shield is Shield.QUOTED:
            continue
        elif ch in FLAG_MARKS:
            return pi, Shield.LABEL
        elif shield is Shield.LABEL or not is_command(ch):
            continue
        else:
            return pi, shield
    return 0, shield


def scan_picture(picture: str) -> Layout:
    """
    Scan ``picture`` from its last character to its first and collect the
    fields it describes. Never raises for string input: a validator error
    ends the scan and is stored as ``layout.diagnostic``.
    """
    pic = START + picture + " "
    layout = Layout(picture=picture)
    account = BitAccountant()
    shield = Shield.NONE
    pi = len(pic) - 1
    end = pi - 1        # rightmost character belonging to the pending field
    pending = None      # (low_bit, width, kind) waiting for its label

    while pi > 0:
        pi, shield = _next_command(pic, pi, shield)
        label = pic[pi + 1:end + 1]
        if pending is None:
            layout.tail = Field(0, 0, label, FieldKind.LITERAL_TAIL)
        else:
            layout.fields.append(Field(pending[0], pending[1], label, pending[2]))
        if pi == 0:
            break
        if len(layout.fields) >= MAX_FIELDS:
            layout.diagnostic = Diagnostic(MSG_TOO_MANY, pi, pi)
            logger.debug("scan of %r stopped: %s", picture, MSG_TOO_MANY)
            return layout

        end = pi
        try:
            pi, width, kind = check_command(pic, pi)
        except PicStringError as exc:
            layout.diagnostic = Diagnostic(exc.message, exc.pos, end)
            logger.debug("scan of %r failed at %d: %s", picture, exc.pos, exc.message)
            return layout
        pending = (account.commit(width), width, kind)

    layout.bits = account.offset
    if account.overflowed:
        layout.diagnostic = Diagnostic(MSG_OVERFLOW, positional=False)
    return layout
