# bitpic_lint/render.py

from __future__ import annotations

from typing import Tuple

from wcwidth import wcwidth

from .logic import MAX_BITS, Diagnostic, Field, Layout, scan_picture

FILLER = "¨"
TICK = "^"
PIPE = "|"
BITS_HEAD = "bits:"
ERR_HEAD = " ERR:"
MARK_HEAD = "     "
CMDS_HEAD = "cmds:" + FILLER
CARET_TAIL = "HERE"
CARET_LOOKBACK = 2

Result = Tuple[str, str, str, str]


def display_width(text: str) -> int:
    """Terminal columns taken by ``text``; non-printables count as 0."""
    return sum(max(wcwidth(ch), 0) for ch in text)


# ---------------- Segments ----------------
def bits_segment(fld: Field, columns: int) -> str:
    """
    Bit range description for ``fld``, at least ``columns`` wide.

    Single bits:  |5   (left-padded with spaces)
    Ranges:       |15 8b 8, then |15.. 8b ..8, then the long form with the
                  width centred in spaces. The label is never cut.
    """
    if fld.width == 1:
        desc = f"{PIPE}{fld.low_bit}"
        if columns > len(desc):
            desc = PIPE + " " * (columns - len(desc)) + str(fld.low_bit)
        return desc

    mid = f"{PIPE}{fld.high_bit} {fld.width}b {fld.low_bit}"
    if columns <= len(mid):
        return mid
    long = f"{PIPE}{fld.high_bit}.. {fld.width}b ..{fld.low_bit}"
    if columns <= len(long):
        return long
    adj = columns - len(long)
    return (
        f"{PIPE}{fld.high_bit}.. "
        + " " * (adj - adj // 2)
        + f"{fld.width}b"
        + " " * (adj // 2)
        + f" ..{fld.low_bit}"
    )

def mark_segment(bits: str) -> str:
    return " " * (len(bits) - 1) + TICK

def cmds_segment(fld: Field, bits: str, columns: int) -> str:
    return FILLER * max(len(bits) - columns, 0) + fld.label + FILLER

def render_field(fld: Field) -> Tuple[str, str, str]:
    # one extra column for the separator that closes the label
    columns = display_width(fld.label) + 1
    bits = bits_segment(fld, columns)
    return bits, mark_segment(bits), cmds_segment(fld, bits, columns)


# ---------------- Whole diagrams ----------------
def render_diagram(layout: Layout) -> Tuple[str, str, str]:
    """Three aligned lines, highest bits first."""
    bits = [ERR_HEAD if layout.bits > MAX_BITS else BITS_HEAD]
    marks = [MARK_HEAD]
    cmds = [CMDS_HEAD]
    for fld in layout.display_order():
        b, m, c = render_field(fld)
        bits.append(b)
        marks.append(m)
        cmds.append(c)
    bits.append(PIPE)
    marks.append(PIPE)
    if layout.tail is not None:
        cmds.append(layout.tail.label)
    return "".join(bits), "".join(marks), "".join(cmds)

def render_caret(diag: Diagnostic) -> str:
    """Caret span under the padded picture, ending with ``HERE``."""
    start = diag.pos - CARET_LOOKBACK
    return "".join(TICK if i >= start else " " for i in range(diag.end)) + CARET_TAIL


def validate(picture: str) -> Result:
    """
    Check a picture string and describe it.

    Returns ``(status, bits, marks, cmds)``. ``status`` is ``"OK."`` or
    ``"Error: <message>"``. Positional errors replace the diagram with the
    picture and a caret line pointing at the offending command; the bit
    overflow error keeps the full diagram.
    """
    layout = scan_picture(picture)
    diag = layout.diagnostic
    if diag is None:
        return ("OK.",) + render_diagram(layout)
    status = f"Error: {diag.message}"
    if not diag.positional:
        return (status,) + render_diagram(layout)
    return status, "", picture + " ", render_caret(diag)
