# tests/test_render.py
import pytest

from bitpic_lint.logic import Diagnostic, Field, FieldKind, Layout


@pytest.mark.parametrize(
    "text,width",
    [("", 0), ("abc", 3), ("żółć", 4), ("鉴定", 4), ("包类型'F", 8), ("a\x00b", 2)],
)
def test_display_width(render, text, width):
    assert render.display_width(text) == width


@pytest.mark.parametrize(
    "low,width,columns,expected",
    [
        (5, 1, 1, "|5"),
        (60, 1, 7, "|    60"),
        (0, 16, 7, "|15 16b 0"),
        (48, 11, 12, "|58.. 11b ..48"),
        (16, 32, 22, "|47..     32b     ..16"),
        (1, 3, 23, "|3..       3b       ..1"),
    ],
)
def test_bits_segment(render, low, width, columns, expected):
    fld = Field(low, width, "", FieldKind.HEX_CHAIN)
    assert render.bits_segment(fld, columns) == expected


def test_mark_segment(render):
    assert render.mark_segment("|15 16b 0") == "        ^"
    assert render.mark_segment("|0") == " ^"


def test_render_field_pads_short_label(render):
    fld = Field(0, 11, "D.11@", FieldKind.DECIMAL_NUMBER)
    assert render.render_field(fld) == ("|10 11b 0", "        ^", "¨¨¨D.11@¨")


def test_render_field_wide_label_wins(render):
    fld = Field(48, 11, " 鉴定:0xFHH", FieldKind.HEX_CHAIN)
    bits, marks, cmds = render.render_field(fld)
    assert bits == "|58.. 11b ..48"
    assert cmds == "¨¨ 鉴定:0xFHH¨"
    assert render.display_width(cmds) == len(bits) == len(marks)


def test_render_diagram_empty(render):
    layout = Layout(picture="", tail=Field(0, 0, "", FieldKind.LITERAL_TAIL))
    assert render.render_diagram(layout) == ("bits:|", "     |", "cmds:¨")


def test_render_caret(render):
    assert render.render_caret(Diagnostic("x", pos=12, end=14)) == "          ^^^^HERE"
    # never fewer than the two characters left of the position
    assert render.render_caret(Diagnostic("x", pos=2, end=2)) == "^^HERE"
