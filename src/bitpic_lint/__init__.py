# bitpic_lint/__init__.py

"""Bitpeek picture string linter.

Re-exports the scanner and renderer for convenient imports in tests or other code.
"""
from .__about__ import (
    __version__,
    APP_NAME,
    APP_TITLE,
    AUTHOR,
    COPYRIGHT,
    COPYRIGHT_YEAR,
    HOMEPAGE,
    about_text,
)

from .logic import (
    MAX_BITS,
    MAX_FIELDS,
    BitAccountant,
    Diagnostic,
    Field,
    FieldKind,
    Layout,
    PicStringError,
    check_command,
    check_ranges,
    check_single_bit,
    check_varbits,
    scan_picture,
)

from .render import (
    display_width,
    render_caret,
    render_diagram,
    validate,
)

from .source import Picture, iter_pictures, parse_marker

__all__ = [
    # Metadata
    "__version__", "APP_NAME", "APP_TITLE",
    "AUTHOR", "COPYRIGHT", "COPYRIGHT_YEAR", "HOMEPAGE", "about_text",
    # Scanning
    "MAX_BITS", "MAX_FIELDS",
    "BitAccountant", "Diagnostic", "Field", "FieldKind", "Layout", "PicStringError",
    "check_command", "check_ranges", "check_single_bit", "check_varbits",
    "scan_picture",
    # Rendering
    "display_width", "render_caret", "render_diagram", "validate",
    # Source files
    "Picture", "iter_pictures", "parse_marker",
]
