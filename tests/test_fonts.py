"""Tests for TrueType registration.

The happy path uses the Vera font reportlab ships with; those tests are
skipped if the installed reportlab build leaves it out.
"""
from pathlib import Path

import pytest
import reportlab

from models.errors import DecodeError, FontDecodeError
from models.page import SERIF, SERIF_BOLD, FontRef
from pipeline.canvas import create_page, draw_text, measure_text, serialize
from pipeline.fonts import load_fonts

VERA = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"
needs_vera = pytest.mark.skipif(not VERA.is_file(), reason="reportlab build without Vera.ttf")


class TestLoadFonts:
    def test_no_fonts_gives_builtins(self):
        fonts = load_fonts({})
        assert fonts.resolve(SERIF) == "Times-Roman"
        assert fonts.embedded == []

    def test_garbage_bytes_raise(self):
        with pytest.raises(FontDecodeError):
            load_fonts({"serif": b"this is not a font"})

    def test_font_error_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            load_fonts({"sans": b""})

    def test_unknown_slot_raises(self):
        with pytest.raises(FontDecodeError, match="unknown font slot"):
            load_fonts({"monospace": b"..."})

    @needs_vera
    def test_registers_truetype(self):
        fonts = load_fonts({"serif": VERA.read_bytes()})
        name = fonts.resolve(SERIF)
        assert name.startswith("SC-serif-")
        assert name in fonts.embedded

    @needs_vera
    def test_regular_stands_in_for_missing_bold(self):
        fonts = load_fonts({"serif": VERA.read_bytes()})
        assert fonts.resolve(SERIF_BOLD) == fonts.resolve(SERIF)
        # Families without a custom face keep the standard ones.
        assert fonts.resolve(FontRef(family="sans", weight="bold")) == "Helvetica-Bold"

    @needs_vera
    def test_same_bytes_same_name(self):
        data = VERA.read_bytes()
        assert load_fonts({"serif": data}).resolve(SERIF) == load_fonts({"serif": data}).resolve(SERIF)

    @needs_vera
    def test_embedded_font_renders(self):
        fonts = load_fonts({"sans": VERA.read_bytes()})
        doc = create_page(300, 200, fonts=fonts)
        sans = FontRef(family="sans")
        draw_text(doc, "Jane Doe", x=20, y=100, font=sans, size=20)
        assert measure_text("Jane Doe", sans, 20, fonts).width > 0
        data = serialize(doc)
        assert data.startswith(b"%PDF")
        assert serialize(doc) == data
