"""Tests for the DesignSystem model and design.yaml loader."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from models.design import DesignSystem, FontFiles
from models.page import Color


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_certificate_page_is_landscape(self):
        d = DesignSystem()
        assert d.certificate.page.width_pt == 842.0
        assert d.certificate.page.height_pt == 595.0

    def test_portfolio_page_is_portrait(self):
        d = DesignSystem()
        assert d.portfolio.page.width_pt == 595.0
        assert d.portfolio.page.height_pt == 842.0
        assert d.portfolio.page.margin_pt == 40.0

    def test_default_row_split(self):
        assert DesignSystem().portfolio.top_row_share == 0.36

    def test_default_card_chrome(self):
        card = DesignSystem().portfolio.card
        assert card.shadow_offset == 3.0
        assert card.corner_radius == 10.0
        assert card.fill_opacity == 0.86

    def test_color_lookup(self):
        d = DesignSystem()
        assert d.colors.color("ink") == Color(r=0.0, g=0.0, b=0.0)

    def test_no_fonts_configured(self):
        assert DesignSystem().fonts.configured() == {}


# ---------------------------------------------------------------------------
# load()
# ---------------------------------------------------------------------------

class TestLoad:
    def test_loads_fixture_design_yaml(self, fixtures_dir):
        d = DesignSystem.load(fixtures_dir / "design.yaml")
        assert d.colors.ink == "#111111"
        assert d.certificate.heading == "Certificate of Excellence"
        assert d.certificate.signatory == "Alex Morgan"
        assert d.certificate.watermark_angle == 45
        assert d.portfolio.logo_width == 150
        assert d.portfolio.card.corner_radius == 6

    def test_partial_yaml_keeps_defaults(self, fixtures_dir):
        d = DesignSystem.load(fixtures_dir / "design.yaml")
        assert d.certificate.page.width_pt == 842.0
        assert d.colors.parchment == "#F4ECDD"
        assert d.portfolio.card.shadow_offset == 3.0

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DesignSystem.load(tmp_path / "nonexistent.yaml")

    def test_load_or_default_returns_default_when_missing(self, tmp_path):
        d = DesignSystem.load_or_default(tmp_path / "nonexistent.yaml")
        assert d == DesignSystem()

    def test_empty_yaml_is_default(self, tmp_path):
        (tmp_path / "design.yaml").write_text("", encoding="utf-8")
        assert DesignSystem.load(tmp_path / "design.yaml") == DesignSystem()

    def test_relative_font_paths_resolve_against_yaml(self, tmp_path):
        (tmp_path / "design.yaml").write_text("fonts:\n  script: fonts/Script.ttf\n", encoding="utf-8")
        d = DesignSystem.load(tmp_path / "design.yaml")
        assert d.fonts.script == tmp_path / "fonts" / "Script.ttf"

    def test_invalid_share_rejected(self, tmp_path):
        (tmp_path / "design.yaml").write_text("portfolio:\n  top_row_share: 1.5\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            DesignSystem.load(tmp_path / "design.yaml")

    def test_bad_colour_rejected_at_load(self, tmp_path):
        (tmp_path / "design.yaml").write_text("colors:\n  accent: \"gold\"\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            DesignSystem.load(tmp_path / "design.yaml")


class TestFontFiles:
    def test_bold_without_regular_rejected(self):
        with pytest.raises(ValidationError):
            FontFiles(serif_bold=Path("Bold.ttf"))

    def test_configured_lists_only_set_paths(self):
        files = FontFiles(script=Path("Script.ttf"))
        assert files.configured() == {"script": Path("Script.ttf")}
