"""Design system model: typed representation of design.yaml.

Loaded once by the CLI and passed to the templates. Every field has a default so
the composer works when design.yaml is absent or only partially specified.
"""
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from models.page import Color


class PageSize(BaseModel):
    width_pt: float = Field(gt=0.0)
    height_pt: float = Field(gt=0.0)
    margin_pt: float = Field(default=40.0, ge=0.0)


class ColorPalette(BaseModel):
    ink: str = "#000000"
    muted: str = "#404045"
    accent: str = "#B08D57"  # gold used for frames and the watermark
    rule: str = "#8C7A5B"
    parchment: str = "#F4ECDD"
    card_border: str = "#E6E6EB"
    shadow: str = "#000000"

    @field_validator("*")
    @classmethod
    def must_be_hex(cls, v: str) -> str:
        Color.from_hex(v)
        return v

    def color(self, key: str) -> Color:
        return Color.from_hex(getattr(self, key))


class CardStyle(BaseModel):
    shadow_offset: float = 3.0
    shadow_opacity: float = Field(default=0.16, ge=0.0, le=1.0)
    corner_radius: float = Field(default=10.0, ge=0.0)
    border_width: float = Field(default=0.7, ge=0.0)
    fill_opacity: float = Field(default=0.86, ge=0.0, le=1.0)
    padding: float = 10.0
    caption_height: float = 18.0
    caption_size: float = 9.0


class CertificateDesign(BaseModel):
    page: PageSize = Field(default_factory=lambda: PageSize(width_pt=842.0, height_pt=595.0, margin_pt=28.0))
    heading: str = "Certificate of Completion"
    subheading: str = "The Style Challenge"
    signatory: str = "Patrick Cameron"
    frame_inset: float = 10.0  # gap between the outer and inner frame
    watermark_size: float = 220.0
    watermark_angle: float = 30.0
    watermark_opacity: float = Field(default=0.06, ge=0.0, le=1.0)
    illustration_box: tuple[float, float] = (150.0, 110.0)
    signature_box: tuple[float, float] = (170.0, 56.0)


class PortfolioDesign(BaseModel):
    page: PageSize = Field(default_factory=lambda: PageSize(width_pt=595.0, height_pt=842.0, margin_pt=40.0))
    logo_width: float = 170.0
    plate_padding: float = 8.0
    top_row_share: float = Field(default=0.36, gt=0.0, lt=1.0)
    row_gap: float = 20.0
    column_gap: float = 12.0
    hero_width_share: float = Field(default=0.8, gt=0.0, le=1.0)
    bottom_reserve: float = 28.0
    card: CardStyle = Field(default_factory=CardStyle)


class FontFiles(BaseModel):
    """Optional TrueType files per family; unset families use the built-in PDF faces."""

    serif: Path | None = None
    serif_bold: Path | None = None
    sans: Path | None = None
    sans_bold: Path | None = None
    script: Path | None = None
    script_bold: Path | None = None

    @model_validator(mode="after")
    def bold_needs_regular(self) -> "FontFiles":
        for family in ("serif", "sans", "script"):
            if getattr(self, f"{family}_bold") is not None and getattr(self, family) is None:
                raise ValueError(f"{family}_bold given without {family}")
        return self

    def configured(self) -> dict[str, Path]:
        return {key: path for key, path in self.model_dump().items() if path is not None}


class DesignSystem(BaseModel):
    """Complete design system loaded from design.yaml."""

    colors: ColorPalette = Field(default_factory=ColorPalette)
    certificate: CertificateDesign = Field(default_factory=CertificateDesign)
    portfolio: PortfolioDesign = Field(default_factory=PortfolioDesign)
    fonts: FontFiles = Field(default_factory=FontFiles)

    @classmethod
    def load(cls, path: Path) -> "DesignSystem":
        """Load from a YAML file. Missing fields use Pydantic defaults.

        Raises FileNotFoundError if path does not exist. Relative font paths are
        resolved against the YAML file's directory.
        """
        import yaml  # lazy, only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        design = cls.model_validate(data)
        fonts = {
            key: (p if p.is_absolute() else path.parent / p)
            for key, p in design.fonts.configured().items()
        }
        return design.model_copy(update={"fonts": FontFiles(**fonts)})

    @classmethod
    def load_or_default(cls, path: Path) -> "DesignSystem":
        """Load from path if it exists, otherwise return default design system."""
        if path.exists():
            return cls.load(path)
        return cls()
