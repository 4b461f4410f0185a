"""Page model: the paint list that every template builds and the canvas serialises.

Coordinates are PDF points with the origin at the bottom-left corner of the page
and y increasing upward.
"""
from enum import IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.assets import ImageAsset


class Color(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: float = Field(ge=0.0, le=1.0)
    g: float = Field(ge=0.0, le=1.0)
    b: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBB`` (leading ``#`` optional)."""
        value = value.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"expected #RRGGBB, got {value!r}")
        r, g, b = (int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(r=r, g=g, b=b)

    @classmethod
    def grey(cls, level: float) -> "Color":
        return cls(r=level, g=level, b=level)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


BLACK = Color(r=0.0, g=0.0, b=0.0)
WHITE = Color(r=1.0, g=1.0, b=1.0)


class Rect(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float  # measured from the page bottom
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def inset(self, dx: float, dy: float | None = None) -> "Rect":
        """Shrink by ``dx`` horizontally and ``dy`` vertically on every side, never below zero."""
        if dy is None:
            dy = dx
        return Rect(
            x=self.x + dx,
            y=self.y + dy,
            width=max(0.0, self.width - 2 * dx),
            height=max(0.0, self.height - 2 * dy),
        )

    def shifted(self, dx: float, dy: float) -> "Rect":
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


class FontRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: Literal["serif", "sans", "script"] = "serif"
    weight: Literal["regular", "bold"] = "regular"


SERIF = FontRef(family="serif")
SERIF_BOLD = FontRef(family="serif", weight="bold")
SANS = FontRef(family="sans")
SANS_BOLD = FontRef(family="sans", weight="bold")
SCRIPT = FontRef(family="script")

# Standard 14 PDF faces; Times-Italic stands in for the decorative script family.
BUILTIN_FACES: dict[str, str] = {
    "serif": "Times-Roman",
    "serif_bold": "Times-Bold",
    "sans": "Helvetica",
    "sans_bold": "Helvetica-Bold",
    "script": "Times-Italic",
    "script_bold": "Times-BoldItalic",
}


class FontSet(BaseModel):
    """Maps each FontRef to a registered reportlab font name."""

    model_config = ConfigDict(frozen=True)

    faces: dict[str, str] = Field(default_factory=lambda: dict(BUILTIN_FACES))

    def resolve(self, ref: FontRef) -> str:
        key = ref.family if ref.weight == "regular" else f"{ref.family}_bold"
        return self.faces.get(key) or self.faces[ref.family]

    @property
    def embedded(self) -> list[str]:
        """Names that are not standard faces and therefore get embedded."""
        builtin = set(BUILTIN_FACES.values())
        return sorted({name for name in self.faces.values() if name not in builtin})


class TextMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    ascent: float
    descent: float  # negative below the baseline


class Layer(IntEnum):
    """Paint order. Lower layers are painted first; append order is kept within a layer."""

    BACKGROUND = 0
    FRAME = 1
    IMAGE = 2
    TEXT = 3


class TextOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    layer: Layer = Layer.TEXT
    text: str
    x: float
    y: float  # baseline
    font_name: str  # registered reportlab name, resolved through a FontSet
    size: float = Field(gt=0.0)
    color: Color = BLACK
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    rotation: float = 0.0  # degrees, counter-clockwise about (x, y)


class LineOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["line"] = "line"
    layer: Layer = Layer.FRAME
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float = Field(default=1.0, ge=0.0)
    color: Color = BLACK


class RectOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rect"] = "rect"
    layer: Layer = Layer.FRAME
    rect: Rect
    border_color: Color | None = None
    border_width: float = Field(default=0.0, ge=0.0)
    fill_color: Color | None = None
    fill_opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    corner_radius: float = Field(default=0.0, ge=0.0)


class ImageOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    layer: Layer = Layer.IMAGE
    asset: ImageAsset
    rect: Rect
    clip: Rect | None = None


PaintOp = Annotated[Union[TextOp, LineOp, RectOp, ImageOp], Field(discriminator="kind")]


class Document(BaseModel):
    """A single fixed-size page and its ordered paint list.

    Drawing functions in ``pipeline.canvas`` append to ``ops``; nothing removes
    or reorders entries, so the list doubles as a log of what was drawn.
    """

    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
    margin: float = Field(default=0.0, ge=0.0)
    fonts: FontSet = Field(default_factory=FontSet)
    ops: list[PaintOp] = Field(default_factory=list)

    @field_validator("margin")
    @classmethod
    def margin_fits_page(cls, v: float, info) -> float:
        width = info.data.get("width")
        height = info.data.get("height")
        if width is not None and height is not None and 2 * v > min(width, height):
            raise ValueError("margin leaves no drawable area")
        return v

    @property
    def content_rect(self) -> Rect:
        return Rect(
            x=self.margin,
            y=self.margin,
            width=self.width - 2 * self.margin,
            height=self.height - 2 * self.margin,
        )

    def texts(self) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp)]

    def images(self) -> list[ImageOp]:
        return [op for op in self.ops if isinstance(op, ImageOp)]

    def find_text(self, text: str) -> TextOp | None:
        return next((op for op in self.texts() if op.text == text), None)

    def paint_order(self) -> list:
        """Ops sorted by layer; ``sorted`` is stable so append order survives within a layer."""
        return sorted(self.ops, key=lambda op: op.layer)
