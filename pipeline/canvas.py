"""Canvas: drawing primitives over a Document paint list, and PDF serialisation.

Draw calls only append to ``Document.ops``. ``serialize`` is the single place
that talks to reportlab: it paints the ops in layer order onto one page and
returns the PDF bytes. The canvas runs in reportlab's invariant mode (fixed
creation date and document id), so the same paint list always yields the same
bytes.
"""
import io
import logging

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as rl_canvas

from models.assets import ImageAsset
from models.errors import RenderError
from models.page import (
    BLACK,
    Color,
    Document,
    FontRef,
    FontSet,
    ImageOp,
    Layer,
    LineOp,
    Rect,
    RectOp,
    TextMetrics,
    TextOp,
)

logger = logging.getLogger(__name__)

_PDF_CREATOR = "Style Challenge composer"


def create_page(width: float, height: float, margin: float = 0.0, fonts: FontSet | None = None) -> Document:
    return Document(width=width, height=height, margin=margin, fonts=fonts or FontSet())


def measure_text(text: str, font: FontRef, size: float, fonts: FontSet | None = None) -> TextMetrics:
    """Exact metrics from the registered font's glyph widths and ascent/descent."""
    name = (fonts or FontSet()).resolve(font)
    width = pdfmetrics.stringWidth(text, name, size)
    ascent, descent = pdfmetrics.getAscentDescent(name, size)
    return TextMetrics(width=width, height=ascent - descent, ascent=ascent, descent=descent)


def draw_text(
    doc: Document,
    text: str,
    *,
    x: float,
    y: float,
    font: FontRef,
    size: float,
    color: Color = BLACK,
    opacity: float = 1.0,
    rotation: float = 0.0,
    layer: Layer = Layer.TEXT,
) -> TextOp:
    op = TextOp(
        text=text,
        x=x,
        y=y,
        font_name=doc.fonts.resolve(font),
        size=size,
        color=color,
        opacity=opacity,
        rotation=rotation,
        layer=layer,
    )
    doc.ops.append(op)
    return op


def draw_line(
    doc: Document,
    *,
    start: tuple[float, float],
    end: tuple[float, float],
    thickness: float = 1.0,
    color: Color = BLACK,
    layer: Layer = Layer.FRAME,
) -> LineOp:
    op = LineOp(
        x1=start[0], y1=start[1], x2=end[0], y2=end[1],
        thickness=thickness, color=color, layer=layer,
    )
    doc.ops.append(op)
    return op


def draw_rect(
    doc: Document,
    rect: Rect,
    *,
    border_color: Color | None = None,
    border_width: float = 0.0,
    fill_color: Color | None = None,
    fill_opacity: float = 1.0,
    corner_radius: float = 0.0,
    layer: Layer = Layer.FRAME,
) -> RectOp:
    op = RectOp(
        rect=rect,
        border_color=border_color,
        border_width=border_width,
        fill_color=fill_color,
        fill_opacity=fill_opacity,
        corner_radius=corner_radius,
        layer=layer,
    )
    doc.ops.append(op)
    return op


def draw_image(
    doc: Document,
    asset: ImageAsset,
    rect: Rect,
    *,
    clip: Rect | None = None,
    layer: Layer = Layer.IMAGE,
) -> ImageOp:
    """Stretch ``asset`` to exactly ``rect``. Aspect-preserving placement is the caller's job."""
    op = ImageOp(asset=asset, rect=rect, clip=clip, layer=layer)
    doc.ops.append(op)
    return op


def serialize(doc: Document, *, title: str | None = None) -> bytes:
    """Paint ``doc`` onto a single PDF page and return the bytes."""
    buf = io.BytesIO()
    try:
        c = rl_canvas.Canvas(
            buf,
            pagesize=(doc.width, doc.height),
            invariant=1,
            pageCompression=1,
        )
        c.setCreator(_PDF_CREATOR)
        if title:
            c.setTitle(title)
        for op in doc.paint_order():
            _paint(c, op)
        c.showPage()
        c.save()
    except Exception as exc:
        raise RenderError(f"PDF serialisation failed: {exc}") from exc
    data = buf.getvalue()
    logger.debug("Serialised %d ops into %d bytes", len(doc.ops), len(data))
    return data


# ---------------------------------------------------------------------------
# Painting
# ---------------------------------------------------------------------------

def _pt(value: float) -> float:
    """Round to 1/100 pt. Only serialisation rounds; layout stays in full floats."""
    return round(value, 2)


def _paint(c, op) -> None:
    c.saveState()
    try:
        if isinstance(op, TextOp):
            _paint_text(c, op)
        elif isinstance(op, LineOp):
            _paint_line(c, op)
        elif isinstance(op, RectOp):
            _paint_rect(c, op)
        elif isinstance(op, ImageOp):
            _paint_image(c, op)
        else:  # pragma: no cover
            raise RenderError(f"unknown paint op {op!r}")
    finally:
        c.restoreState()


def _paint_text(c, op: TextOp) -> None:
    c.setFillColorRGB(*op.color.as_tuple())
    if op.opacity < 1.0:
        c.setFillAlpha(op.opacity)
    c.setFont(op.font_name, op.size)
    if op.rotation:
        c.translate(_pt(op.x), _pt(op.y))
        c.rotate(op.rotation)
        c.drawString(0, 0, op.text)
    else:
        c.drawString(_pt(op.x), _pt(op.y), op.text)


def _paint_line(c, op: LineOp) -> None:
    c.setStrokeColorRGB(*op.color.as_tuple())
    c.setLineWidth(op.thickness)
    c.line(_pt(op.x1), _pt(op.y1), _pt(op.x2), _pt(op.y2))


def _paint_rect(c, op: RectOp) -> None:
    stroke = op.border_color is not None and op.border_width > 0
    fill = op.fill_color is not None
    if not (stroke or fill):
        return
    if fill:
        c.setFillColorRGB(*op.fill_color.as_tuple())
        if op.fill_opacity < 1.0:
            c.setFillAlpha(op.fill_opacity)
    if stroke:
        c.setStrokeColorRGB(*op.border_color.as_tuple())
        c.setLineWidth(op.border_width)
    r = op.rect
    if op.corner_radius > 0:
        radius = min(op.corner_radius, r.width / 2, r.height / 2)
        c.roundRect(_pt(r.x), _pt(r.y), _pt(r.width), _pt(r.height), radius,
                    stroke=int(stroke), fill=int(fill))
    else:
        c.rect(_pt(r.x), _pt(r.y), _pt(r.width), _pt(r.height),
               stroke=int(stroke), fill=int(fill))


def _paint_image(c, op: ImageOp) -> None:
    if op.clip is not None:
        path = c.beginPath()
        path.rect(_pt(op.clip.x), _pt(op.clip.y), _pt(op.clip.width), _pt(op.clip.height))
        c.clipPath(path, stroke=0, fill=0)
    reader = ImageReader(io.BytesIO(op.asset.data))
    r = op.rect
    c.drawImage(
        reader,
        _pt(r.x),
        _pt(r.y),
        width=_pt(r.width),
        height=_pt(r.height),
        mask="auto" if op.asset.encoding == "flat" else None,
    )
