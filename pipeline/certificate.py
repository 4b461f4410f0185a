"""Certificate template: single landscape page awarded on an approved submission.

Paint order (lowest layer first):
  background artwork or parchment fill, watermark  → BACKGROUND
  double frame, rules, signature line              → FRAME
  illustration, signature image                    → IMAGE
  headings, body lines, signature block text       → TEXT

The body is laid out with a running cursor: each line is drawn at the cursor
and then moves it down by that line's fixed step. Without a salon the salon
line and its step are skipped, so everything below moves up.
"""
import logging

from models.assets import present_asset
from models.design import DesignSystem
from models.fields import CertificateAssets, CertificateFields
from models.page import SCRIPT, SERIF, SERIF_BOLD, Document, FontRef, FontSet, Layer, Rect
from pipeline.canvas import create_page, draw_image, draw_line, draw_rect, draw_text, measure_text, serialize
from pipeline.layout import center_x, contain_fit, cover_fit, fit_font_size, place_fit, rotated_text_origin

logger = logging.getLogger(__name__)

INTRO_LINE = "This certifies that"
COMPLETION_LINE = "has successfully completed the Style Challenge"

# (size, font, step below) for the cursor-driven body block
_INTRO = (20.0, SERIF, 34.0)
_NAME = (30.0, SERIF_BOLD, 40.0)
_SALON = (18.0, SERIF, 32.0)
_COMPLETION = (18.0, SERIF, 30.0)
_STYLE = (20.0, SERIF_BOLD, 0.0)

_NAME_MIN_SIZE = 18.0
_HEADING_SIZE = 40.0
_SUBHEADING_SIZE = 16.0
_BODY_TOP_GAP = 38.0  # first body baseline below the upper rule
_RULE_HALF_WIDTH = 180.0
_RULE_BELOW_BODY = 26.0
_BLOCK_INSET = 30.0  # illustration / signature block distance from the inner frame
_BLOCK_BOTTOM = 24.0


def render_certificate(
    fields: CertificateFields,
    assets: CertificateAssets | None = None,
    *,
    design: DesignSystem | None = None,
    fonts: FontSet | None = None,
) -> bytes:
    """Validate, compose and serialise a certificate. Returns PDF bytes."""
    doc = compose_certificate(fields, assets, design=design, fonts=fonts)
    data = serialize(doc, title=f"Certificate {fields.certificate_id}")
    logger.info("Certificate %s rendered (%d bytes)", fields.certificate_id, len(data))
    return data


def compose_certificate(
    fields: CertificateFields,
    assets: CertificateAssets | None = None,
    *,
    design: DesignSystem | None = None,
    fonts: FontSet | None = None,
) -> Document:
    """Build the certificate paint list. Raises ValidationError before drawing anything."""
    fields.require_complete()
    assets = assets or CertificateAssets()
    design = design or DesignSystem()
    look = design.certificate

    doc = create_page(look.page.width_pt, look.page.height_pt, look.page.margin_pt, fonts)
    outer = doc.content_rect
    inner = outer.inset(look.frame_inset)

    _draw_background(doc, assets, design)
    _draw_frame(doc, outer, inner, design)
    if fields.watermark:
        _draw_watermark(doc, fields.watermark, design)

    rule_y = _draw_headings(doc, inner, design)
    _draw_rule(doc, rule_y, design)
    cursor = _draw_body(doc, fields, rule_y - _BODY_TOP_GAP, inner, design)
    _draw_rule(doc, cursor - _RULE_BELOW_BODY, design)

    _draw_illustration(doc, assets, inner, design)
    _draw_signature_block(doc, fields, assets, inner, design)

    logger.debug("Certificate %s composed with %d ops", fields.certificate_id, len(doc.ops))
    return doc


# ---------------------------------------------------------------------------
# Background, frame, watermark
# ---------------------------------------------------------------------------

def _draw_background(doc: Document, assets: CertificateAssets, design: DesignSystem) -> None:
    page = Rect(x=0, y=0, width=doc.width, height=doc.height)
    artwork = present_asset(assets.background)
    if artwork is None:
        draw_rect(doc, page, fill_color=design.colors.color("parchment"), layer=Layer.BACKGROUND)
        return
    fit = cover_fit(artwork.width, artwork.height, page.width, page.height)
    draw_image(doc, artwork, place_fit(fit, page), clip=page, layer=Layer.BACKGROUND)


def _draw_frame(doc: Document, outer: Rect, inner: Rect, design: DesignSystem) -> None:
    accent = design.colors.color("accent")
    draw_rect(doc, outer, border_color=accent, border_width=2.5)
    draw_rect(doc, inner, border_color=accent, border_width=0.8)


def _draw_watermark(doc: Document, text: str, design: DesignSystem) -> None:
    look = design.certificate
    metrics = measure_text(text, SERIF_BOLD, look.watermark_size, doc.fonts)
    # Cap height is roughly the ascent; centring on it keeps capitals visually centred.
    x, y = rotated_text_origin(
        metrics.width, metrics.ascent, doc.width / 2, doc.height / 2, look.watermark_angle,
    )
    draw_text(
        doc, text,
        x=x, y=y,
        font=SERIF_BOLD, size=look.watermark_size,
        color=design.colors.color("accent"),
        opacity=look.watermark_opacity,
        rotation=look.watermark_angle,
        layer=Layer.BACKGROUND,
    )


# ---------------------------------------------------------------------------
# Headings and body
# ---------------------------------------------------------------------------

def _centered(doc: Document, text: str, y: float, font: FontRef, size: float, color) -> None:
    draw_text(
        doc, text,
        x=center_x(text, size, font, doc.width, doc.fonts), y=y,
        font=font, size=size, color=color,
    )


def _draw_headings(doc: Document, inner: Rect, design: DesignSystem) -> float:
    """Draw heading and sub-heading; return the y of the rule beneath them."""
    look = design.certificate
    heading_y = inner.top - 62
    subheading_y = heading_y - 30
    _centered(doc, look.heading, heading_y, SCRIPT, _HEADING_SIZE, design.colors.color("ink"))
    _centered(doc, look.subheading.upper(), subheading_y, SERIF, _SUBHEADING_SIZE,
              design.colors.color("muted"))
    return subheading_y - 17


def _draw_rule(doc: Document, y: float, design: DesignSystem) -> None:
    cx = doc.width / 2
    draw_line(
        doc,
        start=(cx - _RULE_HALF_WIDTH, y),
        end=(cx + _RULE_HALF_WIDTH, y),
        thickness=0.8,
        color=design.colors.color("rule"),
    )


def body_lines(fields: CertificateFields) -> list[tuple[str, float, FontRef, float]]:
    """(text, size, font, step) for each body line, top to bottom."""
    lines = [
        (INTRO_LINE, *_INTRO),
        (fields.stylist_name.upper(), *_NAME),
    ]
    if fields.salon_name:
        lines.append((f"of {fields.salon_name}", *_SALON))
    lines.append((COMPLETION_LINE, *_COMPLETION))
    lines.append((fields.style_name, *_STYLE))
    return lines


def _draw_body(doc: Document, fields: CertificateFields, top: float, inner: Rect,
               design: DesignSystem) -> float:
    """Draw the centred body block from ``top`` down; return the last baseline."""
    ink = design.colors.color("ink")
    max_width = inner.width - 2 * _BLOCK_INSET
    y = top
    for index, (text, size, font, step) in enumerate(body_lines(fields)):
        if index == 1:  # stylist name shrinks to fit long names
            size = fit_font_size(text, font, size, _NAME_MIN_SIZE, max_width, doc.fonts)
        _centered(doc, text, y, font, size, ink)
        if step:
            y -= step
    return y


# ---------------------------------------------------------------------------
# Bottom corners
# ---------------------------------------------------------------------------

def _draw_illustration(doc: Document, assets: CertificateAssets, inner: Rect,
                       design: DesignSystem) -> None:
    image = present_asset(assets.illustration)
    if image is None:
        return
    box_w, box_h = design.certificate.illustration_box
    box = Rect(x=inner.x + _BLOCK_INSET, y=inner.y + _BLOCK_BOTTOM, width=box_w, height=box_h)
    fit = contain_fit(image.width, image.height, box.width, box.height)
    draw_image(doc, image, place_fit(fit, box))


def signature_lines(fields: CertificateFields, design: DesignSystem) -> list[tuple[str, float, FontRef]]:
    """(text, size, font) of the printed signature block, top to bottom."""
    return [
        (design.certificate.signatory, 14.0, SERIF_BOLD),
        (f"Awarded on {fields.date}", 12.0, SERIF),
        (f"Certificate No. {fields.certificate_id}", 11.0, SERIF),
    ]


def _draw_signature_block(doc: Document, fields: CertificateFields, assets: CertificateAssets,
                          inner: Rect, design: DesignSystem) -> None:
    """Printed lines left-aligned at the block x; signature centred over the printed name."""
    look = design.certificate
    ink = design.colors.color("ink")
    box_w, box_h = look.signature_box
    block_x = inner.right - _BLOCK_INSET - box_w

    lines = signature_lines(fields, design)
    # Lay out bottom-up so the certificate number sits on the block baseline.
    y = inner.y + _BLOCK_BOTTOM
    placed: list[tuple[str, float, FontRef, float]] = []
    for text, size, font in reversed(lines):
        placed.append((text, size, font, y))
        y += size + 6
    placed.reverse()
    for text, size, font, line_y in placed:
        draw_text(doc, text, x=block_x, y=line_y, font=font, size=size, color=ink)

    name_text, name_size, name_font, name_y = placed[0]
    name_center = block_x + measure_text(name_text, name_font, name_size, doc.fonts).width / 2

    line_y = name_y + name_size + 4
    draw_line(
        doc,
        start=(name_center - box_w / 2, line_y),
        end=(name_center + box_w / 2, line_y),
        thickness=0.6,
        color=design.colors.color("rule"),
    )

    signature = present_asset(assets.signature)
    if signature is None:
        return
    fit = contain_fit(signature.width, signature.height, box_w, box_h)
    draw_image(
        doc,
        signature,
        Rect(
            x=name_center - fit.draw_width / 2,
            y=line_y + 2 + fit.offset_y,
            width=fit.draw_width,
            height=fit.draw_height,
        ),
    )
