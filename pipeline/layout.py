"""Layout algorithms: geometry shared by the certificate and portfolio templates.

The fit functions are pure arithmetic on floats. The card helpers append to a
Document through ``pipeline.canvas`` and always draw something: a card whose
image is absent (or has a zero dimension) becomes a labelled placeholder in
the same position, so a missing photo never stops the rest of the page.
"""
import logging
import math

from pydantic import BaseModel, ConfigDict

from models.assets import Asset, present_asset
from models.page import BLACK, WHITE, Color, Document, FontRef, FontSet, Rect, SANS, SANS_BOLD
from pipeline.canvas import draw_image, draw_rect, draw_text, measure_text

logger = logging.getLogger(__name__)

_CAPTION_COLOR = Color(r=0.25, g=0.25, b=0.27)
_PLACEHOLDER_MESSAGE_COLOR = Color.grey(0.45)


class Fit(BaseModel):
    """Drawn size and offset of an asset inside a box (offsets relative to the box origin)."""

    model_config = ConfigDict(frozen=True)

    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float
    scale: float


class CardChrome(BaseModel):
    model_config = ConfigDict(frozen=True)

    shadow_offset: float = 3.0
    shadow_opacity: float = 0.16
    shadow_color: Color = BLACK
    corner_radius: float = 10.0
    border_color: Color = Color(r=0.9, g=0.9, b=0.92)
    border_width: float = 0.7
    fill_color: Color = WHITE
    fill_opacity: float = 0.86
    padding: float = 10.0
    caption_height: float = 18.0
    caption_size: float = 9.0
    caption_font: FontRef = SANS_BOLD


# ---------------------------------------------------------------------------
# Text placement
# ---------------------------------------------------------------------------

def center_x(text: str, size: float, font: FontRef, page_width: float, fonts: FontSet | None = None) -> float:
    """Left x that centres ``text`` across ``page_width``.

    Text wider than the page gets a negative x and overflows evenly on both sides.
    """
    return (page_width - measure_text(text, font, size, fonts).width) / 2


def fit_font_size(
    text: str,
    font: FontRef,
    max_size: float,
    min_size: float,
    max_width: float,
    fonts: FontSet | None = None,
) -> float:
    """Largest whole-point size in [min_size, max_size] at which ``text`` fits ``max_width``."""
    size = max_size
    while size > min_size:
        if measure_text(text, font, size, fonts).width <= max_width:
            return size
        size -= 1
    return min_size


def rotated_text_origin(
    text_width: float,
    text_height: float,
    cx: float,
    cy: float,
    degrees: float,
) -> tuple[float, float]:
    """Baseline origin that puts the middle of a rotated text box on (cx, cy).

    The box centre sits at (text_width / 2, text_height / 2) in text space; rotating
    that vector and subtracting it from the target centre gives the origin.
    """
    theta = math.radians(degrees)
    hx, hy = text_width / 2, text_height / 2
    dx = hx * math.cos(theta) - hy * math.sin(theta)
    dy = hx * math.sin(theta) + hy * math.cos(theta)
    return cx - dx, cy - dy


# ---------------------------------------------------------------------------
# Image fitting
# ---------------------------------------------------------------------------

def _check_dimensions(asset_width: float, asset_height: float, box_width: float, box_height: float) -> None:
    if asset_width <= 0 or asset_height <= 0:
        raise ValueError(f"asset has no area: {asset_width}x{asset_height}")
    if box_width <= 0 or box_height <= 0:
        raise ValueError(f"target box has no area: {box_width}x{box_height}")


def _fit(asset_width, asset_height, box_width, box_height, scale) -> Fit:
    draw_width = asset_width * scale
    draw_height = asset_height * scale
    return Fit(
        draw_width=draw_width,
        draw_height=draw_height,
        offset_x=(box_width - draw_width) / 2,
        offset_y=(box_height - draw_height) / 2,
        scale=scale,
    )


def contain_fit(asset_width: float, asset_height: float, box_width: float, box_height: float) -> Fit:
    """Largest aspect-preserving size that fits entirely inside the box, centred (letter/pillarbox)."""
    _check_dimensions(asset_width, asset_height, box_width, box_height)
    scale = min(box_width / asset_width, box_height / asset_height)
    return _fit(asset_width, asset_height, box_width, box_height, scale)


def cover_fit(asset_width: float, asset_height: float, box_width: float, box_height: float) -> Fit:
    """Smallest aspect-preserving size that covers the whole box, centred; offsets go negative."""
    _check_dimensions(asset_width, asset_height, box_width, box_height)
    scale = max(box_width / asset_width, box_height / asset_height)
    return _fit(asset_width, asset_height, box_width, box_height, scale)


def place_fit(fit: Fit, box: Rect) -> Rect:
    """Absolute page rect for ``fit`` inside ``box``; may extend past the box for cover fits."""
    return Rect(
        x=box.x + fit.offset_x,
        y=box.y + fit.offset_y,
        width=fit.draw_width,
        height=fit.draw_height,
    )


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------

def card_with_chrome(doc: Document, rect: Rect, chrome: CardChrome) -> None:
    """Drop shadow offset right/down by ``shadow_offset``, then the rounded card on top."""
    draw_rect(
        doc,
        rect.shifted(chrome.shadow_offset, -chrome.shadow_offset),
        fill_color=chrome.shadow_color,
        fill_opacity=chrome.shadow_opacity,
        corner_radius=chrome.corner_radius,
    )
    draw_rect(
        doc,
        rect,
        fill_color=chrome.fill_color,
        fill_opacity=chrome.fill_opacity,
        border_color=chrome.border_color,
        border_width=chrome.border_width,
        corner_radius=chrome.corner_radius,
    )


def placeholder_card(
    doc: Document,
    label: str,
    rect: Rect,
    chrome: CardChrome | None = None,
    *,
    message: str = "No image",
) -> None:
    """Card chrome with the slot label and ``message`` centred in the card."""
    chrome = chrome or CardChrome()
    card_with_chrome(doc, rect, chrome)

    label_size = chrome.caption_size + 2
    message_size = chrome.caption_size
    label_width = measure_text(label, chrome.caption_font, label_size, doc.fonts).width
    message_width = measure_text(message, SANS, message_size, doc.fonts).width
    # Two lines with a 6pt gap, centred as a block on the card's vertical middle.
    block_height = label_size + 6 + message_size
    label_y = rect.center_y + block_height / 2 - label_size
    message_y = label_y - 6 - message_size

    draw_text(
        doc, label,
        x=rect.x + (rect.width - label_width) / 2, y=label_y,
        font=chrome.caption_font, size=label_size, color=_CAPTION_COLOR,
    )
    draw_text(
        doc, message,
        x=rect.x + (rect.width - message_width) / 2, y=message_y,
        font=SANS, size=message_size, color=_PLACEHOLDER_MESSAGE_COLOR,
    )
    logger.debug("Placeholder card for %s at (%.1f, %.1f)", label, rect.x, rect.y)


def image_card(
    doc: Document,
    asset: Asset,
    label: str,
    rect: Rect,
    chrome: CardChrome | None = None,
) -> bool:
    """Card with a contain-fitted image above a bottom-centred caption.

    Returns False when the slot degraded to a placeholder.
    """
    chrome = chrome or CardChrome()
    image = present_asset(asset)
    image_area = Rect(
        x=rect.x + chrome.padding,
        y=rect.y + chrome.padding + chrome.caption_height,
        width=max(0.0, rect.width - chrome.padding * 2),
        height=max(0.0, rect.height - chrome.padding * 2 - chrome.caption_height),
    )
    if image is None or image_area.width <= 0 or image_area.height <= 0:
        if image is None:
            logger.warning("No usable image for %s; drawing placeholder", label)
        else:
            logger.warning("Card for %s too small for its image; drawing placeholder", label)
        placeholder_card(doc, label, rect, chrome)
        return False

    card_with_chrome(doc, rect, chrome)
    fit = contain_fit(image.width, image.height, image_area.width, image_area.height)
    draw_image(doc, image, place_fit(fit, image_area))

    caption_width = measure_text(label, chrome.caption_font, chrome.caption_size, doc.fonts).width
    draw_text(
        doc, label,
        x=rect.x + (rect.width - caption_width) / 2,
        y=rect.y + 6,
        font=chrome.caption_font, size=chrome.caption_size, color=_CAPTION_COLOR,
    )
    logger.debug("Image card %s: %.1fx%.1f in %.1fx%.1f", label,
                 fit.draw_width, fit.draw_height, image_area.width, image_area.height)
    return True
