"""Portfolio template: single portrait page showing the three steps and the finished look.

Layout, top to bottom:
  background texture (cover-fit, full bleed) or a flat parchment fill
  logo on a white shadowed plate
  "<name>’s Portfolio", challenge title, optional salon line
  row of three step cards, then one wider hero card for the finished look

The space left below the header is split between the two rows (36 % / 64 % by
default, after the row gap). Every card slot degrades to a placeholder on its own.
"""
import logging

from models.assets import present_asset
from models.design import DesignSystem
from models.fields import PortfolioAssets, PortfolioFields
from models.page import SANS, SANS_BOLD, WHITE, Color, Document, FontSet, Layer, Rect
from pipeline.canvas import create_page, draw_image, draw_rect, draw_text, serialize
from pipeline.layout import CardChrome, card_with_chrome, center_x, cover_fit, image_card, place_fit

logger = logging.getLogger(__name__)

FINISHED_LABEL = "Finished Look"

_HEADER_SIZE = 14.0
_SUBTITLE_SIZE = 11.0
_SALON_SIZE = 9.0
_HEADER_COLOR = Color.grey(0.12)
_SUBTITLE_COLOR = Color.grey(0.18)
_PLATE_BORDER = Color(r=0.85, g=0.85, b=0.87)


def header_text(fields: PortfolioFields) -> str:
    return f"{fields.stylist_name}’s Portfolio"


def render_portfolio(
    fields: PortfolioFields,
    assets: PortfolioAssets | None = None,
    *,
    design: DesignSystem | None = None,
    fonts: FontSet | None = None,
) -> bytes:
    """Validate, compose and serialise a portfolio. Returns PDF bytes."""
    doc = compose_portfolio(fields, assets, design=design, fonts=fonts)
    data = serialize(doc, title=header_text(fields))
    logger.info("Portfolio for %s rendered (%d bytes)", fields.stylist_name, len(data))
    return data


def compose_portfolio(
    fields: PortfolioFields,
    assets: PortfolioAssets | None = None,
    *,
    design: DesignSystem | None = None,
    fonts: FontSet | None = None,
) -> Document:
    """Build the portfolio paint list. Raises ValidationError before drawing anything."""
    fields.require_complete()
    assets = assets or PortfolioAssets()
    design = design or DesignSystem()
    look = design.portfolio

    doc = create_page(look.page.width_pt, look.page.height_pt, look.page.margin_pt, fonts)
    _draw_background(doc, assets, design)

    cursor = doc.height - doc.margin - 10
    cursor = _draw_logo_plate(doc, assets, cursor, design)
    cursor = _draw_header(doc, fields, cursor)

    chrome = card_chrome(design)
    top_row, hero = card_rects(doc, cursor, design)
    placed = 0
    for (label, asset), rect in zip(assets.steps(), top_row):
        placed += image_card(doc, asset, label, rect, chrome)
    placed += image_card(doc, assets.finished, FINISHED_LABEL, hero, chrome)

    logger.debug("Portfolio composed: %d of 4 images placed, %d ops", placed, len(doc.ops))
    return doc


def card_chrome(design: DesignSystem) -> CardChrome:
    card = design.portfolio.card
    return CardChrome(
        shadow_offset=card.shadow_offset,
        shadow_opacity=card.shadow_opacity,
        shadow_color=design.colors.color("shadow"),
        corner_radius=card.corner_radius,
        border_color=design.colors.color("card_border"),
        border_width=card.border_width,
        fill_opacity=card.fill_opacity,
        padding=card.padding,
        caption_height=card.caption_height,
        caption_size=card.caption_size,
    )


def card_rects(doc: Document, images_top: float, design: DesignSystem) -> tuple[list[Rect], Rect]:
    """Rects for the three step cards (left to right) and the hero card.

    Heights never go negative: a header pushed too far down yields empty cards,
    which ``image_card`` turns into placeholders.
    """
    look = design.portfolio
    content = doc.content_rect
    images_bottom = doc.margin + look.bottom_reserve
    images_height = max(0.0, images_top - images_bottom - look.row_gap)

    top_height = images_height * look.top_row_share
    hero_height = images_height - top_height

    top_width = max(0.0, (content.width - look.column_gap * 2) / 3)
    top_y = images_bottom + hero_height + look.row_gap
    top_row = [
        Rect(x=content.x + i * (top_width + look.column_gap), y=top_y, width=top_width, height=top_height)
        for i in range(3)
    ]

    hero_width = content.width * look.hero_width_share
    hero = Rect(
        x=content.x + (content.width - hero_width) / 2,
        y=images_bottom,
        width=hero_width,
        height=hero_height,
    )
    return top_row, hero


# ---------------------------------------------------------------------------
# Background, logo, header
# ---------------------------------------------------------------------------

def _draw_background(doc: Document, assets: PortfolioAssets, design: DesignSystem) -> None:
    page = Rect(x=0, y=0, width=doc.width, height=doc.height)
    texture = present_asset(assets.background)
    if texture is None:
        logger.warning("No background texture; using a flat parchment fill")
        draw_rect(doc, page, fill_color=design.colors.color("parchment"), layer=Layer.BACKGROUND)
        return
    fit = cover_fit(texture.width, texture.height, page.width, page.height)
    draw_image(doc, texture, place_fit(fit, page), clip=page, layer=Layer.BACKGROUND)


def _draw_logo_plate(doc: Document, assets: PortfolioAssets, top: float, design: DesignSystem) -> float:
    """Logo at a fixed width on a padded plate; returns the cursor below it."""
    logo = present_asset(assets.logo)
    if logo is None:
        logger.warning("No logo; skipping the logo plate")
        return top

    look = design.portfolio
    logo_w = look.logo_width
    logo_h = logo.height * (logo_w / logo.width)
    pad = look.plate_padding
    plate = Rect(
        x=(doc.width - (logo_w + pad * 2)) / 2,
        y=top - (logo_h + pad * 2),
        width=logo_w + pad * 2,
        height=logo_h + pad * 2,
    )
    card_with_chrome(
        doc,
        plate,
        CardChrome(
            shadow_offset=3.0,
            shadow_opacity=0.18,
            shadow_color=design.colors.color("shadow"),
            corner_radius=0.0,
            border_color=_PLATE_BORDER,
            border_width=0.7,
            fill_color=WHITE,
            fill_opacity=0.88,
        ),
    )
    draw_image(doc, logo, Rect(x=plate.x + pad, y=plate.y + pad, width=logo_w, height=logo_h))
    return plate.y - 24


def _draw_header(doc: Document, fields: PortfolioFields, top: float) -> float:
    """Header, subtitle and optional salon line; returns the top of the card region."""
    header = header_text(fields)
    draw_text(
        doc, header,
        x=center_x(header, _HEADER_SIZE, SANS_BOLD, doc.width, doc.fonts), y=top,
        font=SANS_BOLD, size=_HEADER_SIZE, color=_HEADER_COLOR,
    )
    y = top - 16

    draw_text(
        doc, fields.challenge_title,
        x=center_x(fields.challenge_title, _SUBTITLE_SIZE, SANS_BOLD, doc.width, doc.fonts), y=y,
        font=SANS_BOLD, size=_SUBTITLE_SIZE, color=_SUBTITLE_COLOR,
    )
    if fields.salon_name:
        y -= 14
        draw_text(
            doc, fields.salon_name,
            x=center_x(fields.salon_name, _SALON_SIZE, SANS, doc.width, doc.fonts), y=y,
            font=SANS, size=_SALON_SIZE, color=_SUBTITLE_COLOR,
        )
    return y - 26
