"""Font registration: turns TrueType bytes into a FontSet.

Without configuration the composer uses the standard PDF faces, which need no
embedding. TrueType files are registered under a name derived from a hash of
their bytes, so registering the same file twice is a no-op and two renders with
the same fonts always reference the same name.
"""
import hashlib
import io
import logging

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from models.errors import FontDecodeError
from models.page import BUILTIN_FACES, FontSet

logger = logging.getLogger(__name__)


def load_fonts(font_bytes: dict[str, bytes]) -> FontSet:
    """Register TrueType fonts and return a FontSet using them.

    ``font_bytes`` is keyed like ``FontFiles`` (``serif``, ``script_bold``, …).
    Fonts are never optional, so an unknown slot or a file that cannot be parsed
    raises FontDecodeError.
    """
    faces = dict(BUILTIN_FACES)
    for key, data in sorted(font_bytes.items()):
        if key not in BUILTIN_FACES:
            raise FontDecodeError(f"unknown font slot {key!r}")
        faces[key] = _register(key, data)
    # A custom regular face without a custom bold would otherwise mix families.
    for family in ("serif", "sans", "script"):
        if family in font_bytes and f"{family}_bold" not in font_bytes:
            faces[f"{family}_bold"] = faces[family]
    return FontSet(faces=faces)


def _register(key: str, data: bytes) -> str:
    digest = hashlib.sha1(data).hexdigest()[:12]
    name = f"SC-{key}-{digest}"
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    try:
        pdfmetrics.registerFont(TTFont(name, io.BytesIO(data)))
    except Exception as exc:
        raise FontDecodeError(f"cannot load {key} font: {exc}") from exc
    logger.debug("Registered font %s (%d bytes)", name, len(data))
    return name
