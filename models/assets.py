"""Image assets and the decoder that produces them.

Every image slot in a template is an ``Asset``: either ``Present`` with a decoded
``ImageAsset`` or ``Absent`` with the reason. Templates branch on the variant, so a
missing or broken photo can only ever become a placeholder card.
"""
import io
import logging
from typing import Annotated, Literal, Union

from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from models.errors import ImageDecodeError

logger = logging.getLogger(__name__)

# EXIF tag 274 = Orientation; 1 means "already upright"
_EXIF_ORIENTATION_TAG = 274

_FLAT_MODES = frozenset({"RGBA", "LA", "PA"})


class ImageAsset(BaseModel):
    """Decoded raster image. ``width``/``height`` are intrinsic pixels after EXIF correction."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    encoding: Literal["photo", "flat"] = "photo"  # "flat" keeps its alpha channel when drawn

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


class Present(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["present"] = "present"
    asset: ImageAsset


class Absent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["absent"] = "absent"
    reason: Literal["not provided", "undecodable", "zero size"] = "not provided"


Asset = Annotated[Union[Present, Absent], Field(discriminator="kind")]

ABSENT = Absent()


def load_image(data: bytes, *, max_edge: int | None = None) -> ImageAsset:
    """Decode ``data`` into an ImageAsset or raise ImageDecodeError.

    EXIF orientation is applied so width/height describe the upright image. When
    the image had to be rotated, or ``max_edge`` shrank it, the pixels are
    re-encoded (PNG for flat images, JPEG otherwise) so the stored bytes match
    the reported size.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            orientation = img.getexif().get(_EXIF_ORIENTATION_TAG, 1)
            encoding = _encoding_for(img)
            corrected = ImageOps.exif_transpose(img) if orientation != 1 else img
            resized = False
            if max_edge is not None and max(corrected.size) > max_edge:
                corrected = corrected.copy()
                corrected.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)
                resized = True
            width, height = corrected.size
            if orientation != 1 or resized:
                data = _reencode(corrected, encoding)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"cannot decode image: {exc}") from exc

    return ImageAsset(data=data, width=width, height=height, encoding=encoding)


def decode_image(data: bytes | None, *, label: str = "image", max_edge: int | None = None):
    """Decode ``data`` into an Asset, never raising for bad image content.

    ``None`` or empty bytes mean the caller had nothing for this slot.
    """
    if not data:
        return Absent(reason="not provided")
    try:
        asset = load_image(data, max_edge=max_edge)
    except ImageDecodeError as exc:
        logger.warning("Treating %s as missing: %s", label, exc)
        return Absent(reason="undecodable")
    if asset.is_empty:
        logger.warning("Treating %s as missing: zero-sized image", label)
        return Absent(reason="zero size")
    return Present(asset=asset)


def present_asset(asset) -> ImageAsset | None:
    """Return the ImageAsset for a usable slot, or None for Absent and zero-sized images."""
    if isinstance(asset, Present) and not asset.asset.is_empty:
        return asset.asset
    return None


def _encoding_for(img: Image.Image) -> str:
    if img.mode in _FLAT_MODES:
        return "flat"
    if img.mode == "P" and "transparency" in img.info:
        return "flat"
    return "photo"


def _reencode(img: Image.Image, encoding: str) -> bytes:
    buf = io.BytesIO()
    if encoding == "flat":
        img.save(buf, format="PNG", optimize=False)
    else:
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        img.save(buf, format="JPEG", quality=92)
    return buf.getvalue()
