"""Text inputs and image slots for the two document templates.

Blank required fields are reported together through ``require_complete()``; the
templates call it before drawing anything.
"""
from typing import ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from models.assets import ABSENT, Asset
from models.errors import ValidationError


def _text(name: str, default):
    """Field accepting both snake_case and camelCase keys (the web forms send camelCase)."""
    head, *rest = name.split("_")
    camel = head + "".join(part.title() for part in rest)
    return Field(default=default, validation_alias=AliasChoices(name, camel))


class _FieldSet(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    required_fields: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def normalise_text(cls, v, info: ValidationInfo):
        text = "" if v is None else str(v).strip()
        if not text and info.field_name not in cls.required_fields:
            return None
        return text

    def missing_fields(self) -> list[str]:
        """Names of blank required fields, in declaration order."""
        return [name for name in self.required_fields if not (getattr(self, name) or "").strip()]

    def require_complete(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(missing)


class CertificateFields(_FieldSet):
    required_fields: ClassVar[tuple[str, ...]] = (
        "stylist_name", "style_name", "date", "certificate_id",
    )

    stylist_name: str = _text("stylist_name", "")
    salon_name: str | None = _text("salon_name", None)
    style_name: str = _text("style_name", "")
    date: str = _text("date", "")  # printed verbatim, e.g. "2025-11-09"
    certificate_id: str = _text("certificate_id", "")
    watermark: str | None = _text("watermark", None)


class PortfolioFields(_FieldSet):
    required_fields: ClassVar[tuple[str, ...]] = ("stylist_name", "challenge_title")

    stylist_name: str = _text("stylist_name", "")
    salon_name: str | None = _text("salon_name", None)
    challenge_title: str = _text("challenge_title", "")


class CertificateAssets(BaseModel):
    model_config = ConfigDict(frozen=True)

    signature: Asset = ABSENT
    illustration: Asset = ABSENT
    background: Asset = ABSENT


class PortfolioAssets(BaseModel):
    model_config = ConfigDict(frozen=True)

    step1: Asset = ABSENT
    step2: Asset = ABSENT
    step3: Asset = ABSENT
    finished: Asset = ABSENT
    logo: Asset = ABSENT
    background: Asset = ABSENT

    def steps(self) -> list[tuple[str, Asset]]:
        """The three step slots with their card captions, left to right."""
        return [("Step 1", self.step1), ("Step 2", self.step2), ("Step 3", self.step3)]
