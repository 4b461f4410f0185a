"""Error taxonomy for document composition.

``ValidationError`` and ``FontDecodeError`` reach the caller. ``ImageDecodeError``
is caught by the asset decoder and turned into an absent slot, so templates never
see it. ``RenderError`` wraps anything unexpected raised while painting.
"""


class CompositionError(Exception):
    """Base class for every error raised by the composer."""


class ValidationError(CompositionError):
    """One or more required text fields are missing or blank."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required fields: " + ", ".join(self.missing))


class DecodeError(CompositionError):
    pass


class ImageDecodeError(DecodeError):
    pass


class FontDecodeError(DecodeError):
    pass


class DesignError(CompositionError):
    """design.yaml cannot be parsed or fails validation."""


class RenderError(CompositionError):
    pass
