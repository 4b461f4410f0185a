"""Download filenames for generated documents.

HTTP ``Content-Disposition`` headers must stay ASCII, so names built from
stylist and style names are folded to a conservative character set.
"""
import re
import unicodedata

from models.fields import CertificateFields, PortfolioFields

_DASHES = re.compile("[‒-―]")


def ascii_filename(text: str, fallback: str = "Certificate.pdf") -> str:
    """Fold ``text`` to ``[A-Za-z0-9_.-]`` and make sure it ends in ``.pdf``."""
    s = unicodedata.normalize("NFKD", text or "")
    s = _DASHES.sub("-", s)
    s = s.encode("ascii", "ignore").decode("ascii")
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^A-Za-z0-9_.-]", "", s)
    s = re.sub(r"_+", "_", s)
    s = s.strip("-").strip("_")
    if not s:
        return fallback
    return s if s.lower().endswith(".pdf") else f"{s}.pdf"


def certificate_filename(fields: CertificateFields) -> str:
    return ascii_filename(f"Certificate_{fields.stylist_name}_{fields.style_name}")


def portfolio_filename(fields: PortfolioFields) -> str:
    """Slug of the challenge title, e.g. ``updo-masterclass.pdf``."""
    slug = re.sub(r"[^a-z0-9]+", "-", (fields.challenge_title or "").lower()).strip("-")
    return f"{slug or 'style-challenge-portfolio'}.pdf"


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{ascii_filename(filename, fallback="document.pdf")}"'
