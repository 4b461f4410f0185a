import io
from pathlib import Path

import pytest
from PIL import Image

from models.assets import Present, load_image
from models.fields import CertificateFields, PortfolioFields
from settings import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_image_bytes(width: int = 40, height: int = 30, *, mode: str = "RGB", fmt: str = "PNG",
                     color=(180, 120, 90)) -> bytes:
    """Encode a solid-colour image; small sizes keep the PDFs quick to build."""
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    buf = io.BytesIO()
    Image.new(mode, (width, height), color).save(buf, format=fmt)
    return buf.getvalue()


def make_present(width: int = 40, height: int = 30, **kwargs) -> Present:
    return Present(asset=load_image(make_image_bytes(width, height, **kwargs)))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def tmp_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh temp directory:

        assets/   logo, background texture, design.yaml
        output/   rendered PDFs
    """
    (tmp_path / "assets").mkdir()
    return Settings(assets_dir=tmp_path / "assets", output_dir=tmp_path / "output")


@pytest.fixture
def certificate_fields() -> CertificateFields:
    return CertificateFields(
        stylist_name="Jane Doe",
        salon_name="Luxe Salon",
        style_name="Updo Masterclass",
        date="2025-11-09",
        certificate_id="PC-001234",
        watermark="PC",
    )


@pytest.fixture
def portfolio_fields() -> PortfolioFields:
    return PortfolioFields(
        stylist_name="Jane Doe",
        salon_name="Luxe Salon",
        challenge_title="Updo Masterclass",
    )


@pytest.fixture
def photo() -> Present:
    return make_present(400, 300, fmt="JPEG")
