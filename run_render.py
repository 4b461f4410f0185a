#!/usr/bin/env python3
"""Render a Style Challenge certificate or portfolio PDF from the command line.

Usage:
    python run_render.py certificate --fields fields.json [--signature sig.png] [--illustration art.png]
    python run_render.py portfolio --fields fields.json --step1 a.jpg --step2 b.jpg --step3 c.jpg --finished d.jpg

Image files that are missing or unreadable render as placeholders. The PDF is
written to ``--out`` or to the configured output directory under a name derived
from the fields.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parent))

from settings import Settings
from models.assets import Absent, decode_image
from models.design import DesignSystem
from models.errors import CompositionError, DesignError, FontDecodeError
from models.fields import CertificateAssets, CertificateFields, PortfolioAssets, PortfolioFields
from pipeline.certificate import render_certificate
from pipeline.fonts import load_fonts
from pipeline.portfolio import render_portfolio
from utils.filenames import certificate_filename, portfolio_filename

logger = logging.getLogger("run_render")


def _read_bytes(path: Path | None) -> bytes | None:
    """Caller-side fetch: bytes of ``path``, or None when it is not there."""
    if path is None:
        return None
    if not path.is_file():
        logger.warning("Image not found: %s", path)
        return None
    return path.read_bytes()


def _asset(path: Path | None, label: str, settings: Settings):
    data = _read_bytes(path)
    if data is None:
        return Absent()
    return decode_image(data, label=label, max_edge=settings.max_image_edge)


def _load_fields(path: Path, model):
    data = json.loads(path.read_text(encoding="utf-8"))
    return model.model_validate(data)


def _load_design(settings: Settings):
    try:
        design = DesignSystem.load_or_default(settings.design_yaml_path)
    except (ValidationError, yaml.YAMLError) as exc:
        raise DesignError(f"invalid {settings.design_yaml_path}: {exc}") from exc
    font_bytes = {}
    for key, path in design.fonts.configured().items():
        try:
            font_bytes[key] = path.read_bytes()
        except OSError as exc:
            raise FontDecodeError(f"cannot read {key} font {path}: {exc}") from exc
    return design, load_fonts(font_bytes)


def _certificate(args: argparse.Namespace, settings: Settings) -> tuple[bytes, str]:
    fields = _load_fields(args.fields, CertificateFields)
    if fields.watermark is None and settings.default_watermark:
        fields = fields.model_copy(update={"watermark": settings.default_watermark})
    assets = CertificateAssets(
        signature=_asset(args.signature, "signature", settings),
        illustration=_asset(args.illustration, "illustration", settings),
        background=_asset(args.background, "background", settings),
    )
    design, fonts = _load_design(settings)
    pdf = render_certificate(fields, assets, design=design, fonts=fonts)
    return pdf, certificate_filename(fields)


def _portfolio(args: argparse.Namespace, settings: Settings) -> tuple[bytes, str]:
    fields = _load_fields(args.fields, PortfolioFields)
    logo = args.logo or settings.default_logo_path
    background = args.background or settings.default_background_path
    assets = PortfolioAssets(
        step1=_asset(args.step1, "Step 1", settings),
        step2=_asset(args.step2, "Step 2", settings),
        step3=_asset(args.step3, "Step 3", settings),
        finished=_asset(args.finished, "Finished Look", settings),
        logo=_asset(logo, "logo", settings),
        background=_asset(background, "background texture", settings),
    )
    design, fonts = _load_design(settings)
    pdf = render_portfolio(fields, assets, design=design, fonts=fonts)
    return pdf, portfolio_filename(fields)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a Style Challenge document")
    sub = parser.add_subparsers(dest="document", required=True)

    cert = sub.add_parser("certificate", help="Render a completion certificate")
    cert.add_argument("--fields", type=Path, required=True, help="JSON file with certificate fields")
    cert.add_argument("--signature", type=Path)
    cert.add_argument("--illustration", type=Path)
    cert.add_argument("--background", type=Path)
    cert.add_argument("--out", type=Path)

    port = sub.add_parser("portfolio", help="Render a portfolio page")
    port.add_argument("--fields", type=Path, required=True, help="JSON file with portfolio fields")
    for slot in ("step1", "step2", "step3", "finished", "logo", "background"):
        port.add_argument(f"--{slot}", type=Path)
    port.add_argument("--out", type=Path)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    logger.info("=== Rendering %s ===", args.document)
    try:
        if args.document == "certificate":
            pdf, filename = _certificate(args, settings)
        else:
            pdf, filename = _portfolio(args, settings)
    except CompositionError as exc:
        logger.error("Render failed: %s", exc)
        return 1

    output_path = args.out or settings.output_dir / filename
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf)
    logger.info("=== Done → %s ===", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
