"""Tests for download filenames and e-mail attachment helpers."""
import base64

import pytest

from models.fields import CertificateFields, PortfolioFields
from utils.attachments import PDF_CONTENT_TYPE, pdf_attachment
from utils.filenames import ascii_filename, certificate_filename, content_disposition, portfolio_filename


class TestAsciiFilename:
    @pytest.mark.parametrize("text, expected", [
        ("Certificate_Jane Doe_Updo", "Certificate_Jane_Doe_Updo.pdf"),
        ("Zoë Ångström", "Zoe_Angstrom.pdf"),
        ("Braids – Level 2", "Braids_-_Level_2.pdf"),
        ("Bob/Lob: the sequel?", "BobLob_the_sequel.pdf"),
        ("already.pdf", "already.pdf"),
        ("  __spaced__  ", "spaced.pdf"),
    ])
    def test_folding(self, text, expected):
        assert ascii_filename(text) == expected

    def test_only_ascii_output(self):
        name = ascii_filename("Chloé’s “Glamour” Waves 💇")
        assert name.isascii()
        assert name.endswith(".pdf")

    def test_empty_falls_back(self):
        assert ascii_filename("") == "Certificate.pdf"
        assert ascii_filename("日本語", fallback="x.pdf") == "x.pdf"


class TestDocumentFilenames:
    def test_certificate_filename(self, certificate_fields):
        assert certificate_filename(certificate_fields) == "Certificate_Jane_Doe_Updo_Masterclass.pdf"

    def test_certificate_filename_accents(self):
        fields = CertificateFields(stylist_name="Renée", style_name="Chignon", date="d", certificate_id="1")
        assert certificate_filename(fields) == "Certificate_Renee_Chignon.pdf"

    def test_portfolio_filename(self, portfolio_fields):
        assert portfolio_filename(portfolio_fields) == "updo-masterclass.pdf"

    def test_portfolio_filename_fallback(self):
        assert portfolio_filename(PortfolioFields(challenge_title="!!!")) == "style-challenge-portfolio.pdf"

    def test_content_disposition(self):
        assert content_disposition("Zoë.pdf") == 'attachment; filename="Zoe.pdf"'


class TestPdfAttachment:
    def test_attachment_shape(self):
        pdf = b"%PDF-1.4 minimal"
        attachment = pdf_attachment(pdf, "Certificate_Jane_Doe.pdf")
        assert attachment["type"] == PDF_CONTENT_TYPE
        assert attachment["disposition"] == "attachment"
        assert attachment["filename"] == "Certificate_Jane_Doe.pdf"
        assert base64.b64decode(attachment["content"]) == pdf

    def test_rejects_non_pdf(self):
        with pytest.raises(ValueError):
            pdf_attachment(b"<html>", "x.pdf")
