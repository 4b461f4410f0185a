"""Helpers for handing a rendered PDF to an e-mail transport."""
import base64

PDF_CONTENT_TYPE = "application/pdf"


def pdf_attachment(pdf_bytes: bytes, filename: str) -> dict:
    """Attachment entry in the shape transactional mail APIs expect (base64 content)."""
    if not pdf_bytes.startswith(b"%PDF"):
        raise ValueError("attachment is not a PDF document")
    return {
        "content": base64.b64encode(pdf_bytes).decode("ascii"),
        "filename": filename,
        "type": PDF_CONTENT_TYPE,
        "disposition": "attachment",
    }
