import base64

from vtrenamer.extraction.client_base import DocumentAttachment

PDF_MIME_TYPE = "application/pdf"


def to_base64(content: bytes) -> str:
    """Encode raw bytes into the ASCII form providers accept inline."""
    return base64.b64encode(content).decode("ascii")


def pdf_attachment(content: bytes, filename: str = "document.pdf") -> DocumentAttachment:
    return DocumentAttachment(
        filename=filename,
        mime_type=PDF_MIME_TYPE,
        data_base64=to_base64(content),
    )
