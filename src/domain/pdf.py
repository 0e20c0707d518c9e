"""PDF artifact checks"""

from src.domain.errors import InvalidArtifactError

PDF_MARKER = b"%PDF"


def is_pdf(content: bytes) -> bool:
    return bool(content) and content[:4] == PDF_MARKER


def ensure_pdf(content: bytes) -> bytes:
    """
    Reject empty payloads and payloads without the %PDF marker

    Raises:
        InvalidArtifactError: If content is not a PDF
    """
    if not content:
        raise InvalidArtifactError("Received empty PDF payload")
    if content[:4] != PDF_MARKER:
        raise InvalidArtifactError(
            f"Payload does not start with %PDF (got {content[:4]!r})"
        )
    return content
