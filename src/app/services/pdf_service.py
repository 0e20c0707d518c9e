"""PDF Rendering Service Interface

Turns a standalone HTML document into PDF bytes using a headless browser.
"""

from abc import ABC, abstractmethod


class PdfService(ABC):
    """
    Service interface for HTML to PDF rendering

    Output is a single A4 document with zero margins and printed backgrounds.
    """

    @abstractmethod
    async def render_pdf(self, html: str) -> bytes:
        """
        Render an HTML document to PDF

        Args:
            html: Complete, self-contained HTML document

        Returns:
            PDF document as bytes

        Raises:
            RenderTimeoutError: If the document did not load in time
            RenderFailureError: For any other browser failure
        """
        pass
