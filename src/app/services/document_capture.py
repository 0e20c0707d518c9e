"""Document Capture Interface

Produces a self-contained HTML document from a rendered invoice page.
"""

from abc import ABC, abstractmethod


class DocumentCapture(ABC):

    @abstractmethod
    async def capture(self, html: str, base_url: str, title: str = "Invoice") -> str:
        """
        Capture the invoice subtree of a page as a standalone document

        Interactive controls are removed, images are inlined as data URIs and
        readable stylesheets are embedded. Image failures are non-fatal.

        Args:
            html: Full page markup
            base_url: URL the page was served from, used to resolve assets
            title: Title of the standalone document

        Returns:
            Standalone HTML document
        """
        pass
