"""Render Client Interface

Client side of the rendering service HTTP contract.
"""

from abc import ABC, abstractmethod


class RenderClient(ABC):

    @abstractmethod
    async def render(self, html: str, filename: str) -> bytes:
        """
        Send a document to the rendering service

        Returns:
            Validated PDF bytes (non-empty, starting with %PDF)

        Raises:
            RenderServiceError: On a non-success response or transport failure
            InvalidArtifactError: If the payload is empty or not a PDF
        """
        pass
