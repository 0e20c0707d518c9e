"""Invoice View Interface"""

from abc import ABC, abstractmethod


class InvoiceView(ABC):

    @abstractmethod
    def render(self, invoice) -> str:
        """
        Render the invoice preview page

        Args:
            invoice: InvoiceResponseDTO to display

        Returns:
            Full HTML page
        """
        pass
