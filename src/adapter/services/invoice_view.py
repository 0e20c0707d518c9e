"""Jinja2 Invoice View Implementation"""

import os
from jinja2 import Environment, FileSystemLoader, select_autoescape
from src.app.services.invoice_view import InvoiceView
from src.domain.financials import format_amount

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "web", "templates")


class JinjaInvoiceView(InvoiceView):
    """
    Renders templates/invoice_preview.html

    The page carries Edit/Print/Download controls for the browser; the
    printable part is the #invoice-document element.
    """

    def __init__(self, templates_dir: str = TEMPLATES_DIR, currency_symbol: str = "৳"):
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["money"] = format_amount
        self.currency_symbol = currency_symbol

    def render(self, invoice) -> str:
        template = self.env.get_template("invoice_preview.html")
        return template.render(invoice=invoice, currency=self.currency_symbol)
