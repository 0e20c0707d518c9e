"""BeautifulSoup Document Capture Implementation

Cuts the invoice out of a rendered page and makes it self-contained so the
rendering service never has to reach back to this application.
"""

import base64
import copy
import logging
from html import escape
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

import httpx
from bs4 import BeautifulSoup

from src.app.services.document_capture import DocumentCapture

logger = logging.getLogger(__name__)

INVOICE_SELECTOR = "#invoice-document"
INTERACTIVE_SELECTOR = "button, input, select, textarea, form, [data-interactive], .no-print"
DEFAULT_IMAGE_TYPE = "image/png"

# Malformed URLs surface as InvalidURL from httpx or ValueError from urllib.
FETCH_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)

DOCUMENT_SHELL = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{styles}
</style>
</head>
<body>
{content}
</body>
</html>
"""


def _origin(url: str) -> tuple:
    parts = urlsplit(url)
    return parts.scheme, parts.netloc


class SoupDocumentCapture(DocumentCapture):
    """
    BeautifulSoup implementation of DocumentCapture

    Stylesheets from another origin are left out without notice. Images
    that cannot be fetched keep their original src and are logged.
    """

    def __init__(
        self,
        selector: str = INVOICE_SELECTOR,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.selector = selector
        self.timeout = timeout
        self.transport = transport

    async def capture(self, html: str, base_url: str, title: str = "Invoice") -> str:
        soup = BeautifulSoup(html, "html.parser")
        node = soup.select_one(self.selector) or soup.body or soup
        fragment = copy.copy(node)

        for control in fragment.select(INTERACTIVE_SELECTOR):
            # nested controls go with their decomposed parent
            if not control.decomposed:
                control.decompose()

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            await self._inline_images(client, fragment, base_url)
            styles = await self._collect_styles(client, soup, base_url)

        return DOCUMENT_SHELL.format(
            title=escape(title),
            styles="\n".join(styles),
            content=str(fragment),
        )

    async def _inline_images(self, client: httpx.AsyncClient, fragment, base_url: str) -> None:
        for img in fragment.find_all("img"):
            src = img.get("src")
            if not src or src.startswith("data:"):
                continue

            try:
                response = await client.get(urljoin(base_url, src))
                response.raise_for_status()
            except FETCH_ERRORS as e:
                logger.warning(f"Failed to inline image {src}: {e}")
                continue

            content_type = response.headers.get("content-type", "").split(";")[0].strip()
            encoded = base64.b64encode(response.content).decode("ascii")
            img["src"] = f"data:{content_type or DEFAULT_IMAGE_TYPE};base64,{encoded}"

    async def _collect_styles(self, client: httpx.AsyncClient, soup, base_url: str) -> List[str]:
        styles = []
        page_origin = _origin(base_url)

        for tag in soup.find_all(["style", "link"]):
            if tag.name == "style":
                styles.append(tag.get_text())
                continue

            if "stylesheet" not in (tag.get("rel") or []) or not tag.get("href"):
                continue
            try:
                url = urljoin(base_url, tag["href"])
                if _origin(url) != page_origin:
                    continue
                response = await client.get(url)
                response.raise_for_status()
            except FETCH_ERRORS as e:
                logger.warning(f"Failed to load stylesheet {tag['href']}: {e}")
                continue
            styles.append(response.text)

        return styles
