"""Playwright PDF Rendering Service Implementation

Drives headless Chromium through Playwright. Every call launches its own
browser and closes it again, so no page or session state outlives a render.
"""

import logging
from typing import List, Optional

from playwright.async_api import async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.app.services.pdf_service import PdfService
from src.domain.errors import RenderFailureError, RenderTimeoutError
from src.domain.pdf import is_pdf

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1200, "height": 1600}
ZERO_MARGIN = {"top": "0mm", "right": "0mm", "bottom": "0mm", "left": "0mm"}
DEFAULT_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

# Resolves once every image has loaded, failed, or hit its own time cap.
WAIT_FOR_IMAGES_JS = """
(timeoutMs) => Promise.all(
  Array.from(document.images).map((img) => {
    if (img.complete) return Promise.resolve();
    return new Promise((resolve) => {
      img.onload = resolve;
      img.onerror = resolve;
      setTimeout(resolve, timeoutMs);
    });
  })
)
"""


class PlaywrightPdfService(PdfService):
    """
    Playwright implementation of PdfService

    Renders into a 1200x1600 viewport and prints A4 with zero margins and
    backgrounds included.
    """

    def __init__(
        self,
        content_timeout_ms: int = 30000,
        image_timeout_ms: int = 5000,
        executable_path: Optional[str] = None,
        launch_args: Optional[List[str]] = None,
    ):
        self.content_timeout_ms = content_timeout_ms
        self.image_timeout_ms = image_timeout_ms
        self.executable_path = executable_path
        self.launch_args = launch_args or DEFAULT_LAUNCH_ARGS

    async def render_pdf(self, html: str) -> bytes:
        playwright = None
        browser = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=True,
                args=self.launch_args,
                executable_path=self.executable_path,
            )
            page = await browser.new_page(viewport=VIEWPORT)

            await page.set_content(
                html, wait_until="networkidle", timeout=self.content_timeout_ms
            )
            await page.evaluate(WAIT_FOR_IMAGES_JS, self.image_timeout_ms)

            pdf = await page.pdf(
                format="A4",
                print_background=True,
                margin=ZERO_MARGIN,
            )
        except PlaywrightTimeoutError as e:
            raise RenderTimeoutError(
                f"Content did not load within {self.content_timeout_ms} ms: {e}"
            ) from e
        except Exception as e:
            raise RenderFailureError(str(e)) from e
        finally:
            await self._release(browser, playwright)

        if not is_pdf(pdf):
            raise RenderFailureError("Generated file is not a valid PDF")
        return pdf

    async def _release(self, browser, playwright) -> None:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.error(f"Error closing browser: {e}")
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.error(f"Error stopping playwright: {e}")
