"""Snapshot production for shared conversations.

A capture walks one conversation page through a fixed sequence of stages:
navigate, wait for readiness, expand truncated sections, read title and
features, clean up the live document, serialize it with SingleFile, and post-process the resulting text.
Each stage depends on the previous one; any failure aborts the capture with
a CaptureError tagged with the stage it came from.
"""

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from conversation_archive.config import Settings
from conversation_archive.domain.errors import (
    CaptureError,
    CaptureStage,
    CaptureTimeout,
    ExtractionError,
    NavigationError,
)
from conversation_archive.domain.models import Snapshot
from conversation_archive.operations import page_scripts
from conversation_archive.operations.filenames import format_snapshot_filename, is_document_id
from conversation_archive.operations.postprocess import postprocess_snapshot
from conversation_archive.operations.scripts import ScriptBundle

logger = logging.getLogger(__name__)


@asynccontextmanager
async def browser_session(config: Settings) -> AsyncIterator[Browser]:
    """Launch the Chromium instance shared by every capture of a run."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=config.headless,
            args=config.browser_args,
        )
        try:
            yield browser
        finally:
            await browser.close()


@contextmanager
def _stage(
    document_id: str,
    stage: CaptureStage,
    error_type: type[CaptureError] = ExtractionError,
) -> Iterator[None]:
    """Wrap failures of one pipeline stage into a tagged CaptureError."""
    try:
        yield
    except CaptureError:
        raise
    except Exception as e:
        raise error_type(document_id, stage, e) from e


class SnapshotPipeline:
    """Captures conversations into self-contained HTML snapshots.

    One pipeline is shared by every job of a run. It holds no per-job state:
    each capture opens its own page and closes it before returning.
    """

    def __init__(self, browser: Browser, scripts: ScriptBundle, config: Settings):
        """Initialize the pipeline.

        Args:
            browser: Shared browser used to open one page per capture
            scripts: SingleFile scripts injected into every page
            config: Archive configuration
        """
        self.browser = browser
        self.scripts = scripts
        self.config = config

    def share_url(self, document_id: str) -> str:
        """Return the canonical URL of a shared conversation."""
        return self.config.share_url_template.format(id=document_id)

    def serialization_options(self) -> dict:
        """Options passed to ``singlefile.getPageData``."""
        return {
            "zipScript": self.scripts.zip_script,
            "removeUnusedStyles": True,
            "removeUnusedFonts": True,
            "removeFrames": True,
            "insertSingleFileComment": True,
        }

    async def capture(self, document_id: str) -> Snapshot:
        """Produce the snapshot of one conversation.

        Args:
            document_id: Shared conversation id

        Returns:
            Snapshot with its archive filename and HTML content

        Raises:
            CaptureError: If any stage fails. The page is closed regardless.
        """
        if not is_document_id(document_id):
            raise NavigationError(document_id, CaptureStage.NAVIGATE, "invalid document id")

        page = await self._open_page(document_id)

        try:
            await self._navigate(page, document_id)
            await self._wait_until_ready(page, document_id)
            # Expanded sections can contain math, so expand before detecting features
            await self._expand_truncated_content(page, document_id)
            title = await self._read_title(page, document_id)
            includes_math = await self._detect_math(page, document_id)
            await self._clean_up(page, document_id)
            content = await self._serialize(page, document_id)

            with _stage(document_id, CaptureStage.POSTPROCESS):
                content = postprocess_snapshot(
                    content,
                    includes_math=includes_math,
                    math_font_prefix=self.config.math_font_prefix,
                )

            with _stage(document_id, CaptureStage.FILENAME):
                filename = format_snapshot_filename(document_id, title, self.config.max_title_bytes)
        finally:
            await self._close_page(page, document_id)

        logger.debug(f"Captured {document_id} as {filename}")
        return Snapshot(filename=filename, content=content.encode("utf-8"))

    async def _open_page(self, document_id: str) -> Page:
        """Open an isolated page with the SingleFile scripts installed.

        The scripts must be registered before navigation: injected late, the
        serializer still runs but silently produces an incomplete document.
        """
        with _stage(document_id, CaptureStage.NAVIGATE, NavigationError):
            page = await self.browser.new_page(bypass_csp=True)

        try:
            with _stage(document_id, CaptureStage.NAVIGATE, NavigationError):
                await page.add_init_script(script=self.scripts.hook_script)
                await page.add_init_script(script=self.scripts.page_script)
        except CaptureError:
            await self._close_page(page, document_id)
            raise

        return page

    async def _close_page(self, page: Page, document_id: str) -> None:
        try:
            await page.close()
        except PlaywrightError as e:
            logger.warning(f"Failed to close page for {document_id}: {e}")

    async def _navigate(self, page: Page, document_id: str) -> None:
        url = self.share_url(document_id)
        logger.debug(f"Navigating to {url}")
        with _stage(document_id, CaptureStage.NAVIGATE, NavigationError):
            await page.goto(url)

    async def _wait_until_ready(self, page: Page, document_id: str) -> None:
        try:
            await page.wait_for_selector(
                self.config.ready_selector,
                timeout=self.config.ready_timeout * 1000,
            )
        except PlaywrightTimeoutError as e:
            raise CaptureTimeout(document_id, CaptureStage.WAIT, e) from e
        except PlaywrightError as e:
            raise NavigationError(document_id, CaptureStage.WAIT, e) from e

        # Late asynchronous content has no completion signal to wait on
        await page.wait_for_timeout(self.config.settle_delay * 1000)

    async def _read_title(self, page: Page, document_id: str) -> str:
        """Read the conversation title; some shared conversations have none."""
        try:
            title = await page.evaluate(page_scripts.READ_TITLE, self.config.title_selector)
        except PlaywrightError as e:
            logger.debug(f"No title for {document_id}: {e}")
            return ""
        return (title or "").strip()

    async def _detect_math(self, page: Page, document_id: str) -> bool:
        with _stage(document_id, CaptureStage.FEATURES):
            return bool(await page.evaluate(page_scripts.HAS_CLASS, self.config.math_marker_class))

    async def _expand_truncated_content(self, page: Page, document_id: str) -> None:
        """Click every visible "show more" style toggle so its content is captured."""
        for label in self.config.expand_labels:
            with _stage(document_id, CaptureStage.MUTATE):
                toggles = await page.get_by_text(label).all()

            for toggle in toggles:
                try:
                    if await toggle.is_visible():
                        await toggle.click(timeout=self.config.click_timeout * 1000)
                except PlaywrightError as e:
                    logger.warning(f"Could not expand '{label}' toggle for {document_id}: {e}")

    async def _clean_up(self, page: Page, document_id: str) -> None:
        with _stage(document_id, CaptureStage.MUTATE):
            await page.evaluate(
                page_scripts.CLEAN_UP_PAGE,
                {"iconUrlTemplate": self.config.icon_url_template},
            )

    async def _serialize(self, page: Page, document_id: str) -> str:
        with _stage(document_id, CaptureStage.SERIALIZE):
            page_data = await page.evaluate(page_scripts.GET_PAGE_DATA, self.serialization_options())

        if not isinstance(page_data, dict) or not isinstance(page_data.get("content"), str):
            raise ExtractionError(
                document_id,
                CaptureStage.SERIALIZE,
                f"unexpected SingleFile result of type {type(page_data).__name__}",
            )
        return page_data["content"]
