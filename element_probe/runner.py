# runner.py
import os
from typing import Any, Dict, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page

from .constants import logger, BROWSER_ARGS, VIEWPORT, USER_AGENT
from .report import RunReport, build_accessibility_report, summary_message
from .storage import upload_screenshot
from .utils import ensure_directories_exist, utc_timestamp
from .validator import validate_elements


class ValidationRunError(Exception):
    pass


class ElementValidator:
    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def initialize(self):
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=not self.config.get('headful', False),
            args=BROWSER_ARGS,
        )
        self.context = await self.browser.new_context(viewport=VIEWPORT, user_agent=USER_AGENT)

    async def cleanup(self):
        try:
            if self.context:
                try:
                    await self.context.close()
                except Exception as e:
                    logger.error(f"Error closing browser context: {e}")
            if self.browser:
                try:
                    await self.browser.close()
                except Exception as e:
                    logger.error(f"Error closing browser: {e}")
        finally:
            if self.playwright:
                await self.playwright.stop()

    async def run(self) -> RunReport:
        page = await self.context.new_page()
        try:
            await self._open(page)
            screenshot_url = None
            if self.config.get('screenshot'):
                screenshot_url = await self._capture_anchor(page)

            targets = self.config['targets']
            results = await validate_elements(page, targets, self.config['settings'])
        except Exception as e:
            logger.error(f"Error during validation run: {e}")
            raise
        finally:
            await page.close()

        report = build_accessibility_report(results)
        message = summary_message(results, report)
        logger.info(message)
        return RunReport(
            message=message,
            timestamp=utc_timestamp(),
            accessibility_report=report,
            results={target.name: result for target, result in zip(targets, results)},
            screenshot_url=screenshot_url,
        )

    async def _open(self, page: Page):
        page.set_default_navigation_timeout(self.config['timeout_navigation'])
        await page.goto(
            self.config['target_url'],
            wait_until='domcontentloaded',
            timeout=self.config['timeout_navigation'],
        )
        logger.info(f"Opened {page.url}")
        await page.wait_for_selector(
            self.config['anchor_selector'],
            state='visible',
            timeout=self.config['timeout_selector'],
        )

    async def _capture_anchor(self, page: Page) -> Optional[str]:
        """Screenshot the anchor element; returns its S3 URL when uploading."""
        anchor = await page.query_selector(self.config['anchor_selector'])
        if not anchor:
            raise ValidationRunError(f"Anchor element {self.config['anchor_selector']} not found")

        ensure_directories_exist(self.config['screenshot_dir'])
        path = os.path.join(self.config['screenshot_dir'], 'anchor.png')
        await anchor.screenshot(path=path)
        logger.info(f"Saved screenshot to {path}")

        if not self.config.get('upload'):
            return None
        return upload_screenshot(path, self.config['s3_bucket'], self.config['aws_region'])
