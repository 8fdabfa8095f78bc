"""
Live browser integration tests for semlens.

Run with:
    pytest tests/test_integration_live.py -m integration -v

These are excluded from the default `pytest tests/` run because they require
a Playwright-controlled Chromium browser. Pages are loaded with
page.set_content(), so no network access is needed.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from semlens import PlaywrightTreeProvider, Scope, SemanticEngine

pytestmark = pytest.mark.integration

_LOGIN_HTML = """
<!doctype html>
<html>
  <head><title>Login</title></head>
  <body>
    <main>
      <h1>Sign in</h1>
      <form>
        <label>Email <input type="email" name="email" required></label>
        <label>Password <input type="password" name="password" required></label>
        <label><input type="checkbox" checked> Remember me</label>
        <button type="submit">Submit</button>
      </form>
    </main>
    <div style="height: 3000px"></div>
    <footer><a href="/terms">Terms of service</a></footer>
  </body>
</html>
"""


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def browser() -> AsyncGenerator[Browser, None]:
    async with async_playwright() as pw:
        b = await pw.chromium.launch(
            headless=True,
            args=["--no-sandbox", "--disable-dev-shm-usage"],
        )
        yield b
        await b.close()


@pytest_asyncio.fixture
async def page(browser: Browser) -> AsyncGenerator[Page, None]:
    """Fresh browser context for every test, with the login page loaded."""
    ctx: BrowserContext = await browser.new_context(viewport={"width": 1280, "height": 800})
    pg = await ctx.new_page()
    await pg.set_content(_LOGIN_HTML)
    yield pg
    await ctx.close()


# ─────────────────────────────────────────────────────────────────────────────
# Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_query_finds_submit_button(page: Page) -> None:
    engine = SemanticEngine(PlaywrightTreeProvider(page))
    result = await engine.query(role="button", label="Submit", explain=True)
    assert result.best is not None
    assert result.best.label == "Submit"
    assert result.best.confidence == 0.9
    assert result.explanations == ["role=button,label≈Submit"]


@pytest.mark.asyncio
async def test_sid_survives_rerender(page: Page) -> None:
    engine = SemanticEngine(PlaywrightTreeProvider(page))
    before = (await engine.query(role="button", label="Submit")).best

    # Replace the button with an identical fresh element
    await page.evaluate("""() => {
        const old = document.querySelector('button');
        const fresh = document.createElement('button');
        fresh.type = 'submit';
        fresh.textContent = 'Submit';
        old.replaceWith(fresh);
    }""")

    after = (await engine.query(role="button", label="Submit")).best
    assert before.sid == after.sid


@pytest.mark.asyncio
async def test_snapshot_pages_cover_document(page: Page) -> None:
    engine = SemanticEngine(PlaywrightTreeProvider(page, include_bounds=False))
    full = await engine.snapshot(fields=["sid"])

    paged: list[str] = []
    cursor = None
    while True:
        result = await engine.snapshot(fields=["sid"], max_nodes=3, cursor=cursor)
        paged += [n.sid for n in result.nodes]
        cursor = result.next_cursor
        if cursor is None:
            break
    assert paged == [n.sid for n in full.nodes]


@pytest.mark.asyncio
async def test_viewport_scope_drops_footer(page: Page) -> None:
    engine = SemanticEngine(PlaywrightTreeProvider(page))
    document = await engine.snapshot(scope=Scope.DOCUMENT, fields=["label", "bounds"])
    viewport = await engine.snapshot(scope=Scope.VIEWPORT, fields=["label", "bounds"])

    doc_labels = [n.label for n in document.nodes]
    view_labels = [n.label for n in viewport.nodes]
    assert "Terms of service" in doc_labels
    assert "Terms of service" not in view_labels
    assert any(n.bounds is not None for n in document.nodes)
