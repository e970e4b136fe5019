"""Live-page snapshot — parse the current Playwright page into a SemanticDocument."""

from __future__ import annotations

import logging

from playwright.async_api import Page

from semanticdom.adapters.soup import SoupDocument
from semanticdom.core.config import ParseConfig
from semanticdom.core.dom import SemanticDOM
from semanticdom.core.types import SemanticDocument

logger = logging.getLogger(__name__)

# Returns {"/html[1]/body[1]/div[2]": [x, y, width, height], ...}.
# Paths use the same 1-based same-tag index the parser computes.
_BOUNDS_JS = """() => {
    const result = {};
    function walk(el, path) {
        const rect = el.getBoundingClientRect();
        result[path] = [rect.x, rect.y, rect.width, rect.height];
        const counts = {};
        for (const child of el.children) {
            const tag = child.tagName.toLowerCase();
            counts[tag] = (counts[tag] || 0) + 1;
            walk(child, path + '/' + tag + '[' + counts[tag] + ']');
        }
    }
    const root = document.documentElement;
    if (root) walk(root, '/' + root.tagName.toLowerCase() + '[1]');
    return result;
}"""


async def snapshot_page(page: Page, config: ParseConfig | None = None) -> SemanticDocument:
    """
    Parse the page's current markup. Scripts are never run by the parser;
    the only script evaluated is the read-only geometry probe, and only
    when ``compute_bounds`` is on.
    """
    config = config or ParseConfig()
    source = SoupDocument.from_html(await page.content())

    if config.compute_bounds:
        rects = await page.evaluate(_BOUNDS_JS)
        attached = source.attach_bounds(rects or {})
        logger.debug("bounds for %d elements on %s", attached, page.url)

    return SemanticDOM(config).parse_source(source, url=page.url, title=await page.title())
