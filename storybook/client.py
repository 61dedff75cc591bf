"""
Storybook HTTP client.

Two calls are all the job pipeline needs:

    fetch_stories_index()          → the parsed index.json (story id → metadata)
    fetch_component_html(story_id) → ComponentHTML (markup, <style> blocks, classes)

Both are blocking (httpx.Client) because they run on worker threads, not on
the event loop. Transport failures and non-2xx responses are re-raised as
StorybookFetchError carrying the upstream message; that message is what ends
up in a failed job's `error` field.

The client has no cancellation hook. Once a fetch starts it runs until the
server answers or STORYBOOK_HTTP_TIMEOUT expires, whatever happens to the job.
"""

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Optional

import httpx

from config.settings import settings
from models.exceptions import StorybookFetchError

logger = logging.getLogger(__name__)

ROOT_ELEMENT_IDS = ("storybook-root", "root")
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})


@dataclass
class ComponentHTML:
    story_id: str
    html: str
    styles: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    elements: list[str] = field(default_factory=list)   # tag names inside the root


class _StoryMarkupParser(HTMLParser):
    """
    Pulls three things out of a story's iframe page:
    - the inner HTML of the story root element (#storybook-root or #root)
    - the text of every <style> block on the page
    - every class name and tag name used inside the root element
    """

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self.parts: list[str] = []
        self.styles: list[str] = []
        self.classes: set[str] = set()
        self.elements: set[str] = set()
        self.found_root = False
        self._depth = 0            # >0 while inside the root element
        self._in_style = False
        self._style_buffer: list[str] = []

    def handle_starttag(self, tag, attrs):
        attr_map = dict(attrs)
        if tag == "style":
            self._in_style = True
            self._style_buffer = []

        if self._depth:
            self.parts.append(self.get_starttag_text())
            self.elements.add(tag)
            self._collect_classes(attr_map)
            if tag not in VOID_ELEMENTS:
                self._depth += 1
        elif not self.found_root and attr_map.get("id") in ROOT_ELEMENT_IDS:
            self.found_root = True
            self._depth = 1

    def handle_startendtag(self, tag, attrs):
        if self._depth:
            self.parts.append(self.get_starttag_text())
            self.elements.add(tag)
            self._collect_classes(dict(attrs))

    def handle_endtag(self, tag):
        if tag == "style" and self._in_style:
            self._in_style = False
            css = "".join(self._style_buffer).strip()
            if css:
                self.styles.append(css)

        if self._depth and tag not in VOID_ELEMENTS:
            self._depth -= 1
            if self._depth:
                self.parts.append(f"</{tag}>")

    def handle_data(self, data):
        if self._in_style:
            self._style_buffer.append(data)
        if self._depth:
            self.parts.append(data)

    def handle_entityref(self, name):
        if self._depth:
            self.parts.append(f"&{name};")

    def handle_charref(self, name):
        if self._depth:
            self.parts.append(f"&#{name};")

    def _collect_classes(self, attr_map: dict) -> None:
        for cls in (attr_map.get("class") or "").split():
            self.classes.add(cls)


def parse_story_markup(story_id: str, page: str) -> ComponentHTML:
    parser = _StoryMarkupParser()
    parser.feed(page)
    parser.close()
    if not parser.found_root:
        raise StorybookFetchError(f"Story root element not found for story: {story_id}")
    return ComponentHTML(
        story_id=story_id,
        html="".join(parser.parts).strip(),
        styles=parser.styles,
        classes=sorted(parser.classes),
        elements=sorted(parser.elements),
    )


class StorybookClient:

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[httpx.Client] = None):
        self.base_url = (base_url or settings.STORYBOOK_URL).rstrip("/")
        self._http = http_client or httpx.Client(
            base_url=self.base_url,
            timeout=settings.STORYBOOK_HTTP_TIMEOUT,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._http.close()

    def fetch_stories_index(self) -> dict:
        """
        Load the story index. Storybook 7+ serves /index.json, older versions
        only /stories.json, so a 404 on the first falls back to the second.
        """
        try:
            resp = self._http.get("/index.json")
            if resp.status_code == 404:
                logger.debug("index.json not found, falling back to stories.json")
                resp = self._http.get("/stories.json")
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise StorybookFetchError(
                f"Failed to fetch stories index: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise StorybookFetchError(f"Failed to fetch stories index: {e}") from e
        except ValueError as e:
            raise StorybookFetchError(f"Stories index is not valid JSON: {e}") from e

    def fetch_component_html(self, story_id: str) -> ComponentHTML:
        try:
            resp = self._http.get(
                "/iframe.html", params={"id": story_id, "viewMode": "story"}
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StorybookFetchError(
                f"Failed to fetch story {story_id}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise StorybookFetchError(f"Failed to fetch story {story_id}: {e}") from e

        return parse_story_markup(story_id, resp.text)
