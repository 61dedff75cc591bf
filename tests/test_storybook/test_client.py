"""
Tests for StorybookClient.

httpx.MockTransport stands in for the Storybook server, so the client's real
request building, status handling and markup parsing all run.
"""

import httpx
import pytest

from models.exceptions import StorybookFetchError
from storybook.client import StorybookClient, parse_story_markup

IFRAME_PAGE = """<!doctype html>
<html>
<head>
  <style>.sb-show-main { margin: 0; }</style>
  <style>.button { color: red; }</style>
</head>
<body>
  <div id="storybook-root"><button class="button button--primary">Click &amp; go<br/></button><img src="x.png"></div>
  <div id="storybook-docs"></div>
</body>
</html>"""


def _client(handler):
    http = httpx.Client(base_url="http://storybook.test", transport=httpx.MockTransport(handler))
    return StorybookClient(base_url="http://storybook.test", http_client=http)


def test_fetch_component_html_parses_root_styles_and_classes():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, text=IFRAME_PAGE)

    result = _client(handler).fetch_component_html("button--primary")

    assert seen["path"] == "/iframe.html"
    assert seen["params"] == {"id": "button--primary", "viewMode": "story"}
    assert result.story_id == "button--primary"
    assert result.html == (
        '<button class="button button--primary">Click &amp; go<br/></button><img src="x.png">'
    )
    assert result.styles == [".sb-show-main { margin: 0; }", ".button { color: red; }"]
    assert result.classes == ["button", "button--primary"]
    assert result.elements == ["br", "button", "img"]


def test_fetch_component_html_maps_http_errors():
    client = _client(lambda request: httpx.Response(500))

    with pytest.raises(StorybookFetchError, match="HTTP 500"):
        client.fetch_component_html("button--primary")


def test_fetch_component_html_maps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(StorybookFetchError, match="connection refused"):
        _client(handler).fetch_component_html("button--primary")


def test_fetch_index_uses_index_json():
    def handler(request):
        assert request.url.path == "/index.json"
        return httpx.Response(200, json={"v": 4, "entries": {"button--primary": {}}})

    assert _client(handler).fetch_stories_index()["entries"] == {"button--primary": {}}


def test_fetch_index_falls_back_to_stories_json():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        if request.url.path == "/index.json":
            return httpx.Response(404)
        return httpx.Response(200, json={"v": 3, "stories": {"card--x": {}}})

    index = _client(handler).fetch_stories_index()

    assert paths == ["/index.json", "/stories.json"]
    assert index["stories"] == {"card--x": {}}


def test_fetch_index_rejects_invalid_json():
    client = _client(lambda request: httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(StorybookFetchError, match="not valid JSON"):
        client.fetch_stories_index()


def test_parse_falls_back_to_legacy_root_id():
    page = '<div id="root"><span class="chip">x</span></div>'

    result = parse_story_markup("chip--default", page)

    assert result.html == '<span class="chip">x</span>'
    assert result.classes == ["chip"]


def test_parse_without_root_element_fails():
    with pytest.raises(StorybookFetchError, match="Story root element not found"):
        parse_story_markup("chip--default", "<html><body><p>nothing</p></body></html>")
