# src/flowkit/plugins/clients/http.py
"""httpx implementations of the dataset source readers.

- HttpUrlFileReader: download a file by URL and decode it as text
- HttpLinkFetcher: fetch web pages and convert them to markdown
- ApiDatasetClient: read documents from a generic API dataset server
- SystemApiDatasetClient: read feishu/yuque documents via the platform
"""

from __future__ import annotations

from collections.abc import Sequence
from json import JSONDecodeError
from typing import Any
from urllib.parse import urlsplit

import html2text
import httpx
from bs4 import BeautifulSoup

from flowkit.contracts import (
    APIFileServer,
    FeishuServer,
    FetchedPage,
    SourceReadError,
    YuqueServer,
)
from flowkit.plugins.clients.base import HttpReaderBase

# Extensions whose bytes are text we can hand back directly.
_TEXT_EXTENSIONS: frozenset[str] = frozenset({"txt", "md", "markdown", "csv", "json", "xml", "yaml", "yml"})
_HTML_EXTENSIONS: frozenset[str] = frozenset({"html", "htm"})

# Never part of the readable content of a page.
_STRIP_ELEMENTS: tuple[str, ...] = ("script", "style", "noscript")


def parse_file_extension_from_url(url: str) -> str:
    """Lower-cased extension of the URL path's last segment, or "".

    Query string and fragment are ignored.
    """
    path = urlsplit(url).path
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def html_to_markdown(html: str, selector: str | None = None) -> str:
    """Convert a page to markdown, keeping only the selected elements.

    Args:
        html: Raw HTML
        selector: CSS selector; when it matches nothing the whole page is used

    Returns:
        Markdown text, stripped
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag_name in _STRIP_ELEMENTS:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    selected = soup.select(selector) if selector else []
    cleaned_html = "".join(str(element) for element in selected) if selected else str(soup)

    h = html2text.HTML2Text()
    h.ignore_links = False
    h.ignore_images = False
    h.body_width = 0  # Don't wrap lines
    return h.handle(cleaned_html).strip()


class HttpUrlFileReader(HttpReaderBase):
    """Downloads files by URL. Only text formats can be decoded."""

    def read_url(self, url: str, *, related_id: str, custom_pdf_parse: bool = False) -> str:
        """Download url and return its text.

        Raises:
            SourceReadError: On HTTP failure or a format that is not text
        """
        response = self._request("GET", url)
        extension = parse_file_extension_from_url(url)
        if extension in _HTML_EXTENSIONS:
            return html_to_markdown(response.text)
        if extension in _TEXT_EXTENSIONS:
            return response.text
        raise SourceReadError(f"Unsupported file type '.{extension or '?'}' for file {related_id}: {url}")


class HttpLinkFetcher(HttpReaderBase):
    """Fetches web pages and returns their content as markdown."""

    def fetch(self, urls: Sequence[str], *, selector: str | None = None) -> list[FetchedPage]:
        return [FetchedPage(url=url, content=html_to_markdown(self._request("GET", url).text, selector)) for url in urls]


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except JSONDecodeError as e:
        raise SourceReadError(f"Invalid JSON from {response.request.url}: {e}") from e


class ApiDatasetClient(HttpReaderBase):
    """Client of a generic API dataset server.

    The server answers ``GET {base_url}/v1/file/content?id=...`` with
    ``{"data": {"content": ..., "previewUrl": ...}}``. Inline content wins;
    otherwise the preview URL is downloaded.
    """

    def __init__(
        self,
        server: APIFileServer,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {server.authorization}"} if server.authorization else None
        super().__init__(timeout=timeout, headers=headers, client=client)
        self._base_url = server.base_url.rstrip("/")
        self._files = HttpUrlFileReader(client=self._client)

    def get_file_content(
        self,
        *,
        api_file_id: str,
        team_id: str,
        tmb_id: str,
        custom_pdf_parse: bool = False,
    ) -> str:
        response = self._request("GET", f"{self._base_url}/v1/file/content", params={"id": api_file_id})
        body = _json_body(response)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise SourceReadError(f"Malformed response for file {api_file_id}")

        content = data.get("content")
        if isinstance(content, str) and content:
            return content
        preview_url = data.get("previewUrl")
        if isinstance(preview_url, str) and preview_url:
            return self._files.read_url(preview_url, related_id=api_file_id, custom_pdf_parse=custom_pdf_parse)
        raise SourceReadError(f"Can not find file content for {api_file_id}")


class SystemApiDatasetClient(HttpReaderBase):
    """Reads feishu and yuque documents through the platform's system API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(timeout=timeout, client=client)
        self._base_url = base_url.rstrip("/")

    def get_content(
        self,
        *,
        api_file_id: str,
        feishu_server: FeishuServer | None = None,
        yuque_server: YuqueServer | None = None,
    ) -> str:
        payload: dict[str, Any] = {"type": "content", "apiFileId": api_file_id}
        if feishu_server is not None:
            payload["feishuServer"] = feishu_server.model_dump(by_alias=True, exclude_none=True)
        if yuque_server is not None:
            payload["yuqueServer"] = yuque_server.model_dump(by_alias=True, exclude_none=True)

        response = self._request("POST", f"{self._base_url}/core/dataset/systemApiDataset", json=payload)
        body = _json_body(response)
        content = body.get("data") if isinstance(body, dict) else body
        if not isinstance(content, str):
            raise SourceReadError(f"Malformed response for file {api_file_id}")
        return content
