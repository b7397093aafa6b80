# src/flowkit/core/dataset/read.py
"""Read the raw text of a dataset source.

Where the text comes from depends on the source type:

- fileLocal: a file stored by the platform, read by id
- link: a web page, fetched and converted to markdown
- externalFile: a file behind a URL, downloaded and decoded
- apiFile: a document served by an API dataset (generic, feishu or yuque)

The readers that do the I/O are injected through SourceReaders, so this
module only decides which one to call.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, Self

from flowkit.contracts import (
    APIFileServer,
    DatasetSource,
    DatasetSourceReadType,
    FeishuServer,
    FetchedPage,
    SourceReadError,
    YuqueServer,
)
from flowkit.core.logging import get_logger

logger = get_logger(__name__)


class StoredFileReader(Protocol):
    """Reads a file previously uploaded to the platform's file store."""

    def read_file(
        self,
        *,
        team_id: str,
        tmb_id: str,
        file_id: str,
        is_qa_import: bool = False,
        custom_pdf_parse: bool = False,
    ) -> str: ...


class LinkFetcher(Protocol):
    """Fetches web pages and extracts their readable content."""

    def fetch(self, urls: Sequence[str], *, selector: str | None = None) -> list[FetchedPage]: ...


class UrlFileReader(Protocol):
    """Downloads a file by URL and returns its text."""

    def read_url(self, url: str, *, related_id: str, custom_pdf_parse: bool = False) -> str: ...


class ApiFileContentReader(Protocol):
    """Client of one generic API dataset server.

    A client is built for each read and closed when the read finishes.
    """

    def __enter__(self) -> Self: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def get_file_content(
        self,
        *,
        api_file_id: str,
        team_id: str,
        tmb_id: str,
        custom_pdf_parse: bool = False,
    ) -> str: ...


class SystemApiDatasetReader(Protocol):
    """Client of the platform service that reads feishu and yuque datasets."""

    def get_content(
        self,
        *,
        api_file_id: str,
        feishu_server: FeishuServer | None = None,
        yuque_server: YuqueServer | None = None,
    ) -> str: ...


@dataclass(frozen=True, slots=True)
class SourceReaders:
    """The I/O collaborators used to read dataset sources.

    A reader left as None makes the corresponding source type fail with
    SourceReadError instead of silently returning nothing.
    """

    stored_files: StoredFileReader | None = None
    links: LinkFetcher | None = None
    url_files: UrlFileReader | None = None
    api_client_factory: Callable[[APIFileServer], ApiFileContentReader] | None = None
    system_api: SystemApiDatasetReader | None = None


def _require[R](reader: R | None, source_type: str) -> R:
    if reader is None:
        raise SourceReadError(f"No reader configured for {source_type} sources")
    return reader


def read_api_server_file_content(
    *,
    api_file_id: str,
    team_id: str,
    tmb_id: str,
    readers: SourceReaders,
    api_server: APIFileServer | None = None,
    feishu_server: FeishuServer | None = None,
    yuque_server: YuqueServer | None = None,
    custom_pdf_parse: bool = False,
) -> str:
    """Read one document from an API dataset.

    The generic API server wins when configured; feishu and yuque are both
    served through the platform's system API.

    Raises:
        SourceReadError: If no server is configured, or the read fails
    """
    if api_server is not None:
        factory = _require(readers.api_client_factory, DatasetSourceReadType.API_FILE)
        with factory(api_server) as client:
            return client.get_file_content(
                api_file_id=api_file_id,
                team_id=team_id,
                tmb_id=tmb_id,
                custom_pdf_parse=custom_pdf_parse,
            )

    if feishu_server is not None or yuque_server is not None:
        system_api = _require(readers.system_api, DatasetSourceReadType.API_FILE)
        return system_api.get_content(
            api_file_id=api_file_id,
            feishu_server=feishu_server,
            yuque_server=yuque_server,
        )

    raise SourceReadError("No apiServer or feishuServer or yuqueServer")


def read_dataset_source_raw_text(source: DatasetSource, readers: SourceReaders) -> str:
    """Produce the raw text of a dataset source.

    Args:
        source: What to read
        readers: I/O collaborators

    Returns:
        The source's text; "" for a link that yielded no page

    Raises:
        SourceReadError: If the source cannot be read
    """
    logger.debug("Reading dataset source", source_type=source.type, source_id=source.source_id)

    match source.type:
        case DatasetSourceReadType.FILE_LOCAL:
            return _require(readers.stored_files, source.type).read_file(
                team_id=source.team_id,
                tmb_id=source.tmb_id,
                file_id=source.source_id,
                is_qa_import=source.is_qa_import,
                custom_pdf_parse=source.custom_pdf_parse,
            )
        case DatasetSourceReadType.LINK:
            pages = _require(readers.links, source.type).fetch([source.source_id], selector=source.selector)
            return pages[0].content if pages else ""
        case DatasetSourceReadType.EXTERNAL_FILE:
            if not source.external_file_id:
                raise SourceReadError("FileId not found")
            return _require(readers.url_files, source.type).read_url(
                source.source_id,
                related_id=source.external_file_id,
                custom_pdf_parse=source.custom_pdf_parse,
            )
        case DatasetSourceReadType.API_FILE:
            return read_api_server_file_content(
                api_file_id=source.source_id,
                team_id=source.team_id,
                tmb_id=source.tmb_id,
                readers=readers,
                api_server=source.api_server,
                feishu_server=source.feishu_server,
                yuque_server=source.yuque_server,
                custom_pdf_parse=source.custom_pdf_parse,
            )
