"""HTTP clients that implement the dataset source readers."""

from flowkit.plugins.clients.base import HttpReaderBase
from flowkit.plugins.clients.http import (
    ApiDatasetClient,
    HttpLinkFetcher,
    HttpUrlFileReader,
    SystemApiDatasetClient,
    html_to_markdown,
    parse_file_extension_from_url,
)

__all__ = [
    "ApiDatasetClient",
    "HttpLinkFetcher",
    "HttpReaderBase",
    "HttpUrlFileReader",
    "SystemApiDatasetClient",
    "html_to_markdown",
    "parse_file_extension_from_url",
]
