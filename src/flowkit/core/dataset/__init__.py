"""Dataset sources: reading raw text and splitting it into chunks."""

from flowkit.core.dataset.chunks import (
    parse_csv_table_to_chunks,
    raw_text_to_chunks,
    split_text_to_chunks,
)
from flowkit.core.dataset.read import (
    SourceReaders,
    read_api_server_file_content,
    read_dataset_source_raw_text,
)

__all__ = [
    "SourceReaders",
    "parse_csv_table_to_chunks",
    "raw_text_to_chunks",
    "read_api_server_file_content",
    "read_dataset_source_raw_text",
    "split_text_to_chunks",
]
