# src/flowkit/core/dataset/chunks.py
"""Split raw dataset text into chunks for indexing.

Two modes:
- QA import: the text is a CSV table of question, answer and extra index
  columns. Each row becomes one chunk.
- Plain text: the text is split on the coarsest separator that yields
  pieces no longer than ``chunk_len``, and the pieces are packed back into
  chunks with a trailing overlap from the previous chunk.
"""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Sequence

from flowkit.contracts import QAChunk

DEFAULT_CHUNK_LEN = 512
DEFAULT_OVERLAP_RATIO = 0.2

# Coarsest first. A piece is cut at the end of each match, so the
# separator stays with the text before it.
_BUILTIN_SEPARATORS: tuple[str, ...] = (
    r"\n(?=#{1,6} )",  # before a markdown heading
    r"\n{2,}",  # paragraph
    r"\n",
    r"[。！？!?]|\.\s",  # sentence
    r"[，,；;]",
    r"\s+",
)


def parse_csv_table_to_chunks(raw_text: str) -> list[QAChunk]:
    """One chunk per CSV data row: q, a, then any number of index columns.

    The first row is a header and is skipped. Rows with an empty question
    and answer are dropped.
    """
    reader = csv.reader(io.StringIO(raw_text))
    next(reader, None)

    chunks: list[QAChunk] = []
    for row in reader:
        if not row:
            continue
        q = row[0].strip()
        a = row[1].strip() if len(row) > 1 else ""
        if not q and not a:
            continue
        indexes = tuple(cell.strip() for cell in row[2:] if cell.strip())
        chunks.append(QAChunk(q=q, a=a, indexes=indexes))
    return chunks


def _cut(text: str, pattern: re.Pattern[str]) -> list[str]:
    parts: list[str] = []
    start = 0
    for match in pattern.finditer(text):
        end = match.end()
        if end <= start:
            continue
        parts.append(text[start:end])
        start = end
    if start < len(text):
        parts.append(text[start:])
    return parts


def _split_pieces(text: str, separators: Sequence[re.Pattern[str]], max_len: int) -> list[str]:
    if len(text) <= max_len:
        return [text]
    for index, pattern in enumerate(separators):
        parts = _cut(text, pattern)
        if len(parts) < 2:
            continue
        pieces: list[str] = []
        for part in parts:
            pieces.extend(_split_pieces(part, separators[index + 1 :], max_len))
        return pieces
    # No separator left: hard cut.
    return [text[i : i + max_len] for i in range(0, len(text), max_len)]


def split_text_to_chunks(
    text: str,
    *,
    chunk_len: int = DEFAULT_CHUNK_LEN,
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO,
    custom_reg: Sequence[str] | None = None,
) -> list[str]:
    """Split text into chunks of at most chunk_len characters.

    Args:
        text: Text to split
        chunk_len: Maximum characters per chunk
        overlap_ratio: Fraction of chunk_len that may be repeated from the
            end of one chunk at the start of the next
        custom_reg: Separator regexes tried before the built-in ones

    Returns:
        Non-empty, stripped chunks in text order

    Raises:
        ValueError: If chunk_len is not positive or overlap_ratio is outside [0, 1)
    """
    if chunk_len <= 0:
        raise ValueError(f"chunk_len must be positive, got {chunk_len}")
    if not 0 <= overlap_ratio < 1:
        raise ValueError(f"overlap_ratio must be in [0, 1), got {overlap_ratio}")

    text = text.strip()
    if not text:
        return []

    separators = [re.compile(pattern) for pattern in (*(custom_reg or ()), *_BUILTIN_SEPARATORS)]
    pieces = _split_pieces(text, separators, chunk_len)
    overlap_len = int(chunk_len * overlap_ratio)

    chunks: list[str] = []
    current: list[str] = []
    current_len = 0
    for piece in pieces:
        if current and current_len + len(piece) > chunk_len:
            chunks.append("".join(current))
            tail: list[str] = []
            tail_len = 0
            for previous in reversed(current):
                if tail_len + len(previous) > overlap_len:
                    break
                tail.insert(0, previous)
                tail_len += len(previous)
            if tail_len + len(piece) > chunk_len:
                tail, tail_len = [], 0
            current, current_len = tail, tail_len
        current.append(piece)
        current_len += len(piece)
    if current:
        chunks.append("".join(current))

    return [stripped for chunk in chunks if (stripped := chunk.strip())]


def raw_text_to_chunks(
    raw_text: str,
    *,
    is_qa_import: bool = False,
    chunk_len: int = DEFAULT_CHUNK_LEN,
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO,
    custom_reg: Sequence[str] | None = None,
) -> list[QAChunk]:
    """Chunk the raw text of a dataset source.

    QA imports are parsed as CSV; everything else is split as plain text
    into chunks with an empty answer.
    """
    if is_qa_import:
        return parse_csv_table_to_chunks(raw_text)
    return [
        QAChunk(q=chunk)
        for chunk in split_text_to_chunks(
            raw_text,
            chunk_len=chunk_len,
            overlap_ratio=overlap_ratio,
            custom_reg=custom_reg,
        )
    ]
