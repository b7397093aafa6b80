"""Dataset source descriptors and chunk records."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from flowkit.contracts.enums import DatasetSourceReadType

# Wire form is camelCase, as the platform sends and stores it.
_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class APIFileServer(BaseModel):
    """Generic API dataset server."""

    model_config = _WIRE_CONFIG

    base_url: str
    authorization: str | None = None


class FeishuServer(BaseModel):
    model_config = _WIRE_CONFIG

    app_id: str
    app_secret: str
    folder_token: str | None = None


class YuqueServer(BaseModel):
    model_config = _WIRE_CONFIG

    user_id: str
    token: str
    base_url: str | None = None


class DatasetSource(BaseModel):
    """Everything needed to read the raw text of one dataset collection.

    ``source_id`` is interpreted per ``type``: a stored file id for
    FILE_LOCAL, a URL for LINK and EXTERNAL_FILE, an API file id for API_FILE.
    """

    model_config = _WIRE_CONFIG

    team_id: str
    tmb_id: str
    type: DatasetSourceReadType
    source_id: str
    custom_pdf_parse: bool = False
    is_qa_import: bool = False
    selector: str | None = None
    external_file_id: str | None = None
    api_server: APIFileServer | None = None
    feishu_server: FeishuServer | None = None
    yuque_server: YuqueServer | None = None


@dataclass(frozen=True, slots=True)
class QAChunk:
    """One chunk ready for indexing. Plain text chunks have an empty answer."""

    q: str
    a: str = ""
    indexes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class FetchedPage:
    """Result of fetching one link."""

    url: str
    content: str
