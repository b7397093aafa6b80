"""CLI helper functions for workflow loading and reader construction."""

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from flowkit.contracts import StoreWorkflow
    from flowkit.core.chat import ConfiguredModelLookup
    from flowkit.core.config import FlowkitSettings
    from flowkit.core.dataset.read import SourceReaders


def load_workflow_file(path: Path) -> "StoreWorkflow":
    """Parse a stored workflow from a JSON or YAML file.

    JSON is read through the YAML parser, which accepts it unchanged.

    Raises:
        FileNotFoundError: If path does not exist
        yaml.YAMLError: If the file is not valid JSON/YAML
        ValueError: If the document is not a mapping
        pydantic.ValidationError: If the document is not a workflow
    """
    from flowkit.contracts import StoreWorkflow

    if not path.exists():
        raise FileNotFoundError(f"Workflow file not found: {path}")
    raw: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Workflow file must contain a mapping, got {type(raw).__name__}")
    return StoreWorkflow.model_validate(raw)


@contextmanager
def open_source_readers(settings: "FlowkitSettings") -> Iterator["SourceReaders"]:
    """Create the HTTP-backed dataset readers from settings.

    Every reader is closed when the block exits. API dataset clients are
    built per read and closed by the read itself.

    Stored files live in the platform's file store, which the CLI cannot
    reach, so fileLocal sources are left without a reader.
    """
    from flowkit.core.dataset.read import SourceReaders
    from flowkit.plugins.clients.http import (
        ApiDatasetClient,
        HttpLinkFetcher,
        HttpUrlFileReader,
        SystemApiDatasetClient,
    )

    timeout = settings.http.timeout_seconds
    with ExitStack() as stack:
        system_api = (
            stack.enter_context(SystemApiDatasetClient(settings.http.system_api_base_url, timeout=timeout))
            if settings.http.system_api_base_url
            else None
        )
        yield SourceReaders(
            links=stack.enter_context(HttpLinkFetcher(timeout=timeout)),
            url_files=stack.enter_context(HttpUrlFileReader(timeout=timeout)),
            api_client_factory=lambda server: ApiDatasetClient(server, timeout=timeout),
            system_api=system_api,
        )


def build_model_lookup(settings: "FlowkitSettings") -> "ConfiguredModelLookup":
    """Model capability lookup over the ``models:`` settings section."""
    from flowkit.core.chat import ConfiguredModelLookup

    return ConfiguredModelLookup(settings.models)
