# src/flowkit/core/__init__.py
"""Core: configuration, logging, id generation, workflow and dataset logic."""

from flowkit.core.config import (
    ChunkingSettings,
    FlowkitSettings,
    HttpSettings,
    ValidationSettings,
    load_settings,
)
from flowkit.core.identifiers import (
    DEFAULT_ID_GENERATOR,
    IdGenerator,
    NanoIdGenerator,
    SequentialIdGenerator,
)
from flowkit.core.logging import configure_logging, get_logger

__all__ = [
    "DEFAULT_ID_GENERATOR",
    "ChunkingSettings",
    "FlowkitSettings",
    "HttpSettings",
    "IdGenerator",
    "NanoIdGenerator",
    "SequentialIdGenerator",
    "ValidationSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
