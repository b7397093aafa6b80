# src/flowkit/plugins/manager.py
"""Template manager: kind tag -> NodeTemplate lookup.

Uses pluggy for hook-based template registration. Templates are collected
once when a provider registers and are read-only afterwards.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import pluggy

from flowkit.contracts import NodeTemplate
from flowkit.plugins.hookspecs import PROJECT_NAME, FlowkitTemplateSpec

# Module-level singleton for the built-in registry
_template_manager_cache: "TemplateManager | None" = None


class TemplateManager:
    """Collects node templates from registered providers.

    Usage:
        manager = TemplateManager()
        manager.register_builtin_templates()

        template = manager.get_template("chatNode")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FlowkitTemplateSpec)
        self._templates: dict[str, NodeTemplate] = {}

    def register_builtin_templates(self) -> None:
        """Register the templates shipped with flowkit."""
        from flowkit.plugins.templates import BuiltinTemplates

        self.register(BuiltinTemplates())

    def register(self, provider: Any) -> None:
        """Register a template provider.

        Args:
            provider: Object implementing flowkit_get_node_templates

        Raises:
            ValueError: If two providers declare the same node kind
        """
        self._pm.register(provider)
        try:
            self._refresh_cache()
        except ValueError:
            self._pm.unregister(provider)
            raise

    def _refresh_cache(self) -> None:
        templates: dict[str, NodeTemplate] = {}
        for provided in self._pm.hook.flowkit_get_node_templates():
            for template in provided:
                kind = template.flow_node_type
                if kind in templates:
                    raise ValueError(f"Duplicate node template for kind '{kind}'")
                templates[kind] = template
        self._templates = templates

    # === Lookup ===

    @property
    def templates(self) -> Mapping[str, NodeTemplate]:
        """Read-only view of kind tag -> template."""
        return MappingProxyType(self._templates)

    def get_templates(self) -> list[NodeTemplate]:
        """Get all registered templates in registration order."""
        return list(self._templates.values())

    def get_template(self, flow_node_type: str) -> NodeTemplate | None:
        """Get the template for a node kind."""
        return self._templates.get(flow_node_type)


def get_template_manager() -> TemplateManager:
    """Get the template manager holding the built-in templates (singleton)."""
    global _template_manager_cache

    if _template_manager_cache is None:
        manager = TemplateManager()
        manager.register_builtin_templates()
        _template_manager_cache = manager
    return _template_manager_cache
