# src/flowkit/plugins/hookspecs.py
"""pluggy hook specifications for node template providers.

Providers implement these hooks to contribute node templates. The template
manager calls them at startup and indexes the results by node-kind tag.

Usage (implementing a provider):
    from flowkit.plugins.hookspecs import hookimpl

    class MyTemplates:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def flowkit_get_node_templates(self):
            return [MY_TEMPLATE]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks provider implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from flowkit.contracts import NodeTemplate

# Project name for pluggy
PROJECT_NAME = "flowkit"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for providers to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class FlowkitTemplateSpec:
    """Hook specifications for node template providers."""

    @hookspec
    def flowkit_get_node_templates(self) -> list["NodeTemplate"]:  # type: ignore[empty-body]
        """Return node templates.

        Returns:
            List of NodeTemplate instances, at most one per node kind
        """
