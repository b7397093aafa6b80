"""Template provider for the built-in node kinds."""

from flowkit.contracts import NodeTemplate
from flowkit.plugins.hookspecs import hookimpl
from flowkit.plugins.templates.system import BUILTIN_TEMPLATES


class BuiltinTemplates:
    """Registers every template in BUILTIN_TEMPLATES."""

    @hookimpl
    def flowkit_get_node_templates(self) -> list[NodeTemplate]:
        return list(BUILTIN_TEMPLATES)


__all__ = ["BUILTIN_TEMPLATES", "BuiltinTemplates"]
