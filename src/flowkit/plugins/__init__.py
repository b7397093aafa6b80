"""Node template providers and the registry that indexes them."""

from flowkit.plugins.hookspecs import hookimpl
from flowkit.plugins.manager import TemplateManager, get_template_manager

__all__ = ["TemplateManager", "get_template_manager", "hookimpl"]
