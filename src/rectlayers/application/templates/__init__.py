"""Bundled inventories and worked examples.

This package provides template run configurations and a TemplateManager
class for accessing them.
"""

from rectlayers.application.templates.manager import (
    TEMPLATE_METADATA,
    TemplateInfo,
    TemplateManager,
    TemplateNotFoundError,
)

__all__ = [
    "TemplateInfo",
    "TemplateManager",
    "TemplateNotFoundError",
    "TEMPLATE_METADATA",
]
