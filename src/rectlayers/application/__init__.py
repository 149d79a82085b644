"""Application layer - use cases and orchestration."""

from .commands import CheckCombinationCommand, PipelineCommand, PipelineState
from .dtos import PipelineResult, PipelineSettings, SearchSettings

__all__ = [
    "CheckCombinationCommand",
    "PipelineCommand",
    "PipelineResult",
    "PipelineSettings",
    "PipelineState",
    "SearchSettings",
]
