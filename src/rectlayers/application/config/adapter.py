"""Adapter to convert LayerPackingConfiguration to domain objects and DTOs.

Relative pipeline paths are resolved against a base directory, normally the
directory holding the configuration file.
"""

from pathlib import Path

from rectlayers.application.config.schema import LayerPackingConfiguration
from rectlayers.application.dtos import PipelineSettings, SearchSettings
from rectlayers.domain import Inventory


def config_to_inventory(config: LayerPackingConfiguration) -> Inventory:
    """Build the inventory described by a configuration."""
    return Inventory.from_dimensions(
        container=(config.container.width, config.container.height),
        pieces=[(p.id, p.width, p.height) for p in config.pieces],
    )


def config_to_search_settings(config: LayerPackingConfiguration) -> SearchSettings:
    search = config.search
    return SearchSettings(
        workers=search.workers,
        min_pieces=search.min_pieces,
        max_pieces=search.max_pieces,
        min_solution_area=search.min_solution_area,
        distance=search.distance,
    )


def _resolve(path: str | None, base_dir: Path | None) -> Path | None:
    if path is None:
        return None
    resolved = Path(path)
    if base_dir is not None and not resolved.is_absolute():
        resolved = base_dir / resolved
    return resolved


def config_to_pipeline_settings(
    config: LayerPackingConfiguration,
    base_dir: Path | None = None,
) -> PipelineSettings:
    """Convert the pipeline section, resolving relative paths against base_dir.

    Args:
        config: Validated configuration.
        base_dir: Directory relative paths are resolved against. Paths are
            kept as given when None.

    Returns:
        PipelineSettings with stage switches and resolved paths.
    """
    pipeline = config.pipeline
    return PipelineSettings(
        generate=pipeline.stages.generate,
        feasibility=pipeline.stages.feasibility,
        matching=pipeline.stages.matching,
        ranking=pipeline.stages.ranking,
        candidates_path=_resolve(pipeline.candidates_path, base_dir),
        deduplicated_path=_resolve(pipeline.deduplicated_path, base_dir),
        layers_path=_resolve(pipeline.layers_path, base_dir),
        expanded_layers_path=_resolve(pipeline.expanded_layers_path, base_dir),
        solutions_path=_resolve(pipeline.solutions_path, base_dir),
        ranking_path=_resolve(pipeline.ranking_path, base_dir),
    )
