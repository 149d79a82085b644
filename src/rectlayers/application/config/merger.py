"""Configuration merging utilities for CLI override support.

CLI arguments override configuration file values, which override defaults.
Only non-None CLI arguments take effect.
"""

from typing import Any

from rectlayers.application.config.schema import LayerPackingConfiguration, SearchConfig


def merge_config_with_cli(
    config: LayerPackingConfiguration,
    *,
    workers: int | None = None,
    distance: int | None = None,
) -> LayerPackingConfiguration:
    """Merge CLI arguments with configuration values.

    Args:
        config: The base configuration to merge with
        workers: Override for search.workers (if not None)
        distance: Override for search.distance (if not None)

    Returns:
        A new, revalidated configuration with merged values

    Example:
        >>> merged = merge_config_with_cli(config, workers=8)
        >>> merged.search.workers
        8
    """
    search_data: dict[str, Any] = config.search.model_dump()
    if workers is not None:
        search_data["workers"] = workers
    if distance is not None:
        search_data["distance"] = distance

    return config.model_copy(update={"search": SearchConfig.model_validate(search_data)})
