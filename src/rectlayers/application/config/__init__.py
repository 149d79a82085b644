"""Configuration schema and loading system for layer packing runs.

Public API:
    - LayerPackingConfiguration: Root configuration model
    - ContainerConfig, PieceConfig: Inventory models
    - SearchConfig: Search settings model
    - PipelineConfig, StagesConfig: Pipeline stage and path models
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - merge_config_with_cli: Apply command-line overrides
    - validate_config: Packing advisories beyond the schema
    - config_to_inventory, config_to_search_settings,
      config_to_pipeline_settings: Convert to domain objects and DTOs

Example:
    >>> from pathlib import Path
    >>> from rectlayers.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("run.json"))
    ...     print(f"{len(config.pieces)} pieces")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from rectlayers.application.config.adapter import (
    config_to_inventory,
    config_to_pipeline_settings,
    config_to_search_settings,
)
from rectlayers.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from rectlayers.application.config.merger import merge_config_with_cli
from rectlayers.application.config.schema import (
    SUPPORTED_VERSIONS,
    ContainerConfig,
    LayerPackingConfiguration,
    PieceConfig,
    PipelineConfig,
    SearchConfig,
    StagesConfig,
)
from rectlayers.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_packing_advisories,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "ContainerConfig",
    "LayerPackingConfiguration",
    "PieceConfig",
    "PipelineConfig",
    "SearchConfig",
    "StagesConfig",
    # Loader
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Merger
    "merge_config_with_cli",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_packing_advisories",
    "validate_config",
    # Adapter
    "config_to_inventory",
    "config_to_pipeline_settings",
    "config_to_search_settings",
]
