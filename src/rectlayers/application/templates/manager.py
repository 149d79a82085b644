"""Template manager for bundled run configuration templates.

Templates are JSON run configurations shipped with the package: the
18-piece inventories at three rounding precisions and the worked
examples. Every template is validated through the configuration loader
before it is listed, summarized, or written out.
"""

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from rectlayers.application.config import (
    LayerPackingConfiguration,
    config_to_inventory,
    load_config_from_dict,
)
from rectlayers.domain import Inventory


class TemplateNotFoundError(Exception):
    """Raised when a requested template does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


# Template metadata: name -> description
TEMPLATE_METADATA: dict[str, str] = {
    "mm": "18-piece inventory rounded to millimetres",
    "mm10": "18-piece inventory rounded to tenths of a millimetre",
    "mm100": "18-piece inventory rounded to hundredths of a millimetre",
    "example-9": "Nine pieces filling a 10x4 container in one layer",
    "example-20": "Twenty pieces covered by three layers of an 8x4 container",
}


@dataclass(frozen=True)
class TemplateInfo:
    """Summary of one bundled template."""

    name: str
    description: str
    container_width: int
    container_height: int
    piece_count: int
    total_area: int

    @property
    def container_area(self) -> int:
        return self.container_width * self.container_height

    @property
    def layers_needed(self) -> float:
        """Piece area measured in container areas."""
        return self.total_area / self.container_area


class TemplateManager:
    """Manager for bundled run configuration templates.

    Example:
        manager = TemplateManager()
        for info in manager.list_templates():
            print(f"{info.name}: {info.piece_count} pieces")

        manager.init_template("mm10", Path("run.json"))
    """

    def __init__(self) -> None:
        self._data_package = "rectlayers.application.templates.data"

    def list_templates(self) -> list[TemplateInfo]:
        """Summarize every bundled template in a fixed order."""
        return [self.describe(name) for name in TEMPLATE_METADATA]

    def get_template(self, name: str) -> str:
        """Get the JSON content of a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        if name not in TEMPLATE_METADATA:
            raise TemplateNotFoundError(name)

        try:
            template_file = resources.files(self._data_package).joinpath(f"{name}.json")
            return template_file.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(name) from e

    def load_template(self, name: str) -> LayerPackingConfiguration:
        """Parse and validate a template as a run configuration.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConfigError: If the bundled content is not a valid configuration.
        """
        return load_config_from_dict(json.loads(self.get_template(name)))

    def template_inventory(self, name: str) -> Inventory:
        return config_to_inventory(self.load_template(name))

    def describe(self, name: str) -> TemplateInfo:
        """Summarize a template's container and pieces.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        config = self.load_template(name)
        return TemplateInfo(
            name=name,
            description=TEMPLATE_METADATA[name],
            container_width=config.container.width,
            container_height=config.container.height,
            piece_count=len(config.pieces),
            total_area=sum(p.width * p.height for p in config.pieces),
        )

    def init_template(
        self, name: str, output_path: Path, overwrite: bool = False
    ) -> LayerPackingConfiguration:
        """Validate a template and copy it to the specified output path.

        Args:
            name: The template name (without .json extension).
            output_path: The destination path for the template copy.
            overwrite: Replace an existing file instead of failing.

        Returns:
            The validated configuration that was written.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConfigError: If the bundled content is not a valid configuration.
            FileExistsError: If the output file exists and overwrite is False.
        """
        content = self.get_template(name)
        config = load_config_from_dict(json.loads(content))
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"File already exists: {output_path}")
        output_path.write_text(content, encoding="utf-8")
        return config

    def template_exists(self, name: str) -> bool:
        return name in TEMPLATE_METADATA
