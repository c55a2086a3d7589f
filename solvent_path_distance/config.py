"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
from dataclasses import dataclass, fields, replace
from pathlib import Path
import yaml
from solvent_path_distance import exception


@dataclass(frozen=True)
class SearchConfig:
    """
    Parameters of a solvent path distance calculation.

    grid_cell_size: edge length of a grid cell.
    solvent_radius: probe radius added to every atom radius.
    max_distance: longest path a cross-linker can span, the search cutoff.
    local_grid_threshold: structures with a larger bounding box diagonal get
        one local grid per source atom instead of one global grid.
    grid_offset: margin added around the structure for the global grid.
    exact_paths: trace paths through parents rather than greedy descent.
    """
    grid_cell_size: float = 1.0
    solvent_radius: float = 1.4
    max_distance: float = 34.0
    local_grid_threshold: float = 100.0
    grid_offset: float = 4.0
    exact_paths: bool = False

    def __post_init__(self):
        if not self.grid_cell_size > 0:
            raise exception.InvalidConfiguration(
                f"grid_cell_size must be positive was {self.grid_cell_size}.")
        if self.solvent_radius < 0:
            raise exception.InvalidConfiguration(
                f"solvent_radius can't be negative was "
                f"{self.solvent_radius}.")
        if not self.max_distance > 0:
            raise exception.InvalidConfiguration(
                f"max_distance must be positive was {self.max_distance}.")
        if not self.local_grid_threshold > 0:
            raise exception.InvalidConfiguration(
                f"local_grid_threshold must be positive was "
                f"{self.local_grid_threshold}.")
        if self.grid_offset < 0:
            raise exception.InvalidConfiguration(
                f"grid_offset can't be negative was {self.grid_offset}.")

    def updated(self, **overrides):
        """
        Copy of the config with every override that isn't None applied.
        """
        return replace(self, **{key: value for key, value in overrides.items()
                                if value is not None})


def load_config(path):
    """
    Load a SearchConfig from a YAML mapping. Missing keys keep their
    defaults, unknown keys are an error.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle)
    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise exception.InvalidConfiguration(
            f"{path} must contain a mapping at the root.")
    known = {field.name for field in fields(SearchConfig)}
    unknown = set(content) - known
    if unknown:
        raise exception.InvalidConfiguration(
            f"unknown keys {sorted(unknown)} in {path}.")
    return SearchConfig(**content)
