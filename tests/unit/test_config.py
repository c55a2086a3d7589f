"""Tests for search configuration loading."""

from __future__ import annotations

import dataclasses

import pytest

from solvent_path_distance import exception
from solvent_path_distance.config import SearchConfig, load_config


def test_defaults() -> None:
    config = SearchConfig()
    assert config.grid_cell_size == 1.0
    assert config.solvent_radius == 1.4
    assert config.max_distance == 34.0
    assert config.local_grid_threshold == 100.0
    assert config.grid_offset == 4.0
    assert config.exact_paths is False


def test_config_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        SearchConfig().max_distance = 10.0


@pytest.mark.parametrize("overrides", [
    {"grid_cell_size": 0.0},
    {"solvent_radius": -0.1},
    {"max_distance": 0.0},
    {"local_grid_threshold": -1.0},
    {"grid_offset": -2.0},
])
def test_invalid_values(overrides) -> None:
    with pytest.raises(exception.InvalidConfiguration):
        SearchConfig(**overrides)


def test_updated_skips_none() -> None:
    config = SearchConfig().updated(max_distance=20.0, solvent_radius=None)
    assert config.max_distance == 20.0
    assert config.solvent_radius == 1.4


def test_load_config(tmp_path) -> None:
    path = tmp_path / "search.yaml"
    path.write_text("max_distance: 25.0\nexact_paths: true\n",
                    encoding="utf-8")
    config = load_config(path)
    assert config.max_distance == 25.0
    assert config.exact_paths is True
    assert config.grid_cell_size == 1.0


def test_load_empty_config(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == SearchConfig()


def test_load_config_unknown_key(tmp_path) -> None:
    path = tmp_path / "typo.yaml"
    path.write_text("max_distnace: 25.0\n", encoding="utf-8")
    with pytest.raises(exception.InvalidConfiguration, match="max_distnace"):
        load_config(path)


def test_load_config_needs_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(exception.InvalidConfiguration):
        load_config(path)
