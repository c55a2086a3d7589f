"""Tests for the breadth-first distance propagation and path building."""

from __future__ import annotations

import math

import numpy as np
import pytest

from solvent_path_distance import exception
from solvent_path_distance.grid import GridCell, UNSET_DISTANCE
from solvent_path_distance.search import BreadthFirstSearch, Path


def test_single_step_path(cube) -> None:
    search = BreadthFirstSearch(cube, cube.get(1, 1, 1), [cube.get(0, 0, 0)],
                                10.0)
    paths = search.find_shortest_path()

    assert len(paths) == 1
    path = paths[0]
    assert isinstance(path, Path)
    assert [cell.indices for cell in path] == [(0, 0, 0), (1, 1, 1)]
    assert path.distance == pytest.approx(math.sqrt(3), rel=1e-6)
    assert path.source.get_distance() == 0.0
    assert path.found
    assert search.search_completed
    assert not search.reached_cutoff
    assert not search.has_succeeded()


def test_cutoff_leaves_target_unreached(cube) -> None:
    search = BreadthFirstSearch(cube, cube.get(1, 1, 1), [cube.get(0, 0, 0)],
                                0.5)
    path = search.find_shortest_path()[0]
    assert search.reached_cutoff
    assert len(path) == 1
    assert path.target.indices == (0, 0, 0)
    assert path.distance == UNSET_DISTANCE
    assert not path.found


def test_distances_are_copied_to_grid(cube) -> None:
    search = BreadthFirstSearch(cube, cube.get(1, 1, 1), [], 10.0)
    search.set_distances()
    np.testing.assert_array_equal(cube.distances, search.distances)
    assert cube.get(1, 1, 1).get_distance() == 0.0
    assert cube.get(1, 1, 0).get_distance() == pytest.approx(1.0)
    assert cube.get(0, 1, 0).get_distance() == pytest.approx(math.sqrt(2))


def test_path_goes_around_obstacle(block) -> None:
    block.get(1, 1, 1).set_occupied()
    source, target = block.get(2, 2, 2), block.get(0, 0, 0)
    path = BreadthFirstSearch(block, source, [target],
                              34.0).find_shortest_path()[0]

    assert path.distance > 2 * math.sqrt(3)
    assert path.distance == pytest.approx(
        math.sqrt(2) + math.sqrt(3) + 1, rel=1e-5)
    assert (1, 1, 1) not in [cell.indices for cell in path]
    assert path.source.indices == (2, 2, 2)
    assert not any(cell.is_occupied() for cell in path)


def test_path_distances_decrease_towards_source(block) -> None:
    block.get(1, 1, 1).set_occupied()
    path = BreadthFirstSearch(block, block.get(2, 2, 2), [block.get(0, 0, 0)],
                              34.0).find_shortest_path()[0]
    distances = [float(cell.get_distance()) for cell in path]
    assert distances == sorted(distances, reverse=True)
    assert distances[-1] == 0.0


def test_wall_blocks_search(block) -> None:
    block.occupied[2, :, :] = True
    search = BreadthFirstSearch(block, block.get(0, 2, 2),
                                [block.get(4, 2, 2)], 34.0)
    path = search.find_shortest_path()[0]
    assert not search.reached_cutoff
    assert not search.target_reachable(block.get(4, 2, 2))
    assert len(path) == 1
    assert not path.found
    assert (search.distances[3:, :, :] == UNSET_DISTANCE).all()


def test_occupied_cells_never_get_distances(block) -> None:
    block.occupied[1, :, :] = True
    search = BreadthFirstSearch(block, block.get(3, 2, 2), [], 34.0)
    search.set_distances()
    assert (search.distances[block.occupied] == UNSET_DISTANCE).all()


def test_distances_respect_euclidean_lower_bound(block) -> None:
    block.get(1, 2, 2).set_occupied()
    block.get(3, 3, 3).set_occupied()
    source = block.get(2, 1, 2)
    search = BreadthFirstSearch(block, source, [], 34.0)
    search.set_distances()
    for cell in block:
        distance = search.distance_of(cell)
        if distance == UNSET_DISTANCE:
            continue
        euclidean = np.linalg.norm(np.subtract(cell.center, source.center))
        assert distance >= euclidean - 1e-5


def test_unobstructed_straight_line(block) -> None:
    path = BreadthFirstSearch(block, block.get(2, 2, 2), [block.get(0, 2, 2)],
                              34.0).find_shortest_path()[0]
    assert path.distance == pytest.approx(2.0)
    assert [cell.indices for cell in path] == [(0, 2, 2), (1, 2, 2),
                                                (2, 2, 2)]


def test_repeated_searches_agree(block) -> None:
    block.get(1, 1, 1).set_occupied()
    first = BreadthFirstSearch(block, block.get(2, 2, 2),
                               [block.get(0, 0, 0)], 34.0)
    first_path = first.find_shortest_path()[0]
    block.reset_soft()
    second = BreadthFirstSearch(block, block.get(2, 2, 2),
                                [block.get(0, 0, 0)], 34.0)
    second_path = second.find_shortest_path()[0]
    np.testing.assert_array_equal(first.distances, second.distances)
    assert first_path == second_path


def test_targets_keep_their_order(block) -> None:
    targets = [block.get(4, 4, 4), block.get(0, 2, 2), block.get(2, 2, 3)]
    paths = BreadthFirstSearch(block, block.get(2, 2, 2), targets,
                               34.0).find_shortest_path()
    assert [path.target.indices for path in paths] == [
        (4, 4, 4), (0, 2, 2), (2, 2, 3)]
    assert paths[2].distance == pytest.approx(1.0)


def test_exact_paths_follow_parents(block) -> None:
    block.get(1, 1, 1).set_occupied()
    greedy = BreadthFirstSearch(block, block.get(2, 2, 2),
                                [block.get(0, 0, 0)], 34.0)
    exact = BreadthFirstSearch(block, block.get(2, 2, 2),
                               [block.get(0, 0, 0)], 34.0, exact=True)
    greedy_path = greedy.find_shortest_path()[0]
    exact_path = exact.find_shortest_path()[0]
    assert exact_path.source.indices == (2, 2, 2)
    assert exact_path.distance == pytest.approx(greedy_path.distance)
    steps = np.linalg.norm(np.diff(exact_path.coords(), axis=0), axis=1)
    assert steps.sum() == pytest.approx(float(exact_path.distance), rel=1e-5)


def test_search_local_occupancy(block) -> None:
    block.occupied[2, :, :] = True
    occupied = np.zeros(block.shape, dtype=bool)
    search = BreadthFirstSearch(block, block.get(0, 2, 2),
                                [block.get(4, 2, 2)], 34.0, occupied=occupied)
    path = search.find_shortest_path()[0]
    assert path.distance == pytest.approx(4.0)
    assert block.occupied[2, :, :].all()


def test_source_outside_grid_raises(block) -> None:
    outside = GridCell((-0.5, 0.5, 0.5), (-1, 0, 0))
    with pytest.raises(exception.CellOutOfBounds):
        BreadthFirstSearch(block, outside, [], 10.0)


def test_target_outside_grid_is_unreachable(block) -> None:
    outside = GridCell((10.5, 0.5, 0.5), (10, 0, 0))
    search = BreadthFirstSearch(block, block.get(2, 2, 2), [outside], 34.0)
    path = search.find_shortest_path()[0]
    assert path.target == outside
    assert path.distance == UNSET_DISTANCE


def test_path_coords(cube) -> None:
    path = BreadthFirstSearch(cube, cube.get(1, 1, 1), [cube.get(0, 0, 0)],
                              10.0).find_shortest_path()[0]
    np.testing.assert_allclose(path.coords(), [[0.5, 0.5, 0.5],
                                               [1.5, 1.5, 1.5]])


def test_source_distance_is_zero_before_running(block) -> None:
    source = block.get(2, 2, 2)
    search = BreadthFirstSearch(block, source, [block.get(0, 0, 0)], 34.0)
    assert search.distance_of(source) == 0.0
    assert not search.search_completed
    unset = np.count_nonzero(search.distances == UNSET_DISTANCE)
    assert unset == block.number_of_cells - 1


def test_open_region_reaches_border(cube) -> None:
    search = BreadthFirstSearch(cube, cube.get(1, 1, 1), [], 10.0)
    search.set_distances()
    assert search.reached_border
    assert not search.reached_cutoff


def test_sealed_region_stays_off_border(block) -> None:
    block.occupied[...] = True
    block.occupied[1:4, 1:4, 1:4] = False
    search = BreadthFirstSearch(block, block.get(2, 2, 2), [], 34.0)
    search.set_distances()
    assert not search.reached_border
    assert search.distance_of(block.get(1, 1, 1)) == pytest.approx(
        math.sqrt(3))
