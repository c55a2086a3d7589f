"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import logging
from numba import njit
import numpy as np
from solvent_path_distance import exception
from solvent_path_distance.grid import (GridCell, UNSET_DISTANCE, components,
                                        neighbouring_voxels)


logger = logging.getLogger(__name__)


@njit(nogil=True, cache=True)
def propagate_distances(source, occupied, distances, parents, eqn, steps,
                        max_distance):
    """
    Breadth-first distance propagation starting at source. Every round
    relaxes the unoccupied neighbours (eqn offsets, steps lengths) of all
    active cells and each improved cell becomes active in the next round at
    most once. Cells further than max_distance are dropped from the next
    round and the search stops when no active cell is left. Parents hold the
    raveled index of the cell a distance came from.
    """
    nx, ny, nz = occupied.shape
    # Round in which a cell was last added so it's only added once per round.
    added = np.zeros(occupied.shape, dtype=np.int64)
    actives = np.empty((1, 3), dtype=np.int64)
    actives[0] = source
    new_actives = np.empty((occupied.size, 3), dtype=np.int64)
    reached_cutoff = False
    rounds = 0
    while True:
        rounds += 1
        count = 0
        for a in range(actives.shape[0]):
            i = actives[a, 0]
            j = actives[a, 1]
            k = actives[a, 2]
            for n in range(eqn.shape[0]):
                ni = i + eqn[n, 0]
                nj = j + eqn[n, 1]
                nk = k + eqn[n, 2]
                if ni < 0 or ni >= nx or nj < 0 or nj >= ny \
                        or nk < 0 or nk >= nz:
                    continue
                if occupied[ni, nj, nk]:
                    continue
                candidate = distances[i, j, k] + steps[n]
                if candidate < distances[ni, nj, nk]:
                    distances[ni, nj, nk] = candidate
                    parents[ni, nj, nk] = (i * ny + j) * nz + k
                    if added[ni, nj, nk] != rounds:
                        added[ni, nj, nk] = rounds
                        new_actives[count, 0] = ni
                        new_actives[count, 1] = nj
                        new_actives[count, 2] = nk
                        count += 1
        # Drop everything beyond the cutoff from the next round.
        kept = 0
        for n in range(count):
            if distances[new_actives[n, 0], new_actives[n, 1],
                         new_actives[n, 2]] > max_distance:
                reached_cutoff = True
            else:
                new_actives[kept] = new_actives[n]
                kept += 1
        if kept == 0:
            break
        actives = new_actives[:kept].copy()
    return reached_cutoff, rounds


class Path(list):
    """
    Grid cell snapshots from a target cell (first) back to the source cell
    (last). Holds only the target cell if no path was found.
    """
    TARGET_INDEX = 0

    @property
    def target(self):
        return self[Path.TARGET_INDEX]

    @property
    def source(self):
        return self[-1]

    @property
    def distance(self):
        """
        Distance recorded on the target cell.
        """
        return self.target.get_distance()

    @property
    def found(self):
        return self.distance != UNSET_DISTANCE

    def coords(self):
        """
        (n, 3) array of the cell centers along the path.
        """
        return np.array([cell.center for cell in self],
                        dtype=np.float64).reshape(-1, 3)


class BreadthFirstSearch:
    """
    Shortest path search through the unoccupied cells of a grid from a source
    cell to a list of target cells.

    The distances and parents of a search are held by the search itself so a
    grid can be searched over and over without resetting it. The distances of
    the last finished search are copied onto the grid for inspection.
    """
    def __init__(self, grid, source, targets, max_distance, occupied=None,
                 exact=False):
        """
        Prepare the search. The source cell distance is zero from here on.
        Occupied can replace the grid occupancy with a search local mask and
        exact traces paths through parents instead of greedy descent.
        """
        if not grid.in_bounds(*source.indices):
            raise exception.CellOutOfBounds(source.indices)
        self._grid = grid
        self._source = source.copy()
        self._targets = list(targets)
        self._max_distance = float(max_distance)
        self._exact = exact
        self._occupied = grid.occupied if occupied is None else occupied
        self._distances = np.full(grid.shape, UNSET_DISTANCE,
                                  dtype=np.float32)
        self._parents = np.full(grid.shape, -1, dtype=np.int64)
        self._distances[self._source.indices] = 0.0
        self._search_completed = False
        self._reached_cutoff = False
        self._reached_border = False
        self._rounds = 0

    @property
    def source(self):
        return self._source

    @property
    def targets(self):
        return self._targets

    @property
    def max_distance(self):
        return self._max_distance

    @property
    def distances(self):
        """
        Distance array of this search indexed like the grid cells.
        """
        return self._distances

    @property
    def search_completed(self):
        """
        Whether propagation ran until no cell within the cutoff was left.
        """
        return self._search_completed

    @property
    def reached_cutoff(self):
        """
        Whether propagation had to drop cells for exceeding the cutoff, in
        other words the source is not enclosed in a small cavity.
        """
        return self._reached_cutoff

    @property
    def reached_border(self):
        """
        Whether any cell of the outer layer of the grid got a distance, so the
        searched region is open to the solvent around the structure.
        """
        return self._reached_border

    @property
    def rounds(self):
        return self._rounds

    def has_succeeded(self):
        return self._reached_cutoff

    def distance_of(self, cell):
        """
        Distance of a cell in this search, unset for cells outside the grid.
        """
        if not self._grid.in_bounds(*cell.indices):
            return UNSET_DISTANCE
        return self._distances[cell.indices]

    def target_reachable(self, target):
        """
        Whether a target got a distance within the cutoff.
        """
        return self.distance_of(target) <= self._max_distance

    def set_distances(self):
        """
        Run the distance propagation from the source cell.
        """
        eqn = components
        steps = (np.linalg.norm(eqn, axis=1)
                 * self._grid.cell_size).astype(np.float32)
        self._reached_cutoff, self._rounds = propagate_distances(
            np.array(self._source.indices, dtype=np.int64), self._occupied,
            self._distances, self._parents, eqn, steps, self._max_distance
        )
        self._search_completed = True
        reached = self._distances != UNSET_DISTANCE
        self._reached_border = bool(
            reached[0].any() or reached[-1].any()
            or reached[:, 0].any() or reached[:, -1].any()
            or reached[:, :, 0].any() or reached[:, :, -1].any()
        )
        np.copyto(self._grid.distances, self._distances)
        logger.debug("Search from %s finished after %d rounds (cutoff %s "
                     "reached: %s).", self._source.indices, self._rounds,
                     self._max_distance, self._reached_cutoff)

    def find_shortest_path(self):
        """
        Set all distances then build one path per target in target order. An
        unreachable target gives a path holding only the target cell with an
        unset distance.
        """
        if not self._search_completed:
            self.set_distances()
        paths = []
        for target in self._targets:
            if self.target_reachable(target):
                path = Path([self._snapshot(target.indices)])
                if self._exact:
                    self._trace_parents(path)
                else:
                    self._backtrack_path(path)
            else:
                unreachable = target.copy()
                unreachable.set_distance(UNSET_DISTANCE)
                path = Path([unreachable])
            paths.append(path)
        return paths

    def _snapshot(self, indices):
        indices = tuple(int(index) for index in indices)
        return GridCell(self._grid.center(indices), indices,
                        self._occupied[indices], self._distances[indices])

    def _backtrack_path(self, path):
        """
        Walk downhill from the target always stepping to the neighbour with
        the smallest distance until the source is reached or no neighbour is
        closer. Ties go to the first neighbour in i, j, k order.
        """
        current = path.target.indices
        while current != self._source.indices:
            neighbours = neighbouring_voxels(current, self._grid.shape)
            neighbour_distances = self._distances[tuple(neighbours.T)]
            closest = int(np.argmin(neighbour_distances))
            if not neighbour_distances[closest] < self._distances[current]:
                break
            current = tuple(int(index) for index in neighbours[closest])
            path.append(self._snapshot(current))
        return path

    def _trace_parents(self, path):
        """
        Follow the recorded parents from the target back to the source.
        """
        current = path.target.indices
        while current != self._source.indices:
            parent = self._parents[current]
            if parent < 0:
                break
            current = tuple(int(index) for index in
                            np.unravel_index(parent, self._grid.shape))
            path.append(self._snapshot(current))
        return path
