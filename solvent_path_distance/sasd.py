"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import logging
from solvent_path_distance.grid import GridCell, OUT_OF_RANGE_INDICES
from solvent_path_distance.search import BreadthFirstSearch, Path


logger = logging.getLogger(__name__)

SOLVENT_RADIUS = 1.4


class SolventPathDistance:
    """
    Solvent path distance between a source atom and a list of target atoms on
    an atom grid.
    """
    def __init__(self, source_atom, target_atoms, atom_grid,
                 solvent_radius=SOLVENT_RADIUS, exact=False):
        """
        Free the cells of the source and target atom spheres (extended by the
        solvent radius) so the search can leave and enter them. This is done
        on a copy of the grid occupancy so the grid itself is left untouched
        for the next atom pair.
        """
        self._grid = atom_grid
        self._exact = exact
        self._occupied = atom_grid.occupied.copy()

        self._free(atom_grid.atom_voxels(source_atom.inflated(solvent_radius)))
        self._source_cell = atom_grid.atom_cell(source_atom)

        self._target_cells = []
        for target_atom in target_atoms:
            target_small = target_atom.inflated(solvent_radius)
            target_cell = atom_grid.atom_cell(target_small)
            if target_cell is None:
                # The pair might be further apart than the grid reaches so
                # the target gets a cell that no search will ever reach.
                logger.debug("%s lies outside of the grid.",
                             getattr(target_atom, "label", target_atom))
                target_cell = GridCell(target_atom.coords,
                                       OUT_OF_RANGE_INDICES)
            else:
                self._occupied[target_cell.indices] = False
            self._target_cells.append(target_cell)
            self._free(atom_grid.atom_voxels(target_small))

    @classmethod
    def from_cells(cls, source_cell, target_cells, grid, exact=False):
        """
        Solvent path distance between already known grid cells searching the
        grid occupancy as it is.
        """
        sasd = cls.__new__(cls)
        sasd._grid = grid
        sasd._exact = exact
        sasd._occupied = grid.occupied
        sasd._source_cell = source_cell
        sasd._target_cells = list(target_cells)
        return sasd

    def _free(self, voxels):
        if voxels.shape[0] > 0:
            self._occupied[tuple(voxels.T)] = False

    @property
    def source_cell(self):
        return self._source_cell

    @property
    def target_cells(self):
        return self._target_cells

    @property
    def occupied(self):
        """
        Occupancy used by the search with the atom pair cells freed.
        """
        return self._occupied

    def get_shortest_path(self, max_distance):
        """
        One path per target cell. Paths holding a single cell are failed
        distance calculations. The list is empty if the source is outside of
        the grid or buried in a closed cavity, that is the search ran out of
        cells before the cutoff without reaching any target or the outer
        layer of the grid.
        """
        if self._source_cell is None:
            logger.debug("Source atom lies outside of the grid.")
            return []
        search = BreadthFirstSearch(self._grid, self._source_cell,
                                    self._target_cells, max_distance,
                                    occupied=self._occupied,
                                    exact=self._exact)
        paths = search.find_shortest_path()
        enclosed = not (search.reached_cutoff or search.reached_border)
        if enclosed and not any(search.target_reachable(target)
                                for target in self._target_cells):
            logger.debug("Source cell %s is enclosed in a cavity.",
                         self._source_cell.indices)
            return []
        return paths

    @staticmethod
    def extract_target_distance(path):
        """
        Distance of the target cell which is the first cell of a path.
        """
        return path[Path.TARGET_INDEX].get_distance()
