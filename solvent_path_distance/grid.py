"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import itertools
import logging
import numpy as np
from solvent_path_distance import rasterize
from solvent_path_distance import exception
from solvent_path_distance import utils


logger = logging.getLogger(__name__)

# Distance of a cell nobody has reached yet, compared as if it was infinite.
UNSET_DISTANCE = np.float32(2 ** 31 - 1)

# Indices of a cell that can never be part of a grid.
OUT_OF_RANGE_INDICES = (2 ** 31 - 1, 2 ** 31 - 1, 2 ** 31 - 1)


def cube_components(reach):
    """
    Index offsets of a cube of the given reach around a cell without the cell
    itself ordered by i then j then k.
    """
    steps = range(-reach, reach + 1)
    return np.array([offset for offset in itertools.product(steps, repeat=3)
                     if offset != (0, 0, 0)], dtype=np.int64).reshape(-1, 3)


# Offsets of the 26 directly adjacent cells.
components = cube_components(1)


class GridCell:
    """
    Single cube of a grid. The center and indices never change. The occupied
    flag and distance are read from and written to the grid arrays when the
    cell came from a grid, otherwise (copies) they are held by the cell.
    """
    def __init__(self, center, indices, occupied=False,
                 distance=UNSET_DISTANCE, grid=None):
        self._center = tuple(float(value) for value in center)
        self._indices = tuple(int(value) for value in indices)
        self._grid = grid
        self._occupied = bool(occupied)
        self._distance = np.float32(distance)

    def __eq__(self, other):
        if not isinstance(other, GridCell):
            return NotImplemented
        return self.center == other.center and self.indices == other.indices

    def __hash__(self):
        return hash((self.center, self.indices))

    def __repr__(self):
        return (f"GridCell(indices={self.indices}, center={self.center}, "
                f"occupied={self.is_occupied()}, "
                f"distance={self.get_distance()})")

    @property
    def center(self):
        """
        Cartesian coordinates of the cell center.
        """
        return self._center

    @property
    def indices(self):
        """
        (i, j, k) indices of the cell in its grid.
        """
        return self._indices

    @property
    def is_live(self):
        """
        Whether the cell reads and writes its state straight from a grid.
        """
        return self._grid is not None

    def is_occupied(self):
        if self._grid is not None:
            return bool(self._grid.occupied[self._indices])
        return self._occupied

    def set_occupied(self):
        if self._grid is not None:
            self._grid.occupied[self._indices] = True
        else:
            self._occupied = True

    def unset_occupied(self):
        if self._grid is not None:
            self._grid.occupied[self._indices] = False
        else:
            self._occupied = False

    def get_distance(self):
        if self._grid is not None:
            return self._grid.distances[self._indices]
        return self._distance

    def set_distance(self, distance):
        if self._grid is not None:
            self._grid.distances[self._indices] = distance
        else:
            self._distance = np.float32(distance)

    @property
    def distance(self):
        """
        Convenience property for get_distance().
        """
        return self.get_distance()

    def reset(self):
        """
        Unset distance and occupied flag.
        """
        self.set_distance(UNSET_DISTANCE)
        self.unset_occupied()

    def reset_soft(self):
        """
        Unset distance only keeping the occupied flag.
        """
        self.set_distance(UNSET_DISTANCE)

    def copy(self):
        """
        Detached snapshot of the cell which doesn't follow later grid changes.
        """
        return GridCell(self.center, self.indices, self.is_occupied(),
                        self.get_distance())


class Grid:
    """
    Dense three dimensional grid of cubic cells with an occupied and a
    distance value per cell stored as numpy arrays.
    """
    def __init__(self, minimum, maximum, cell_size):
        """
        Build the grid spanning minimum to maximum. The number of cells per
        axis is the rounded box length divided by the cell size.
        """
        if cell_size is None or not cell_size > 0:
            raise exception.InvalidGridCellSize(cell_size)
        self._minimum = np.asarray(minimum, dtype=np.float64)
        self._maximum = np.asarray(maximum, dtype=np.float64)
        self._cell_size = float(cell_size)
        shape = tuple(
            utils.round_half_up(length / self._cell_size)
            for length in self._maximum - self._minimum
        )
        if min(shape) <= 0:
            raise exception.EmptyGrid(shape)
        self._shape = shape
        self._occupied = np.zeros(shape, dtype=bool)
        self._distances = np.full(shape, UNSET_DISTANCE, dtype=np.float32)
        logger.debug("Built %s grid with cell size %s starting at %s.",
                     "x".join(str(n) for n in shape), self._cell_size,
                     self._minimum)

    def __str__(self):
        return f"Grid(shape={self.shape}, cell_size={self.cell_size})"

    def __iter__(self):
        return self.cells()

    @property
    def minimum(self):
        """
        Convenience property to reference the minimum corner of the grid
        (zero shift of the cartesian coordinate system).
        """
        return self._minimum

    @property
    def maximum(self):
        """
        Convenience property to reference the requested maximum corner.
        """
        return self._maximum

    @property
    def cell_size(self):
        """
        Convenience property to reference the cell edge length.
        """
        return self._cell_size

    @property
    def shape(self):
        """
        Convenience property to reference the number of cells per axis.
        """
        return self._shape

    @property
    def number_of_cells(self):
        """
        Total number of cells of the grid.
        """
        return self._occupied.size

    @property
    def occupied(self):
        """
        Boolean occupied array indexed like the cells.
        """
        return self._occupied

    @property
    def distances(self):
        """
        Float32 distance array indexed like the cells.
        """
        return self._distances

    def in_bounds(self, i, j, k):
        return (0 <= i < self._shape[0] and 0 <= j < self._shape[1]
                and 0 <= k < self._shape[2])

    def center(self, indices):
        """
        Cartesian center of the cell (or cells for an (n, 3) array) at
        indices.
        """
        return (np.asarray(indices) + 0.5) * self._cell_size + self._minimum

    def gridify_point(self, point):
        """
        Take a cartesian point and project it onto the grid. Then return the
        voxel coordinate.
        """
        return ((np.asarray(point) - self._minimum)
                / self._cell_size).astype(np.int64)

    def get(self, i, j, k):
        """
        Cell at i, j, k or None if any index is outside the grid.
        """
        if not self.in_bounds(i, j, k):
            return None
        return GridCell(self.center((i, j, k)), (i, j, k), grid=self)

    def cells(self):
        """
        Iterate all cells in i, j, k order.
        """
        for i, j, k in np.ndindex(*self._shape):
            yield GridCell(self.center((i, j, k)), (i, j, k), grid=self)

    def reset(self):
        """
        Clear occupied flags and distances of all cells.
        """
        self._occupied[...] = False
        self._distances[...] = UNSET_DISTANCE

    def reset_soft(self):
        """
        Clear only the distances of all cells.
        """
        self._distances[...] = UNSET_DISTANCE


class AtomGrid(Grid):
    """
    Grid built on a set of atoms where every cell inside an atom sphere is
    marked occupied.
    """
    def __init__(self, atoms, minimum, maximum, cell_size):
        super().__init__(minimum, maximum, cell_size)
        self._atoms = atoms
        self.occupy()

    @classmethod
    def from_atoms(cls, atoms, cell_size=1.0, offset=0.0):
        """
        Grid enclosing all atom spheres extended on every side by offset.
        """
        return cls(atoms, atoms.minimum - offset, atoms.maximum + offset,
                   cell_size)

    @classmethod
    def around_atom(cls, atoms, atom, size, cell_size=1.0):
        """
        Local grid reaching size (plus one) from a single atom. Used when the
        full structure would give an unreasonably large grid.
        """
        return cls(atoms, atom.coords - size - 1, atom.coords + size + 1,
                   cell_size)

    @property
    def atoms(self):
        """
        Convenience property to reference the atoms the grid was built on.
        """
        return self._atoms

    @property
    def _shape_array(self):
        return np.array(self.shape, dtype=np.int64)

    def occupy(self):
        """
        Rasterize all atom spheres marking their cells occupied.
        """
        if len(self._atoms) == 0:
            return
        rasterize.occupy_spheres(
            self._atoms.coords, self._atoms.radii, self.minimum,
            self.cell_size, self.occupied
        )
        logger.debug("Occupied %d of %d cells by %d atoms.",
                     np.count_nonzero(self.occupied), self.number_of_cells,
                     len(self._atoms))

    def atom_voxels(self, atom, expand=0):
        """
        (n, 3) array of voxel indices covered by an atom sphere, center voxel
        first. Empty if the atom center is not inside the grid.
        """
        return rasterize.sphere_voxels(
            np.asarray(atom.coords, dtype=np.float64), float(atom.radius),
            int(expand), self.minimum, self.cell_size, self._shape_array
        )

    def atom_cell(self, atom):
        """
        Cell holding the atom center or None when the center falls outside of
        the grid (index 0 on any axis counts as outside).
        """
        voxel = rasterize.centre_voxel(
            np.asarray(atom.coords, dtype=np.float64), self.minimum,
            self.cell_size, self._shape_array
        )
        if voxel[0] < 0:
            return None
        return self.get(*(int(index) for index in voxel))

    def atom_cells(self, atom, expand=0):
        """
        All cells covered by an atom sphere whose radius is widened by expand
        cells.
        """
        return [self.get(*(int(index) for index in voxel))
                for voxel in self.atom_voxels(atom, expand)]

    def contains(self, atom):
        """
        Whether the atom covers any cell of the grid.
        """
        return self.atom_voxels(atom).shape[0] > 0

    def __contains__(self, atom):
        return self.contains(atom)

    def border_voxels(self, atom):
        """
        Voxels of the one cell thick shell just outside of the atom sphere.
        """
        inner = {tuple(voxel) for voxel in self.atom_voxels(atom).tolist()}
        return np.array([voxel for voxel in
                         self.atom_voxels(atom, expand=1).tolist()
                         if tuple(voxel) not in inner],
                        dtype=np.int64).reshape(-1, 3)

    def is_accessible(self, atom):
        """
        An atom is solvent accessible if any cell of the shell around its
        sphere is not occupied.
        """
        border = self.border_voxels(atom)
        if border.shape[0] == 0:
            return False
        free = np.count_nonzero(~self.occupied[tuple(border.T)])
        logger.debug("%s has %d grid cells at the protein/solvent boundary.",
                     getattr(atom, "label", atom), free)
        return free > 0

    def reset_atoms(self, atoms):
        """
        Reset distance and occupied flag of the cells covered by atoms.
        """
        for atom in atoms:
            voxels = self.atom_voxels(atom)
            if voxels.shape[0] == 0:
                continue
            index = tuple(voxels.T)
            self.occupied[index] = False
            self.distances[index] = UNSET_DISTANCE


def hemisphere_cells(radius, cell_size):
    """
    Number of grid cells that fit into a hemisphere of radius.
    """
    return int(rasterize.hemisphere_cells(float(radius), float(cell_size)))


def neighbouring_voxels(indices, shape, reach=1):
    """
    Voxel indices of the cube of reach around indices that lie inside shape,
    without indices itself.
    """
    voxels = np.asarray(indices, dtype=np.int64) + (
        components if reach == 1 else cube_components(reach)
    )
    inside = ((voxels >= 0) & (voxels < np.asarray(shape))).all(axis=1)
    return voxels[inside]


def neighbouring_cells(cell, grid, reach=1):
    """
    All cells of the cube of reach around cell clipped to the grid.
    """
    return [grid.get(*(int(index) for index in voxel))
            for voxel in neighbouring_voxels(cell.indices, grid.shape, reach)]


def volume(grid):
    """
    Occupied, unoccupied and total volume of a grid.
    """
    cell_volume = grid.cell_size ** 3
    hit = np.count_nonzero(grid.occupied)
    count = grid.number_of_cells
    return (cell_volume * hit, cell_volume * (count - hit),
            cell_volume * count)


def unoccupied_cells(grid):
    """
    All cells of the grid that are not occupied.
    """
    return [grid.get(*(int(index) for index in voxel))
            for voxel in np.argwhere(~grid.occupied)]


def is_accessible(atom, grid):
    """
    Whether atom touches empty space on the atom grid.
    """
    return grid.is_accessible(atom)


def find_equal(target, cells):
    """
    First cell of cells structurally equal to target or None.
    """
    for cell in cells:
        if cell == target:
            return cell
    return None
