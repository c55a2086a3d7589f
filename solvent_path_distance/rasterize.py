"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
from numba import njit, prange
import numpy as np


@njit(nogil=True, cache=True)
def hemisphere_cells(radius, cell_size):
    """
    Number of grid cells needed to span a sphere radius from its center cell.
    A zero radius still gets the 0.01 minimum which rounds down to zero
    cells, leaving just the center cell.
    """
    if radius == 0.0:
        cells = 0.01
    else:
        cells = 0.5 + radius / cell_size
    return np.int64(np.floor(cells + 0.5))


@njit(nogil=True, cache=True)
def centre_voxel(coord, minimum, cell_size, shape):
    """
    Voxel holding a cartesian coordinate by truncating the shifted and scaled
    coordinate. Returns [-1, -1, -1] unless 0 < index < shape on every axis,
    so the lowest layer of the grid never holds an atom center.
    """
    voxel = np.empty(3, dtype=np.int64)
    for axis in range(3):
        voxel[axis] = np.int64((coord[axis] - minimum[axis]) / cell_size)
        if voxel[axis] <= 0 or voxel[axis] >= shape[axis]:
            voxel[:] = -1
            return voxel
    return voxel


@njit(nogil=True, cache=True)
def sphere_voxels(coord, radius, expand, minimum, cell_size, shape):
    """
    All voxels covered by a sphere. The center voxel comes first followed by
    every voxel of the surrounding cube whose center is closer to the sphere
    center than the radius widened by expand cells.
    """
    centre = centre_voxel(coord, minimum, cell_size, shape)
    if centre[0] < 0:
        return np.empty((0, 3), dtype=np.int64)

    reach = hemisphere_cells(radius, cell_size) + expand
    side = 2 * reach + 1
    limit = radius + cell_size * expand
    voxels = np.empty((side ** 3, 3), dtype=np.int64)
    voxels[0] = centre
    count = 1
    for di in range(-reach, reach + 1):
        i = centre[0] + di
        if i < 0 or i >= shape[0]:
            continue
        dx = minimum[0] + (i + 0.5) * cell_size - coord[0]
        for dj in range(-reach, reach + 1):
            j = centre[1] + dj
            if j < 0 or j >= shape[1]:
                continue
            dy = minimum[1] + (j + 0.5) * cell_size - coord[1]
            for dk in range(-reach, reach + 1):
                k = centre[2] + dk
                if k < 0 or k >= shape[2]:
                    continue
                if di == 0 and dj == 0 and dk == 0:
                    continue
                dz = minimum[2] + (k + 0.5) * cell_size - coord[2]
                if np.sqrt(dx * dx + dy * dy + dz * dz) - limit < 0.0:
                    voxels[count, 0] = i
                    voxels[count, 1] = j
                    voxels[count, 2] = k
                    count += 1
    return voxels[:count].copy()


@njit(parallel=True, nogil=True, cache=True)
def occupy_spheres(coords, radii, minimum, cell_size, occupied):
    """
    Mark the voxels of every sphere as occupied in parallel. Only True values
    are ever written so the shared grid doesn't need any locking.
    """
    shape = np.empty(3, dtype=np.int64)
    for axis in range(3):
        shape[axis] = occupied.shape[axis]
    for n in prange(coords.shape[0]):
        voxels = sphere_voxels(coords[n], radii[n], 0, minimum, cell_size,
                               shape)
        for v in range(voxels.shape[0]):
            occupied[voxels[v, 0], voxels[v, 1], voxels[v, 2]] = True
    return occupied
