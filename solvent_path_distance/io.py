"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import numpy as np
from solvent_path_distance import exception


MAX_TEMPERATURE_FACTOR = 999.99

extensions = (".pdb", ".xyz", ".csv", ".txt", ".npz")


def cell_record(cell, serial=1, resname="GRD", resseq=1):
    """
    PDB HETATM record of a grid cell. The chain is Y for occupied and N for
    free cells and the distance goes into the temperature factor column.
    """
    x_coord, y_coord, z_coord = cell.center
    temperature = min(float(cell.get_distance()), MAX_TEMPERATURE_FACTOR)
    chain = "Y" if cell.is_occupied() else "N"
    return (f"HETATM{serial % 100000:5d}  C   {resname:>3s} {chain}"
            f"{resseq % 10000:4d}    {x_coord:8.3f}{y_coord:8.3f}"
            f"{z_coord:8.3f}{1.0:6.2f}{temperature:6.2f}           C\n")


def path_records(path, resseq=1):
    """
    PDB records of all cells of a path as PTH residue resseq.
    """
    return "".join(cell_record(cell, serial, "PTH", resseq)
                   for serial, cell in enumerate(path, start=1))


def grid_records(grid, header=None):
    """
    PDB records of every cell of a grid optionally headed by a HEADER line.
    """
    lines = [f"HEADER {header}\n"] if header else []
    lines.extend(cell_record(cell, serial)
                 for serial, cell in enumerate(grid.cells(), start=1))
    lines.append("END\n")
    return "".join(lines)


def write_paths(file, paths):
    """
    Takes a filename string and a list of paths and dumps the path cells to
    file depending on the file extension.
    """
    if file.endswith(".pdb"):
        # Every path becomes its own PTH residue for loading into PyMOL.
        with open(file, 'w+', encoding='utf-8') as pdb_file:
            for resseq, path in enumerate(paths, start=1):
                pdb_file.write(path_records(path, resseq))
            pdb_file.write("END\n")
        return
    # Remaining formats are flat arrays of path index, x, y, z and distance.
    rows = np.array([
        (number, *cell.center, cell.get_distance())
        for number, path in enumerate(paths, start=1) for cell in path
    ], dtype=np.float64).reshape(-1, 5)
    if file.endswith(".xyz"):
        with open(file, 'w+', encoding='utf-8') as xyz_file:
            xyz_file.write(f"{rows.shape[0]}\n\n")
            for row in rows:
                xyz_file.write(f"X {row[1]} {row[2]} {row[3]}\n")
    elif file.endswith(".csv"):
        np.savetxt(
            file, rows, header="path,x,y,z,distance", comments="",
            delimiter=","
        )
    elif file.endswith(".txt"):
        np.savetxt(file, rows)
    elif file.endswith(".npz"):
        np.savez_compressed(file, rows)
    else:
        raise exception.InvalidFileExtension(extensions)
