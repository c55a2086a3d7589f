"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
from solvent_path_distance import exception


plot_types = ("scatter",)


def plot_paths(paths, atoms=None, plot_type="scatter"):
    """
    Plot the cells of every path labelled by its distance, optionally on top
    of the atom centers of the structure.
    """
    if plot_type not in plot_types:
        raise exception.InvalidPlotType(plot_types)
    series = [(path.coords(), f"{float(path.distance):.1f}")
              for path in paths]
    scatter(series, None if atoms is None else atoms.coords)


def scatter(series, atom_coords=None):
    """
    3D scatter of (coords, label) series. Atom centers are drawn as small
    grey points so the paths stand out.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError as import_error:
        raise ImportError(
            "Plotting paths needs matplotlib, install the visualization "
            "extra and run again."
        ) from import_error
    figure = plt.figure()
    axes = figure.add_subplot(projection='3d')
    if atom_coords is not None and len(atom_coords):
        axes.scatter3D(*atom_coords.T, s=2, c="grey", alpha=0.3)
    for coords, label in series:
        axes.plot3D(*coords.T, marker="o", label=label)
    if series:
        axes.legend(title="SASD")
    plt.show()
