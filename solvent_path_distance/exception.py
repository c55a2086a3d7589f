"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
class InvalidGridCellSize(Exception):
    """
    Error for a grid cell edge length that can not produce a grid.
    """
    def __init__(self, cell_size):
        self.message = \
        f"""
        Error: grid cell size must be a positive number was {cell_size}.
        """
        super().__init__(self.message)


class EmptyGrid(Exception):
    """
    Error for when the bounding box and cell size give zero cells on an axis.
    """
    def __init__(self, shape):
        self.message = \
        f"""
        Error: grid would have no cells (shape {tuple(shape)}). Typically the
        bounding box is smaller than a single grid cell, try decreasing the
        grid cell size or increasing the grid offset.
        """
        super().__init__(self.message)


class CellOutOfBounds(Exception):
    """
    Error for starting a search from a cell that is not part of the grid.
    """
    def __init__(self, indices):
        self.message = \
        f"""
        Error: grid cell {tuple(indices)} lies outside of the grid. The search
        source must be a cell of the searched grid.
        """
        super().__init__(self.message)


class AtomNotFound(Exception):
    """
    Error for an atom selection that doesn't match any atom of the structure.
    """
    def __init__(self, selection):
        self.message = \
        f"""
        Error: no atom matches the selection ({selection}). Double check your
        chain IDs, residue numbers and atom names.
        """
        super().__init__(self.message)


class InvalidConfiguration(Exception):
    """
    Error for configuration values that are out of range or unknown.
    """
    def __init__(self, reason):
        self.message = \
        f"""
        Error: invalid configuration, {reason}
        """
        super().__init__(self.message)


class InvalidFileExtension(Exception):
    """
    Error for when an incorrect path out file extension is used.
    """
    def __init__(self, extensions):
        self.message = \
        f"""
        Error: the file extension must be one of ({(', ').join(extensions)}).
        """
        super().__init__(self.message)


class InvalidPlotType(Exception):
    """
    Error for when an unsupported plot type is requested.
    """
    def __init__(self, plot_types):
        self.message = \
        f"""
        Error: the plot type must be one of ({(', ').join(plot_types)}).
        """
        super().__init__(self.message)
