"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import numpy as np
from solvent_path_distance import utils
from solvent_path_distance import exception


DEFAULT_RADIUS = 1.5

# van der Waals radii (Bondi) by element symbol.
_vdw_radii = {
    "H": 1.10,
    "D": 1.10,
    "C": 1.70,
    "N": 1.55,
    "O": 1.52,
    "F": 1.47,
    "P": 1.80,
    "S": 1.80,
    "CL": 1.75,
    "SE": 1.90,
    "BR": 1.85,
    "I": 1.98,
    "NA": 2.27,
    "MG": 1.73,
    "K": 2.75,
    "CA": 2.31,
    "FE": 1.94,
    "ZN": 1.39,
    "CU": 1.40,
}


def get_atom_radius(element):
    """
    van der Waals radius of an element falling back to the default radius for
    unknown elements.
    """
    return _vdw_radii.get(element.strip().upper(), DEFAULT_RADIUS)


class Atom:
    """
    Single atom record with everything the grid needs (coords and radius) and
    the residue details needed to report on it.
    """
    def __init__(self, coords, radius=DEFAULT_RADIUS, name="CA", element="C",
                 resname="UNK", resseq=0, chain=" ", serial=0):
        self.coords = np.asarray(coords, dtype=np.float64)
        self.radius = float(radius)
        self.name = name
        self.element = element
        self.resname = resname
        self.resseq = resseq
        self.chain = chain
        self.serial = serial

    def __repr__(self):
        return (f"Atom({self.label}, coords={self.coords.tolist()}, "
                f"radius={self.radius})")

    @property
    def label(self):
        """
        Human readable residue and atom identifier (i.e. LYS-12-A-NZ).
        """
        return f"{self.resname}-{self.resseq}-{self.chain.strip()}-{self.name}"

    def copy(self, radius=None):
        """
        Copy of the atom optionally with another radius.
        """
        return Atom(self.coords.copy(),
                    self.radius if radius is None else radius,
                    self.name, self.element, self.resname, self.resseq,
                    self.chain, self.serial)

    def inflated(self, extension):
        """
        Copy of the atom with its radius extended (i.e. by the solvent
        radius).
        """
        return self.copy(radius=self.radius + extension)

    def matches(self, chain, resseq, name):
        """
        Whether the atom is the one described by chain, residue number and
        atom name.
        """
        return (self.chain.strip() == chain.strip() and self.resseq == resseq
                and self.name == name)


class Atoms:
    """
    Holds the atoms of a structure as numpy arrays of coordinates and radii
    alongside the atom records themselves.
    """
    _minimum = None
    _maximum = None

    def __init__(self, atoms, frame_number=1):
        self._atoms = list(atoms)
        self.frame_number = frame_number
        self.coords = np.array([atom.coords for atom in self._atoms],
                               dtype=np.float64).reshape(-1, 3)
        self.radii = np.array([atom.radius for atom in self._atoms],
                              dtype=np.float64)

    def __len__(self):
        return len(self._atoms)

    def __iter__(self):
        return iter(self._atoms)

    def __getitem__(self, index):
        return self._atoms[index]

    @property
    def minimum(self):
        """
        Convenience property to return the minimum corner of the box enclosing
        all atom spheres.
        """
        if self._minimum is None:
            self._minimum, self._maximum = utils.bounding_box(self.coords,
                                                              self.radii)
        return self._minimum

    @property
    def maximum(self):
        """
        Convenience property to return the maximum corner of the box enclosing
        all atom spheres.
        """
        if self._maximum is None:
            self._minimum, self._maximum = utils.bounding_box(self.coords,
                                                              self.radii)
        return self._maximum

    @property
    def dimension(self):
        """
        Diagonal of the box enclosing all atom spheres.
        """
        return utils.diagonal(self.minimum, self.maximum)

    def inflated(self, extension):
        """
        Copy of all atoms with radii extended by extension.
        """
        return Atoms([atom.inflated(extension) for atom in self._atoms],
                     frame_number=self.frame_number)

    def select(self, chain, resseq, name):
        """
        First atom matching chain, residue number and atom name.
        """
        for atom in self._atoms:
            if atom.matches(chain, resseq, name):
                return atom
        raise exception.AtomNotFound(f"{chain}:{resseq}:{name}")
