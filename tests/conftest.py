"""
Shared pytest fixtures: small synthetic structures with known geometry.
"""

from __future__ import annotations

import pytest

from solvent_path_distance.atoms import Atom, Atoms
from solvent_path_distance.grid import Grid


def make_atom(coords, radius=1.5, resseq=1, name="NZ", chain="A",
              resname="LYS") -> Atom:
    return Atom(coords, radius, name=name, element=name[:1],
                resname=resname, resseq=resseq, chain=chain)


@pytest.fixture
def open_atoms() -> Atoms:
    """Two lysine NZ atoms 10 apart along x with nothing in between."""
    return Atoms([
        make_atom((5.0, 5.0, 5.0), resseq=1),
        make_atom((15.0, 5.0, 5.0), resseq=2),
    ])


@pytest.fixture
def buried_atoms() -> Atoms:
    """
    Two small atoms buried inside one large atom plus one free atom far
    away from them.
    """
    return Atoms([
        make_atom((5.0, 5.0, 5.0), resseq=1),
        make_atom((5.0, 5.0, 6.0), resseq=2),
        make_atom((5.0, 5.0, 5.0), radius=6.0, resseq=3, name="CA"),
        make_atom((25.0, 5.0, 5.0), resseq=4),
    ])


@pytest.fixture
def cube() -> Grid:
    """Empty 3x3x3 grid with unit cells."""
    return Grid((0.0, 0.0, 0.0), (3.0, 3.0, 3.0), 1.0)


@pytest.fixture
def block() -> Grid:
    """Empty 5x5x5 grid with unit cells."""
    return Grid((0.0, 0.0, 0.0), (5.0, 5.0, 5.0), 1.0)


PDB_TEXT = """\
HEADER    TEST
MODEL        1
ATOM      1  N   LYS A  12       1.000   2.000   3.000  1.00  0.00           N
ATOM      2  NZ  LYS A  12       4.000   5.000   6.000  1.00  0.00           N
HETATM    3  O   HOH B 101       7.000   8.000   9.000  1.00  0.00           O
ENDMDL
MODEL        2
ATOM      1  N   LYS A  12       1.500   2.000   3.000  1.00  0.00           N
ATOM      2  NZ  LYS A  12       4.500   5.000   6.000  1.00  0.00           N
HETATM    3  O   HOH B 101       7.500   8.000   9.000  1.00  0.00           O
ENDMDL
END
"""


@pytest.fixture
def pdb_file(tmp_path):
    path = tmp_path / "two_models.pdb"
    path.write_text(PDB_TEXT, encoding="utf-8")
    return path
