"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import logging
from solvent_path_distance import utils
from solvent_path_distance.config import SearchConfig
from solvent_path_distance.grid import AtomGrid, UNSET_DISTANCE
from solvent_path_distance.sasd import SolventPathDistance


logger = logging.getLogger(__name__)

# Solvent path distances reported for pairs that can't be measured.
NON_CONFORMING = -1.0
FIRST_ATOM_INACCESSIBLE = -2.0
SECOND_ATOM_INACCESSIBLE = -3.0
BOTH_ATOMS_INACCESSIBLE = -4.0
FIRST_ATOM_BURIED = -5.0


class CrossLink:
    """
    Virtual cross-link between two atoms holding both its Euclidean and its
    solvent path distance.
    """
    def __init__(self, source_atom, target_atom,
                 solvent_path_distance=NON_CONFORMING, path=None):
        self.source_atom = source_atom
        self.target_atom = target_atom
        self.euclidean_distance = float(
            utils.distance(source_atom.coords, target_atom.coords))
        self.solvent_path_distance = solvent_path_distance
        self.path = path

    def __repr__(self):
        return (f"CrossLink({self.source_atom.label}, "
                f"{self.target_atom.label}, "
                f"euclidean={self.euclidean_distance:.3f}, "
                f"sasd={self.solvent_path_distance:.3f})")

    @property
    def is_conforming(self):
        """
        Whether a solvent path within the cutoff was found.
        """
        return self.solvent_path_distance >= 0


def _group_by_source(pairs):
    """
    Pairs grouped by source atom keeping the first appearance order. Values
    hold the pair index and the target atom.
    """
    groups = {}
    for index, (source, target) in enumerate(pairs):
        groups.setdefault(id(source), (source, []))[1].append((index, target))
    return list(groups.values())


def _accessibility_code(source_ok, target_ok):
    if not source_ok and not target_ok:
        return BOTH_ATOMS_INACCESSIBLE
    if not source_ok:
        return FIRST_ATOM_INACCESSIBLE
    return SECOND_ATOM_INACCESSIBLE


def calculate(atoms, pairs, config=None):
    """
    Solvent path distance for every (source atom, target atom) pair of atoms.
    Returns one CrossLink per pair in pair order. Pairs sharing a source atom
    are measured by a single search.
    """
    config = config or SearchConfig()
    inflated = atoms.inflated(config.solvent_radius)
    global_grid = None
    if atoms.dimension <= config.local_grid_threshold:
        global_grid = AtomGrid.from_atoms(inflated, config.grid_cell_size,
                                          config.grid_offset)
        logger.info("Using a global grid of %s cells.",
                    "x".join(str(n) for n in global_grid.shape))
    else:
        logger.info("Structure dimension %.1f exceeds %.1f, using local "
                    "grids.", atoms.dimension, config.local_grid_threshold)

    cross_links = [None] * len(pairs)
    for source, members in _group_by_source(pairs):
        grid = global_grid
        if grid is None:
            grid = AtomGrid.around_atom(inflated, source, config.max_distance,
                                        config.grid_cell_size)
        source_ok = grid.is_accessible(source.inflated(config.solvent_radius))

        measurable = []
        for index, target in members:
            target_large = target.inflated(config.solvent_radius)
            # Targets the local grid doesn't reach are simply too far away.
            target_ok = (not grid.contains(target_large)
                         or grid.is_accessible(target_large))
            if source_ok and target_ok:
                measurable.append((index, target))
            else:
                cross_links[index] = CrossLink(
                    source, target, _accessibility_code(source_ok, target_ok))
        if not measurable:
            continue

        sasd = SolventPathDistance(
            source, [target for _, target in measurable], grid,
            solvent_radius=config.solvent_radius, exact=config.exact_paths)
        paths = sasd.get_shortest_path(config.max_distance)
        if not paths:
            for index, target in measurable:
                cross_links[index] = CrossLink(source, target,
                                               FIRST_ATOM_BURIED)
            continue
        for (index, target), path in zip(measurable, paths):
            distance = SolventPathDistance.extract_target_distance(path)
            if distance == UNSET_DISTANCE or distance > config.max_distance:
                cross_links[index] = CrossLink(source, target, NON_CONFORMING,
                                               path)
            else:
                cross_links[index] = CrossLink(source, target, float(distance),
                                               path)
        logger.debug("Measured %d pairs from %s.", len(measurable),
                     source.label)
    return cross_links


def sort_cross_links(cross_links):
    """
    Conforming cross-links first ordered by solvent path distance then
    Euclidean distance, chain IDs and residue numbers. Non-conforming ones
    follow ordered the same way apart from their distance codes.
    """
    def key(cross_link):
        return (
            not cross_link.is_conforming,
            cross_link.solvent_path_distance if cross_link.is_conforming
            else 0.0,
            cross_link.euclidean_distance,
            cross_link.source_atom.chain,
            cross_link.target_atom.chain,
            cross_link.source_atom.resseq,
            cross_link.target_atom.resseq,
        )
    return sorted(cross_links, key=key)
