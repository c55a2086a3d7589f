"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import logging
from solvent_path_distance import atoms


logger = logging.getLogger(__name__)

allowed_records = {
    "ATOM",
    "HETATM",
}


def parse_atom_line(line, line_number):
    """
    Build an Atom from a fixed column ATOM or HETATM record.
    """
    fullname = line[12:16]
    # get rid of whitespace in atom names
    split_list = fullname.split()
    if len(split_list) != 1:
        # atom name has internal spaces, e.g. " N B ", so
        # we do not strip spaces
        name = fullname
    else:
        # atom name is like " CA ", so we can strip spaces
        name = split_list[0]
    resname = line[17:20].strip()
    chain = line[21:22] or " "
    try:
        resseq = int(line[22:26].split()[0])
        serial = int(line[6:11])
    except (ValueError, IndexError) as value_error:
        raise ValueError(
            f"Invalid or missing serial or residue number at line "
            f"{line_number}."
        ) from value_error
    try:
        x_coord = float(line[30:38])
        y_coord = float(line[38:46])
        z_coord = float(line[46:54])
    except ValueError as value_error:
        raise ValueError(
            f"Invalid or missing coordinate(s) at line {line_number}."
        ) from value_error
    element = line[76:78].strip().upper()
    if not element:
        # Old files lack the element column so guess from the atom name.
        element = name.strip()[:1]
    return atoms.Atom((x_coord, y_coord, z_coord),
                      atoms.get_atom_radius(element), name=name,
                      element=element, resname=resname, resseq=resseq,
                      chain=chain, serial=serial)


def parse_pdb(pdb_file, frames=None):
    """
    Yield one Atoms object per model (frame) of a PDB file. Frames limits
    the yielded models to the given 1-based frame numbers.
    """
    if frames is not None:
        frames = set(frames)
    frame_number = 1
    # Atom records of the current frame whether it is wanted or not.
    frame_atoms = 0
    records = []
    with open(pdb_file, 'r', encoding='utf-8') as handle:
        for i, line in enumerate(handle, start=1):
            record_type = line[0:6].strip()
            if record_type in ("ENDMDL", "END"):
                # A trailing END after ENDMDL closes no frame.
                if not frame_atoms:
                    continue
                if records:
                    yield atoms.Atoms(records, frame_number=frame_number)
                frame_number += 1
                frame_atoms = 0
                records = []
                # Time saver to stop once every requested frame was read.
                if frames is not None and frame_number > max(frames):
                    return
                continue
            if record_type not in allowed_records:
                continue
            frame_atoms += 1
            if frames is None or frame_number in frames:
                records.append(parse_atom_line(line, i))
    # Files without a closing END record.
    if records:
        yield atoms.Atoms(records, frame_number=frame_number)
    elif frame_number == 1 and not frame_atoms:
        logger.warning("No atoms found in %s.", pdb_file)
