"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import numpy as np


def parse_frames(frames):
    """
    Parse frames from a string of comma separated or single (-) dash ranges or
    integer frames.
    """
    frame_results = []
    for frame in frames.split(','):
        if '-' in frame:
            frame_range = frame.split('-')
            if len(frame_range) > 2:
                raise ValueError(f"Frame ranges should be like (a-b) was "
                                 f"{frame}.")
            try:
                first, last = int(frame_range[0]), int(frame_range[1])
            except ValueError as value_error:
                raise ValueError(
                    f"Frame range must both be integers was {frame}."
                ) from value_error
            if first >= last:
                raise ValueError("Frame range (a-b) 'a' must be less than "
                                 "'b'.")
            frame_results.extend(range(first, last + 1))
        else:
            try:
                frame_results.append(int(frame))
            except ValueError as value_error:
                raise ValueError(
                    f"Frame must be an integer was {frame}."
                ) from value_error
    return frame_results


def parse_selection(selection):
    """
    Parse an atom selection written as CHAIN:RESSEQ:ATOM (i.e. A:12:NZ) into
    a (chain, resseq, name) tuple. An empty chain (:12:NZ) matches a blank
    chain identifier.
    """
    parts = selection.split(':')
    if len(parts) != 3:
        raise ValueError(f"Atom selection should be like (A:12:NZ) was "
                         f"{selection}.")
    chain, resseq, name = parts
    try:
        resseq = int(resseq)
    except ValueError as value_error:
        raise ValueError(
            f"Residue number must be an integer was {selection}."
        ) from value_error
    return chain.strip() or " ", resseq, name.strip().upper()


def distance(first, second):
    """
    Return cartesian distance between two points.
    """
    return np.linalg.norm(np.asarray(first) - np.asarray(second))


def round_half_up(number):
    """
    Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)
    rather than numpy's round half to even.
    """
    return int(np.floor(number + 0.5))


def bounding_box(coords, radii):
    """
    Minimum and maximum corner of the box enclosing every sphere.
    """
    coords = np.asarray(coords, dtype=np.float64)
    radii = np.asarray(radii, dtype=np.float64).reshape(-1, 1)
    return (coords - radii).min(axis=0), (coords + radii).max(axis=0)


def diagonal(minimum, maximum):
    """
    Length of the diagonal of a box given by its two corners.
    """
    return distance(maximum, minimum)
