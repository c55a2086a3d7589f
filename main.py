#!/usr/bin/env python
"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import argparse
import logging
import time
from solvent_path_distance import config as search_config
from solvent_path_distance import crosslink
from solvent_path_distance import exception
from solvent_path_distance import io
from solvent_path_distance import logging_config
from solvent_path_distance import parser
from solvent_path_distance import utils
from solvent_path_distance import visualization


logger = logging.getLogger("solvent_path_distance.main")

# Errors that fail a single frame without stopping the run.
frame_errors = (
    exception.AtomNotFound,
    exception.EmptyGrid,
    exception.CellOutOfBounds,
    exception.InvalidFileExtension,
    exception.InvalidPlotType,
)


def parse_args(args=None):
    """
    Parse args
    """
    arg_parser = argparse.ArgumentParser(
        description="Calculate solvent path distances (SASD) between atom "
        "pairs of a PDB file to validate cross-links.",
        formatter_class=argparse.RawTextHelpFormatter)
    arg_parser.add_argument(
        '-f', '--pdb-file', required=True, type=str,
        help="Path to the PDB file.")
    arg_parser.add_argument(
        '-p', '--pair', required=True, nargs=2, action='append',
        metavar=('SOURCE', 'TARGET'),
        help="Atom pair to measure written as CHAIN:RESSEQ:ATOM "
        "(i.e. -p A:12:NZ A:45:NZ). Can be given multiple times.")
    arg_parser.add_argument(
        '-c', '--config', type=str,
        help="YAML file with search parameters. Command line values take "
        "precedence.")
    arg_parser.add_argument(
        '-r', '--solvent-radius', type=float,
        help="Radius of the solvent probe added to every atom radius "
        f"(default: {search_config.SearchConfig.solvent_radius}).")
    arg_parser.add_argument(
        '-g', '--grid-size', type=float,
        help="Edge length of the grid cells "
        f"(default: {search_config.SearchConfig.grid_cell_size}).")
    arg_parser.add_argument(
        '-m', '--max-distance', type=float,
        help="Maximum path length of the cross-linker "
        f"(default: {search_config.SearchConfig.max_distance}).")
    arg_parser.add_argument(
        '-e', '--exact-paths', action='store_true', default=None,
        help="Trace paths through the search parents instead of greedy "
        "descent on distances.")
    arg_parser.add_argument(
        '-F', '--frames', required=False, type=str,
        help="Specify specific frames to run for a multiframe PDB file. Can "
        "be a range (i.e. 253-1014), comma separated (i.e. 1,61,76,205), or "
        "a single frame (i.e. 25). Can also be a combination "
        "(i.e. 1-25,205,1062-2052).")
    arg_parser.add_argument(
        '-V', '--visualize', const='scatter', nargs='?',
        choices=visualization.plot_types,
        help="If specified, creates a visualization plot (default: scatter).")
    arg_parser.add_argument(
        '-l', '--log-level', default='WARNING',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
        help="Logging level (default: %(default)s).")
    arg_parser.add_argument(
        '-L', '--log-file', type=str, help="Also write the log to this file.")
    arg_parser.add_argument(
        '-v', '--paths-file', default="", type=str,
        help="""
Output the cells of every path to file where the file type generated is
determined by the file extension provided in this argument. If there are
multiple frames the frame number is appended to the file name
(i.e. example_{frame}.pdb)
    pdb: One PTH residue per path with the distance as temperature factor,
         ready for PyMOL.
    xyz: Path cells as a molecular xyz file with every cell as an X atom.
    csv: One "path,x,y,z,distance" row per cell with a header line.
    txt: Same rows as csv space separated without header.
    npz: Numpy array compressed binary file of the csv rows.
    """)
    return arg_parser.parse_args(args)


def build_config(args):
    """
    Search config from the optional YAML file overridden by the command line.
    """
    config = search_config.SearchConfig()
    if args.config:
        config = search_config.load_config(args.config)
    return config.updated(solvent_radius=args.solvent_radius,
                          grid_cell_size=args.grid_size,
                          max_distance=args.max_distance,
                          exact_paths=args.exact_paths)


def frame_file(file, frame_number, multiple):
    """
    Append the frame number before the extension when needed.
    """
    if not multiple:
        return file
    name_list = file.split('.')
    name_list[-2] = f"{name_list[-2]}_{frame_number}"
    return ".".join(name_list)


def main(args=None):
    """
    Main function to use the cli
    """
    args = parse_args(args)
    logging_config.setup_logging(getattr(logging, args.log_level),
                                 args.log_file)
    config = build_config(args)
    selections = [
        (utils.parse_selection(source), utils.parse_selection(target))
        for source, target in args.pair
    ]
    frames = utils.parse_frames(args.frames) if args.frames else None

    for structure in parser.parse_pdb(args.pdb_file, frames=frames):
        print(f"Frame: {structure.frame_number}")
        start = time.time_ns()
        try:
            pairs = [(structure.select(*source), structure.select(*target))
                     for source, target in selections]
            cross_links = crosslink.calculate(structure, pairs, config)
            for cross_link in crosslink.sort_cross_links(cross_links):
                print(f"{cross_link.source_atom.label}\t"
                      f"{cross_link.target_atom.label}\t"
                      f"{cross_link.euclidean_distance:.1f}\t"
                      f"{cross_link.solvent_path_distance:.1f}")

            paths = [cross_link.path for cross_link in cross_links
                     if cross_link.path is not None]
            if args.paths_file:
                io.write_paths(
                    frame_file(args.paths_file, structure.frame_number,
                               frames is None or len(frames) > 1),
                    paths)
            if args.visualize:
                visualization.plot_paths(paths, structure,
                                         plot_type=args.visualize)
        except frame_errors as error:
            # A bad selection or grid only fails this frame.
            message = " ".join(str(error).split())
            logger.error("Frame %d failed: %s", structure.frame_number,
                         message)
            print(f"Failed: {message}")

        print(f"Took: {(time.time_ns() - start) * 10 ** (-9)}s")


if __name__ == '__main__':
    main()
