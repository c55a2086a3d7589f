"""
Created by: Mitchell Walls
Email: miwalls@siue.edu
"""
import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure the 'solvent_path_distance' logger with a stdout handler and an
    optional file handler.
    """
    logger = logging.getLogger("solvent_path_distance")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w',
                                           encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
