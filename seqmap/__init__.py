import logging

from seqmap import constants
from seqmap.collection import Collection
from seqmap.common import Ordering, OutOfBoundsError
from seqmap.iterables import to_array, to_arrays, to_list
from seqmap.map import Map
from seqmap.sorting import SortFlag


def configure_logging(log_level: str = constants.DEFAULT_LOG_LEVEL) -> None:
    """Configure the logging system with the specified log level.

    The library only logs at debug level, so this is mostly useful for
    tracing skipped column values and rejected writes.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(format=constants.LOG_FORMAT, level=log_level)


__all__ = [
    "Collection",
    "Map",
    "Ordering",
    "OutOfBoundsError",
    "SortFlag",
    "configure_logging",
    "to_array",
    "to_arrays",
    "to_list",
]
