"""Library-wide defaults for seqmap."""

import sys

DEFAULT_EXPLODE_LIMIT = sys.maxsize
"""Default part limit for Collection.explode (effectively unlimited)."""

DEFAULT_IMPLODE_DELIMITER = ""
"""Default delimiter for Collection.implode."""

DEFAULT_LOG_LEVEL = "WARNING"
"""Level used by configure_logging when none is given."""

LOG_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s"
"""Format string used by configure_logging."""

EMPTY_MESSAGE = "the collection is empty"
"""Bounds error detail when the collection has no values."""

RANGE_MESSAGE = "valid indexes are 0 to {last}"
"""Bounds error detail when the collection has values."""

REPLACE_MESSAGE = "Cannot replace value at index {index} because it does not exist ({detail})"
"""Bounds error raised by Collection.replace."""

COMBINE_MESSAGE = "Cannot combine {keys} keys with {values} values; the counts must be equal"
"""Length mismatch error raised by Map.combine."""
