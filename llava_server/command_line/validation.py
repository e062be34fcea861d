"""
Validation of option sets.

These checks catch mistakes in the option definitions themselves, not in
user input, and run before every parse and every help rendering.
"""

import logging
from collections import Counter
from typing import Sequence, Tuple

from .errors import OptionDefinitionError
from .options import OptionDefinition

logger = logging.getLogger(__name__)


def _validate_unique_names(options: Sequence[OptionDefinition]) -> bool:
    num_times_used = Counter(name for option in options for name in option.all_names())

    error = False
    for name, count in sorted(num_times_used.items()):
        if count > 1:
            error = True
            logger.error(f"Option name used multiple times: {name}")
    return error


def _validate_names(names: Sequence[str]) -> Tuple[int, bool]:
    """Returns (number of non-empty names, error)"""
    num_names = 0
    error = False
    for name in names:
        if name:
            num_names += 1
        if "=" in name:
            error = True
            logger.error(f"Option {name} contains forbidden character '='.")
    return num_names, error


def _validate_has_name(options: Sequence[OptionDefinition]) -> bool:
    error = False
    for idx, option in enumerate(options, start=1):
        num_long_names, long_name_error = _validate_names(option.long_names)
        _, short_name_error = _validate_names(option.short_names)
        error |= long_name_error or short_name_error
        if num_long_names == 0:
            error = True
            logger.error(f"Option {idx} must have at least one long name.")
    return error


def validate_definition(options: Sequence[OptionDefinition]):
    """
    Check an option set for definition errors.

    Every problem found is logged before raising.

    Raises:
        OptionDefinitionError: If names are duplicated, an option lacks a
            long name or a name contains '='
    """
    error = _validate_unique_names(options)
    error |= _validate_has_name(options)
    if error:
        raise OptionDefinitionError("Ill-specified command line options. Unable to parse. Fix the option definitions.")
