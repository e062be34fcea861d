"""
Command line parsing.

Options are given as name or name=value(s). Parsed values are written to a
config tree under each option's config key; defaults are stored first and
then overwritten by whatever is found on the command line.

User errors (unknown options, bad values, missing required options) are
logged and reported through ParserState.parse_error. Ill-specified option
sets raise OptionDefinitionError before any argument is looked at.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, TextIO, Tuple

from ..config_node import ConfigNode
from ..text_format import split
from .help import show_help
from .options import HELP_KEY, OptionDefinition
from .validation import validate_definition

logger = logging.getLogger(__name__)


@dataclass
class ParserState:
    exit: bool = False
    parse_error: bool = False


@dataclass
class ParserResult:
    config: ConfigNode = field(default_factory=lambda: ConfigNode("CommandLine"))
    state: ParserState = field(default_factory=ParserState)


# ============================================
# COMMAND LINE PARSING
# ============================================


def _store_defaults(config: ConfigNode, options: Sequence[OptionDefinition]):
    for option in options:
        option.if_not_found.perform(config, option, "", [])


def _extract_name_and_values(arg: str) -> Tuple[str, bool, str]:
    """Returns (name, separator_present, values)"""
    name, separator, values = arg.partition("=")
    return name, bool(separator), values


def _find_option(name: str, options: Sequence[OptionDefinition]) -> Optional[int]:
    for idx, option in enumerate(options):
        if name in option.long_names or name in option.short_names:
            return idx
    return None


def _validate_option_parameters(option: OptionDefinition, name: str, value_list: List[str]) -> bool:
    """Returns True if there was an error"""
    if len(option.parameters) != len(value_list):
        if len(option.parameters) == 1:
            logger.error(f"'{name}' expects a parameter but none was given.")
        else:
            were_given = "was given" if len(value_list) == 1 else "were given"
            logger.error(
                f"'{name}' expects {len(option.parameters)} parameters but {len(value_list)} {were_given}."
            )
        return True

    error = False
    for parameter_num, (parameter, value) in enumerate(zip(option.parameters, value_list), start=1):
        is_valid, message = parameter.validate(name, value, parameter_num)
        if not is_valid:
            logger.error(message)
            error = True
    return error


def _validate_required_options_found(options: Sequence[OptionDefinition], options_found: Set[int]) -> bool:
    error = False
    for idx, option in enumerate(options):
        if option.is_required() and idx not in options_found:
            logger.error(f"Missing required option: {option.primary_name}")
            error = True
    return error


def parse_command_line(
    options: Sequence[OptionDefinition],
    argv: Optional[Sequence[str]] = None,
    config: Optional[ConfigNode] = None,
    out: Optional[TextIO] = None,
) -> ParserResult:
    """
    Parse a command line against an option set.

    Args:
        options: Option definitions
        argv: Arguments including the program name (default: sys.argv)
        config: Config tree to populate (default: a new "CommandLine" node)
        out: Where help text is written (default: sys.stdout)

    Returns:
        ParserResult holding the populated config tree and the parser state

    Raises:
        OptionDefinitionError: If the option set itself is ill-specified
    """
    if argv is None:
        argv = sys.argv
    result = ParserResult() if config is None else ParserResult(config=config)
    result.state = _parse(result.config, options, list(argv), out)
    return result


def _parse(
    config: ConfigNode,
    options: Sequence[OptionDefinition],
    argv: List[str],
    out: Optional[TextIO],
) -> ParserState:
    validate_definition(options)

    if len(argv) <= 1 and any(option.is_required() for option in options):
        show_help(options, argv, out)
        # Parse error because required options are missing
        return ParserState(exit=True, parse_error=True)

    _store_defaults(config, options)

    options_found: Set[int] = set()
    parse_error = False
    for arg in argv[1:]:
        name, separator_present, values = _extract_name_and_values(arg)

        idx = _find_option(name, options)
        if idx is None:
            logger.error(f"Invalid option: {name}")
            parse_error = True
            continue

        option = options[idx]
        value_list: List[str] = []
        if values:
            if len(option.parameters) == 1:
                value_list.append(values)
            elif len(option.parameters) > 1:
                value_list = split(values, option.parameter_delimiter)

        if not values and not separator_present and option.is_switch():
            # --option is equivalent to --option=true. Skip validation, which
            # would flag the "missing" bool parameter.
            values = "true"
            value_list.append("true")
            error_this_option = False
        else:
            error_this_option = _validate_option_parameters(option, name, value_list)

        if not error_this_option:
            option.if_found.perform(config, option, values, value_list)

        parse_error |= error_this_option
        options_found.add(idx)

    help_requested = config[HELP_KEY].value_as_default(bool, False)
    if help_requested:
        show_help(options, argv, out)
    else:
        # When help was requested, omitting required options is not an error
        parse_error |= _validate_required_options_found(options, options_found)

    return ParserState(exit=parse_error or help_requested, parse_error=parse_error)
