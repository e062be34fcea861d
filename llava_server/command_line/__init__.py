from .actions import Action, do_nothing, store_constants, store_inverse_bool, store_values
from .errors import OptionDefinitionError
from .help import format_help, show_help
from .options import (
    HELP_KEY,
    NONE,
    REQUIRED,
    OptionDefinition,
    complement_switch_option,
    default_multivalued_option,
    default_valued_option,
    help_switch,
    multivalued_option,
    switch_option,
    valued_option,
)
from .parameters import ParameterDefinition, boolean, integer, string
from .parser import ParserResult, ParserState, parse_command_line
from .validation import validate_definition

__all__ = [
    "Action",
    "do_nothing",
    "store_constants",
    "store_inverse_bool",
    "store_values",
    "OptionDefinitionError",
    "format_help",
    "show_help",
    "HELP_KEY",
    "NONE",
    "REQUIRED",
    "OptionDefinition",
    "complement_switch_option",
    "default_multivalued_option",
    "default_valued_option",
    "help_switch",
    "multivalued_option",
    "switch_option",
    "valued_option",
    "ParameterDefinition",
    "boolean",
    "integer",
    "string",
    "ParserResult",
    "ParserState",
    "parse_command_line",
    "validate_definition",
]
