"""
Help text generation.

Help is rendered as a usage synopsis followed by one entry per option:

    Usage: prog --model=<file> [options]

    Options:
      --model=<file>  Model file to load.
      --verbose       Print more.
        -v

Only the primary (first long) name of an option shows its full syntax; other
names are listed, indented, beneath it.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO

from ..text_format import TabExpander, WordWrapper, to_lower, trim_whitespace
from .options import OptionDefinition
from .validation import validate_definition

DISPLAY_COLUMNS = 80
TAB_STOP = 2
DESCRIPTION_MIN_COLUMNS = 80 - 36
USAGE_PREFIX = "Usage: "


def program_name(argv: Sequence[str]) -> str:
    if not argv:
        return ""
    return Path(argv[0]).stem


def syntax_description(name: str, option: OptionDefinition) -> str:
    if len(option.parameters) == 0:
        return name
    parameter_syntax = [f"<{to_lower(parameter.name)}>" for parameter in option.parameters]
    return f"{name}={','.join(parameter_syntax)}"


def build_option_name_to_syntax_map(options: Sequence[OptionDefinition], tab_stop: int = TAB_STOP) -> Dict[str, str]:
    """Map every option name to its (indented, tab-expanded) syntax string"""
    t = TabExpander(tab_stop)
    m: Dict[str, str] = {}
    for option in options:
        primary_name = option.primary_name
        if option.is_switch():
            # Switches described as --option rather than --option=<value>
            m[primary_name] = t.expand(f"\t{primary_name}\t")
        else:
            m[primary_name] = t.expand(f"\t{syntax_description(primary_name, option)}\t")

        # Omit the parameters for all other names and add an indent
        for name in option.long_names[1:]:
            m[name] = t.expand(f"\t\t{name}\t")
        for name in option.short_names:
            m[name] = t.expand(f"\t\t{name}\t")
    return m


def _required_option_names(options: Sequence[OptionDefinition]) -> List[str]:
    return [option.primary_name for option in options if option.is_required()]


def format_usage(
    options: Sequence[OptionDefinition],
    argv: Sequence[str],
    name_to_syntax: Dict[str, str],
    display_columns: int = DISPLAY_COLUMNS,
) -> List[str]:
    """
    Usage synopsis: program_name --required-1=<value> --required-2=<value> [options]

    Wrapped to the display width, with continuation lines aligned under the
    text following "Usage: ".
    """
    required_option_names = _required_option_names(options)
    parts = [program_name(argv)]
    for name in required_option_names:
        parts.append(trim_whitespace(name_to_syntax[name]))
    if len(required_option_names) < len(options):
        parts.append("[options]")
    usage_syntax = " ".join(parts)

    column = len(USAGE_PREFIX)
    w = WordWrapper(display_columns - column)
    lines = w.wrap_words(usage_syntax)

    padding = " " * column
    return [USAGE_PREFIX + lines[0]] + [padding + line for line in lines[1:]]


def _description_lines(option: OptionDefinition, w: WordWrapper, description_columns: int) -> List[str]:
    description_lines = w.wrap_words(option.description)
    if not option.default_values_description:
        return description_lines

    defaults = f"[Default: {option.default_values_description}]"

    # Append defaults to the last line if there is room (accounting for the
    # space and newline), else put them on their own line
    length_with_defaults = len(description_lines[-1]) + 1 + len(defaults) + 1
    if length_with_defaults >= description_columns:
        description_lines.append(defaults)
    else:
        description_lines[-1] += " " + defaults
    return description_lines


def format_help(options: Sequence[OptionDefinition], argv: Sequence[str]) -> List[str]:
    """
    Render help text as a list of lines.

    Raises:
        OptionDefinitionError: If the option set is ill-specified
    """
    validate_definition(options)

    name_to_syntax = build_option_name_to_syntax_map(options, TAB_STOP)
    widest_syntax = max((len(syntax) for syntax in name_to_syntax.values()), default=0)

    lines = format_usage(options, argv, name_to_syntax, DISPLAY_COLUMNS)
    if not options:
        return lines

    lines.append("")
    lines.append("Options:")

    # Starting column and width for descriptions
    columns_available = 0 if widest_syntax > DISPLAY_COLUMNS else DISPLAY_COLUMNS - widest_syntax
    if columns_available < DESCRIPTION_MIN_COLUMNS:
        description_start_column = DISPLAY_COLUMNS - DESCRIPTION_MIN_COLUMNS
    else:
        description_start_column = widest_syntax
    description_columns = DISPLAY_COLUMNS - description_start_column

    w = WordWrapper(description_columns)
    for option in options:
        description_lines = _description_lines(option, w, description_columns)
        names = option.all_names()

        for i in range(max(len(description_lines), len(names))):
            line = ""
            if i < len(names):
                line = name_to_syntax[names[i]]

            if i < len(description_lines):
                if len(line) > description_start_column:
                    # Syntax is too wide; description starts on the next line
                    lines.append(line)
                    line = ""
                line = line.ljust(description_start_column) + description_lines[i]

            lines.append(line)
    return lines


def show_help(options: Sequence[OptionDefinition], argv: Sequence[str], out: Optional[TextIO] = None):
    if out is None:
        out = sys.stdout
    for line in format_help(options, argv):
        out.write(line + "\n")
