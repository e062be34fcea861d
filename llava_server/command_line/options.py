"""
Option definitions and the factory functions that build them.

Behavioral conventions:
- Valued options do not provide defaults unless explicitly requested.
- Switch options (a special case of single-valued boolean options) do
  provide a default: they are set to false if not present.

Always build options with the factory functions; they compose parameters
and actions into the supported option shapes.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .actions import Action, do_nothing, store_constants, store_inverse_bool, store_values
from .parameters import ParameterDefinition, boolean

# Option flags
NONE = 0x00
REQUIRED = 0x01

# Config key of the switch that requests help
HELP_KEY = "ShowHelp"


@dataclass(frozen=True)
class OptionDefinition:
    long_names: Tuple[str, ...]
    short_names: Tuple[str, ...]
    parameters: Tuple[ParameterDefinition, ...]
    parameter_delimiter: str
    if_found: Action
    if_not_found: Action
    config_key: str
    description: str
    default_values_description: str = ""
    flags: int = NONE

    @property
    def primary_name(self) -> str:
        return self.long_names[0]

    def all_names(self) -> List[str]:
        return list(self.long_names) + list(self.short_names)

    def is_required(self) -> bool:
        return (self.flags & REQUIRED) != 0

    def is_switch(self) -> bool:
        # Boolean options with a single parameter can be given as
        # --option=<bool> or simply as --option
        return len(self.parameters) == 1 and self.parameters[0].is_boolean()


def _names(names: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(names, str):
        return (names,)
    return tuple(names)


# ============================================
# OPTION EMITTERS
# ============================================


def switch_option(
    long_names: Union[str, Sequence[str]],
    config_key: str,
    description: str,
    flags: int = NONE,
    short_names: Sequence[str] = (),
) -> OptionDefinition:
    return OptionDefinition(
        long_names=_names(long_names),
        short_names=tuple(short_names),
        parameters=(boolean(),),
        parameter_delimiter=",",
        if_found=store_values(),
        if_not_found=store_constants("false"),
        config_key=config_key,
        description=description,
        default_values_description="",
        flags=flags,
    )


def complement_switch_option(
    long_name: str,
    config_key: str,
    description: str,
    flags: int = NONE,
) -> OptionDefinition:
    """
    Switch that stores the inverse of its value (e.g. --no-foo for --foo).

    Intended to complement an existing switch_option on the same config key;
    therefore it has no default of its own.
    """
    return OptionDefinition(
        long_names=(long_name,),
        short_names=(),
        parameters=(boolean(),),
        parameter_delimiter=",",
        if_found=store_inverse_bool(),
        if_not_found=do_nothing(),
        config_key=config_key,
        description=description,
        default_values_description="",
        flags=flags,
    )


def valued_option(
    long_name: str,
    parameter: ParameterDefinition,
    config_key: str,
    description: str,
    flags: int = NONE,
) -> OptionDefinition:
    return OptionDefinition(
        long_names=(long_name,),
        short_names=(),
        parameters=(parameter,),
        parameter_delimiter=",",
        if_found=store_values(),
        if_not_found=do_nothing(),
        config_key=config_key,
        description=description,
        default_values_description="",
        flags=flags,
    )


def default_valued_option(
    long_name: str,
    parameter: ParameterDefinition,
    default_value: str,
    config_key: str,
    description: str,
    flags: int = NONE,
) -> OptionDefinition:
    return OptionDefinition(
        long_names=(long_name,),
        short_names=(),
        parameters=(parameter,),
        parameter_delimiter=",",
        if_found=store_values(),
        if_not_found=store_constants(default_value),
        config_key=config_key,
        description=description,
        default_values_description=default_value,
        flags=flags,
    )


def multivalued_option(
    long_name: str,
    parameters: Sequence[ParameterDefinition],
    config_key: str,
    description: str,
    flags: int = NONE,
) -> OptionDefinition:
    return OptionDefinition(
        long_names=(long_name,),
        short_names=(),
        parameters=tuple(parameters),
        parameter_delimiter=",",
        if_found=store_values(),
        if_not_found=do_nothing(),
        config_key=config_key,
        description=description,
        default_values_description="",
        flags=flags,
    )


def default_multivalued_option(
    long_name: str,
    parameters: Sequence[ParameterDefinition],
    default_values: str,
    config_key: str,
    description: str,
    flags: int = NONE,
) -> OptionDefinition:
    return OptionDefinition(
        long_names=(long_name,),
        short_names=(),
        parameters=tuple(parameters),
        parameter_delimiter=",",
        if_found=store_values(),
        if_not_found=store_constants(default_values),
        config_key=config_key,
        description=description,
        default_values_description=default_values,
        flags=flags,
    )


def help_switch() -> OptionDefinition:
    """The conventional --help switch; the parser prints help when it is set"""
    return switch_option(["--help"], HELP_KEY, "Print this help text.", short_names=["-h", "-?"])
