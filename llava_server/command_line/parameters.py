"""
Parameter types for command line options.

A parameter is one value slot of an option (e.g. the <port> in
--port=<port>). Each type validates the raw string given on the command
line; values are stored as strings regardless of type.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..text_format import INTEGER_PATTERN, to_lower

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

BOOLEAN_STRINGS = {"true", "false", "yes", "no", "on", "off", "1", "0"}


@dataclass(frozen=True)
class ParameterDefinition:
    name: str
    type: str = "string"
    lower_bound: int = INT64_MIN
    upper_bound: int = INT64_MAX
    bounds_check_required: bool = False

    def is_boolean(self) -> bool:
        return self.type == "bool"

    def validate(self, option_name: str, value: str, parameter_num: int) -> Tuple[bool, Optional[str]]:
        """
        Validate a value given for this parameter.

        Args:
            option_name: Option name as it appeared on the command line
            value: Raw value string
            parameter_num: 1-based position of the parameter within the option

        Returns:
            (is_valid, error_message or None)
        """
        if self.type == "string":
            return True, None
        elif self.type == "bool":
            return _validate_boolean(option_name, value, parameter_num)
        elif self.type == "int":
            return self._validate_integer(option_name, value, parameter_num)
        else:
            raise ValueError(f"Unknown parameter type: {self.type}")

    def _validate_integer(self, option_name: str, value: str, parameter_num: int) -> Tuple[bool, Optional[str]]:
        v = int(value) if INTEGER_PATTERN.match(value) else None
        if v is None or not (INT64_MIN <= v <= INT64_MAX):
            return False, f"Argument {parameter_num} to '{option_name}' must be an integer."
        if self.bounds_check_required and not (self.lower_bound <= v <= self.upper_bound):
            return False, (
                f"Argument {parameter_num} to '{option_name}' must be an integer within range "
                f"[{self.lower_bound},{self.upper_bound}]."
            )
        return True, None


def _validate_boolean(option_name: str, value: str, parameter_num: int) -> Tuple[bool, Optional[str]]:
    # Same spellings the config tree understands
    if to_lower(value) in BOOLEAN_STRINGS:
        return True, None
    return False, f"Argument {parameter_num} to '{option_name}' must be a boolean value ('true' or 'false')."


# ============================================
# PARAMETER EMITTERS
# ============================================


def string(name: str = "value") -> ParameterDefinition:
    return ParameterDefinition(name=name, type="string")


def boolean(name: str = "value") -> ParameterDefinition:
    return ParameterDefinition(name=name, type="bool")


def integer(*args) -> ParameterDefinition:
    """
    Integer parameter, optionally bounded (inclusive).

    integer()                   -> unbounded, named "value"
    integer(name)               -> unbounded
    integer(lower, upper)       -> bounded, named "value"
    integer(name, lower, upper) -> bounded

    Bounds given in the wrong order are swapped.
    """
    if len(args) == 0:
        return ParameterDefinition(name="value", type="int")
    if len(args) == 1:
        return ParameterDefinition(name=args[0], type="int")
    if len(args) == 2:
        name, (lower, upper) = "value", args
    elif len(args) == 3:
        name, lower, upper = args
    else:
        raise TypeError(f"integer() takes at most 3 arguments ({len(args)} given)")

    if lower > upper:
        lower, upper = upper, lower
    return ParameterDefinition(
        name=name,
        type="int",
        lower_bound=lower,
        upper_bound=upper,
        bounds_check_required=True,
    )
