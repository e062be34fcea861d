"""
Actions update the config tree when an option is found on the command line
(if_found) or when it is absent (if_not_found).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from ..config_node import ConfigNode
from ..text_format import parse_bool, split
from .errors import OptionDefinitionError

if TYPE_CHECKING:
    from .options import OptionDefinition


@dataclass(frozen=True)
class Action:
    kind: str
    constant_values: str = ""

    def perform(self, config: ConfigNode, option: "OptionDefinition", values: str, value_list: Sequence[str]):
        """
        Apply this action to the config tree.

        Args:
            config: Config tree to modify
            option: Option the action belongs to
            values: Raw value text as given on the command line
            value_list: Values split out per parameter
        """
        if self.kind == "do_nothing":
            return
        elif self.kind == "store_values":
            _store_values(config, option, values, value_list)
        elif self.kind == "store_constants":
            constant_value_list = split(self.constant_values, option.parameter_delimiter)
            _store_values(config, option, self.constant_values, constant_value_list)
        elif self.kind == "store_inverse_bool":
            if len(value_list) > 1:
                raise OptionDefinitionError(
                    "store_inverse_bool action can only be used with options taking a single parameter."
                )
            inverted_value = "false" if parse_bool(values) else "true"
            _store_values(config, option, inverted_value, [inverted_value])
        else:
            raise ValueError(f"Unknown action kind: {self.kind}")


def _store_values(config: ConfigNode, option: "OptionDefinition", values: str, value_list: Sequence[str]):
    # Top-level node set to value as-is, unparsed
    node = config.set(option.config_key, values)

    # Remove existing child nodes (e.g. from a default)
    node.remove_children()

    # One sub-node per parameter, only if the value count matches
    if len(value_list) == len(option.parameters):
        for parameter, value in zip(option.parameters, value_list):
            node.add(parameter.name, value)


# ============================================
# ACTION EMITTERS
# ============================================

_DO_NOTHING = Action(kind="do_nothing")
_STORE_VALUES = Action(kind="store_values")
_STORE_INVERSE_BOOL = Action(kind="store_inverse_bool")


def do_nothing() -> Action:
    return _DO_NOTHING


def store_values() -> Action:
    return _STORE_VALUES


def store_constants(values: str) -> Action:
    """Store values as if they had been given on the command line"""
    return Action(kind="store_constants", constant_values=values)


def store_inverse_bool() -> Action:
    return _STORE_INVERSE_BOOL
