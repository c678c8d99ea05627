"""
Specifier bits for option and parameter definitions.

Spec is an IntFlag so bits combine with "|":

    REQUIRED        option must be present on the command line
    REPEATABLE      option may be given several times / parameter takes several tokens
    VALUE_OPTIONAL  option value may be omitted (option must have a value name)
    OPTIONAL        parameter may be left unfilled

The same bits can be written as trailing sigils on a value name (or on a
parameter name): "..." for REPEATABLE, "?" for VALUE_OPTIONAL and "!" for
REQUIRED, e.g. "FILE...", "MODE?", "PATH!".
"""
from enum import IntFlag


class Spec(IntFlag):
    NONE = 0
    REQUIRED = 1
    REPEATABLE = 2
    VALUE_OPTIONAL = 4
    OPTIONAL = 8


# Sigil → bit, checked in this order when stripping a name.
SIGILS = {
    "...": Spec.REPEATABLE,
    "?": Spec.VALUE_OPTIONAL,
    "!": Spec.REQUIRED,
}

# Bits that only make sense on one kind of definition.
OPTION_BITS = Spec.REQUIRED | Spec.REPEATABLE | Spec.VALUE_OPTIONAL
PARAM_BITS = Spec.OPTIONAL | Spec.REPEATABLE
ALL_BITS = OPTION_BITS | PARAM_BITS

REQUIRED = Spec.REQUIRED
REPEATABLE = Spec.REPEATABLE
VALUE_OPTIONAL = Spec.VALUE_OPTIONAL
OPTIONAL = Spec.OPTIONAL


__all__ = (
    "Spec",
    "REQUIRED",
    "REPEATABLE",
    "VALUE_OPTIONAL",
    "OPTIONAL",
)
