"""
Argot faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (definition vs. argument) to keep logs and
  searches predictable.
- ArgumentException: base type that carries message + options and knows how
  to render itself with rich.
- DefinitionError: raised while building a registry (bad names, duplicates,
  conflicting specifiers, illegal parameter ordering).
- ArgumentError and its subclasses: raised while parsing a command line.
- trigger(): central entry point to surface a fault (raise, or print and exit
  in shell mode).

Message shape
- str(fault) reads "<Kind>: <message>." so plain tracebacks stay readable,
  e.g. "Invalid argument: option '--foo' not defined."
- rich rendering shows "[ prog — code | title ]", the message and a hint.

Integration
- The registry raises faults with code/title/hint/token options and routes
  parse-time faults through trigger(fault, **runtime_options).
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definition faults (21xxx)
      • MALFORMED_NAME, DUPLICATE_NAME, CONFLICTING_SPECIFIER, ILLEGAL_ORDER
    - argument faults (22xxx)
      • unknown input: UNKNOWN_OPTION, UNDEFINED_NAME, EXTRA_PARAM
      • missing input: MISSING_VALUE, MISSING_OPTION, MISSING_PARAM
      • repeated input: DUPLICATE_OPTION
      • unexpected values: FLAG_ASSIGNMENT

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- definition faults (21xxx) ---
    MALFORMED_NAME         = 21101
    DUPLICATE_NAME         = 21102
    CONFLICTING_SPECIFIER  = 21103
    ILLEGAL_ORDER          = 21104

    # --- argument faults (22xxx) ---
    UNKNOWN_OPTION         = 22101
    UNDEFINED_NAME         = 22102
    EXTRA_PARAM            = 22103
    MISSING_VALUE          = 22111
    MISSING_OPTION         = 22112
    MISSING_PARAM          = 22113
    DUPLICATE_OPTION       = 22121
    FLAG_ASSIGNMENT        = 22131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    """
    Root of every fault raised by argot.

    Carries a human-readable message and an immutable mapping of options
    (code, title, hint, token and rendering switches such as prog, fancy,
    colorful, shell).
    """
    __kind__ = "Argument exception"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return "%s: %s." % (type(self).__kind__, self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = self.options.get("prog") or getattr(main, "__prog__", os.path.basename(sys.argv[0]))
        title = self.options.get("title", type(self).__kind__)

        parts = ["[ ", text(prog, styler("prog-name"))]
        if (code := self.code) is not None:
            parts += [" — ", text(code.normalize(), styler("code"))]
        parts += [" | ", text(title.title(), styler("error-title")), " ]"]
        header = Text.assemble(*parts)

        message = text(self.message, styler("error-message"))
        body = [message]
        if self.hint:
            body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left", width=console.width - 4)

        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DefinitionError(ArgumentException, ValueError):
    """Invalid option or parameter definition (raised while building a registry)."""
    __kind__ = "Invalid definition"


class ArgumentError(ArgumentException):
    """Invalid command line (raised while parsing)."""
    __kind__ = "Argument error"


class InvalidArgumentError(ArgumentError):
    __kind__ = "Invalid argument"


class MissingArgumentError(ArgumentError):
    __kind__ = "Missing argument"


class DuplicateOptionError(InvalidArgumentError):
    __kind__ = "Duplicate option"


class ExtraValueError(InvalidArgumentError):
    __kind__ = "Extra value"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via fault.__replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich stderr console followed by
      sys.exit(1); otherwise the fault is raised.

    typical options
    - prog, shell, fancy, colorful
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentException",
    "DefinitionError",
    "ArgumentError",
    "InvalidArgumentError",
    "MissingArgumentError",
    "DuplicateOptionError",
    "ExtraValueError",
    "trigger",
)
