"""
Argot registry: define, parse and query command-line arguments.

What this module provides
- Args: ordered collections of Option and Parameter definitions with
  • all-or-nothing insertion (duplicate names and illegal parameter layouts
    are rejected and leave the registry untouched),
  • a single-pass tokenizer (short/long options, clustering, inline values,
    optional values, "--" terminator),
  • reservation-aware distribution of positional tokens over parameters,
  • lookup of parsed values by any option name or parameter name.

Quick start
    from argot import Args, REPEATABLE

    args = Args(
        ("-v", "--verbose", REPEATABLE, "increase verbosity"),
        ("-o", "--output", "FILE!", "output file"),
        ("SRC...", "source files"),
        ("DEST", "destination"),
    )
    args.parse(["-vv", "--output=out.txt", "a", "b", "c"])

    args["-v"].count()        # 2
    args["--output"].value()  # 'out.txt'
    args["SRC"].values()      # ('a', 'b')
    args["DEST"].value()      # 'c'

Parsing model
- Options are recognized anywhere on the command line (GNU convention);
  non-option tokens are set aside and handed to parameters once the whole
  command line is known, so a repeatable parameter can leave exactly enough
  tokens for the required parameters after it.
- Every argument fault is raised from parse(); with deferred=True it is kept
  on Args.fault instead and surfaced later by finalize().
"""
import difflib
import os.path
import sys
from collections import deque
from itertools import chain

from .arguments import Argument, Kind, arg
from .faults import *
from .names import is_option_shaped
from .formatting import usage
from .utils import *


def _label(option, /):
    """'-o/--output' style label used in messages."""
    return "'%s'" % "/".join(option.names)


class Args:
    """
    Registry of option and parameter definitions, and their parsed values.

    Parameters
    - *definitions: tuples forwarded to arg(...) (e.g. ("-v", "--verbose",
      "increase verbosity")) or ready-made Option/Parameter instances.
    - strict: also reject parameters after a repeatable one, and required
      parameters after an optional one.
    - prog: program name used in usage and fault rendering.
    - shell: print faults to stderr and exit instead of raising.
    - fancy: render faults inside a panel.
    - colorful: style fault rendering.
    - deferred: keep the parse fault on `fault` until finalize().
    """

    options = mirror("options")
    params = mirror("params")
    fault = mirror("fault")

    strict = mirror("strict")
    prog = mirror("prog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    deferred = mirror("deferred")

    def __init__(
            self,
            *definitions,
            strict=False,
            prog=Unset,
            shell=False,
            fancy=False,
            colorful=True,
            deferred=False
    ):
        if not isinstance(prog, str | Unset):
            raise TypeError("Args() 'prog' must be a string")

        self._options = []
        self._params = []
        self._fault = None

        self._strict = bool(strict)
        self._prog = coalesce(prog)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._deferred = bool(deferred)

        for definition in definitions:
            if isinstance(definition, Argument):
                self.add(definition)
            elif isinstance(definition, tuple):
                self.add(*definition)
            else:
                raise TypeError("Args() definitions must be tuples or Option/Parameter instances")

    def add(self, *parameters):
        """
        Add one definition and return it.

        Accepts either a single Option/Parameter instance, or the arguments of
        arg(...). Raises DefinitionError (and leaves the registry unchanged)
        on duplicate names or an illegal parameter layout.
        """
        if len(parameters) == 1 and isinstance(parameters[0], Argument):
            argument, = parameters
        else:
            argument = arg(*parameters)

        if getattr(argument, "_registry", None) is not None:
            raise DefinitionError(
                "%s already defined in another registry" % argument.kind(),
                code=FaultCode.DUPLICATE_NAME,
                title="shared definition",
                hint="build a new definition for each registry",
            )

        match argument.kind():
            case Kind.OPTION:
                self._add_option(argument)
            case Kind.PARAM:
                self._add_param(argument)
            case kind:
                raise TypeError("Args.add() cannot add a definition of kind %r" % (kind,))

        argument._registry = self
        return argument

    def _add_option(self, option, /):
        # both names are checked before anything is inserted
        for field, name in (("short", option.short), ("long", option.long)):
            if name is not None and self._find_option(name) is not None:
                raise DefinitionError(
                    "duplicate %s option '%s'" % (field, name),
                    code=FaultCode.DUPLICATE_NAME,
                    title="duplicate option",
                    hint="each option name can be defined only once",
                    token=name,
                )
        self._options.append(option)

    def _add_param(self, param, /):
        name = param.name
        if any(other.name == name for other in self._params):
            raise DefinitionError(
                "duplicate param '%s'" % name,
                code=FaultCode.DUPLICATE_NAME,
                title="duplicate param",
                hint="each param name can be defined only once",
                token=name,
            )
        if param.repeatable and any(other.repeatable for other in self._params):
            raise DefinitionError(
                "second repeatable param '%s'" % name,
                code=FaultCode.ILLEGAL_ORDER,
                title="illegal param order",
                hint="only one param can take multiple values",
                token=name,
            )
        if self._strict and self._params:
            if self._params[-1].repeatable:
                raise DefinitionError(
                    "'%s' after repeatable param" % name,
                    code=FaultCode.ILLEGAL_ORDER,
                    title="illegal param order",
                    hint="the repeatable param must be the last one",
                    token=name,
                )
            if self._params[-1].optional and not param.optional:
                raise DefinitionError(
                    "required '%s' after optional param" % name,
                    code=FaultCode.ILLEGAL_ORDER,
                    title="illegal param order",
                    hint="optional params must follow all required ones",
                    token=name,
                )
        self._params.append(param)

    def _find_option(self, name, /):
        return next((option for option in self._options if option.matches(name)), None)

    def __getitem__(self, name, /):
        """
        Values of the option (by short or long name) or param (by name).

        Raises InvalidArgumentError when nothing with that name is defined.
        """
        if not isinstance(name, str):
            raise TypeError("Args indices must be strings")
        if name:
            if (option := self._find_option(name)) is not None:
                return option.values
            for param in self._params:
                if param.name == name:
                    return param.values
        raise InvalidArgumentError(
            "option or param '%s' not defined" % name,
            code=FaultCode.UNDEFINED_NAME,
            title="undefined name",
            hint="look up a name given to Args(...)",
            token=name,
        )

    def __contains__(self, name, /):
        return isinstance(name, str) and bool(name) and (
            self._find_option(name) is not None or any(param.name == name for param in self._params)
        )

    def trigger(self, fault, /):
        """
        Surface an argument fault according to the runtime switches.

        deferred → remember it on `fault`; otherwise raise it, or print it and
        exit when shell=True.
        """
        if self._deferred:
            self._fault = fault
            return
        trigger(fault, prog=self._prog, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def finalize(self):
        """
        Surface the fault kept by a deferred parse, if any.

        Typical use: parse, check "--help"/"--version" first, then finalize()
        before reading the remaining values.
        """
        if (fault := self._fault) is None:
            return
        self._fault = None
        trigger(fault, prog=self._prog, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def parse(self, argv=Unset, /):
        """
        Parse a command line (without the program name) into the definitions.

        Parameters
        - argv: iterable of strings; defaults to sys.argv[1:].

        Behavior
        - values from a previous parse are cleared first.
        - faults: InvalidArgumentError (unknown option, extra param),
          MissingArgumentError (missing value, required option or param),
          DuplicateOptionError, ExtraValueError.

        Returns
        - self, so lookups can be chained.
        """
        tokens = deque(coalesce(argv, sys.argv[1:]))
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        self._fault = None
        for argument in chain(self._options, self._params):
            argument.values._clear()

        try:
            self._parseargs(tokens)
        except ArgumentError as fault:
            self.trigger(fault)
        return self

    def _parseargs(self, pending, /):
        """
        Walk the pending tokens once, then validate and distribute.

        states
        - before "--": option-shaped tokens are resolved against the options;
          everything else is deferred for the params.
        - after "--": every token is deferred.
        """
        deferred = deque()
        terminated = False

        while pending:
            token = pending.popleft()

            if terminated or not is_option_shaped(token):
                deferred.append(token)
                continue

            if token == "--":
                terminated = True
                continue

            name, value = self._resolve_token(token)

            if (option := self._find_option(name)) is None:
                suggestions = difflib.get_close_matches(name, chain.from_iterable(x.names for x in self._options), 1)
                raise InvalidArgumentError(
                    "option '%s' not defined" % name,
                    code=FaultCode.UNKNOWN_OPTION,
                    title="unknown option",
                    hint="did you mean %r?" % suggestions[0] if suggestions else "check the spelling of the option",
                    token=name,
                )

            value = self._getvalue(option, name, value, pending)

            if option.values and not option.repeatable:
                raise DuplicateOptionError(
                    "duplicate option '%s'" % name,
                    code=FaultCode.DUPLICATE_OPTION,
                    title="duplicate option",
                    hint="give %s only once" % _label(option),
                    token=name,
                )

            option.values._add(value)

        self._check_required()
        self._distribute(deferred)

    @staticmethod
    def _resolve_token(token, /):
        """
        split an option-shaped token into (name, inline value or None).

        - "--name=value" → ("--name", "value"); "--name=" → ("--name", "")
        - "--name"       → ("--name", None)
        - "-xVALUE"      → ("-x", "VALUE")
        - "-x"           → ("-x", None)
        """
        if token[1] == "-":
            name, separator, value = token.partition("=")
            return name, value if separator else None
        return token[:2], token[2:] or None

    @staticmethod
    def _getvalue(option, name, value, pending, /):
        """
        resolve the value recorded for one occurrence of an option.

        - no value name: presence is recorded as ""; an inline remainder of a
          short option is put back as a cluster ("-abc" → "-a", then "-bc"),
          while a long option with "=value" is an error.
        - optional value: inline value, else the next pending token unless it
          is option-shaped, else "".
        - required value: inline value, else the next pending token unless the
          command line ends or the next token is "--".
        """
        if option.valname is None:
            if value is not None:
                if name[1] != "-":
                    pending.appendleft("-" + value)
                else:
                    raise ExtraValueError(
                        "option '%s' doesn't take values" % name,
                        code=FaultCode.FLAG_ASSIGNMENT,
                        title="option takes no value",
                        hint="remove everything from '=' (for example: %s)" % name,
                        token=name,
                    )
            return ""

        if value is not None:
            return value

        if option.value_optional:
            if pending and not is_option_shaped(pending[0]):
                return pending.popleft()
            return ""

        if not pending or pending[0] == "--":
            raise MissingArgumentError(
                "option '%s' requires a value" % name,
                code=FaultCode.MISSING_VALUE,
                title="missing option value",
                hint="pass a value (for example: %s %s)" % (name, option.valname),
                token=name,
            )
        return pending.popleft()

    def _check_required(self):
        for option in self._options:
            if option.required and not option.values:
                raise MissingArgumentError(
                    "option %s is required" % _label(option),
                    code=FaultCode.MISSING_OPTION,
                    title="missing option",
                    hint="add %s to the command line" % _label(option),
                    token=option.long or option.short,
                )

    def _distribute(self, deferred, /):
        """
        hand the deferred tokens to the params, in definition order.

        For each param, `reserve` counts the required params after it and
        `available` is what it may take without starving them:
        - required: one token; none left → MissingArgumentError.
        - optional: skipped unless available >= 1; then one token.
        - repeatable: the overflow, i.e. `available` minus one token for each
          optional param after it, but at least one token.
        Tokens left over → InvalidArgumentError.
        """
        for index, param in enumerate(self._params):
            later = self._params[index + 1:]
            reserve = sum(not other.optional for other in later)
            available = len(deferred) - reserve
            # later optional params still get one token each before the overflow
            overflow = available - sum(other.optional for other in later)

            if param.optional:
                if available < 1:
                    continue
                count = max(1, overflow) if param.repeatable else 1
            else:
                if not deferred:
                    raise MissingArgumentError(
                        "param '%s' is required" % param.name,
                        code=FaultCode.MISSING_PARAM,
                        title="missing param",
                        hint="add a value for %s to the command line" % param.name,
                        token=param.name,
                    )
                count = max(1, overflow) if param.repeatable else 1

            for _ in range(count):
                param.values._add(deferred.popleft())

        if deferred:
            raise InvalidArgumentError(
                "extra param '%s'" % deferred[0],
                code=FaultCode.EXTRA_PARAM,
                title="extra param",
                hint="use '--' before params that start with '-', or remove the extra value",
                token=deferred[0],
            )

    def usage(self, prog=Unset, preamble=Unset, prologue=Unset, epilogue=Unset, *, width=80):
        """
        Render the usage/help text as a string (see argot.formatting.usage).

        prog defaults to Args(prog=...), then to the running script name.
        """
        prog = coalesce(prog, self._prog or os.path.basename(sys.argv[0]))
        return usage(self, prog, preamble, prologue, epilogue, width=width)

    def __repr__(self):
        return "args(options=%r, params=%r)" % (self.options, self.params)

    def __rich_repr__(self):
        yield "options", self.options
        yield "params", self.params


__all__ = (
    "Args",
)
