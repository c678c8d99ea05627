r"""
Argot argument specifications and the definition builder.

Overview
- Specs
  • Option: named switch (-o/--output), optionally taking a value.
  • Parameter: positional argument, assigned by order.
  Both are sealed classes behind the Argument base and expose kind().

- Builder
  • arg(*names, [spec,] descr): build an Option or a Parameter from one to
    three name tokens, optional Spec bits and a description, e.g.

        arg("-v", "--verbose", REPEATABLE, "increase verbosity")
        arg("--chmod", "MODE?", "affect permissions")
        arg("-f", "--filter", "RULES...", "add a file-filtering rule")
        arg("SRC...", "source files")
        arg("DEST", "destination")

Introspection & representation
- ArgumentType metaclass exposes the fields listed in __introspectable__ as
  read-only properties and provides stable __repr__/__rich_repr__.
- Option and Parameter are sealed (subclassing raises TypeError).

Validation highlights
- Short names are "-" + one alphanumeric; long names "--" + alphanumerics and
  hyphens; value names and parameter names are printable, non-empty, do not
  start with "-" and carry no "...", "?" or "!" once sigils are stripped.
- An Option needs at least one of short/long; an optional value needs a value
  name; REQUIRED/VALUE_OPTIONAL are option-only and OPTIONAL is param-only.
- A bit given both in the Spec argument and as a sigil is a duplicate
  specification.
All of these raise DefinitionError carrying the offending token.
"""
import functools
import operator
import re
from abc import ABCMeta, abstractmethod
from enum import StrEnum

from rich.text import Text

from .faults import DefinitionError, FaultCode
from .names import is_short, is_long, is_value_name, is_param_name, strip
from .specs import Spec, ALL_BITS, OPTION_BITS, PARAM_BITS
from .utils import *
from .values import Values


class Kind(StrEnum):
    OPTION = "option"
    PARAM = "param"


class ArgumentType(ABCMeta):
    """
    Metaclass that turns specs into introspectable descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Seal classes created with `sealed=True` against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(short='-v', long='--verbose', valname=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the description shared by every spec.

    - descr: Unset | str | Text. Strings are trimmed; an empty description
      becomes None, as does Unset.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str):
        descr = descr.strip() or None
    metadata["descr"] = coalesce(descr)


def _sanitize_option_metadata(cls, metadata, /):
    """
    Internal: validate names and shape of an Option.

    - short: Unset | None | "-x"
    - long: Unset | None | "--long-name"
    - valname: Unset | None | "" | value name ("" and Unset mean "no value")
    - value_optional requires a valname
    """
    for field, predicate, example in (("short", is_short, "-v"), ("long", is_long, "--verbose")):
        name = coalesce(metadata[field])
        if name is not None:
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} '{field}' must be a string")
            if not predicate(name):
                raise DefinitionError(
                    "'%s' not a valid %s option name" % (name, field),
                    code=FaultCode.MALFORMED_NAME,
                    title="malformed option name",
                    hint="use a name like %s" % example,
                    token=name,
                )
        metadata[field] = name

    if metadata["short"] is None and metadata["long"] is None:
        raise DefinitionError(
            "option needs a short or a long name",
            code=FaultCode.MALFORMED_NAME,
            title="nameless option",
            hint="give the option a name like -v or --verbose",
        )

    if not isinstance(valname := coalesce(metadata["valname"]), str | None):
        raise TypeError(f"{cls.__typename__} 'valname' must be a string")
    if valname and not is_value_name(valname):
        raise DefinitionError(
            "'%s' not a valid option value name" % valname,
            code=FaultCode.MALFORMED_NAME,
            title="malformed value name",
            hint="value names are printable, do not start with '-' and do not contain '...', '?' or '!'",
            token=valname,
        )
    metadata["valname"] = valname or None

    if metadata["value_optional"] and metadata["valname"] is None:
        name = metadata["long"] or metadata["short"]
        raise DefinitionError(
            "option '%s' has an optional value but no value name" % name,
            code=FaultCode.CONFLICTING_SPECIFIER,
            title="optional value without value",
            hint="add a value name (for example: %s MODE?)" % name,
            token=name,
        )


def _sanitize_param_metadata(cls, metadata, /):
    """
    Internal: validate the name of a Parameter.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    if not is_param_name(name):
        raise DefinitionError(
            "'%s' not a valid param name" % name,
            code=FaultCode.MALFORMED_NAME,
            title="malformed param name",
            hint="param names are printable, do not start with '-' and do not contain '...', '?' or '!'",
            token=name,
        )


class Argument(metaclass=ArgumentType):
    """
    Common base of Option and Parameter.

    Every spec owns a Values accumulator, filled by the registry during
    parsing and exposed read-only through `values`.
    """

    @abstractmethod
    def kind(self):
        """Kind.OPTION or Kind.PARAM."""

    @property
    def values(self):
        return self._values


class Option(Argument, sealed=True):
    """
    Named option specification.

    An option with a value name takes a value (-o FILE, -oFILE, --output=FILE,
    --output FILE); without one it is a flag whose presence is recorded as an
    empty-string value.

    Properties
    - short, long: names (None when absent)
    - valname: value placeholder (None when the option takes no value)
    - descr: description (None when empty)
    - required, repeatable, value_optional: behavior bits
    """

    __introspectable__ = (
        "short",
        "long",
        "valname",
        "descr",
        "required",
        "repeatable",
        "value_optional",
    )

    def __init__(
            self,
            short=Unset,
            long=Unset,
            valname=Unset,
            descr=Unset,
            *,
            required=False,
            repeatable=False,
            value_optional=False
    ):
        metadata = {
            "short": short,
            "long": long,
            "valname": valname,
            "descr": descr,
            "required": bool(required),
            "repeatable": bool(repeatable),
            "value_optional": bool(value_optional),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_option_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._values = Values()

    def kind(self):
        return Kind.OPTION

    @property
    def names(self):
        """Defined names, short first."""
        return tuple(name for name in (self._short, self._long) if name is not None)

    def matches(self, name, /):
        return name is not None and name in (self._short, self._long)


class Parameter(Argument, sealed=True):
    """
    Positional parameter specification.

    Parameters receive the non-option tokens of the command line in definition
    order. An optional parameter may stay empty; a repeatable one takes as many
    tokens as the parameters after it can spare.
    """

    __introspectable__ = (
        "name",
        "descr",
        "optional",
        "repeatable",
    )

    def __init__(self, name, descr=Unset, *, optional=False, repeatable=False):
        metadata = {
            "name": name,
            "descr": descr,
            "optional": bool(optional),
            "repeatable": bool(repeatable),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_param_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._values = Values()

    def kind(self):
        return Kind.PARAM


def _merge(spec, sigils, token, /):
    """Combine explicit Spec bits with sigil bits; a bit given twice is an error."""
    if overlap := spec & sigils:
        raise DefinitionError(
            "duplicate specifier %s in '%s'" % (overlap.name.lower(), token),
            code=FaultCode.CONFLICTING_SPECIFIER,
            title="duplicate specifier",
            hint="give each specifier either as a flag or as a sigil, not both",
            token=token,
        )
    return spec | sigils


def _restrict(spec, allowed, kind, token, /):
    if extra := spec & ~allowed:
        raise DefinitionError(
            "%s cannot be %s" % (kind, extra.name.lower().replace("_", "-").replace("|", " and ")),
            code=FaultCode.CONFLICTING_SPECIFIER,
            title="specifier not applicable",
            hint="required and value-optional apply to options; optional applies to params",
            token=token,
        )


def _option(short, long, valname, spec, descr, token, /):
    _restrict(spec, OPTION_BITS, "option '%s'" % token, token)
    return Option(
        short,
        long,
        valname,
        descr,
        required=spec & Spec.REQUIRED,
        repeatable=spec & Spec.REPEATABLE,
        value_optional=spec & Spec.VALUE_OPTIONAL,
    )


def _valname(token, spec, /):
    """Strip sigils off a value-name token and validate what remains."""
    name, sigils = strip(token)
    if name and not is_value_name(name):
        raise DefinitionError(
            "'%s' not a valid option value name" % token,
            code=FaultCode.MALFORMED_NAME,
            title="malformed value name",
            hint="value names are printable and do not start with '-' (for example: FILE)",
            token=token,
        )
    return name, _merge(spec, sigils, token)


def _malformed(token, what, /):
    return DefinitionError(
        "'%s' not a valid %s" % (token, what),
        code=FaultCode.MALFORMED_NAME,
        title="malformed name",
        hint="options look like -x or --long-name; params do not start with '-'",
        token=token,
    )


def arg(*parameters):
    """
    Build an Option or a Parameter from name tokens.

    Forms
    - arg(name, [spec,] descr)
      • "-x" / "--long"  → option without value
      • anything else    → parameter ("NAME...", "NAME?" for repeatable/optional)
    - arg(first, second, [spec,] descr)
      • "-x", "--long"   → option with both names, without value
      • "-x", "VALUE"    → short option with value
      • "--long", "VALUE"→ long option with value
    - arg(short, long, value, [spec,] descr)

    Value names accept trailing sigils: "..." (repeatable), "?" (optional value)
    and "!" (required). An empty value name with sigils ("-v", "...") keeps the
    option value-less, e.g. a repeatable flag.

    Returns
    - Option | Parameter

    Raises
    - TypeError: wrong number or type of arguments.
    - DefinitionError: malformed names or conflicting specifiers.
    """
    if not parameters or not isinstance(descr := parameters[-1], str | Text):
        raise TypeError("arg() last argument must be a description")
    parameters = parameters[:-1]

    spec = Spec.NONE
    if parameters and isinstance(parameters[-1], int):
        spec = parameters[-1]
        if isinstance(spec, bool) or spec < 0 or int(spec) & ~int(ALL_BITS):
            raise TypeError("arg() spec must be a combination of Spec bits")
        spec = Spec(spec)
        parameters = parameters[:-1]

    if not all(isinstance(name, str) for name in parameters):
        raise TypeError("arg() names must be strings")

    match parameters:
        case (name,):
            if is_short(name):
                return _option(name, None, None, spec, descr, name)
            if is_long(name):
                return _option(None, name, None, spec, descr, name)

            stripped, sigils = strip(name)
            if sigils & Spec.REQUIRED:
                raise DefinitionError(
                    "param '%s' cannot be marked required" % name,
                    code=FaultCode.CONFLICTING_SPECIFIER,
                    title="specifier not applicable",
                    hint="params are required unless marked optional",
                    token=name,
                )
            # on a param, '?' marks the param itself optional
            if sigils & Spec.VALUE_OPTIONAL:
                sigils = sigils & ~Spec.VALUE_OPTIONAL | Spec.OPTIONAL
            if not stripped or not is_param_name(stripped):
                raise _malformed(name, "option or param name")
            spec = _merge(spec, sigils, name)
            _restrict(spec, PARAM_BITS, "param '%s'" % stripped, name)
            return Parameter(
                stripped,
                descr,
                optional=spec & Spec.OPTIONAL,
                repeatable=spec & Spec.REPEATABLE,
            )

        case (first, second):
            if is_short(first):
                if is_long(second):
                    return _option(first, second, None, spec, descr, first)
                valname, spec = _valname(second, spec)
                return _option(first, None, valname, spec, descr, first)
            if is_long(first):
                valname, spec = _valname(second, spec)
                return _option(None, first, valname, spec, descr, first)
            raise _malformed(first, "short or long option name")

        case (short, long, value):
            if not is_short(short):
                raise _malformed(short, "short option name")
            if not is_long(long):
                raise _malformed(long, "long option name")
            valname, spec = _valname(value, spec)
            return _option(short, long, valname, spec, descr, short)

        case _:
            raise TypeError("arg() takes 1 to 3 names but %d were given" % len(parameters))


__all__ = (
    # Classes (specifications)
    "Kind",
    "Argument",
    "Option",
    "Parameter",

    # Builder
    "arg",
)

# Not part of the public API.
del ArgumentType
