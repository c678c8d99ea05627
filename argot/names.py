"""
Name and token predicates.

Pure, stateless helpers used both while defining arguments and while parsing:

- is_short("-x")          two characters, '-' followed by one alphanumeric
- is_long("--long-name")  '--' followed by alphanumerics and single hyphens
- is_value_name("FILE")   placeholder shown for an option value
- is_param_name("SRC")    positional parameter name
- is_option_shaped(token) whether a command-line token is treated as an option
- strip(token)            peel trailing specifier sigils ("...", "?", "!")

Predicates fail fast: a token that clearly tries to be a long option but uses
characters outside the allowed set raises DefinitionError instead of quietly
answering False.
"""
from .faults import DefinitionError, FaultCode
from .specs import SIGILS, Spec


def is_short(s, /):
    """True if `s` is a short option name such as "-v"."""
    return len(s) == 2 and s[0] == "-" and s[1].isalnum()


def is_long(s, /):
    """
    True if `s` is a long option name such as "--dry-run".

    A token starting with "--" (and not "---") whose remaining characters are
    not alphanumerics or hyphens is a malformed definition and raises
    DefinitionError.
    """
    if not (len(s) > 2 and s.startswith("--") and s[2] != "-"):
        return False
    if not all(char == "-" or char.isalnum() for char in s[2:]):
        raise DefinitionError(
            "'%s' not a valid long option name" % s,
            code=FaultCode.MALFORMED_NAME,
            title="malformed option name",
            hint="long options may only contain letters, digits and '-' (for example: --dry-run)",
            token=s,
        )
    return True


def _is_name(s, /):
    # printable, no whitespace, no leading '-', no specifier sigils
    return (
        bool(s)
        and s[0] != "-"
        and all(char.isprintable() and not char.isspace() for char in s)
        and "?" not in s
        and "!" not in s
        and "..." not in s
    )


def is_value_name(s, /):
    """True if `s` can be used as an option value placeholder (e.g. "FILE")."""
    return _is_name(s)


def is_param_name(s, /):
    """True if `s` can be used as a positional parameter name (e.g. "SRC")."""
    return _is_name(s)


def is_option_shaped(token, /):
    """
    True if a command-line token is handled as an option.

    The empty string, a lone "-" and anything not starting with "-" are
    positional tokens.
    """
    return len(token) > 1 and token[0] == "-"


def strip(token, /):
    """
    Split trailing specifier sigils off a name token.

    Returns (name, spec) where spec holds the bits named by the sigils.
    Each sigil may appear once; order does not matter:

        strip("FILE...")  -> ("FILE", Spec.REPEATABLE)
        strip("MODE?!")   -> ("MODE", Spec.VALUE_OPTIONAL | Spec.REQUIRED)
        strip("...")      -> ("", Spec.REPEATABLE)

    Raises DefinitionError on a repeated sigil, or when "?" is attached to an
    empty name (there is no value to make optional).
    """
    name = token
    spec = Spec.NONE
    while True:
        for sigil, bit in SIGILS.items():
            if name.endswith(sigil):
                break
        else:
            break
        if spec & bit:
            raise DefinitionError(
                "duplicate specifier '%s' in '%s'" % (sigil, token),
                code=FaultCode.CONFLICTING_SPECIFIER,
                title="duplicate specifier",
                hint="use each of '...', '?' and '!' at most once",
                token=token,
            )
        spec |= bit
        name = name.removesuffix(sigil)

    if not name and spec & Spec.VALUE_OPTIONAL:
        raise DefinitionError(
            "bad specifier '%s'" % token,
            code=FaultCode.CONFLICTING_SPECIFIER,
            title="bad specifier",
            hint="'?' needs a value name to make optional (for example: MODE?)",
            token=token,
        )
    return name, spec


__all__ = (
    "is_short",
    "is_long",
    "is_value_name",
    "is_param_name",
    "is_option_shaped",
    "strip",
)
