"""
Usage/help text for a registry.

Layout (sections are separated by a blank line, empty ones are left out):

    <preamble>

    Usage: prog [option]... <SRC>... <DEST>

    <prologue>

    Options:
      -v, --verbose        increase verbosity
      -o, --output=FILE    output file
          --chmod[=MODE]   affect permissions

    Parameters:
      SRC                  source files
      DEST                 destination

    <epilogue>

The text is laid out with rich (grid tables wrap descriptions inside their
column) and returned as a plain string without styles.
"""
import io

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .utils import Unset


def _label(option, /):
    """Names and value placeholder of an option, GNU style."""
    if (valname := option.valname) is None:
        value = ""
    elif option.long is None:
        value = " [%s]" % valname if option.value_optional else " %s" % valname
    else:
        value = "[=%s]" % valname if option.value_optional else "=%s" % valname

    if option.short is None:
        return "    %s%s" % (option.long, value)
    if option.long is None:
        return "%s%s" % (option.short, value)
    return "%s, %s%s" % (option.short, option.long, value)


def _synopsis(params, /):
    for param in params:
        synopsis = "<%s>" % param.name
        if param.optional:
            synopsis = "[%s]" % synopsis
        if param.repeatable:
            synopsis += "..."
        yield synopsis


def _signature(args, prog, width, /):
    """
    The "Usage:" line, wrapped with a hanging indent after the program name.
    """
    usage = "Usage: %s " % prog
    offset = len(usage)

    inputs = ["[option]..."] if args.options else []
    inputs.extend(_synopsis(args.params))
    if not inputs:
        return Text(usage.rstrip())

    lines = [inputs.pop(0)]
    for input in inputs:
        if len(lines[-1]) + 1 + len(input) > width - offset:
            lines.append(input)
        else:
            lines[-1] += " " + input

    return Text(usage + ("\n" + " " * offset).join(lines))


def _section(title, rows, /):
    table = Table.grid(padding=(0, 2))
    table.add_column(no_wrap=True)
    table.add_column(overflow="fold")
    for label, descr in rows:
        table.add_row(Text("  " + label), Text(descr) if isinstance(descr, str) else descr or Text(""))
    return Text(title + ":"), table


def usage(args, prog, preamble=Unset, prologue=Unset, epilogue=Unset, *, width=80):
    """
    Render the usage/help text of `args`.

    Parameters
    - args: registry (anything exposing `options` and `params`).
    - prog: program name shown on the "Usage:" line.
    - preamble, prologue, epilogue: str | Text | Unset; free text placed
      before the "Usage:" line, after it and after the tables.
    - width: wrap width in columns.

    Returns
    - str (no styles, no trailing whitespace).
    """
    if not isinstance(prog, str):
        raise TypeError("usage() 'prog' must be a string")
    if not isinstance(width, int) or width < 20:
        raise ValueError("usage() 'width' must be an integer >= 20")

    def paragraph(fragment):
        if not isinstance(fragment, str | Text | Unset):
            raise TypeError("usage() text sections must be strings")
        return Text(fragment) if isinstance(fragment, str) else fragment

    renders = []
    if preamble := paragraph(preamble):
        renders.append(preamble)
    renders.append(_signature(args, prog, width))
    if prologue := paragraph(prologue):
        renders.append(prologue)
    if args.options:
        renders.extend(_section("Options", ((_label(option), option.descr) for option in args.options)))
    if args.params:
        renders.extend(_section("Parameters", ((param.name, param.descr) for param in args.params)))
    if epilogue := paragraph(epilogue):
        renders.append(epilogue)

    console = Console(
        file=io.StringIO(),
        width=width,
        color_system=None,
        no_color=True,
        highlight=False,
        markup=False,
        emoji=False,
    )
    for index, render in enumerate(renders):
        # section titles stick to their table
        if index and not isinstance(render, Table):
            console.print()
        console.print(render)

    lines = console.file.getvalue().splitlines()
    return "\n".join(line.rstrip() for line in lines).strip("\n")


__all__ = (
    "usage",
)
