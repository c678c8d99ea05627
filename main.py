"""
sync is a dummy file transfer program showing argot in action.

    python main.py -v --chmod=0600 a.c b.c /dest/path/
    python main.py --help
"""
import sys

from rich.pretty import pprint

from argot import *

__prog__ = "sync"

PREAMBLE = """\
sync is a dummy file transfer program created solely for demonstrating
capabilities of argot."""

EPILOGUE = """\
You must specify at least one source file or directory and a destination to
copy to. For example:

    sync *.c /dest/path/

In theory, this would transfer all files matching the pattern *.c from the
current directory to the directory /dest/path/. However, since this is a dummy
program, nothing will actually be transferred."""

args = Args(
    ("-v", "--verbose", REPEATABLE, "increase verbosity"),
    ("--info", "FLAGS", "fine-grained informational verbosity"),
    ("--debug", "FLAGS", "fine-grained debug verbosity"),
    ("-q", "--quiet", "suppress non-error messages"),
    ("-r", "--recursive", "recurse into directories"),
    ("-l", "copy symlinks as symlinks"),
    ("-L", "transform symlink into referent file/dir"),
    ("--chmod", "CHMOD", "affect file and/or directory permissions"),
    ("-f", "--filter", "RULES...", "add a file-filtering RULE"),
    ("-V", "--version", "print the version and exit"),
    ("-h", "--help", "show this help"),

    ("SRC...", "source file(s) or directory(s)"),
    ("DEST", "destination file or directory"),
    prog=__prog__,
    shell=True,
    fancy=True,
    deferred=True,
)


def main(argv):
    args.parse(argv)

    if args["--help"]:
        print(args.usage(preamble=PREAMBLE, epilogue=EPILOGUE))
        return
    if args["--version"]:
        print("%s 0.42" % __prog__)
        return

    # faults are reported only once --help/--version had their chance
    args.finalize()

    if args["-l"] and args["-L"]:
        trigger(
            InvalidArgumentError("options '-l' and '-L' are mutually exclusive", title="conflicting options"),
            prog=args.prog,
            shell=args.shell,
            fancy=args.fancy,
        )

    if args["-v"].count() > 1:
        pprint(args)

    for source in args["SRC"].values():
        if not args["--quiet"]:
            print("Sending %s to %s (mode %s)" % (source, args["DEST"].value(), args["--chmod"].value_or("0644")))


if __name__ == '__main__':
    main(sys.argv[1:])
