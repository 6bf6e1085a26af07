"""Example program using the classic getopt() interface.

    python -m getopt_p.example -a -f notes.txt extra args
"""

import sys
from collections.abc import Sequence
from typing import Optional

from getopt_p import compat
from getopt_p.scanner import EOF

VERSION = "1.01"
OPTSTRING = ":hva1f:"
USAGE = (
    "Usage : example [-h] [-v] [-a] [-1] [-f <filename>] [non-option-arguments]"
)


def usage_err() -> None:
    print(USAGE, file=sys.stderr)
    print("For help : example -h", file=sys.stderr)


def usage_full() -> None:
    print(USAGE)
    print("    -h Display this help text")
    print("    -v Display the program version number")
    print("    -a Set the 'a' flag for the program")
    print("    -1 Set the '1' flag for the program")
    print("    -f Specify the filename to operate on")
    print("non-option-arguments : other arguments not parsed by getopt()")


def main(argv: Optional[Sequence[str]] = None) -> None:
    if argv is None:
        argv = sys.argv
    compat.optind = 1
    compat.opterr = False
    while True:
        c = compat.getopt(argv, OPTSTRING)
        if c == EOF:
            break
        option = chr(c)
        if option == "?":
            print(f"Error : unknown option '{compat.optopt}'", file=sys.stderr)
            usage_err()
        elif option == ":":
            print(f"Error : missing argument to option '{compat.optopt}'", file=sys.stderr)
            usage_err()
        elif option == "h":
            usage_full()
        elif option == "v":
            print(f"Version {VERSION}")
        elif option in "a1":
            print(f"You supplied the option flag '{option}'")
        elif option == "f":
            print(f'You supplied the filename "{compat.optarg}"')
        else:
            print(f"UNKNOWN RETURN VALUE '{option}'", file=sys.stderr)
    print()

    if compat.optind < len(argv):
        print("non-option argv elements : " + " ".join(argv[compat.optind :]))


if __name__ == "__main__":
    main()
