from collections.abc import Sequence

from getopt_p.scanner import OptionScanner, OutcomeKind


class GetoptError(Exception):
    """Raised by getopt() for an unknown option or a missing argument.

    ``opt`` is the offending option character; ``missing`` is True when
    the option was recognized but its argument was absent.
    """

    def __init__(self, msg: str, opt: str = "", missing: bool = False) -> None:
        super().__init__(msg, opt)
        self.msg = msg
        self.opt = opt
        self.missing = missing

    def __str__(self) -> str:
        return self.msg


def getopt(
    args: Sequence[str], optstring: str
) -> tuple[list[tuple[str, str]], list[str]]:
    """Scan a whole argument list at once.

    ``args`` does not include the program name (pass ``sys.argv[1:]``).

    Returns two elements, just as getopt.getopt.  The first is a list
    of (option, value) pairs like ``("-f", "name")``; options without an
    argument have an empty string as value.  The second is the list of
    arguments following the options.

    Different from getopt.getopt, only POSIX short options are
    recognized, and option characters that are not in ``optstring`` or
    lack their argument raise GetoptError.
    """
    scanner = OptionScanner(opterr=False)
    argv = [""]
    argv.extend(args)
    opts = []
    for outcome in scanner.scan(argv, optstring):
        if outcome.kind is OutcomeKind.UNKNOWN:
            raise GetoptError(f"invalid option '-{scanner.optopt}'", scanner.optopt)
        if outcome.kind is OutcomeKind.MISSING:
            raise GetoptError(
                f"option '-{scanner.optopt}' requires an argument",
                scanner.optopt,
                missing=True,
            )
        opts.append(("-" + outcome.char, scanner.optarg or ""))
    return opts, argv[scanner.optind :]
