"""getopt_p.scanner - a POSIX compliant getopt() state machine.

OptionScanner classifies the elements of an argument vector one call at a
time, exactly like the C library getopt() does:

    scanner = OptionScanner()
    while True:
        outcome = scanner.next(sys.argv, ":hvf:")
        if outcome.kind is OutcomeKind.END:
            break
        ...
    positional = sys.argv[scanner.optind:]

Option string syntax:

  * an option character followed by ':' requires an argument
  * a ':' as the first character makes a missing argument return ':'
    instead of '?', and silences the built-in error messages

Long options, optional arguments ('::'), the '+' and '-' option string
prefixes and argument permutation are not supported.  Scanning stops at
the first non-option argument, a lone '-', or '--' (which is consumed).

A scanner keeps its cursor between calls and may only run one scan at a
time.  Once the end of the options has been reported it keeps reporting
it; call reset() (or set ``optind = 1``) before scanning another vector.
"""

import abc
import enum
import logging
from collections.abc import Iterator, Sequence
from typing import NamedTuple, Optional

from getopt_p.diagnostics import (
    MSG_ARGUMENT_REQUIRED,
    MSG_INVALID_OPTION,
    DiagnosticSink,
    NameProvider,
    StreamSink,
    program_name,
)

logger = logging.getLogger(__name__)
_debug = logger.debug

# classic return value when option parsing is complete
EOF = -1

OPTION_UNKNOWN = "?"
OPTION_MISSING = ":"

OPTION_INTRODUCER = "-"
END_OF_OPTIONS = "--"

AT_TOKEN_BOUNDARY = "AtTokenBoundary"
WITHIN_TOKEN = "WithinToken"


class OutcomeKind(enum.Enum):
    OPTION = "OptionChar"
    UNKNOWN = "UnknownOption"
    MISSING = "MissingArgument"
    END = "EndOfOptions"


class Outcome(NamedTuple):
    """The classification returned by one scanner call.

    ``char`` is the option character for OPTION, '?' for UNKNOWN, '?' or
    ':' for MISSING (depending on the option string) and None for END.
    """

    kind: OutcomeKind
    char: Optional[str] = None

    @property
    def code(self) -> int:
        """The value the C getopt() would have returned."""
        if self.char is None:
            return EOF
        return ord(self.char)


END = Outcome(OutcomeKind.END)


def requires_argument(optstring: str, char: str) -> bool:
    """Return True if ``char`` is declared in ``optstring`` with a ':'."""
    if char == OPTION_MISSING:
        return False
    pos = optstring.find(char)
    return pos >= 0 and optstring[pos + 1 : pos + 2] == OPTION_MISSING


class _ScannerBase(abc.ABC):
    """Conveniences shared by every scanner flavour.

    Subclasses implement next().
    """

    @abc.abstractmethod
    def next(self, argv: Sequence[Optional[str]], optstring: str) -> Outcome:
        ...

    def getopt(self, argv: Sequence[Optional[str]], optstring: str) -> int:
        """Scan like the C function: return the option character code,
        ord('?') or ord(':') on errors, and -1 when options are exhausted."""
        return self.next(argv, optstring).code

    def scan(self, argv: Sequence[Optional[str]], optstring: str) -> Iterator[Outcome]:
        """Yield outcomes until the end of the options is reached.

        The final END outcome is not yielded; ``optind`` then points at the
        first positional argument.
        """
        while True:
            outcome = self.next(argv, optstring)
            if outcome.kind is OutcomeKind.END:
                return
            yield outcome


class OptionScanner(_ScannerBase):
    """Portable getopt() scanner.

    The four result fields of the C interface are instance attributes:

    optarg -- argument of the last option, or None.
    optind -- index in argv of the next element to be processed.
    opterr -- when true, errors are reported through ``sink``.
    optopt -- the last option character that caused an error.

    ``optarg`` is a slice of an argv element; ``optarg_span`` holds the
    ``(element_index, char_offset)`` it was taken from.
    """

    def __init__(
        self,
        opterr: bool = True,
        sink: Optional[DiagnosticSink] = None,
        name_provider: Optional[NameProvider] = None,
    ) -> None:
        self.opterr = opterr
        self.sink = sink if sink is not None else StreamSink()
        self.name_provider = name_provider if name_provider is not None else program_name
        self.optarg: Optional[str] = None
        self.optarg_span: Optional[tuple[int, int]] = None
        self.optopt = OPTION_UNKNOWN
        self._optind = 1
        # character index into argv[optind]; 0 means "at a token boundary"
        self.nextchar = 0
        # set once END has been returned, so a consumed "--" is never rescanned
        self._done = False

    @property
    def optind(self) -> int:
        return self._optind

    @optind.setter
    def optind(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"optind must be at least 1, not {value!r}")
        self._optind = value
        self.nextchar = 0
        self._done = False

    @property
    def state(self) -> str:
        return WITHIN_TOKEN if self.nextchar else AT_TOKEN_BOUNDARY

    def reset(self) -> None:
        """Prepare for scanning a new argument vector."""
        self._optind = 1
        self.nextchar = 0
        self._done = False
        self.optarg = None
        self.optarg_span = None
        self.optopt = OPTION_UNKNOWN

    def next(self, argv: Sequence[Optional[str]], optstring: str) -> Outcome:
        if not isinstance(optstring, str):
            raise TypeError(f"optstring must be str, not {type(optstring).__name__}")
        self.optarg = None
        self.optarg_span = None

        if self._done:
            return END
        if self.nextchar == 0:
            if (
                self._optind >= len(argv)
                or argv[self._optind] is None
                or argv[self._optind][:1] != OPTION_INTRODUCER
                or argv[self._optind] == OPTION_INTRODUCER
            ):
                self._done = True
                return END
            if argv[self._optind] == END_OF_OPTIONS:
                self._optind += 1
                self._done = True
                return END
            self.nextchar = 1

        token = argv[self._optind]
        c = token[self.nextchar]

        if c == OPTION_MISSING or optstring.find(c) < 0:
            self.optopt = c
            self._report(optstring, MSG_INVALID_OPTION, c)
            _debug("argv[%d] %r: invalid option %r", self._optind, token, c)
            self._step(token)
            return Outcome(OutcomeKind.UNKNOWN, OPTION_UNKNOWN)

        if not requires_argument(optstring, c):
            self._step(token)
            return Outcome(OutcomeKind.OPTION, c)

        if self.nextchar + 1 < len(token):
            # argument glued to the option character
            self.optarg = token[self.nextchar + 1 :]
            self.optarg_span = (self._optind, self.nextchar + 1)
        elif self._optind + 1 < len(argv):
            self._optind += 1
            self.optarg = argv[self._optind]
            self.optarg_span = (self._optind, 0)
        else:
            self.optopt = c
            self._report(optstring, MSG_ARGUMENT_REQUIRED, c)
            self._optind += 1
            self.nextchar = 0
            _debug("argv[%d] %r: missing argument for %r", self._optind - 1, token, c)
            if optstring.startswith(OPTION_MISSING):
                return Outcome(OutcomeKind.MISSING, OPTION_MISSING)
            return Outcome(OutcomeKind.MISSING, OPTION_UNKNOWN)
        self._optind += 1
        self.nextchar = 0
        return Outcome(OutcomeKind.OPTION, c)

    def _step(self, token: str) -> None:
        # move past one option character, and past the token once it is used up
        self.nextchar += 1
        if self.nextchar >= len(token):
            self._optind += 1
            self.nextchar = 0

    def _report(self, optstring: str, message: str, char: str) -> None:
        if not self.opterr or optstring.startswith(OPTION_MISSING):
            return
        try:
            self.sink(self.name_provider(), message, char)
        except OSError:
            _debug("could not report %r for %r", message, char, exc_info=True)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} optind={self._optind} nextchar={self.nextchar} "
            f"optarg={self.optarg!r} optopt={self.optopt!r} opterr={self.opterr!r}>"
        )
