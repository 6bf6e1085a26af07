"""getopt_p.diagnostics - program name lookup and error message sinks.

The scanner never writes to a stream itself.  When it has to complain
about an option it asks a *name provider* for the short program name and
hands ``(name, message, char)`` to a *diagnostic sink*.  The default sink
writes the classic one-line message to ``sys.stderr``:

    prog : invalid option '-x'
"""

import logging
import sys
from collections.abc import Sequence
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)

# Label used when the program name cannot be determined.
FALLBACK_NAME = "Error"

MSG_INVALID_OPTION = "invalid option"
MSG_ARGUMENT_REQUIRED = "argument required for option"

# sink(program_name, message, option_char)
DiagnosticSink = Callable[[str, str, str], None]
NameProvider = Callable[[], str]


def program_name(
    argv: Optional[Sequence[Optional[str]]] = None, fallback: str = FALLBACK_NAME
) -> str:
    """Return the short name of the running program.

    This is the last path component of ``argv[0]`` (``sys.argv[0]`` when
    argv is not given), split on both ``/`` and ``\\``.  ``fallback`` is
    returned when no usable name is available.
    """
    if argv is None:
        argv = getattr(sys, "argv", None)
    try:
        path = argv[0]
    except (IndexError, TypeError):
        return fallback
    if not path:
        return fallback
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    return name or fallback


def format_message(name: str, message: str, char: str) -> str:
    return f"{name} : {message} '-{char}'\n"


class StreamSink:
    """Write diagnostics to a text stream.

    With no stream given, ``sys.stderr`` is looked up on every write so
    that redirection done after construction is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        if self._stream is None:
            return sys.stderr
        return self._stream

    def __call__(self, name: str, message: str, char: str) -> None:
        stream = self.stream
        stream.write(format_message(name, message, char))
        stream.flush()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} stream={self._stream!r}>"


class LoggingSink:
    """Send diagnostics to a logger at WARNING level."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log if log is not None else logger

    def __call__(self, name: str, message: str, char: str) -> None:
        self.log.warning("%s : %s '-%s'", name, message, char)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} logger={self.log.name!r}>"
