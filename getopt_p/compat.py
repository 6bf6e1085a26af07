"""getopt_p.compat - the classic global variable getopt() interface.

For code written against the C interface:

    from getopt_p import compat

    while True:
        c = compat.getopt(sys.argv, "hvf:")
        if c == -1:
            break
        if c == ord("f"):
            filename = compat.optarg
    rest = sys.argv[compat.optind:]

``optarg``, ``optind``, ``opterr`` and ``optopt`` are module attributes
backed by one process-wide scanner; read and assign them through the
module (``compat.optind = 1``), since ``from getopt_p.compat import
optind`` only copies the current value.  The process-wide scanner is not
reentrant: two scans must not be interleaved.
"""

import sys
import types
from collections.abc import Sequence
from typing import Optional

from getopt_p.config import create_scanner, load_config

_scanner = None


def get_scanner():
    """Return the process-wide scanner, creating it on first use.

    It is configured from the files named by ``GETOPT_P_CONFIG``.
    """
    global _scanner
    if _scanner is None:
        _scanner = create_scanner(load_config())
    return _scanner


def use_scanner(scanner):
    """Replace the process-wide scanner, returning the previous one."""
    global _scanner
    previous, _scanner = _scanner, scanner
    return previous


def getopt(argv: Sequence[Optional[str]], optstring: str) -> int:
    return get_scanner().getopt(argv, optstring)


class _CompatModule(types.ModuleType):
    @property
    def optarg(self) -> Optional[str]:
        return get_scanner().optarg

    @property
    def optind(self) -> int:
        return get_scanner().optind

    @optind.setter
    def optind(self, value: int) -> None:
        get_scanner().optind = value

    @property
    def opterr(self) -> bool:
        return get_scanner().opterr

    @opterr.setter
    def opterr(self, value: bool) -> None:
        get_scanner().opterr = value

    @property
    def optopt(self) -> str:
        return get_scanner().optopt


sys.modules[__name__].__class__ = _CompatModule
