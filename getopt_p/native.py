"""getopt_p.native - the C library getopt(), driven through ctypes.

On platforms whose C library provides a standards conforming getopt()
there is no need for the portable scanner; NativeScanner wraps the
platform function behind the same interface as OptionScanner.

The C library keeps its state in process-wide variables, so all
NativeScanner instances share one cursor.  Do not interleave scans.

The C library compares bytes and glibc refuses ';' as an option
character.  Option strings using either, and argument vector tokens that
are not ASCII, are scanned by an OptionScanner on the native scanner's
behalf, so both kinds of scanner classify characters alike.
"""

import logging
import os
import sys
from collections.abc import Sequence
from ctypes import CDLL, POINTER, addressof, c_char_p, c_int, c_void_p, create_string_buffer
from typing import Optional

from getopt_p.scanner import (
    AT_TOKEN_BOUNDARY,
    END,
    EOF,
    OPTION_MISSING,
    OPTION_UNKNOWN,
    WITHIN_TOKEN,
    OptionScanner,
    Outcome,
    OutcomeKind,
    _ScannerBase,
    requires_argument,
)

logger = logging.getLogger(__name__)
_debug = logger.debug

_libc: Optional[CDLL] = None
_GNU = False
_c_optreset: Optional[c_int] = None

if sys.platform != "win32":
    try:
        _libc = CDLL(None)
        # int getopt(int argc, char * const argv[], const char *optstring);
        _getopt = _libc.getopt
        _getopt.argtypes = [c_int, POINTER(c_char_p), c_char_p]
        _getopt.restype = c_int

        _c_optind = c_int.in_dll(_libc, "optind")
        _c_opterr = c_int.in_dll(_libc, "opterr")
        _c_optopt = c_int.in_dll(_libc, "optopt")
        _c_optarg = c_void_p.in_dll(_libc, "optarg")
    except (OSError, AttributeError, ValueError):
        _debug("no usable getopt() in the C library", exc_info=True)
        _libc = None

if _libc is not None:
    # GNU getopt permutes argv unless the option string starts with '+'.
    _GNU = hasattr(_libc, "gnu_get_libc_version")
    try:
        # BSD and musl restart scanning when optreset is set.
        _c_optreset = c_int.in_dll(_libc, "optreset")
    except ValueError:
        _c_optreset = None


def is_available() -> bool:
    """Return True if the C library getopt() can be used."""
    return _libc is not None


def _native_optstring(optstring: str) -> bool:
    return optstring.isascii() and ";" not in optstring


def _reinitialise() -> None:
    # Force the C library to forget any position inside a previous token,
    # by running it once over a vector holding only a program name.
    if _c_optreset is not None:
        _c_optreset.value = 1
        _c_optind.value = 1
    else:
        _c_optind.value = 0
    argv = (c_char_p * 2)(b"getopt_p", None)
    saved, _c_opterr.value = _c_opterr.value, 0
    try:
        _getopt(1, argv, b"+" if _GNU else b"")
    finally:
        _c_opterr.value = saved


class NativeScanner(_ScannerBase):
    """getopt() scanner backed by the platform C library.

    The result fields mirror OptionScanner.  Error messages are printed by
    the C library itself when ``opterr`` is true.  Argument vector
    elements are encoded with os.fsencode(); a None element ends the
    vector as far as the C library is concerned.
    """

    def __init__(self, opterr: bool = True) -> None:
        if not is_available():
            raise OSError("the C library getopt() is not available on this platform")
        self.opterr = opterr
        self.optarg: Optional[str] = None
        self.optarg_span: Optional[tuple[int, int]] = None
        self.optopt = OPTION_UNKNOWN
        self._optind = 1
        self._restart = True
        self._done = False
        self._key: Optional[tuple] = None
        self._encoded: list[bytes] = []
        self._buffers: list = []
        self._array = None
        self._argc = 0
        self._within = False
        self._delegating = False
        self._portable: Optional[OptionScanner] = None

    @property
    def optind(self) -> int:
        return self._optind

    @optind.setter
    def optind(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"optind must be at least 1, not {value!r}")
        self._optind = value
        self._restart = True
        self._done = False
        self._within = False
        self._delegating = False

    @property
    def state(self) -> str:
        return WITHIN_TOKEN if self._within or self._delegating else AT_TOKEN_BOUNDARY

    def reset(self) -> None:
        self._optind = 1
        self._restart = True
        self._done = False
        self._within = False
        self._delegating = False
        self.optarg = None
        self.optarg_span = None
        self.optopt = OPTION_UNKNOWN

    def _load(self, argv: Sequence[Optional[str]]) -> None:
        # The C library keeps pointers into these buffers between calls,
        # so they live as long as the vector is being scanned.
        self._key = tuple(argv)
        self._encoded = []
        self._buffers = []
        for arg in argv:
            if arg is None:
                break
            encoded = os.fsencode(arg)
            self._encoded.append(encoded)
            self._buffers.append(create_string_buffer(encoded))
        self._argc = len(self._buffers)
        self._array = (c_char_p * (self._argc + 1))()
        for i, buf in enumerate(self._buffers):
            self._array[i] = addressof(buf)
        self._array[self._argc] = None
        self._restart = True
        self._within = False
        self._delegating = False

    def _locate(self, address: Optional[int]) -> None:
        self.optarg = None
        self.optarg_span = None
        if not address:
            return
        for i, (buf, encoded) in enumerate(zip(self._buffers, self._encoded)):
            start = addressof(buf)
            if start <= address <= start + len(encoded):
                offset = address - start
                self.optarg = os.fsdecode(encoded[offset:])
                self.optarg_span = (i, len(os.fsdecode(encoded[:offset])))
                return

    def _delegate(self, argv: Sequence[Optional[str]], optstring: str) -> Outcome:
        portable = self._portable
        if portable is None:
            portable = self._portable = OptionScanner()
        if not self._delegating:
            portable.optind = self._optind
        portable.opterr = self.opterr
        outcome = portable.next(argv, optstring)
        self._optind = portable.optind
        self.optarg = portable.optarg
        self.optarg_span = portable.optarg_span
        if outcome.kind in (OutcomeKind.UNKNOWN, OutcomeKind.MISSING):
            self.optopt = portable.optopt
        self._delegating = portable.state == WITHIN_TOKEN
        self._within = False
        # the C library has not seen what was consumed
        self._restart = True
        if outcome.kind is OutcomeKind.END:
            self._done = True
        return outcome

    def next(self, argv: Sequence[Optional[str]], optstring: str) -> Outcome:
        if not isinstance(optstring, str):
            raise TypeError(f"optstring must be str, not {type(optstring).__name__}")
        if self._key != tuple(argv):
            self._load(argv)

        if self._done or self._optind >= self._argc:
            # nothing left; the C library would not touch anything either
            self.optarg = None
            self.optarg_span = None
            self._done = True
            return END

        if (
            self._delegating
            or not _native_optstring(optstring)
            or (not self._within and not argv[self._optind].isascii())
        ):
            _debug("scanning %r with the portable scanner", argv[self._optind])
            return self._delegate(argv, optstring)

        if self._restart:
            _reinitialise()
            _c_optind.value = self._optind
            self._restart = False

        spec = os.fsencode(optstring)
        if _GNU:
            spec = b"+" + spec
        _c_opterr.value = 1 if self.opterr else 0
        _c_optarg.value = None
        before = self._optind
        result = _getopt(self._argc, self._array, spec)
        self._optind = _c_optind.value
        self._locate(_c_optarg.value)

        if result == EOF:
            self._done = True
            self._within = False
            return END
        self._within = self._optind == before
        c = chr(result & 0xFF)
        if c == OPTION_MISSING and optstring.startswith(OPTION_MISSING):
            self.optopt = chr(_c_optopt.value & 0xFF)
            return Outcome(OutcomeKind.MISSING, OPTION_MISSING)
        if c == OPTION_UNKNOWN:
            self.optopt = chr(_c_optopt.value & 0xFF)
            if requires_argument(optstring, self.optopt):
                return Outcome(OutcomeKind.MISSING, OPTION_UNKNOWN)
            return Outcome(OutcomeKind.UNKNOWN, OPTION_UNKNOWN)
        return Outcome(OutcomeKind.OPTION, c)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} optind={self._optind} "
            f"optarg={self.optarg!r} optopt={self.optopt!r} opterr={self.opterr!r}>"
        )
