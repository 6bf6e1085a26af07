import sys

import pytest

from getopt_p import native
from getopt_p.native import NativeScanner
from getopt_p.scanner import AT_TOKEN_BOUNDARY, END, WITHIN_TOKEN, Outcome, OutcomeKind


def test_unavailable_on_windows():
	if sys.platform == "win32":
		assert not native.is_available()
		with pytest.raises(OSError):
			NativeScanner()


def test_argv_not_permuted(native_scanner):
	# GNU getopt would move "-b" in front of "file" without the '+' prefix
	argv = ["prog", "-a", "file", "-b"]
	assert list(native_scanner.scan(argv, "ab")) == [Outcome(OutcomeKind.OPTION, "a")]
	assert argv[native_scanner.optind :] == ["file", "-b"]


def test_new_vector_restarts(native_scanner):
	first = ["prog", "-abc"]
	assert native_scanner.next(first, "abc").char == "a"
	# abandon the first vector mid-token
	second = ["prog", "-c"]
	native_scanner.reset()
	assert native_scanner.next(second, "abc").char == "c"
	assert native_scanner.next(second, "abc") == END


def test_none_ends_vector(native_scanner):
	argv = ["prog", "-a", None, "-b"]
	assert native_scanner.next(argv, "ab").char == "a"
	assert native_scanner.next(argv, "ab") == END
	assert native_scanner.optind == 2


def test_non_ascii_argument(native_scanner):
	argv = ["prog", "-vfdonnées.txt"]
	native_scanner.next(argv, "vf:")
	assert native_scanner.next(argv, "vf:") == Outcome(OutcomeKind.OPTION, "f")
	assert native_scanner.optarg == "données.txt"
	assert native_scanner.optarg_span == (1, 3)


def test_optind_assignment(native_scanner):
	argv = ["prog", "sub", "-a"]
	native_scanner.optind = 2
	assert native_scanner.next(argv, "a").char == "a"
	assert native_scanner.optind == 3
	with pytest.raises(ValueError):
		native_scanner.optind = 0


def test_optstring_must_be_str(native_scanner):
	with pytest.raises(TypeError):
		native_scanner.next(["prog", "-a"], b"a")


def test_state_follows_the_token(native_scanner):
	argv = ["prog", "-ab", "-é"]
	assert native_scanner.next(argv, "ab").char == "a"
	assert native_scanner.state == WITHIN_TOKEN
	assert native_scanner.next(argv, "ab").char == "b"
	assert native_scanner.state == AT_TOKEN_BOUNDARY
	assert native_scanner.next(argv, "ab") == Outcome(OutcomeKind.UNKNOWN, "?")
	assert native_scanner.optopt == "é"
	assert native_scanner.state == AT_TOKEN_BOUNDARY
