from typing import Union

import pytest

from getopt_p import native
from getopt_p.native import NativeScanner
from getopt_p.scanner import OptionScanner


@pytest.fixture(params=["portable", "native"])
def scanner(request) -> Union[OptionScanner, NativeScanner]:
	if request.param == "native":
		if not native.is_available():
			pytest.skip("the C library getopt() is not available")
		return NativeScanner(opterr=False)
	return OptionScanner(opterr=False)


@pytest.fixture
def native_scanner() -> NativeScanner:
	if not native.is_available():
		pytest.skip("the C library getopt() is not available")
	return NativeScanner(opterr=False)
