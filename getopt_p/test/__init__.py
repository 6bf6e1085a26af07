import os
import sys
import unittest


def run_tests(package, mask: str = "test_*.py", verbosity: int = 1) -> bool:
    """Run the test modules of ``package`` matching ``mask``.

    Returns True if any test failed.
    """
    start_dir = package.__path__[0]
    # import the test modules by their dotted names, e.g. getopt_p.test.test_scanner
    top_level_dir = os.path.dirname(os.path.dirname(os.path.abspath(start_dir)))
    suite = unittest.TestLoader().discover(start_dir, mask, top_level_dir)
    runner = unittest.TextTestRunner(stream=sys.stderr, verbosity=verbosity)
    result = runner.run(suite)
    return not result.wasSuccessful()
