import unittest
from unittest.mock import Mock, patch

from getopt_p import compat
from getopt_p.native import NativeScanner
from getopt_p.scanner import EOF, OptionScanner


class Test_compat(unittest.TestCase):
    def setUp(self):
        self.sink = Mock()
        self.scanner = OptionScanner(sink=self.sink, name_provider=lambda: "prog")
        self.previous = compat.use_scanner(self.scanner)

    def tearDown(self):
        compat.use_scanner(self.previous)

    def test_globals_follow_scanner(self):
        argv = ["prog", "-a", "-f", "name", "rest"]
        self.assertEqual(compat.optind, 1)
        self.assertEqual(compat.getopt(argv, "af:"), ord("a"))
        self.assertIsNone(compat.optarg)
        self.assertEqual(compat.getopt(argv, "af:"), ord("f"))
        self.assertEqual(compat.optarg, "name")
        self.assertEqual(compat.optind, 4)
        self.assertEqual(compat.getopt(argv, "af:"), EOF)
        self.assertEqual(argv[compat.optind :], ["rest"])

    def test_optopt(self):
        self.assertEqual(compat.optopt, "?")
        self.assertEqual(compat.getopt(["prog", "-z"], "a"), ord("?"))
        self.assertEqual(compat.optopt, "z")
        self.sink.assert_called_once_with("prog", "invalid option", "z")

    def test_opterr_assignment(self):
        self.assertTrue(compat.opterr)
        compat.opterr = False
        self.assertFalse(self.scanner.opterr)
        compat.getopt(["prog", "-z"], "a")
        self.sink.assert_not_called()

    def test_optind_assignment_restarts(self):
        argv = ["prog", "-ab"]
        compat.getopt(argv, "ab")
        compat.optind = 1
        self.assertEqual(self.scanner.nextchar, 0)
        self.assertEqual(compat.getopt(argv, "ab"), ord("a"))

    def test_use_scanner_returns_previous(self):
        other = OptionScanner()
        self.assertIs(compat.use_scanner(other), self.scanner)
        self.assertIs(compat.get_scanner(), other)


class Test_get_scanner(unittest.TestCase):
    def setUp(self):
        self.previous = compat.use_scanner(None)

    def tearDown(self):
        compat.use_scanner(self.previous)

    def test_created_on_first_use(self):
        with patch.dict("os.environ", {"GETOPT_P_CONFIG": ""}):
            scanner = compat.get_scanner()
        self.assertIsInstance(scanner, (OptionScanner, NativeScanner))
        self.assertIs(compat.get_scanner(), scanner)


if __name__ == "__main__":
    unittest.main()
