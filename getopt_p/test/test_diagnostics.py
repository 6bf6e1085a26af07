import io
import logging
import unittest
from unittest.mock import patch

from getopt_p.diagnostics import (
    FALLBACK_NAME,
    LoggingSink,
    StreamSink,
    format_message,
    program_name,
)


class Test_program_name(unittest.TestCase):
    def test_posix_path(self):
        self.assertEqual(program_name(["/usr/local/bin/tool", "-a"]), "tool")

    def test_windows_path(self):
        self.assertEqual(program_name([r"C:\Tools\tool.exe"]), "tool.exe")

    def test_bare_name(self):
        self.assertEqual(program_name(["tool"]), "tool")

    def test_fallback(self):
        for argv in ([], [""], [None], ["/usr/bin/"]):
            with self.subTest(argv=argv):
                self.assertEqual(program_name(argv), FALLBACK_NAME)

    def test_custom_fallback(self):
        self.assertEqual(program_name([], fallback="getopt"), "getopt")

    @patch("sys.argv", ["/opt/app/run.py", "-v"])
    def test_defaults_to_sys_argv(self):
        self.assertEqual(program_name(), "run.py")

    def test_missing_sys_argv(self):
        with patch("sys.argv", None):
            self.assertEqual(program_name(), FALLBACK_NAME)


class Test_sinks(unittest.TestCase):
    def test_format_message(self):
        self.assertEqual(
            format_message("prog", "invalid option", "x"), "prog : invalid option '-x'\n"
        )

    def test_stream_sink(self):
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink("prog", "argument required for option", "f")
        self.assertEqual(stream.getvalue(), "prog : argument required for option '-f'\n")

    def test_stream_sink_follows_stderr(self):
        sink = StreamSink()
        stream = io.StringIO()
        with patch("sys.stderr", stream):
            sink("prog", "invalid option", "q")
        self.assertEqual(stream.getvalue(), "prog : invalid option '-q'\n")

    def test_logging_sink(self):
        log = logging.getLogger("getopt_p.test.sink")
        sink = LoggingSink(log)
        with self.assertLogs(log, level="WARNING") as cm:
            sink("prog", "invalid option", "x")
        self.assertEqual(cm.output, ["WARNING:getopt_p.test.sink:prog : invalid option '-x'"])


if __name__ == "__main__":
    unittest.main()
