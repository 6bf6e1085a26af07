# getopt_p version numbers follow semver (http://semver.org/) and PEP 440
__version__ = "1.0.0"

import logging

from getopt_p.batch import GetoptError, getopt
from getopt_p.config import ScannerConfig, create_scanner, load_config, setup_logging
from getopt_p.diagnostics import LoggingSink, StreamSink, program_name
from getopt_p.scanner import EOF, OptionScanner, Outcome, OutcomeKind

logger = logging.getLogger(__name__)

# Add a NULL handler to the getopt_p logger.  This prevents getting a
# message like this:
#    No handlers could be found for logger "getopt_p"
# when logging is not configured and logger.error() is called.
logger.addHandler(logging.NullHandler())

__all__ = [
    "EOF",
    "GetoptError",
    "LoggingSink",
    "OptionScanner",
    "Outcome",
    "OutcomeKind",
    "ScannerConfig",
    "StreamSink",
    "create_scanner",
    "getopt",
    "load_config",
    "program_name",
    "setup_logging",
]
