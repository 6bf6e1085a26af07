"""getopt_p.config - INI file configuration.

Scanner defaults are read from a ``[getopt_p]`` section:

    [getopt_p]
    opterr = yes
    native = auto
    fallback_name = Error
    sink = stream

``native`` is auto, yes or no and selects the C library getopt();
``fallback_name`` is used when argv[0] is unusable; ``sink`` is stream
(stderr) or logging.

setup_logging() configures the logging module from the ``[logging]`` and
``[logging.levels]`` sections of the same kind of file:

    [logging]
    level = DEBUG
    format = %(levelname)s:%(name)s:%(message)s
    handler = StreamHandler

    [logging.levels]
    getopt_p.scanner = DEBUG

When no file names are given, the ``GETOPT_P_CONFIG`` environment
variable may name one or more files, separated by os.pathsep.
"""

import configparser
import functools
import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

from getopt_p import native
from getopt_p.diagnostics import FALLBACK_NAME, LoggingSink, StreamSink, program_name
from getopt_p.scanner import OptionScanner

logger = logging.getLogger(__name__)

SECTION = "getopt_p"
ENV_VAR = "GETOPT_P_CONFIG"

NATIVE_CHOICES = ("auto", "yes", "no")
SINK_CHOICES = ("stream", "logging")


@dataclass(frozen=True)
class ScannerConfig:
    opterr: bool = True
    native: str = "auto"
    fallback_name: str = FALLBACK_NAME
    sink: str = "stream"


def _pathnames(pathnames):
    if pathnames:
        return list(pathnames)
    value = os.environ.get(ENV_VAR, "")
    return [p for p in value.split(os.pathsep) if p]


def _read(pathnames) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    parser.optionxform = str  # use case sensitive option names!
    read = parser.read(_pathnames(pathnames))
    logger.debug("configuration read from %s", read)
    return parser


def load_config(*pathnames: Union[str, os.PathLike]) -> ScannerConfig:
    """Read scanner defaults from the given INI files.

    Options that are absent keep their defaults.  Invalid values raise
    ValueError.
    """
    parser = _read(pathnames)
    if not parser.has_section(SECTION):
        return ScannerConfig()
    section = parser[SECTION]
    defaults = ScannerConfig()

    native_choice = section.get("native", defaults.native).strip().lower()
    if native_choice not in NATIVE_CHOICES:
        raise ValueError(f"[{SECTION}] native must be one of {NATIVE_CHOICES}, not {native_choice!r}")
    sink = section.get("sink", defaults.sink).strip().lower()
    if sink not in SINK_CHOICES:
        raise ValueError(f"[{SECTION}] sink must be one of {SINK_CHOICES}, not {sink!r}")

    return ScannerConfig(
        opterr=section.getboolean("opterr", fallback=defaults.opterr),
        native=native_choice,
        fallback_name=section.get("fallback_name", defaults.fallback_name),
        sink=sink,
    )


def _native_compatible(config: ScannerConfig) -> bool:
    # the C library prints its own messages to stderr under its own name
    return config.sink == "stream" and config.fallback_name == FALLBACK_NAME


def create_scanner(config: Optional[ScannerConfig] = None):
    """Create the scanner described by ``config``.

    With ``native = auto`` the C library getopt() is used when the platform
    provides one and the configuration asks for nothing it cannot do (a
    logging sink or a custom fallback name).  ``native = yes`` raises
    OSError where the C library is unavailable, and ValueError when such
    a setting is combined with it.
    """
    if config is None:
        config = ScannerConfig()
    if config.native == "yes":
        if not _native_compatible(config):
            raise ValueError(
                f"[{SECTION}] native = yes cannot honour sink = {config.sink!r}"
                f" or fallback_name = {config.fallback_name!r}"
            )
        logger.debug("using the C library getopt()")
        return native.NativeScanner(opterr=config.opterr)
    if config.native == "auto" and native.is_available() and _native_compatible(config):
        logger.debug("using the C library getopt()")
        return native.NativeScanner(opterr=config.opterr)
    if config.sink == "logging":
        sink = LoggingSink()
    else:
        sink = StreamSink()
    return OptionScanner(
        opterr=config.opterr,
        sink=sink,
        name_provider=functools.partial(program_name, fallback=config.fallback_name),
    )


LOGGING_DEFAULTS = {
    "handler": "StreamHandler",
    "format": "%(levelname)s:%(name)s:%(message)s",
    "level": "WARNING",
}


def _level(levelname: str) -> int:
    # convert level name to level value
    level = getattr(logging, levelname, None)
    if not isinstance(level, int) or isinstance(level, bool):
        raise ValueError(f"unknown logging level {levelname!r}")
    return level


def setup_logging(*pathnames: Union[str, os.PathLike]) -> None:
    parser = _read(pathnames)

    def get(section, option):
        try:
            return parser.get(section, option, raw=True)
        except (configparser.NoOptionError, configparser.NoSectionError):
            return LOGGING_DEFAULTS[option]

    levelname = get("logging", "level")
    format = get("logging", "format")
    handlerclass = get("logging", "handler")

    level = _level(levelname)
    # only handlers of the logging module itself can be named
    handler_type = getattr(logging, handlerclass, None)
    if not (isinstance(handler_type, type) and issubclass(handler_type, logging.Handler)):
        raise ValueError(f"unknown logging handler {handlerclass!r}")
    if issubclass(handler_type, logging.FileHandler):
        handler = handler_type(parser.get("logging", "filename"))
    else:
        handler = handler_type()
    formatter = logging.Formatter(format)
    handler.setFormatter(formatter)
    logging.root.addHandler(handler)
    logging.root.setLevel(level)

    try:
        for name, value in parser.items("logging.levels", raw=True):
            logging.getLogger(name).setLevel(_level(value))
    except configparser.NoSectionError:
        pass
