"""
Server configuration and logging setup
Settings come from the environment first, then command line options
"""

import os
import logging
import tempfile
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from basica_lsp.errors import ConfigError

DEFAULT_LOG_FILE = os.path.join(tempfile.gettempdir(), "basica_lsp.log")
DEFAULT_LOG_LEVEL = "DEBUG"
DEFAULT_WORKERS = 4
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

ENV_LOG_FILE = "BASICA_LSP_LOG"
ENV_LOG_LEVEL = "BASICA_LSP_LOG_LEVEL"
ENV_WORKERS = "BASICA_LSP_WORKERS"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    workers: int = DEFAULT_WORKERS
    extra_args: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ServerConfig":
        environ = os.environ if environ is None else environ
        config = cls()
        if environ.get(ENV_LOG_FILE):
            config.log_file = environ[ENV_LOG_FILE]
        if environ.get(ENV_LOG_LEVEL):
            config.log_level = _parse_level(environ[ENV_LOG_LEVEL])
        if environ.get(ENV_WORKERS):
            config.workers = _parse_workers(environ[ENV_WORKERS])
        return config

    def apply_args(self, argv: List[str]) -> "ServerConfig":
        """Apply --log-file, --log-level and --workers options"""
        i = 0
        while i < len(argv):
            arg = argv[i]
            if arg in ("--log-file", "--log-level", "--workers"):
                if i + 1 >= len(argv):
                    raise ConfigError(f"Option {arg} requires a value")
                value = argv[i + 1]
                if arg == "--log-file":
                    self.log_file = value
                elif arg == "--log-level":
                    self.log_level = _parse_level(value)
                else:
                    self.workers = _parse_workers(value)
                i += 2
            elif arg == "--stdio":
                # stdio is the only transport
                i += 1
            elif arg.startswith("-"):
                raise ConfigError(f"Unknown option: {arg}")
            else:
                self.extra_args.append(arg)
                i += 1
        return self


def _parse_level(value: str) -> str:
    level = value.upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level: {value}")
    return level


def _parse_workers(value: str) -> int:
    try:
        workers = int(value)
    except ValueError:
        raise ConfigError(f"Invalid worker count: {value}")
    if workers < 1:
        raise ConfigError(f"Worker count must be at least 1: {value}")
    return workers


def configure_logging(config: ServerConfig):
    """Log to a file; stdout carries the protocol"""
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level),
        format=LOG_FORMAT
    )
