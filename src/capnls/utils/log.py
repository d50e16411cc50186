"""
Logging setup for capnls.

Library code only ever asks for loggers; whoever embeds capnls owns the
handlers and passes a LoggingConfig to configure_logging().
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "capnls"


@dataclass
class LoggingConfig:
    level: int = logging.INFO
    log_file: Optional[Path] = None
    # Plain formatter instead of rich output, e.g. when stderr is a pipe to an editor.
    rich: bool = True

    @classmethod
    def from_verbosity(cls, verbose: bool = False, log_file: Optional[Path] = None) -> "LoggingConfig":
        return cls(level=logging.DEBUG if verbose else logging.INFO, log_file=log_file)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the capnls hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(config.level)
    logger.propagate = False

    # Reconfiguring must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.rich:
        console_handler: logging.Handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("[capnls] %(levelname)s %(message)s"))
    console_handler.setLevel(config.level)
    logger.addHandler(console_handler)

    if config.log_file is not None:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(config.level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
