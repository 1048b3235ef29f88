import logging
import sys

from .core.constants import LOG_FORMAT

NOISY_LOGGERS = ("botocore", "boto3", "urllib3")


class LoggerSetup:
    """
    Configure the root logger once per process.

    Records go to stderr: stdout carries the status line read by the monitoring
    scheduler.
    """

    def __init__(self, log_format: str = LOG_FORMAT, level: int = logging.WARNING):
        self.log_format = log_format
        self.level = level
        self.setup_logging()

    def setup_logging(self) -> None:
        """Setup logging configuration on the root logger."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.level)
        if not root_logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(self.log_format)
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        if self.level > logging.DEBUG:
            for name in NOISY_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)


def level_from_flags(verbose: bool = False, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING
