import logging
from logging.handlers import RotatingFileHandler

from colorlog import ColoredFormatter


LOGGER_FORMAT = "%(asctime)s %(name)s %(log_color)s%(levelname)s%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
BASIC_LOGGER_NAME = "basic"


class TestNameAdapter(logging.LoggerAdapter):
    """
    Prefix every record with the name of the test that emitted it.
    """

    __test__ = False

    def process(self, msg, kwargs):
        return f"[{self.extra['test_name']}] {msg}", kwargs


def get_test_logger(test_name, logger=None):
    """
    Get a logger scoped to a single test run.

    Args:
        test_name (str): Name of the test.
        logger (logging.Logger): Logger to wrap, defaults to the rook_harness logger.

    Returns:
        TestNameAdapter: Logger adapter carrying the test name.
    """
    return TestNameAdapter(
        logger=logger or logging.getLogger("rook_harness"),
        extra={"test_name": test_name},
    )


def setup_logging(log_file, log_level=logging.INFO):
    """
    Configure the root logger for a test session.

    Console output is colored, the full log goes to log_file. The "basic"
    logger prints test status lines without any decoration.

    Args:
        log_file (str): Path of the session log file.
        log_level (int or str): Log level for the root logger.
    """
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        ColoredFormatter(
            fmt=LOGGER_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    file_handler = RotatingFileHandler(
        filename=log_file, maxBytes=100 * 1024 * 1024, backupCount=20
    )
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    basic_logger = logging.getLogger(BASIC_LOGGER_NAME)
    basic_handler = logging.StreamHandler()
    basic_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    basic_logger.addHandler(basic_handler)
    basic_logger.addHandler(file_handler)
    basic_logger.setLevel(logging.INFO)
    basic_logger.propagate = False
