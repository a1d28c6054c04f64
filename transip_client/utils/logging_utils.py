import logging
import threading

from colorama import Fore, Style

from ..configuration import LoggingConfig

LOGGER_NAME = "transip-client"

# Predefined list of colors
THREAD_COLORS = [Fore.CYAN, Fore.GREEN, Fore.YELLOW, Fore.BLUE, Fore.WHITE, Fore.MAGENTA]
ASSIGNED_COLORS = {}

TRACE_LOGLEVEL = 5
logging.addLevelName(TRACE_LOGLEVEL, "TRACE")


def get_thread_color(thread_id):
    """
    Retrieves a color for the thread, assigning and remembering it for future calls.
    :param thread_id: Unique thread identifier (integer).
    :return: A color from the available list, or a default color if none are available.
    """
    if thread_id in ASSIGNED_COLORS:
        return ASSIGNED_COLORS[thread_id]

    if THREAD_COLORS:
        color = THREAD_COLORS.pop(0)
        ASSIGNED_COLORS[thread_id] = color
        return color
    else:
        return Fore.RESET


class ThreadColorFormatter(logging.Formatter):
    """
    Colors every line by the emitting thread, warnings and above in red.
    """

    def format(self, record):
        thread_color = get_thread_color(threading.get_ident())

        if record.levelno >= logging.WARNING:
            thread_color = Fore.RED

        log_line = super().format(record)
        return f"{thread_color}{log_line}{Style.RESET_ALL}"


class ClientLogger(logging.Logger):
    def __init__(self, name, level=logging.NOTSET):
        super().__init__(name, level)

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE_LOGLEVEL):
            self._log(TRACE_LOGLEVEL, msg, args, **kwargs)


logging.setLoggerClass(ClientLogger)


def init_logger(logging_config: LoggingConfig, name=LOGGER_NAME):
    logger = get_logger(name)
    level = logging_config.level.upper()
    logger.setLevel(logging.getLevelNamesMapping()[level])

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter_args = {
        'fmt': "{asctime:^19} | {name:^16.16} | {levelname[0]:^1} | {thread:^10} | {message}",
        'style': "{",
        'datefmt': "%Y-%m-%d %H:%M:%S"
    }

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ThreadColorFormatter(**formatter_args))
    logger.addHandler(console_handler)

    file_config = logging_config.file
    if file_config:
        file_handler = logging.FileHandler(file_config.path, mode='a')
        file_handler.setFormatter(logging.Formatter(**formatter_args))
        logger.addHandler(file_handler)


def get_logger(name=LOGGER_NAME):
    """
    Returns a logger instance configured for the given name.
    """
    logger = logging.getLogger(name)
    logger.propagate = False

    return logger
