import logging
import math
import sys


class RPNError(Exception):
    '''
    User-facing calculator error. First argument is the status message.
    '''
    @property
    def message(self):
        return self.args[0]


class UnknownCommand(RPNError):
    pass


class ArityError(RPNError):
    pass


class DomainError(RPNError):
    pass


def fmt_number(x):
    '''
    Render a float for the status line and stack listing.

    Integral values lose their trailing .0, so 7.0 shows as 7.
    '''
    x = float(x)
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'inf' if x > 0 else '-inf'
    if x.is_integer() and abs(x) < 1e16:
        return str(int(x))
    return repr(x)


def setup_logging(level=logging.WARNING, log_file=None, console=True):
    '''
    Configure the rpncalc package logger.

    :param level: Logging level (e.g. logging.DEBUG).
    :param log_file: Optional path to also write logs to.
    :param console: Log to stderr. Off while the TUI owns the terminal.
    '''
    logger = logging.getLogger('rpncalc')
    logger.setLevel(level)
    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S')
    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w',
                                            encoding='utf-8'))
    if not handlers:
        handlers.append(logging.NullHandler())
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.debug('Logging initialized.')
    return logger
