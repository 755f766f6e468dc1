import sys
import logging

# Set application name.
logger = logging.getLogger('pwexpiry')
logger.setLevel(logging.INFO)

# Sortable, timezone-aware timestamp.
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S%z'

DIVIDER = '-' * 60


class _Formatter(logging.Formatter):
    """Write records flagged with `bare` without timestamp."""

    def format(self, record):
        if getattr(record, 'bare', False):
            return record.getMessage()

        return logging.Formatter.format(self, record)


def _file_handler(path, level):
    _handler = logging.FileHandler(path, encoding='utf-8')
    _handler.setLevel(level)
    _handler.setFormatter(_Formatter('%(asctime)s %(message)s', datefmt=DATE_FORMAT))
    return _handler


def setup_logging(log_file, error_log_file=None, level='info', foreground=False):
    """Attach handlers of current run, remove handlers of previous run.

    Every message goes to `log_file`, messages logged with level ERROR are
    also written to `error_log_file`. With `foreground`, log lines are printed
    to stdout too.
    """
    for _handler in list(logger.handlers):
        logger.removeHandler(_handler)
        _handler.close()

    logger.setLevel(getattr(logging, str(level).upper()))

    logger.addHandler(_file_handler(log_file, logging.DEBUG))

    if error_log_file:
        logger.addHandler(_file_handler(error_log_file, logging.ERROR))

    if foreground:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(_Formatter('%(asctime)s %(message)s', datefmt=DATE_FORMAT))
        logger.addHandler(_handler)

    return logger


def log(message='', to_error_log=False, section_break=False, minor_break=False):
    """Write one entry to the run log.

    Failures while writing are reported to stderr by `logging` itself, they
    never raise.
    """
    if section_break:
        logger.info('\n\n', extra={'bare': True})
        return None

    if minor_break:
        logger.info(DIVIDER)
        return None

    if to_error_log:
        logger.error(message)
    else:
        logger.info(message)

    return None
