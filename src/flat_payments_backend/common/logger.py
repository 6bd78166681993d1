'''
universal logger
'''
import logging
import sys

from .config import settings

# Attributes every LogRecord has; anything else came in through `extra`.
_RESERVED_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


class ContextFormatter(logging.Formatter):
    """
    Appends the fields passed through `extra` (flat_id, payment_id, ...)
    as key=value pairs after the message.
    """
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = {
            key: value for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith('_')
        }
        if not context:
            return text
        pairs = ' '.join(f'{key}={value}' for key, value in sorted(context.items()))
        return f'{text}\n   [{pairs}]'


def setup_logger():
    """
    Configures and returns the application logger.
    """
    logger = logging.getLogger('flat-payments')
    logger.setLevel(settings.LOG_LEVEL.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        '%(asctime)s - %(module)s - %(levelname)s\n - %(message)s'
    ))

    if not logger.handlers:
        logger.addHandler(handler)

    return logger

# Create a single logger instance to be imported by other modules
log = setup_logger()

def get_logger() -> logging.Logger:
    """FastAPI dependency that hands the application logger to the services."""
    return log
