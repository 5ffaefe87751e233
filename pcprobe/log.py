import colorama
import logging
import os
import warnings
from logging import (getLogger, CRITICAL, ERROR, WARNING, INFO,  # noqa: F401
                     DEBUG)

from .iterutils import tween


class ColoredStreamHandler(logging.StreamHandler):
    _format_codes = {
        DEBUG: '1;35',
        INFO: '1;34',
        WARNING: '1;33',
        ERROR: '1;31',
        CRITICAL: '1;41;37',
    }

    def format(self, record):
        record.coloredlevel = '\033[{format}m{name}\033[0m'.format(
            format=self._format_codes.get(record.levelno, '1'),
            name=record.levelname.lower()
        )
        return super().format(record)


def _clicolor(environ):
    if environ.get('CLICOLOR_FORCE', '0') != '0':
        return 'always'
    if 'CLICOLOR' in environ:
        return 'never' if environ['CLICOLOR'] == '0' else 'auto'
    return None


def _init_logging(logger, debug, stream=None):
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = ColoredStreamHandler(stream)
    fmt = '%(coloredlevel)s: %(message)s'
    if debug:
        fmt = '%(coloredlevel)s: \033[90m%(name)s:\033[0m %(message)s'
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def init(color='auto', debug=False, warn_once=False, environ=os.environ,
         stream=None):
    color = _clicolor(environ) or color
    if color == 'always':
        colorama.init(strip=False)
    elif color == 'never':
        colorama.init(strip=True, convert=False)
    else:  # color == 'auto'
        colorama.init()

    if warn_once:
        warnings.filterwarnings('once')

    _init_logging(logging.root, debug, stream)


def format_message(*args):
    return ''.join(str(i) for i in tween(args, ' '))


def log_message(level, *args, logger=logging, **kwargs):
    logger.log(level, format_message(*args), **kwargs)


def info(*args):
    log_message(INFO, *args)


def debug(*args):
    log_message(DEBUG, *args)


def _showwarning(message, category, filename, lineno, file=None, line=None):
    log_message(WARNING, message)


warnings.showwarning = _showwarning
