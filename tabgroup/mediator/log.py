import logging
import logging.handlers

from tabgroup.files import in_temp_dir


def _init_logger(name, tag, filename: str):
    FORMAT = '%(asctime)-15s %(process)-5d %(levelname)-8s %(filename)s:%(lineno)d:%(funcName)s %(message)s'
    MAX_LOG_SIZE = 50 * 1024 * 1024
    LOG_BACKUP_COUNT = 1

    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    handler = logging.handlers.RotatingFileHandler(
        filename=filename,
        maxBytes=MAX_LOG_SIZE,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8',
    )
    handler.setFormatter(logging.Formatter(FORMAT))
    log.addHandler(handler)
    log.info('Logger has been created (%s)', tag)
    return log


def init_tabgroup_logger(tag: str):
    return _init_logger('tabgroup', tag, in_temp_dir('tabgroup.log'))


def init_mediator_logger(tag: str):
    return _init_logger('tabgroup.mediator', tag, in_temp_dir('tabgroup_mediator.log'))


def disable_logging():
    # disables flask request logging
    log = logging.getLogger('werkzeug')
    log.setLevel(logging.ERROR)
    log.disabled = True


def disable_click_echo():
    """Flask uses click, which unconditionally prints startup banners"""

    def numb_echo(*args, **kwargs):
        pass

    import click
    click.echo = numb_echo
    click.secho = numb_echo


mediator_logger = init_mediator_logger('mediator')
tabgroup_logger = init_tabgroup_logger('tabgroup')
