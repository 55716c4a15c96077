import os
from threading import Thread

from flask import Flask
from flask import request
from werkzeug.exceptions import BadRequest
from wsgiref.simple_server import make_server

from tabgroup.colors import is_valid_color
from tabgroup.const import DEFAULT_COLLAPSED
from tabgroup.mediator.log import mediator_logger
from tabgroup.mediator.remote_api import BrowserRemoteAPI
from tabgroup.mediator.runner import Runner
from tabgroup.mediator.transport import TransportError


def parse_group_request(payload) -> dict:
    if not isinstance(payload, dict):
        raise BadRequest('Expected a JSON object')
    tab_ids = payload.get('tab_ids')
    if not tab_ids or not isinstance(tab_ids, list):
        raise BadRequest('tab_ids must be a non-empty list')
    try:
        tab_ids = [int(tab_id) for tab_id in tab_ids]
    except (TypeError, ValueError):
        raise BadRequest('tab_ids must be integers: %s' % tab_ids)
    color = payload.get('color', 'grey')
    if not is_valid_color(color):
        raise BadRequest('Unknown color: %s' % color)
    return {
        'tab_ids': tab_ids,
        'title': str(payload.get('title', '')),
        'color': color,
        'collapsed': bool(payload.get('collapsed', DEFAULT_COLLAPSED)),
    }


class MediatorHttpServer:
    def __init__(self, host: str, port: int, remote_api: BrowserRemoteAPI, poll_interval: float):
        self.host: str = host
        self.port: int = port
        self.remote_api: BrowserRemoteAPI = remote_api
        self.pid: int = os.getpid()
        self.app = Flask(__name__)
        self.http_server = make_server(host=host, port=port, app=self.app)
        self._setup_routes()

        def serve():
            mediator_logger.info('Serving mediator on %s:%s', host, port)
            self.http_server.serve_forever(poll_interval=poll_interval)

        def shutdown(join: bool):
            mediator_logger.info('Closing mediator http server on %s:%s', host, port)
            self.http_server.server_close()
            mediator_logger.info('Shutting down mediator http server on %s:%s', host, port)
            thread = Thread(target=self.http_server.shutdown)
            thread.daemon = True
            thread.start()
            if join:
                thread.join()
            mediator_logger.info('Done shutting down mediator (is_alive=%s) http server on %s:%s',
                                 thread.is_alive(), host, port)

        self.run = Runner(serve, shutdown)

    def _setup_routes(self) -> None:
        mediator_logger.info('Starting mediator http server on %s:%s pid=%s', self.host, self.port, self.pid)
        self.app.register_error_handler(ConnectionError, self.error_handler)
        self.app.register_error_handler(TimeoutError, self.error_handler)
        self.app.register_error_handler(ValueError, self.error_handler)
        self.app.register_error_handler(TransportError, self.error_handler)
        self.app.route('/', methods=['GET'])(self.root_handler)
        self.app.route('/shutdown', methods=['GET'])(self.shutdown)
        self.app.route('/list_tabs', methods=['GET'])(self.list_tabs)
        self.app.route('/list_groups', methods=['GET'])(self.list_groups)
        self.app.route('/group_tabs', methods=['POST'])(self.group_tabs)
        self.app.route('/ungroup_tabs/<tab_ids>', methods=['GET'])(self.ungroup_tabs)
        self.app.route('/get_pid', methods=['GET'])(self.get_pid)
        self.app.route('/get_browser', methods=['GET'])(self.get_browser)

    def error_handler(self, e: Exception):
        mediator_logger.exception('Shutting down mediator http server due to exception: %s', e)
        # can't wait for shutdown here because we're processing a request right now,
        # we will get deadlocked if we wait (join=True)
        self.run.shutdown(join=False)
        return '<ERROR>'

    def root_handler(self):
        links = []
        for rule in self.app.url_map.iter_rules():
            methods = ','.join(sorted(rule.methods))
            line = '{0}\t{1}\t{2}'.format(rule.endpoint, methods, rule)
            links.append(line)
        return '\n'.join(links)

    def shutdown(self):
        # can't wait for shutdown here because we're processing a request right now,
        # we will get deadlocked if we wait (join=True)
        self.run.shutdown(join=False)
        return 'OK'

    def list_tabs(self):
        tabs = self.remote_api.list_tabs()
        return '\n'.join(tabs)

    def list_groups(self):
        groups = self.remote_api.list_groups()
        return '\n'.join(groups)

    def group_tabs(self):
        group = parse_group_request(request.get_json(silent=True))
        mediator_logger.info('Group tabs: %s', group)
        group_id = self.remote_api.group_tabs(**group)
        mediator_logger.info('Group tabs result: %s', group_id)
        return str(group_id)

    def ungroup_tabs(self, tab_ids):
        self.remote_api.ungroup_tabs(tab_ids)
        return 'OK'

    def get_pid(self):
        mediator_logger.info('getting pid')
        return str(os.getpid())

    def get_browser(self):
        mediator_logger.info('getting browser name')
        return self.remote_api.get_browser()
