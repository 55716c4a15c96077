#!/usr/bin/env python3

import logging
import os
import re
import socket

from tabgroup.env import http_iface
from tabgroup.env import load_dotenv
from tabgroup.inout import get_mediator_ports
from tabgroup.inout import is_port_accepting_connections
from tabgroup.mediator.const import DEFAULT_PARENT_WATCH_INTERVAL
from tabgroup.mediator.const import DEFAULT_SHUTDOWN_POLL_INTERVAL
from tabgroup.mediator.http_server import MediatorHttpServer
from tabgroup.mediator.log import disable_click_echo
from tabgroup.mediator.log import mediator_logger
from tabgroup.mediator.remote_api import default_remote_api
from tabgroup.mediator.transport import default_transport


def monkeypatch_socket_bind_allow_port_reuse():
    """Allow port reuse by default"""
    socket.socket._bind = socket.socket.bind

    def my_socket_bind(self, *args, **kwargs):
        mediator_logger.info('Custom bind called: %s, %s', args, kwargs)
        self.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return socket.socket._bind(self, *args, **kwargs)

    socket.socket.bind = my_socket_bind


def blacklist_loggers():
    blacklist = r'.*urllib.*|.*requests.*|.*werkzeug.*'
    for name in list(logging.root.manager.loggerDict):
        if re.match(blacklist, name) is not None:
            logger = logging.getLogger(name)
            logger.setLevel(logging.ERROR)
            logger.propagate = False


def mediator_main():
    load_dotenv()
    monkeypatch_socket_bind_allow_port_reuse()
    disable_click_echo()
    blacklist_loggers()

    port_range = list(get_mediator_ports())
    transport = default_transport()
    remote_api = default_remote_api(transport)
    host = http_iface()
    poll_interval = DEFAULT_SHUTDOWN_POLL_INTERVAL

    for port in port_range:
        mediator_logger.info('Starting mediator on %s:%s...', host, port)
        if is_port_accepting_connections(port, host):
            continue
        try:
            server = MediatorHttpServer(host, port, remote_api, poll_interval)
        except OSError as e:
            mediator_logger.info('Cannot bind on port %s: %s', port, e)
            continue

        try:
            thread = server.run.in_thread()
            server.run.on_signals()
            server.run.parent_watcher(thread.is_alive, interval=DEFAULT_PARENT_WATCH_INTERVAL)
            thread.join()
            mediator_logger.info('Exiting mediator pid=%s on %s:%s...', os.getpid(), host, port)
        except BrokenPipeError as e:
            mediator_logger.exception('Pipe has been closed (%s)', e)
            server.run.shutdown(join=True)
        break

    else:
        mediator_logger.error('No TCP ports available for bind in range %s', port_range)


def main():
    mediator_main()


if __name__ == '__main__':
    main()
