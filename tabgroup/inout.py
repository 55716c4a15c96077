import os
import socket
import sys
from subprocess import CalledProcessError
from subprocess import check_call
from tempfile import NamedTemporaryFile
from typing import Iterable
from typing import List
from typing import Optional

from select import select

from tabgroup.env import max_http_port
from tabgroup.env import min_http_port
from tabgroup.files import slurp_lines
from tabgroup.platform import get_editor


def get_mediator_ports() -> Iterable:
    return range(min_http_port(), max_http_port())


def get_available_tcp_port(start=1025, end=65536, host='127.0.0.1'):
    for port in range(start, end):
        if not is_port_accepting_connections(port, host):
            return port
    raise RuntimeError('Cannot find available port in range %d:%d' % (start, end))


def is_port_accepting_connections(port, host='127.0.0.1'):
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.settimeout(0.100)
    result = s.connect_ex((host, port))
    s.close()
    return result == 0


def save_lines_to_file(lines, filename):
    with open(filename, 'w', encoding='utf-8') as file_:
        file_.write('\n'.join(lines))


def maybe_remove_file(filename):
    if os.path.exists(filename):
        os.remove(filename)


def run_editor(executable: str, filename: str):
    return check_call([executable, filename])


def edit_lines_in_editor(lines_before: List[str]) -> Optional[List[str]]:
    """
    Open lines in the user's editor and return the saved lines, or None if
    the editor exited with an error.
    """
    with NamedTemporaryFile(suffix='.tsv') as file_:
        file_name = file_.name
    save_lines_to_file(lines_before, file_name)
    try:
        run_editor(get_editor(), file_name)
        return slurp_lines(file_name)
    except CalledProcessError:
        return None
    finally:
        maybe_remove_file(file_name)


def read_stdin(timeout=1.0):
    if select([sys.stdin, ], [], [], timeout)[0]:
        return sys.stdin.read()
    return ''


def marshal(obj):
    if isinstance(obj, str):
        return obj.encode('utf-8')
    if isinstance(obj, list):
        data = '\n'.join(map(str, obj)) + '\n'
        return data.encode('utf-8')
    return str(obj).encode('utf-8')


def stdout_buffer_write(message):
    return sys.stdout.buffer.write(message)
