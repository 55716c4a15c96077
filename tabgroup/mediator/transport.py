"""
Native messaging framing between the mediator and the browser extension.

Every message is a 4-byte length in native byte order followed by that many
bytes of UTF-8 encoded JSON.
"""
import json
import struct
import sys
from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import BinaryIO

from tabgroup.mediator.log import mediator_logger

LENGTH_FORMAT = '@I'
LENGTH_SIZE = struct.calcsize(LENGTH_FORMAT)


class Transport(ABC):
    @abstractmethod
    def send(self, command: dict) -> None:
        pass

    @abstractmethod
    def recv(self) -> Any:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


def default_transport() -> Transport:
    return StdTransport(sys.stdin.buffer, sys.stdout.buffer)


class TransportError(Exception):
    pass


def encode_message(message) -> bytes:
    content = json.dumps(message).encode('utf8')
    return struct.pack(LENGTH_FORMAT, len(content)) + content


class StdTransport(Transport):
    def __init__(self, input_file: BinaryIO, output_file: BinaryIO):
        self._in = input_file
        self._out = output_file

    def send(self, command: dict) -> None:
        mediator_logger.info('StdTransport SENDING: %s', command)
        self._out.write(encode_message(command))
        self._out.flush()
        mediator_logger.info('StdTransport SENDING DONE: %s', command)

    def recv(self) -> Any:
        mediator_logger.info('StdTransport RECEIVING')
        raw_length = self._in.read(LENGTH_SIZE)
        if len(raw_length) != LENGTH_SIZE:
            raise TransportError('StdTransport: cannot read, raw_length is %r' % raw_length)
        message_length = struct.unpack(LENGTH_FORMAT, raw_length)[0]
        raw_message = self._in.read(message_length)
        if len(raw_message) != message_length:
            raise TransportError('StdTransport: expected %s bytes, got %s'
                                 % (message_length, len(raw_message)))
        message = raw_message.decode('utf8')
        mediator_logger.info('StdTransport RECEIVED: %s', message.encode('utf8'))
        try:
            return json.loads(message)
        except ValueError as e:
            raise TransportError('StdTransport: invalid JSON: %s' % e)

    def close(self):
        self._in.close()
        self._out.close()
