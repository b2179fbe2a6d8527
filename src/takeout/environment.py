import socket

from .interfaces import Environment
from .settings import get_settings


class LocalEnvironment(Environment):
    def __init__(self, host: str | None = None):
        self.host = host or get_settings().PORT_CHECK_HOST

    def port_is_available(self, port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((self.host, port))
            except OSError:
                return False
        return True
