"""Protocol-independent helpers for opening client and listening sockets."""

from __future__ import annotations

import socket
from typing import Optional, Union

LISTENQ = 1024

Port = Union[str, int]


def open_clientfd(hostname: str, port: Port) -> socket.socket:
    """Connect to ``hostname`` on the numeric ``port`` and return the socket.

    Every address that the name resolves to is tried in turn. Raises
    ``socket.gaierror`` when the lookup fails and ``OSError`` when no
    address accepts the connection.
    """
    flags = socket.AI_NUMERICSERV | socket.AI_ADDRCONFIG
    candidates = socket.getaddrinfo(
        hostname, str(port), type=socket.SOCK_STREAM, flags=flags
    )
    last_error: Optional[OSError] = None
    for family, socktype, proto, _canon, address in candidates:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            last_error = exc
            continue
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    if last_error is not None:
        raise last_error
    raise OSError(f"no address to connect to for {hostname}:{port}")


def open_listenfd(port: Port) -> socket.socket:
    """Return a socket listening on the numeric ``port`` on any local address.

    Raises ``socket.gaierror`` when the lookup fails and ``OSError`` when no
    address can be bound or the socket cannot listen.
    """
    flags = socket.AI_PASSIVE | socket.AI_ADDRCONFIG | socket.AI_NUMERICSERV
    candidates = socket.getaddrinfo(
        None, str(port), type=socket.SOCK_STREAM, flags=flags
    )
    last_error: Optional[OSError] = None
    listener: Optional[socket.socket] = None
    for family, socktype, proto, _canon, address in candidates:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as exc:
            last_error = exc
            continue
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(address)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        listener = sock
        break
    if listener is None:
        if last_error is not None:
            raise last_error
        raise OSError(f"no address to listen on for port {port}")
    try:
        listener.listen(LISTENQ)
    except OSError:
        listener.close()
        raise
    return listener