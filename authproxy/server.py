"""
Lifecycle controller - binds the listening socket and serves until interrupted.

The server moves through three states:

    RUNNING  -> serving requests
    DRAINING -> first interrupt seen: listener closed, in-flight requests finish
    STOPPED  -> serving has ended

A second interrupt while DRAINING forces exit without waiting for in-flight
requests.
"""
from __future__ import annotations

import enum
import signal
import socket
from typing import List, Optional

import uvicorn

from authproxy.errors import SocketBindError
from authproxy.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BIND_HOST = "0.0.0.0"


class LifecycleState(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class Lifecycle:
    """One-shot RUNNING -> DRAINING -> STOPPED state machine."""

    def __init__(self):
        self.state = LifecycleState.RUNNING

    def begin_draining(self) -> bool:
        """Move to DRAINING. Returns False if shutdown had already started."""
        if self.state is not LifecycleState.RUNNING:
            return False
        self.state = LifecycleState.DRAINING
        return True

    def mark_stopped(self) -> None:
        self.state = LifecycleState.STOPPED


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Bind a TCP socket on host:port for the server to listen on.

    Raises:
        SocketBindError: If the address is in use, not permitted or invalid
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except (OSError, OverflowError) as e:
        sock.close()
        raise SocketBindError(host, port, str(e)) from e
    return sock


class ProxyServer(uvicorn.Server):
    """uvicorn server with an explicit, observable shutdown lifecycle."""

    def __init__(self, config: uvicorn.Config):
        super().__init__(config)
        self.lifecycle = Lifecycle()

    @property
    def state(self) -> LifecycleState:
        return self.lifecycle.state

    def handle_exit(self, sig: int, frame) -> None:
        # Signals are consumed here and not re-raised once serving ends
        if self.lifecycle.begin_draining():
            logger.info("Shutdown signal received, draining in-flight requests...")
            self.should_exit = True
        else:
            logger.warning("Second shutdown signal received, forcing exit")
            self.force_exit = True

    def request_shutdown(self) -> None:
        """Start a graceful shutdown as if an interrupt had been received."""
        self.handle_exit(signal.SIGINT, None)

    async def serve(self, sockets: Optional[List[socket.socket]] = None) -> None:
        try:
            await super().serve(sockets=sockets)
        finally:
            self.lifecycle.mark_stopped()
            logger.info("Server stopped")
