import argparse
import logging
import os
import sys

import uvicorn

from clock_server.core.config import get_settings
from clock_server.core.logging_config import configure_logging

LOG = logging.getLogger("clock_server.run")

APP_PATH = "clock_server.main:app"


class ClockServer(uvicorn.Server):
    """uvicorn server that announces the port once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            LOG.info("Clock server running on port %s", self.bound_port())

    def bound_port(self) -> int:
        for server in self.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self.config.port


def build_server(host: str, port: int) -> ClockServer:
    return ClockServer(uvicorn.Config(APP_PATH, host=host, port=port, log_config=None))


def _startup_failed(host: str, port: int, reason: object) -> None:
    LOG.error("Failed to start clock server host=%s port=%s err=%s", host, port, reason)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the clock server")
    parser.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: PORT env var or 3000)")

    args = parser.parse_args(argv)

    if args.port is not None:
        os.environ["PORT"] = str(args.port)
        get_settings.cache_clear()

    settings = get_settings()
    host = args.host or settings.HOST
    port = settings.PORT

    configure_logging(settings)

    if not 0 < port < 65536:
        _startup_failed(host, port, "port out of range")

    server = build_server(host, port)
    try:
        server.run()
    except KeyboardInterrupt:
        LOG.info("Clock server stopped by user")
        sys.exit(0)
    except SystemExit as exc:
        # uvicorn exits on bind errors; its code varies between releases
        if exc.code not in (None, 0):
            _startup_failed(host, port, f"exit={exc.code}")
        raise
    if not server.started:
        _startup_failed(host, port, "server did not start")


if __name__ == "__main__":
    main()
