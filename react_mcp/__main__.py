"""Run the react-mcp server.

Usage:
    python -m react_mcp [--transport stdio|http] [--port PORT] [--env-file FILE]

stdio is the default, for MCP clients that spawn the server themselves.
Whatever the transport, every process still running when the server stops
is sent SIGTERM before exit.
"""

import argparse
import asyncio
import dataclasses
import logging
import signal
from pathlib import Path

import uvicorn

from react_mcp.config import Config
from react_mcp.process_manager import ProcessSupervisor
from react_mcp.server import create_server

log = logging.getLogger(__name__)


async def _run(config: Config, transport: str) -> None:
    supervisor = ProcessSupervisor()
    server = create_server(supervisor=supervisor, config=config)

    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    uvi: uvicorn.Server | None = None
    if transport == "http":
        # Run uvicorn in the same event loop so the supervisor's async
        # tasks (stream readers, exit waiters) stay alive.
        uvi = uvicorn.Server(
            uvicorn.Config(
                server.streamable_http_app(),
                host=config.host,
                port=config.port,
                log_level="info",
            )
        )
        # _serve() skips uvicorn's capture_signals(), which would replace
        # the handlers installed above.
        serve_task = asyncio.create_task(uvi._serve())
    else:
        serve_task = asyncio.create_task(server.run_stdio_async())

    shutdown_task = asyncio.create_task(shutdown.wait())
    try:
        # stdio ends by itself when the client closes the stream
        await asyncio.wait(
            {serve_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED,
        )
        if shutdown.is_set():
            log.info("Signal received, shutting down")

        if uvi is not None:
            uvi.should_exit = True
            await serve_task
        elif not serve_task.done():
            serve_task.cancel()
            try:
                await serve_task
            except asyncio.CancelledError:
                pass
    finally:
        shutdown_task.cancel()
        log.info("Stopping all running processes")
        supervisor.shutdown_cleanup()


def main() -> None:
    parser = argparse.ArgumentParser(description="React MCP server")
    parser.add_argument(
        "--transport", choices=("stdio", "http"), default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--port", type=int, default=None,
        help="Port for the HTTP transport (default: REACT_MCP_PORT or 8901)",
    )
    parser.add_argument(
        "--env-file", type=Path, default=None,
        help="Load settings from this .env file",
    )
    args = parser.parse_args()

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [react-mcp] %(levelname)s %(message)s",
    )

    # The MCP SDK logs a full traceback when an HTTP client disconnects
    # before the response is sent (ClosedResourceError). Downgrade it.
    class _SuppressDisconnect(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            if record.exc_info and record.exc_info[1] is not None:
                if "ClosedResourceError" in str(record.exc_info[1]):
                    record.levelno = logging.DEBUG
                    record.levelname = "DEBUG"
                    record.msg = "Client disconnected before response completed"
                    record.exc_info = None
                    record.exc_text = None
            return True

    logging.getLogger("mcp.server.streamable_http_manager").addFilter(
        _SuppressDisconnect()
    )

    config = Config.from_env(args.env_file)
    if args.port is not None:
        config = dataclasses.replace(config, port=args.port)

    if args.transport == "http":
        log.info("Starting react-mcp on http://%s:%d/mcp", config.host, config.port)
    else:
        log.info("Starting react-mcp on stdio")
    asyncio.run(_run(config, args.transport))


if __name__ == "__main__":
    main()
