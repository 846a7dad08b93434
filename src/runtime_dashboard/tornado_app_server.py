"""
Runtime Dashboard Web Server

Builds the JSON responders once at startup and serves them through Tornado.
"""
import asyncio
import logging
import signal
from concurrent.futures import ThreadPoolExecutor

import tornado.web

from .app_configuration import (
    load_config,
    get_refresh_interval,
    get_web_port,
    get_executor_threads
)
from .logging_config import setup_logging, get_logger
from .api import (
    DashboardConfigHandler,
    HealthCheckHandler,
    JsonResponderHandler
)

logger = get_logger(__name__, component="AppServer")

# Endpoints clients poll; successful hits are not logged
POLLED_PATHS = {"/config", "/health"}


def log_function(handler):
    """
    Custom log function that suppresses noisy polling endpoints.
    Only logs non-polling or failed requests.
    """
    status = handler.get_status()
    if handler.request.path in POLLED_PATHS and status < 400:
        return

    if status < 400:
        log_method = logging.info
    elif status < 500:
        log_method = logging.warning
    else:
        log_method = logging.error

    request_time = 1000.0 * handler.request.request_time()
    log_method(
        "%d %s %s (%.2fms)",
        status,
        handler.request.method,
        handler.request.uri,
        request_time,
    )

# --- Global State ---
executor: ThreadPoolExecutor | None = None
stop_event: asyncio.Event | None = None


def make_routes(responders, gateway=None):
    """
    Build Tornado routes for every path of every responder.

    Raises:
        ValueError: If two responders claim the same path
    """
    routes = []
    seen = {}
    for responder in responders:
        paths = responder.get_paths()
        if not paths:
            raise ValueError(f"{type(responder).__name__} declares no paths.")
        for path in sorted(paths):
            if path in seen:
                raise ValueError(
                    f"Path '{path}' claimed by both {seen[path]} and {type(responder).__name__}."
                )
            seen[path] = type(responder).__name__
            routes.append(
                (path, JsonResponderHandler, {'responder': responder, 'gateway': gateway})
            )
            logger.debug(f"Registered {path}", method="make_routes", responder=seen[path])
    return routes


def make_tornado_app(responders, gateway=None, debug=False):
    """
    Create and configure the Tornado application.

    Responders must be fully constructed before they are passed in; the
    app shares them across all requests.

    Args:
        responders: AsyncJsonResponder instances to serve
        gateway: Handle to the cluster leader, passed to every responder call
        debug: Include tracebacks in error responses

    Returns:
        Configured Tornado application
    """
    routes = [(r"/health", HealthCheckHandler)]
    routes.extend(make_routes(responders, gateway))

    return tornado.web.Application(
        routes,
        debug=False,
        serve_traceback=debug,
        log_function=log_function
    )


def create_responders(config, pool):
    """Construct all dashboard responders from configuration."""
    return [
        DashboardConfigHandler(pool, get_refresh_interval(config)),
    ]


async def start_server(config=None, gateway=None):
    """Initialize and start the dashboard web server."""
    global executor, stop_event

    config = config or load_config()
    setup_logging(
        level=config["logging"]["level"],
        log_file=config["logging"]["file"]
    )
    logger.info("Starting Runtime Dashboard...", method="start_server")

    executor = ThreadPoolExecutor(
        max_workers=get_executor_threads(config),
        thread_name_prefix="dashboard-responder"
    )

    server = None
    try:
        try:
            responders = create_responders(config, executor)
        except Exception as e:
            logger.critical(f"Failed to construct responders: {e}", method="start_server", exc_info=True)
            raise

        address = config["web"]["address"]
        port = get_web_port(config)
        app = make_tornado_app(responders, gateway)
        server = app.listen(port, address=address)
        logger.info(f"Dashboard listening on http://{address}:{port}", method="start_server")

        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, handle_signal, sig)
            except NotImplementedError:
                # Windows event loops; KeyboardInterrupt still reaches main()
                pass

        await stop_event.wait()
    finally:
        if server:
            server.stop()
        await shutdown()


async def shutdown():
    """Release server resources."""
    logger.info("Initiating shutdown...", method="shutdown")
    if executor:
        # Waiting for in-flight responder work blocks, keep it off the loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: executor.shutdown(wait=True))
    logger.info("Shutdown sequence complete.", method="shutdown")


def handle_signal(sig):
    """Handle interrupt signals."""
    logger.info(f"Received signal {sig}. Initiating graceful shutdown...", method="handle_signal")
    if stop_event:
        stop_event.set()


def main():
    """Main entry point for the server."""
    try:
        asyncio.run(start_server())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...", method="main")
    finally:
        logger.info("Server stopped.", method="main")


if __name__ == "__main__":
    main()
