"""
Hello Server - Flask Server

This module implements the HTTP server using the Flask application factory
pattern. Every request, whatever its method, path, headers or body, gets the
same plain-text response. The module-level ``app`` is what Gunicorn imports;
``main`` runs the threaded Werkzeug server directly.
"""

import logging
import socket
import sys
from typing import Optional

from flask import Flask, request
from werkzeug.exceptions import HTTPException
from werkzeug.serving import BaseWSGIServer, make_server, select_address_family

from hello_server.config import FLASK_DEBUG, HOST, PORT
from hello_server.responder import build_response, discard_body

logger = logging.getLogger(__name__)

# Flask answers OPTIONS itself unless it is listed here with automatic options off
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]

LISTEN_BACKLOG = 128


class ServerStartupError(Exception):
    """Raised when the listener cannot be bound."""

    pass


def create_flask_app(debug: Optional[bool] = None) -> Flask:
    """
    Create Flask application using factory pattern.

    Args:
        debug: Flask debug mode, FLASK_DEBUG from the environment by default

    Returns:
        Configured Flask application
    """
    app = Flask(__name__, static_folder=None)
    app.debug = FLASK_DEBUG if debug is None else debug

    if app.debug:
        logger.warning("Running in DEBUG mode - not suitable for production!")

    register_routes(app)
    register_error_handlers(app)

    logger.debug("Flask application initialized")
    return app


def register_routes(app: Flask) -> None:
    """
    Register the responder.

    The fixed response is returned from ``before_request``, before Flask
    acts on the URL match, so no routing outcome (redirect, miss, wrong
    method) can replace it. The catch-all route covers anything that skips the hook.

    Args:
        app: Flask application instance
    """

    @app.before_request
    def respond_before_routing():
        # Drain the body unread so keep-alive framing stays intact
        discard_body(request.stream)
        return build_response()

    @app.route(
        "/",
        defaults={"path": ""},
        methods=ROUTED_METHODS,
        provide_automatic_options=False,
    )
    @app.route("/<path:path>", methods=ROUTED_METHODS, provide_automatic_options=False)
    def respond(path):
        return build_response()


def register_error_handlers(app: Flask) -> None:
    """
    Register Flask error handlers.

    No request is ever rejected: routing misses, unknown verbs and framing
    errors raised by Werkzeug all get the fixed response.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        logger.debug(f"Answering {error.code} for {request.method} {request.path} with the fixed response")
        return build_response()

    @app.errorhandler(Exception)
    def handle_exception(e):
        """Log unhandled exceptions and still answer with the fixed response."""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return build_response()


# =============================================================================
# LISTENER STARTUP
# =============================================================================


def bind_listener(host: str, port: int) -> socket.socket:
    """
    Bind and listen on ``host:port``.

    Raises:
        ServerStartupError: If the address is in use or cannot be bound
    """
    sock = socket.socket(select_address_family(host, port), socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(LISTEN_BACKLOG)
    except OSError as e:
        sock.close()
        raise ServerStartupError(f"Could not bind {host}:{port}: {e.strerror or e}") from e
    return sock


def start_server(host: str, port: int, application: Optional[Flask] = None) -> BaseWSGIServer:
    """
    Bind the listener and wrap it in a threaded Werkzeug server.

    The socket is bound here rather than by Werkzeug, which exits the process
    on bind errors instead of raising.

    Args:
        host: Interface to listen on
        port: TCP port, 0 for an ephemeral one
        application: WSGI app to serve, the module-level ``app`` by default

    Returns:
        A server ready for ``serve_forever``; the bound port is ``server.port``

    Raises:
        ServerStartupError: If the listener cannot be bound
    """
    sock = bind_listener(host, port)
    try:
        # Werkzeug duplicates the descriptor, so ours is closed afterwards
        server = make_server(
            host,
            port,
            application or app,
            threaded=True,
            fd=sock.fileno(),
        )
    finally:
        sock.close()
    return server


# Create the Flask app for Gunicorn to import
app = create_flask_app()


def main() -> int:
    """
    Development and standalone entry point.
    For production, use Gunicorn with gunicorn.conf.py instead.
    """
    try:
        server = start_server(HOST, PORT)
    except ServerStartupError as e:
        logger.error(f"Failed to start server: {e}")
        return 1

    logger.info(f"Server running at http://localhost:{server.port}/")

    # Werkzeug swallows KeyboardInterrupt and closes the socket on return
    server.serve_forever()
    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
