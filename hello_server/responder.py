"""
Hello Server - Responder

The one response this server ever gives, whatever the method, path, headers
or body of the request.
"""

from typing import IO

from flask import Response

RESPONSE_STATUS = 200
RESPONSE_CONTENT_TYPE = "text/plain"
RESPONSE_BODY = "Hello, Worllld! I MADE A CHANGE : )\n"

DRAIN_CHUNK_SIZE = 64 * 1024


def build_response() -> Response:
    """
    Build a fresh copy of the fixed response.

    ``content_type`` is passed instead of ``mimetype`` so Werkzeug sends the
    header exactly as ``text/plain`` without appending a charset.
    """
    return Response(
        RESPONSE_BODY,
        status=RESPONSE_STATUS,
        content_type=RESPONSE_CONTENT_TYPE,
    )


def discard_body(stream: IO[bytes], chunk_size: int = DRAIN_CHUNK_SIZE) -> int:
    """
    Read and drop whatever request body is left on ``stream``.

    Leaving an unread body on a keep-alive connection would have it parsed as
    the next request line. Returns the number of bytes discarded.
    """
    discarded = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return discarded
        discarded += len(chunk)
