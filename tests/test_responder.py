"""
Responder tests for Hello Server.

These tests drive the Flask application through its test client and verify
that every method and path gets the same fixed response.
"""

import io
import unittest
import sys
import os
from unittest.mock import patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hello_server.responder import (
    RESPONSE_BODY,
    RESPONSE_CONTENT_TYPE,
    build_response,
    discard_body,
)
from hello_server import server
from hello_server.server import create_flask_app

EXPECTED_BODY = b"Hello, Worllld! I MADE A CHANGE : )\n"


class TestBuildResponse(unittest.TestCase):
    """Test the fixed response itself."""

    def test_body_is_verbatim(self):
        self.assertEqual(RESPONSE_BODY.encode("utf-8"), EXPECTED_BODY)

    def test_build_response(self):
        response = build_response()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["Content-Type"], "text/plain")
        self.assertEqual(response.get_data(), EXPECTED_BODY)
        self.assertEqual(response.headers["Content-Length"], str(len(EXPECTED_BODY)))

    def test_build_response_returns_fresh_objects(self):
        first = build_response()
        second = build_response()

        self.assertIsNot(first, second)
        first.set_data(b"changed")
        self.assertEqual(second.get_data(), EXPECTED_BODY)


class TestDiscardBody(unittest.TestCase):
    """Test request body draining."""

    def test_discards_everything(self):
        stream = io.BytesIO(b"x" * 200000)

        self.assertEqual(discard_body(stream, chunk_size=4096), 200000)
        self.assertEqual(stream.read(), b"")

    def test_empty_stream(self):
        self.assertEqual(discard_body(io.BytesIO(b"")), 0)


class TestFlaskApp(unittest.TestCase):
    """Test the application through the Flask test client."""

    def setUp(self):
        self.app = create_flask_app()
        self.client = self.app.test_client()

    def assertFixedResponse(self, response, check_body=True):
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["Content-Type"], RESPONSE_CONTENT_TYPE)
        if check_body:
            self.assertEqual(response.data, EXPECTED_BODY)

    def test_methods_and_paths(self):
        """Every method and path gets the fixed response."""
        methods = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]
        paths = ["/", "/anything", "/a/b/c?x=1", "/static/app.js", "/trailing/"]

        for method in methods:
            for path in paths:
                with self.subTest(method=method, path=path):
                    self.assertFixedResponse(self.client.open(path, method=method))

    def test_arbitrary_verbs(self):
        for method in ["BREW", "PURGE", "PROPFIND", "FOO"]:
            with self.subTest(method=method):
                self.assertFixedResponse(self.client.open("/x/y", method=method))

    def test_options_is_not_answered_by_flask(self):
        response = self.client.options("/")

        self.assertFixedResponse(response)
        self.assertNotIn("Allow", response.headers)

    def test_head(self):
        response = self.client.head("/anything")

        self.assertFixedResponse(response, check_body=False)
        self.assertEqual(response.data, b"")

    def test_request_headers_are_ignored(self):
        response = self.client.get(
            "/",
            headers={"Accept": "application/json", "Authorization": "Bearer nope"},
        )

        self.assertFixedResponse(response)

    def test_malformed_body(self):
        response = self.client.post(
            "/api", data=b"{not json", content_type="application/json"
        )

        self.assertFixedResponse(response)

    def test_large_body(self):
        response = self.client.post("/upload", data=b"x" * (2 * 1024 * 1024))

        self.assertFixedResponse(response)

    def test_repeated_requests(self):
        for _ in range(3):
            self.assertFixedResponse(self.client.get("/"))

    def test_empty_path(self):
        """An empty PATH_INFO would otherwise be redirected to the root."""
        response = self.client.get("/", environ_overrides={"PATH_INFO": ""})

        self.assertFixedResponse(response)
        self.assertNotIn("Location", response.headers)

    def test_unhandled_exception(self):
        """Bugs inside the app are logged and the fixed response still goes out."""
        with patch("hello_server.server.discard_body", side_effect=RuntimeError("boom")):
            with self.assertLogs("hello_server.server", level="ERROR") as logs:
                response = self.client.post("/", data=b"payload")

        self.assertFixedResponse(response)
        self.assertIn("boom", logs.output[0])


class TestDebugMode(unittest.TestCase):
    """Test that FLASK_DEBUG reaches the application."""

    @patch.object(server, "FLASK_DEBUG", False)
    def test_debug_off_when_config_off(self):
        self.assertFalse(create_flask_app().debug)

    @patch.object(server, "FLASK_DEBUG", True)
    def test_debug_from_config(self):
        with self.assertLogs("hello_server.server", level="WARNING"):
            app = create_flask_app()

        self.assertTrue(app.debug)
        self.assertTrue(app.config["DEBUG"])

    @patch.object(server, "FLASK_DEBUG", True)
    def test_explicit_argument_wins(self):
        self.assertFalse(create_flask_app(debug=False).debug)

    def test_debug_app_still_answers(self):
        with self.assertLogs("hello_server.server", level="WARNING"):
            app = create_flask_app(debug=True)

        response = app.test_client().open("/x", method="BREW")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, EXPECTED_BODY)


if __name__ == "__main__":
    unittest.main()
