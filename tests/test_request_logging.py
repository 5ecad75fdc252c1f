import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.request_logging import REQUEST_ID_HEADER, install_request_logging, request_id_from_header


def _build_app() -> FastAPI:
    app = FastAPI()
    install_request_logging(app)

    @app.get("/ok")
    def ok():
        return {"status": "ok"}

    @app.get("/boom")
    def boom():
        raise RuntimeError("handler failed")

    return app


class RequestLoggingTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(_build_app(), raise_server_exceptions=False)

    def tearDown(self):
        self.client.close()

    def test_request_id_from_header_rejects_unsafe_values(self):
        self.assertEqual(request_id_from_header("req-1.a_b"), "req-1.a_b")
        generated = request_id_from_header("bad id\n")
        self.assertNotEqual(generated, "bad id\n")
        self.assertEqual(len(generated), 32)

    def test_successful_request_is_logged_with_request_id(self):
        with self.assertLogs("app.http", level="INFO") as logs:
            response = self.client.get("/ok", headers={REQUEST_ID_HEADER: "req-42"})
        self.assertEqual(response.headers[REQUEST_ID_HEADER], "req-42")
        self.assertTrue(any("GET /ok status=200" in line and "request_id=req-42" in line for line in logs.output))

    def test_failing_handler_is_still_logged(self):
        with self.assertLogs("app.http", level="INFO") as logs:
            response = self.client.get("/boom", headers={REQUEST_ID_HEADER: "req-500"})
        self.assertEqual(response.status_code, 500)
        self.assertTrue(any("GET /boom status=500" in line and "request_id=req-500" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
