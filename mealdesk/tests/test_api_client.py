import unittest

import httpx

from mealdesk.infra.Api_Client import ApiClient, ApiError, COMMUNICATION_ERROR


def _client(handler):
    return ApiClient(base_url="http://backend.test", transport=httpx.MockTransport(handler))


class TestApiClient(unittest.TestCase):

    def test_returns_decoded_json(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(201, json={"id": 7, "name": "Супи"})

        data = _client(handler).post("/api/categories", {"name": "Супи"})
        self.assertEqual(data, {"id": 7, "name": "Супи"})
        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["path"], "/api/categories")
        self.assertIn(b"name", seen["body"])

    def test_empty_body_is_none(self):
        client = _client(lambda request: httpx.Response(204))
        self.assertIsNone(client.delete("/api/categories/1"))

    def test_error_with_message(self):
        client = _client(lambda request: httpx.Response(404, json={"message": "Recipe not found"}))
        with self.assertRaises(ApiError) as ctx:
            client.get("/api/recipes/99")
        self.assertEqual(ctx.exception.message, "Recipe not found")
        self.assertEqual(ctx.exception.status_code, 404)

    def test_error_without_message_uses_reason_phrase(self):
        client = _client(lambda request: httpx.Response(400, json={"detail": "x"}))
        with self.assertRaises(ApiError) as ctx:
            client.get("/api/recipes")
        self.assertEqual(ctx.exception.message, "Error: Bad Request")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_unparseable_error_body(self):
        client = _client(lambda request: httpx.Response(500, text="<html>boom</html>"))
        with self.assertRaises(ApiError) as ctx:
            client.get("/api/recipes")
        self.assertEqual(ctx.exception.message, "HTTP 500: Internal Server Error")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_transport_failure_has_no_status(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with self.assertRaises(ApiError) as ctx:
            _client(handler).get("/api/recipes")
        self.assertEqual(ctx.exception.message, "Connection refused")
        self.assertIsNone(ctx.exception.status_code)

    def test_transport_failure_without_text(self):
        def handler(request):
            raise httpx.ReadTimeout("", request=request)

        with self.assertRaises(ApiError) as ctx:
            _client(handler).get("/api/recipes")
        self.assertEqual(ctx.exception.message, COMMUNICATION_ERROR)

    def test_redirects_are_followed(self):
        def handler(request):
            if request.url.path == "/api/recipes":
                return httpx.Response(307, headers={"Location": "/api/v2/recipes"})
            return httpx.Response(200, json=[{"id": 1}])

        self.assertEqual(_client(handler).get("/api/recipes"), [{"id": 1}])

    def test_leftover_redirect_is_an_error(self):
        client = _client(lambda request: httpx.Response(304))
        with self.assertRaises(ApiError) as ctx:
            client.get("/api/recipes")
        self.assertEqual(ctx.exception.status_code, 304)
        self.assertEqual(ctx.exception.message, "HTTP 304: Not Modified")

    def test_context_manager_closes(self):
        with _client(lambda request: httpx.Response(200, json=[])) as client:
            self.assertEqual(client.get("/api/users"), [])
        self.assertTrue(client._http.is_closed)


if __name__ == '__main__':
    unittest.main()
