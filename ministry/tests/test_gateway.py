"""
Submission gateways: HTTP envelope handling and the in-process backend.

Run with:
    python manage.py test ministry.tests.test_gateway -v 2
"""
from django.test import SimpleTestCase, TestCase, override_settings
from unittest.mock import Mock
from ministry.gateway import GatewayError, HttpMinisterGateway, LocalMinisterGateway, get_gateway
from ministry.models import Minister
from .helpers import make_minister, minister_draft
import requests


def response(status=200, body=None):
    mock = Mock()
    mock.status_code = status
    mock.ok = 200 <= status < 300
    if isinstance(body, Exception):
        mock.json.side_effect = body
    else:
        mock.json.return_value = body
    return mock


class HttpGatewayTest(SimpleTestCase):

    def gateway(self, *responses):
        session = Mock()
        session.request.side_effect = list(responses)
        return HttpMinisterGateway(base_url="https://ministry.example/api/", timeout=5, session=session), session

    def test_create_posts_once(self):
        gateway, session = self.gateway(response(201, {"success": True, "data": {"id": 9}}))
        result = gateway.create({"first_name": "Juan"})

        self.assertEqual(result, {"id": 9})
        session.request.assert_called_once_with(
            "POST", "https://ministry.example/api/minister",
            json={"first_name": "Juan"},
            headers={"Accept": "application/json"},
            timeout=5,
        )

    def test_update_puts_once(self):
        gateway, session = self.gateway(response(200, {"success": True, "data": {"id": 4}}))
        gateway.update(4, {"first_name": "Juan"})
        self.assertEqual(session.request.call_count, 1)
        method, url = session.request.call_args.args
        self.assertEqual((method, url), ("PUT", "https://ministry.example/api/minister/4"))

    def test_error_envelope_raises_with_message(self):
        body = {"success": False, "error": "Validation failed",
                "details": [{"field": "first_name", "message": "This field is required."}]}
        gateway, _ = self.gateway(response(400, body))
        with self.assertRaises(GatewayError) as ctx:
            gateway.create({})
        self.assertEqual(ctx.exception.message, "Validation failed")
        self.assertEqual(ctx.exception.status, 400)
        self.assertEqual(ctx.exception.details[0]["field"], "first_name")

    def test_success_false_with_200_is_an_error(self):
        gateway, _ = self.gateway(response(200, {"success": False, "message": "Rejected"}))
        with self.assertRaises(GatewayError) as ctx:
            gateway.create({})
        self.assertEqual(ctx.exception.message, "Rejected")

    def test_non_json_error_reports_status(self):
        gateway, _ = self.gateway(response(502, ValueError("not json")))
        with self.assertRaises(GatewayError) as ctx:
            gateway.create({})
        self.assertEqual(ctx.exception.message, "HTTP error! status: 502")

    def test_network_failure(self):
        gateway, _ = self.gateway(requests.ConnectionError("refused"))
        with self.assertRaises(GatewayError):
            gateway.create({})


class LocalGatewayTest(TestCase):

    def test_create_saves_and_returns_dict(self):
        result = LocalMinisterGateway().create(minister_draft())
        self.assertEqual(Minister.objects.get().pk, result["id"])
        self.assertEqual(result["full_name"], "Juan Dela Cruz")

    def test_validation_error_becomes_gateway_error(self):
        with self.assertRaises(GatewayError) as ctx:
            LocalMinisterGateway().create(minister_draft(last_name=""))
        self.assertEqual(ctx.exception.status, 400)
        self.assertTrue(ctx.exception.details)

    def test_update_missing_minister(self):
        with self.assertRaises(GatewayError) as ctx:
            LocalMinisterGateway().update(12345, minister_draft())
        self.assertEqual(ctx.exception.status, 404)

    def test_update_existing(self):
        minister = make_minister()
        LocalMinisterGateway().update(minister.pk, minister_draft(nickname="Jun"))
        minister.refresh_from_db()
        self.assertEqual(minister.nickname, "Jun")

    @override_settings(MINISTRY_GATEWAY="ministry.gateway.HttpMinisterGateway")
    def test_get_gateway_follows_settings(self):
        self.assertIsInstance(get_gateway(), HttpMinisterGateway)
