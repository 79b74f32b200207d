"""
Unit tests for the month-scoped REST read (HTTP mocked).
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from teamcal.client import fetch_month_schedules


def _response(payload, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


class TestClient(unittest.TestCase):
    @patch("teamcal.client.requests.get")
    def test_request_shape(self, get: MagicMock) -> None:
        get.return_value = _response([{"schedule_id": 1}])

        data = fetch_month_schedules("http://api.local/", 2025, 3, token="abc")

        self.assertEqual(data, [{"schedule_id": 1}])
        args, kwargs = get.call_args
        self.assertEqual(args[0], "http://api.local/api/schedules/month")
        self.assertEqual(kwargs["params"], {"year": 2025, "month": 3})
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer abc")
        self.assertEqual(kwargs["headers"]["Cache-Control"], "no-store")
        self.assertEqual(kwargs["timeout"], 30)

    @patch("teamcal.client.requests.get")
    def test_no_token_no_auth_header(self, get: MagicMock) -> None:
        get.return_value = _response([])
        fetch_month_schedules("http://api.local", 2025, 3)
        self.assertNotIn("Authorization", get.call_args.kwargs["headers"])

    def test_uses_given_session(self) -> None:
        session = MagicMock()
        session.get.return_value = _response([])
        self.assertEqual(fetch_month_schedules("http://api.local", 2025, 3, session=session), [])
        session.get.assert_called_once()

    @patch("teamcal.client.requests.get")
    def test_http_error_propagates(self, get: MagicMock) -> None:
        get.return_value = _response(None, status=401)
        with self.assertRaises(requests.HTTPError):
            fetch_month_schedules("http://api.local", 2025, 3)

    @patch("teamcal.client.requests.get")
    def test_non_list_body_rejected(self, get: MagicMock) -> None:
        get.return_value = _response({"message": "nope"})
        with self.assertRaises(ValueError):
            fetch_month_schedules("http://api.local", 2025, 3)


if __name__ == "__main__":
    unittest.main()
