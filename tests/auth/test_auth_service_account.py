import base64
import json
import tempfile
import unittest
from pathlib import Path

from gdrivesync.auth import AuthInfo, ServiceAccountClient
from gdrivesync.errors import AuthError, InvalidArgumentError


def _b64(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


class TestServiceAccountClient(unittest.TestCase):
    def test_service_email_from_b64_key(self) -> None:
        info = AuthInfo.service_account(
            credentials_b64=_b64({"type": "service_account", "client_email": "sync@p.iam.gserviceaccount.com"})
        )
        client = ServiceAccountClient(info)
        self.assertEqual(client.service_email, "sync@p.iam.gserviceaccount.com")

    def test_service_email_from_key_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            key = Path(tmp) / "key.json"
            key.write_text(json.dumps({"client_email": "file@p.iam.gserviceaccount.com"}), encoding="utf-8")
            client = ServiceAccountClient(AuthInfo.service_account(credentials_file=str(key)))
            self.assertEqual(client.service_email, "file@p.iam.gserviceaccount.com")

    def test_invalid_b64_raises_auth_error(self) -> None:
        client = ServiceAccountClient(AuthInfo.service_account(credentials_b64="not base64!"))
        with self.assertRaises(AuthError):
            _ = client.service_email

    def test_missing_client_email_raises_auth_error(self) -> None:
        client = ServiceAccountClient(AuthInfo.service_account(credentials_b64=_b64({"type": "x"})))
        with self.assertRaises(AuthError):
            _ = client.service_email

    def test_missing_key_file_raises_auth_error(self) -> None:
        client = ServiceAccountClient(AuthInfo.service_account(credentials_file="/nonexistent/key.json"))
        with self.assertRaises(AuthError):
            _ = client.service_email

    def test_rejects_oauth_info(self) -> None:
        info = AuthInfo(kind="oauth", data={"client_secrets_file": "a", "token_file": "b"})
        with self.assertRaises(InvalidArgumentError):
            ServiceAccountClient(info)


if __name__ == "__main__":
    unittest.main()
