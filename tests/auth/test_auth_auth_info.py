import unittest

from gdrivesync.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.token_file, "/tmp/token.json")

    def test_auth_info_valid_service_account(self) -> None:
        info = AuthInfo.service_account(credentials_b64="eyJ9")
        self.assertEqual(info.kind, "service_account")
        self.assertEqual(info.credentials_b64, "eyJ9")
        self.assertIsNone(info.credentials_file)

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="api_key", data={})

    def test_auth_info_service_account_needs_a_key(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="service_account", data={"credentials_file": "  "})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"client_secrets_file": "x"})


if __name__ == "__main__":
    unittest.main()
