import unittest

from gdrivesync.errors.exceptions import (
    ApiError,
    AuthError,
    BaseRefError,
    ConflictError,
    GDriveSyncError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    VcsError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = GDriveSyncError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_base_ref_error_is_a_vcs_error(self) -> None:
        self.assertTrue(issubclass(BaseRefError, VcsError))

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=412, message="precondition"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_variants(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="quotaExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="userRateLimitExceeded", message="slow down")
        )
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientPermissions", message="x")
        )
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_details(self) -> None:
        cause = RuntimeError("http")
        err = map_http_error(
            HttpErrorInfo(status_code=503, reason="backendError", details={"id": "f1"}),
            cause=cause,
        )
        self.assertIsInstance(err, ApiError)
        self.assertEqual(str(err), "HTTP error 503")
        self.assertEqual(err.details["status_code"], 503)
        self.assertEqual(err.details["reason"], "backendError")
        self.assertEqual(err.details["id"], "f1")
        self.assertIs(err.cause, cause)

    def test_map_http_error_other_is_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418, message="teapot"))
        self.assertIsInstance(err, ApiError)


if __name__ == "__main__":
    unittest.main()
