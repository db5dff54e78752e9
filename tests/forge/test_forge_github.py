import unittest
from unittest.mock import Mock, patch

import requests

from gdrivesync.errors import ForgeError
from gdrivesync.forge import GitHubForge, PullRequest


def _response(status_code: int, payload=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = ""
    return response


def _forge(session: Mock, **kwargs) -> GitHubForge:
    return GitHubForge("acme/handbook", "t0ken", session=session, **kwargs)


def _session(*responses) -> Mock:
    session = Mock()
    session.headers = {}
    session.request.side_effect = list(responses)
    return session


class TestGitHubForge(unittest.TestCase):
    def test_headers_and_repo(self) -> None:
        session = _session()
        forge = _forge(session)
        self.assertEqual(session.headers["Authorization"], "Bearer t0ken")
        self.assertEqual((forge.owner, forge.name), ("acme", "handbook"))

    def test_bad_repo(self) -> None:
        with self.assertRaises(ForgeError):
            GitHubForge("handbook", None, session=_session())

    def test_get_default_branch(self) -> None:
        session = _session(_response(200, {"default_branch": "trunk"}))
        self.assertEqual(_forge(session).get_default_branch(), "trunk")
        method, url = session.request.call_args.args
        self.assertEqual((method, url), ("GET", "https://api.github.com/repos/acme/handbook"))

    def test_get_default_branch_failure(self) -> None:
        session = _session(_response(404, {"message": "Not Found"}))
        with self.assertRaises(ForgeError):
            _forge(session).get_default_branch()

    def test_creates_pull_request_when_none_is_open(self) -> None:
        session = _session(
            _response(200, []),
            _response(201, {"number": 7, "html_url": "https://github.com/acme/handbook/pull/7"}),
        )

        pr = _forge(session).create_or_update_pull_request("sync-from-drive-F1", "main", "title", "body")

        self.assertEqual(pr, PullRequest(number=7, url="https://github.com/acme/handbook/pull/7", created=True))
        list_call, create_call = session.request.call_args_list
        self.assertEqual(
            list_call.kwargs["params"],
            {"head": "acme:sync-from-drive-F1", "base": "main", "state": "open"},
        )
        self.assertEqual(create_call.args[0], "POST")
        self.assertEqual(
            create_call.kwargs["json"],
            {"title": "title", "head": "sync-from-drive-F1", "base": "main", "body": "body"},
        )

    def test_updates_open_pull_request(self) -> None:
        session = _session(
            _response(200, [{"number": 3}]),
            _response(200, {"html_url": "https://github.com/acme/handbook/pull/3"}),
        )

        pr = _forge(session).create_or_update_pull_request("head", "main", "t", "b")

        self.assertFalse(pr.created)
        self.assertEqual(pr.number, 3)
        patch_call = session.request.call_args_list[1]
        self.assertEqual(patch_call.args, ("PATCH", "https://api.github.com/repos/acme/handbook/pulls/3"))
        self.assertEqual(patch_call.kwargs["json"], {"title": "t", "body": "b"})

    @patch("gdrivesync.forge.github.time.sleep")
    def test_retries_transient_statuses_with_backoff(self, sleep: Mock) -> None:
        session = _session(
            _response(404, {"message": "Not Found"}),
            _response(422, {"message": "Validation Failed", "errors": [{"message": "head is invalid"}]}),
            _response(200, []),
            _response(201, {"number": 1, "html_url": "u"}),
        )

        pr = _forge(session, retry_delay_sec=2.0).create_or_update_pull_request("h", "main", "t", "b")

        self.assertEqual(pr.number, 1)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [2.0, 4.0])

    @patch("gdrivesync.forge.github.time.sleep")
    def test_gives_up_after_max_retries(self, sleep: Mock) -> None:
        session = _session(
            _response(404, {"message": "Not Found"}),
            _response(404, {"message": "Not Found"}),
        )

        with self.assertRaises(ForgeError) as ctx:
            _forge(session, max_retries=1).create_or_update_pull_request("h", "main", "t", "b")

        self.assertEqual(ctx.exception.details["status_code"], 404)
        self.assertEqual(sleep.call_count, 1)

    @patch("gdrivesync.forge.github.time.sleep")
    def test_server_errors_are_not_retried(self, sleep: Mock) -> None:
        session = _session(_response(500, {"message": "boom"}))
        with self.assertRaises(ForgeError):
            _forge(session).create_or_update_pull_request("h", "main", "t", "b")
        sleep.assert_not_called()

    def test_no_commits_between_returns_none(self) -> None:
        session = _session(
            _response(200, []),
            _response(
                422,
                {"message": "Validation Failed", "errors": [{"message": "No commits between main and h"}]},
            ),
        )

        self.assertIsNone(_forge(session).create_or_update_pull_request("h", "main", "t", "b"))

    def test_transport_errors_become_forge_errors(self) -> None:
        session = _session()
        session.request.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(ForgeError) as ctx:
            _forge(session).get_default_branch()
        self.assertIsInstance(ctx.exception.cause, requests.ConnectionError)


if __name__ == "__main__":
    unittest.main()
