import json
import tempfile
import unittest
from pathlib import Path

from gdrivesync.config import DriveTarget, build_config, load_config
from gdrivesync.errors import ConfigError


def _raw(**overrides):
    data = {
        "source": {"repo": "acme/handbook"},
        "ignore": ["*.tmp"],
        "targets": {
            "forks": [
                {"drive_folder_id": "F1", "on_untrack": "remove"},
                {"drive_folder_id": " F2 ", "drive_url": "https://drive.example/F2"},
            ]
        },
    }
    data.update(overrides)
    return data


class TestConfigLoader(unittest.TestCase):
    def test_build_config_defaults(self) -> None:
        config = build_config(_raw())
        self.assertEqual(config.source.owner, "acme")
        self.assertEqual(config.source.name, "handbook")
        self.assertEqual(config.ignore, ["*.tmp"])
        self.assertEqual(config.upload_concurrency, 5)
        self.assertEqual(config.git.remote, "origin")
        self.assertEqual(config.logging.level, "INFO")

        first, second = config.drive_targets
        self.assertEqual(first.on_untrack, "remove")
        self.assertEqual(second.drive_folder_id, "F2")
        self.assertEqual(second.on_untrack, "ignore")
        self.assertEqual(second.folder_url, "https://drive.example/F2")
        self.assertEqual(first.folder_url, "https://drive.google.com/drive/folders/F1")

    def test_unknown_policy_is_rejected(self) -> None:
        raw = _raw(targets={"forks": [{"drive_folder_id": "F1", "on_untrack": "delete"}]})
        with self.assertRaises(ConfigError) as ctx:
            build_config(raw)
        self.assertIn("errors", ctx.exception.details)

    def test_bad_repo_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            build_config(_raw(source={"repo": "no-slash"}))

    def test_non_object_root_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            build_config(["not", "an", "object"])

    def test_targets_are_frozen(self) -> None:
        target = DriveTarget(drive_folder_id="F1")
        with self.assertRaises(Exception):
            target.on_untrack = "remove"  # type: ignore[misc]

    def test_load_config_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sync.json"
            path.write_text(json.dumps(_raw()), encoding="utf-8")
            config = load_config(path)
        self.assertEqual(len(config.drive_targets), 2)

    def test_load_config_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError) as ctx:
                load_config(Path(tmp) / "missing.json")
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    def test_load_config_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sync.json"
            path.write_text("{ not json", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
