import json
import logging
import os
import tempfile
import unittest

from gdrivesync.logging_setup import JsonFormatter, setup_logging


class TestLoggingSetup(unittest.TestCase):
    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        root.setLevel(logging.WARNING)

    def test_json_formatter_single_line(self) -> None:
        record = logging.LogRecord("gdrivesync.x", logging.INFO, __file__, 1, "hello %s", ("drive",), None)
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "gdrivesync.x")
        self.assertEqual(payload["msg"], "hello drive")

    def test_setup_logging_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "sync.log")
            setup_logging(level="debug", log_file=log_file)
            self.assertEqual(logging.getLogger().level, logging.DEBUG)

            logging.getLogger("gdrivesync.test").info("written")
            for handler in logging.getLogger().handlers:
                handler.flush()
            with open(log_file, encoding="utf-8") as f:
                content = f.read()
            self.tearDown()
        self.assertIn("gdrivesync.test written", content)

    def test_setup_logging_quiets_client_library(self) -> None:
        setup_logging(level="INFO")
        self.assertEqual(logging.getLogger("googleapiclient").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
