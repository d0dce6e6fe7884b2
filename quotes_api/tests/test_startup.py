"""
Tests for the startup pipeline.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from quotes_api.config import Settings
from quotes_api.exceptions import DatabaseConnectionError
from quotes_api.schema_snapshot import SnapshotState
from quotes_api.startup import Application, bootstrap, launch_snapshot, serve

from conftest import make_fake_db


class TestBootstrap(unittest.TestCase):
    """bootstrap() with the MongoDB connection step mocked out."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        self.settings = Settings(snapshot_path=self.tmp_path / "cache" / "schema.json", static_folder=None)

        self.client = MagicMock(name="client")
        connect_patcher = patch("quotes_api.startup.connect_database", return_value=(self.client, make_fake_db()))
        self.connect = connect_patcher.start()
        self.addCleanup(connect_patcher.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def test_bootstrap_runs_every_step(self):
        application = bootstrap(self.settings)

        self.connect.assert_called_once_with(self.settings)
        self.assertIs(application.client, self.client)
        self.assertEqual(application.app.test_client().get("/health").status_code, 200)
        self.assertIs(application.snapshot.join(timeout=10), SnapshotState.SUCCEEDED)
        document = json.loads(self.settings.snapshot_path.read_text(encoding="utf-8"))
        self.assertIn("__schema", document["data"])

    def test_bootstrap_without_snapshot(self):
        application = bootstrap(self.settings, start_snapshot=False)

        self.assertIsNone(application.snapshot)
        self.assertFalse(self.settings.snapshot_path.exists())

    def test_snapshot_disabled_by_settings(self):
        settings = Settings(snapshot_enabled=False, static_folder=None, snapshot_path=self.tmp_path / "schema.json")

        self.assertIsNone(launch_snapshot(settings, schema=None))
        self.assertIsNone(bootstrap(settings).snapshot)

    def test_app_failure_closes_client(self):
        with patch("quotes_api.startup.create_app", side_effect=RuntimeError("bad config")):
            with self.assertRaises(RuntimeError):
                bootstrap(self.settings)

        self.client.close.assert_called_once_with()

    def test_snapshot_failure_does_not_block_serving(self):
        """An unwritable snapshot location is logged and the listener still binds."""
        blocker = self.tmp_path / "cache"
        blocker.write_text("", encoding="utf-8")

        with self.assertLogs("quotes_api.schema_snapshot", level="ERROR"):
            application = bootstrap(self.settings)
            self.assertIs(application.snapshot.join(timeout=10), SnapshotState.FAILED)

        with patch.object(application.app, "run") as run:
            serve(application)

        run.assert_called_once_with(host="0.0.0.0", port=3000, debug=False, use_reloader=False)
        self.client.close.assert_called_once_with()


class TestStartupFailures(unittest.TestCase):

    def setUp(self):
        self.settings = Settings(static_folder=None)

    def test_database_failure_stops_startup(self):
        with patch("quotes_api.startup.connect_database",
                   side_effect=DatabaseConnectionError("Could not connect to MongoDB")), \
                patch("quotes_api.startup.create_app") as create_app, \
                patch("quotes_api.startup.start_snapshot_refresh") as start_snapshot:
            with self.assertRaises(DatabaseConnectionError):
                bootstrap(self.settings)

        create_app.assert_not_called()
        start_snapshot.assert_not_called()

    def test_serve_closes_client_on_error(self):
        application = Application(settings=self.settings, client=MagicMock(), db=make_fake_db(), app=MagicMock())
        application.app.run.side_effect = OSError("Address already in use")

        with self.assertRaises(OSError):
            serve(application)

        application.client.close.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
