import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from clubsite.config import Settings
from clubsite.content import COLLECTION_NAMES
from clubsite.defaults import DEFAULT_CONTENT
from clubsite.errors import ClubDataError
from clubsite.kv import InMemoryKeyValueStore
from scripts import manage_content


class RemoteCommandTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        settings_patch = patch.object(
            manage_content,
            "get_settings",
            return_value=Settings(auth_password="deuce", log_level="WARNING"),
        )
        settings_patch.start()
        self.addCleanup(settings_patch.stop)
        client_patch = patch.object(manage_content, "ApiClient")
        self.api = client_patch.start().return_value
        self.addCleanup(client_patch.stop)

    def test_export_fails_when_api_unreachable(self):
        self.api.fetch.side_effect = ClubDataError("Request to /data failed", 503)
        out = Path(self.tmp.name) / "backup.json"
        code = manage_content.main(["--remote", "export", "-o", str(out)])
        self.assertEqual(code, 1)
        self.assertFalse(out.exists())

    def test_stats_fails_when_api_unreachable(self):
        self.api.fetch.side_effect = ClubDataError("Request to /data failed", 503)
        self.assertEqual(manage_content.main(["--remote", "stats"]), 1)

    def test_import_reports_failed_pushes(self):
        self.api.fetch.side_effect = lambda collection: []
        self.api.save.side_effect = ClubDataError("boom", 500)
        path = Path(self.tmp.name) / "backup.json"
        path.write_text(json.dumps(DEFAULT_CONTENT), encoding="utf-8")

        code = manage_content.main(["--remote", "import", str(path)])
        self.assertEqual(code, 1)
        self.api.login.assert_called_once_with("deuce")

    def test_import_succeeds(self):
        self.api.fetch.side_effect = lambda collection: []
        path = Path(self.tmp.name) / "backup.json"
        path.write_text(json.dumps(DEFAULT_CONTENT), encoding="utf-8")

        self.assertEqual(manage_content.main(["--remote", "import", str(path)]), 0)
        saved = [call.args[0] for call in self.api.save.call_args_list]
        self.assertEqual(saved, list(COLLECTION_NAMES))


class LocalCommandTests(unittest.TestCase):
    def setUp(self):
        self.kv = InMemoryKeyValueStore()
        kv_patch = patch.object(manage_content, "get_kv_store", return_value=self.kv)
        kv_patch.start()
        self.addCleanup(kv_patch.stop)

    def test_init_fills_missing_collections(self):
        self.kv.put("posts", "[]")
        self.assertEqual(manage_content.main(["init"]), 0)
        self.assertEqual(json.loads(self.kv.get("posts")), [])
        self.assertEqual(json.loads(self.kv.get("events")), DEFAULT_CONTENT["events"])

    def test_reset_requires_confirmation(self):
        self.assertEqual(manage_content.main(["reset"]), 1)
        self.assertIsNone(self.kv.get("events"))
        self.assertEqual(manage_content.main(["reset", "--yes"]), 0)
        self.assertIsNotNone(self.kv.get("events"))


if __name__ == "__main__":
    unittest.main()
