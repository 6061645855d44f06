from __future__ import annotations

import json
import tempfile
import textwrap
import unittest
from pathlib import Path

from _testutil import ensure_repo_on_path


VALID_YAML = textwrap.dedent(
    """
    commonFolders: ["/"]
    environments:
      staging:
        infisicalEnvName: stg
        variableName: "%s"
        folders: ["/", "frontend"]
    strict: true
    clean: true
    """
)


class TestLoadSyncConfig(unittest.TestCase):
    def _write(self, td: str, name: str, text: str) -> Path:
        p = Path(td) / name
        p.write_text(text, encoding="utf-8")
        return p

    def test_load_valid_yaml(self) -> None:
        ensure_repo_on_path()
        from secretsync.config import load_sync_config

        with tempfile.TemporaryDirectory() as td:
            cfg = load_sync_config(self._write(td, "sync.yml", VALID_YAML))

        self.assertEqual(cfg.common_folders, ["/"])
        self.assertTrue(cfg.strict)
        self.assertTrue(cfg.clean)
        env = cfg.environments["staging"]
        self.assertEqual(env.infisical_env_name, "stg")
        self.assertEqual(env.folders, ["/", "frontend"])
        self.assertEqual(env.variable_name.apply("X"), "X")
        self.assertEqual(env.infisical_args, [])

    def test_load_json_and_defaults(self) -> None:
        ensure_repo_on_path()
        from secretsync.config import load_sync_config

        doc = {
            "commonFolders": [],
            "environments": {
                "prod": {"infisicalEnvName": "prod", "variableName": "", "folders": ["/"], "infisicalArgs": ["--projectId=p1"]},
            },
        }
        with tempfile.TemporaryDirectory() as td:
            cfg = load_sync_config(self._write(td, "sync.json", json.dumps(doc)))

        self.assertFalse(cfg.strict)
        self.assertFalse(cfg.clean)
        self.assertTrue(cfg.environments["prod"].variable_name.is_verbatim)
        self.assertEqual(cfg.environments["prod"].infisical_args, ["--projectId=p1"])

    def test_extra_keys_are_ignored(self) -> None:
        ensure_repo_on_path()
        from secretsync.config import load_sync_config

        doc = {
            "description": "ci",
            "commonFolders": ["/"],
            "environments": {
                "s": {"infisicalEnvName": "s", "variableName": "%s", "folders": ["/"], "note": "x"},
            },
            "strict": False,
            "clean": True,
        }
        with tempfile.TemporaryDirectory() as td:
            cfg = load_sync_config(self._write(td, "sync.json", json.dumps(doc)))

        self.assertTrue(cfg.clean)
        self.assertEqual(cfg.environments["s"].folders, ["/"])

    def test_example_config_is_valid(self) -> None:
        repo_root = ensure_repo_on_path()
        from secretsync.config import load_sync_config

        cfg = load_sync_config(repo_root / "config" / "sync_config.example.yml")
        self.assertIn("staging", cfg.environments)

    def test_invalid_configs_rejected(self) -> None:
        ensure_repo_on_path()
        from secretsync.config import load_sync_config
        from secretsync.errors import ConfigError

        env_ok = '{"infisicalEnvName": "s", "variableName": "%s", "folders": ["/"]}'
        cases = {
            "not_mapping": "- a\n- b\n",
            "empty_file": "",
            "missing_common": '{"environments": {}}',
            "missing_environments": '{"commonFolders": []}',
            "common_not_list": '{"commonFolders": "/", "environments": {}}',
            "environments_not_mapping": '{"commonFolders": [], "environments": []}',
            "env_not_mapping": '{"commonFolders": [], "environments": {"s": "x"}}',
            "env_missing_folders": '{"commonFolders": [], "environments": {"s": {"infisicalEnvName": "s", "variableName": ""}}}',
            "env_name_not_string": '{"commonFolders": [], "environments": {"s": {"infisicalEnvName": 1, "variableName": "", "folders": []}}}',
            "folders_not_list": '{"commonFolders": [], "environments": {"s": {"infisicalEnvName": "s", "variableName": "", "folders": "/"}}}',
            "strict_not_bool": '{"commonFolders": [], "environments": {"s": %s}, "strict": "yes"}' % env_ok,
            "two_placeholders": '{"commonFolders": [], "environments": {"s": {"infisicalEnvName": "s", "variableName": "%s_%s", "folders": []}}}',
            "bad_yaml": "commonFolders: [\n",
        }
        with tempfile.TemporaryDirectory() as td:
            for name, text in cases.items():
                with self.subTest(case=name):
                    with self.assertRaises(ConfigError):
                        load_sync_config(self._write(td, f"{name}.yml", text))

            with self.assertRaises(ConfigError):
                load_sync_config(Path(td) / "missing.yml")

    def test_error_message_names_path(self) -> None:
        ensure_repo_on_path()
        from secretsync.config.validate_sync_config import validate_sync_config
        from secretsync.errors import ConfigError

        cfg = {"commonFolders": [], "environments": {"staging": {"infisicalEnvName": "s", "variableName": "", "folders": "x"}}}
        with self.assertRaises(ConfigError) as ctx:
            validate_sync_config(cfg)
        self.assertIn("sync_config.environments.staging.folders", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
