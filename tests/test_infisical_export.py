from __future__ import annotations

import json
import subprocess
import sys
import unittest

from _testutil import ensure_repo_on_path


def _runner(stdout: str, calls: list):
    def run(cmd):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr=None)

    return run


class TestInfisicalExporter(unittest.TestCase):
    def setUp(self) -> None:
        ensure_repo_on_path()

    def test_command_line(self) -> None:
        from secretsync.infisical.export import InfisicalExporter

        calls: list = []
        exp = InfisicalExporter(extra_args=["--projectId=p1"], run_fn=_runner("[]", calls))
        exp.export_folder("staging", "/frontend")
        self.assertEqual(
            calls[0],
            ["infisical", "export", "--env=staging", "--format=json", "--path=/frontend", "--projectId=p1"],
        )

    def test_ok_result(self) -> None:
        from secretsync.infisical.export import InfisicalExporter, RawSecret

        out = json.dumps([{"key": "API_KEY", "value": "abc"}, {"key": "EMPTY", "value": None}])
        res = InfisicalExporter(run_fn=_runner(out, [])).export_folder("staging", "/")
        self.assertTrue(res.ok)
        self.assertEqual(res.secrets, [RawSecret("API_KEY", "abc"), RawSecret("EMPTY", "")])

    def test_empty_result(self) -> None:
        from secretsync.infisical.export import InfisicalExporter

        for out in ("[]", "{}", "null"):
            with self.subTest(output=out):
                res = InfisicalExporter(run_fn=_runner(out, [])).export_folder("staging", "/empty")
                self.assertEqual(res.status, "empty")
                self.assertEqual(res.secrets, [])

    def test_malformed_result_keeps_output(self) -> None:
        from secretsync.infisical.export import InfisicalExporter

        res = InfisicalExporter(run_fn=_runner("error: You must be logged in\n", [])).export_folder("staging", "/")
        self.assertEqual(res.status, "malformed")
        self.assertIn("logged in", res.output)
        self.assertIn("--path=/", res.command)

        res = InfisicalExporter(run_fn=_runner('{"API_KEY": "abc"}', [])).export_folder("staging", "/")
        self.assertEqual(res.status, "malformed")

    def test_missing_binary_is_malformed(self) -> None:
        from secretsync.infisical.export import InfisicalExporter

        def run(cmd):
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        res = InfisicalExporter(binary="infisical-missing", run_fn=run).export_folder("staging", "/")
        self.assertEqual(res.status, "malformed")
        self.assertIn("infisical-missing", res.output)

    def test_non_utf8_output_is_malformed(self) -> None:
        from secretsync.infisical.export import InfisicalExporter, _run

        cp = _run([sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'error: \\xff\\xfe bad bytes')"])
        self.assertIn("bad bytes", cp.stdout)

        res = InfisicalExporter(run_fn=lambda cmd: cp).export_folder("staging", "/")
        self.assertEqual(res.status, "malformed")
        self.assertIn("bad bytes", res.output)

        def run(cmd):
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        res = InfisicalExporter(run_fn=run).export_folder("staging", "/")
        self.assertEqual(res.status, "malformed")


if __name__ == "__main__":
    unittest.main()
