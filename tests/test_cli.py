from __future__ import annotations

import contextlib
import io
import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from abi_c_backend import cli  # noqa: E402
from abi_c_backend.common import write_if_changed  # noqa: E402
from abi_c_backend.errors import WriteFailureError  # noqa: E402


def make_idl() -> dict[str, object]:
    return {
        "types": [
            {"kind": "opaque", "name": "demo_ctx_t"},
            {
                "kind": "enum",
                "name": "demo_result_t",
                "variants": [{"name": "DEMO_OK", "value": 0}, {"name": "DEMO_ERROR", "value": 1}],
            },
        ],
        "constants": [{"name": "DEMO_MAX", "type": "u16", "value": 8}],
        "functions": [
            {
                "name": "create",
                "parameters": [{"name": "out", "type": {"read_write_pointer": {"read_write_pointer": "demo_ctx_t"}}}],
                "return": "demo_result_t",
                "documentation": ["Creates a context."],
            },
            {"name": "destroy", "parameters": [{"name": "ctx", "type": {"read_write_pointer": "demo_ctx_t"}}]},
        ],
    }


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.idl_path = self.root / "demo.idl.json"
        self.idl_path.write_text(json.dumps(make_idl()), encoding="utf-8")
        self.out_path = self.root / "include" / "demo.h"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def run_cli(self, *extra: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        argv = ["--idl", str(self.idl_path), "--out", str(self.out_path), *extra]
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = cli.main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_generates_header(self) -> None:
        code, _, _ = self.run_cli("--ifndef", "DEMO_H", "--function-attribute", "DEMO_API ", "--function-prefix", "demo_")
        self.assertEqual(code, 0)
        header = self.out_path.read_text(encoding="utf-8")
        self.assertTrue(header.startswith("/* Automatically generated by abi_c_backend."))
        self.assertIn("#ifndef DEMO_H\n#define DEMO_H\n", header)
        self.assertIn("const uint16_t DEMO_MAX = 8;", header)
        self.assertIn("typedef struct demo_ctx_t demo_ctx_t;", header)
        self.assertIn("DEMO_API demo_result_t demo_create(demo_ctx_t** out);", header)
        self.assertIn("DEMO_API void demo_destroy(demo_ctx_t* ctx);", header)

    def test_config_file_with_command_line_override(self) -> None:
        config_path = self.root / "header.json"
        config_path.write_text(
            json.dumps({"ifndef": "FROM_CONFIG_H", "custom_defines": "#define DEMO_EXTRA 1", "imports": False}),
            encoding="utf-8",
        )
        code, _, _ = self.run_cli("--config", str(config_path), "--ifndef", "FROM_CLI_H")
        self.assertEqual(code, 0)
        header = self.out_path.read_text(encoding="utf-8")
        self.assertIn("#ifndef FROM_CLI_H", header)
        self.assertNotIn("FROM_CONFIG_H", header)
        self.assertIn("#define DEMO_EXTRA 1", header)
        self.assertNotIn("#include", header)

    def test_no_directives(self) -> None:
        code, _, _ = self.run_cli("--no-directives", "--no-imports")
        self.assertEqual(code, 0)
        header = self.out_path.read_text(encoding="utf-8")
        self.assertNotIn("#ifndef", header)
        self.assertNotIn('extern "C"', header)

    def test_check_mode_reports_stale_header(self) -> None:
        self.assertEqual(self.run_cli()[0], 0)
        self.assertEqual(self.run_cli("--check")[0], 0)

        self.out_path.write_text("/* stale */\n", encoding="utf-8")
        code, stdout, _ = self.run_cli("--check")
        self.assertEqual(code, 1)
        self.assertIn("-/* stale */", stdout)
        self.assertEqual(self.out_path.read_text(encoding="utf-8"), "/* stale */\n")

    def test_dry_run_does_not_write(self) -> None:
        code, _, _ = self.run_cli("--dry-run")
        self.assertEqual(code, 0)
        self.assertFalse(self.out_path.exists())

    def test_generation_error_is_reported(self) -> None:
        idl = make_idl()
        idl["constants"].append({"name": "DEMO_CTX", "type": "demo_ctx_t", "value": 0})
        self.idl_path.write_text(json.dumps(idl), encoding="utf-8")
        code, _, stderr = self.run_cli()
        self.assertEqual(code, 2)
        self.assertIn("abi-c-backend error: constant 'DEMO_CTX'", stderr)
        self.assertFalse(self.out_path.exists())

    def test_invalid_guard_is_reported(self) -> None:
        code, _, stderr = self.run_cli("--ifndef", "bad guard")
        self.assertEqual(code, 2)
        self.assertIn("command line.ifndef", stderr)

    def test_unwritable_output_is_reported(self) -> None:
        self.out_path.mkdir(parents=True)
        code, _, stderr = self.run_cli()
        self.assertEqual(code, 2)
        self.assertIn("abi-c-backend error: Unable to write header", stderr)

    def test_documentation_and_comment_overrides(self) -> None:
        self.assertEqual(self.run_cli()[0], 0)
        self.assertIn("/// Creates a context.\n", self.out_path.read_text(encoding="utf-8"))

        code, _, _ = self.run_cli("--no-documentation", "--file-header-comment", "// demo")
        self.assertEqual(code, 0)
        header = self.out_path.read_text(encoding="utf-8")
        self.assertTrue(header.startswith("// demo\n"))
        self.assertNotIn("///", header)


class WriteIfChangedTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "out" / "lib.h"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_creates_missing_file(self) -> None:
        self.assertEqual(write_if_changed(self.path, "int x;\n"), 0)
        self.assertEqual(self.path.read_text(encoding="utf-8"), "int x;\n")

    def test_check_on_missing_file_reports_diff(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(write_if_changed(self.path, "int x;\n", check=True), 1)
        self.assertIn("+int x;", stdout.getvalue())
        self.assertFalse(self.path.exists())

    def test_up_to_date_file_passes_check(self) -> None:
        write_if_changed(self.path, "int x;\n")
        self.assertEqual(write_if_changed(self.path, "int x;\n", check=True), 0)

    def test_directory_in_place_of_file(self) -> None:
        self.path.mkdir(parents=True)
        with self.assertRaises(WriteFailureError) as ctx:
            write_if_changed(self.path, "int x;\n")
        self.assertIsInstance(ctx.exception.__cause__, OSError)


if __name__ == "__main__":
    unittest.main()
