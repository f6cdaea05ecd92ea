import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from bcbp_samples import (
    LOWERCASE_PNR,
    MULTI_LEG,
    SECURITY,
    SINGLE_LEG,
    write_pkpass,
)
import pbbcbp.tools as bt
from pbbcbp.options import DEFAULT_OPTIONS


class TestDecodeBcbp(unittest.TestCase):
    def test_prints_pass(self):
        output = io.StringIO()
        with redirect_stdout(output):
            bp = bt.decode_bcbp(MULTI_LEG, DEFAULT_OPTIONS)
        self.assertEqual(2, bp.leg_count)
        text = output.getvalue()
        self.assertIn("ACKERMANN/JUSTIN DAV", text)
        self.assertIn("WHFPBW", text)
        self.assertIn("JNU", text)
        self.assertIn("Security type", text)

    def test_bag_tags_printed(self):
        output = io.StringIO()
        with redirect_stdout(output):
            bt.decode_bcbp(SINGLE_LEG, DEFAULT_OPTIONS)
        self.assertIn("Bag tags", output.getvalue())
        self.assertNotIn("Security type", output.getvalue())

    def test_no_security_table_when_keeping_empty_strings(self):
        output = io.StringIO()
        with redirect_stdout(output):
            bt.decode_bcbp(SINGLE_LEG,
                DEFAULT_OPTIONS.replace(empty_string_is_nil=False))
        self.assertNotIn("Security type", output.getvalue())

    def test_invalid_pass_exits(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit) as ctx:
                bt.decode_bcbp(SINGLE_LEG[:40], DEFAULT_OPTIONS)
        self.assertEqual(1, ctx.exception.code)
        self.assertIn("not valid", output.getvalue())


class TestValidateBcbp(unittest.TestCase):
    def test_no_issues(self):
        output = io.StringIO()
        with redirect_stdout(output):
            bt.validate_bcbp(SECURITY)
        self.assertIn("No validation issues found", output.getvalue())

    def test_issues_exit(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit) as ctx:
                bt.validate_bcbp(LOWERCASE_PNR)
        self.assertEqual(1, ctx.exception.code)
        self.assertIn("1 validation issue(s) found", output.getvalue())
        self.assertIn("9169f13", output.getvalue())


class TestDecodePkpasses(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _run(self):
        output = io.StringIO()
        env = {'BCBP_IMPORT_PATH': self.tmp.name}
        with mock.patch.dict(os.environ, env):
            with redirect_stdout(output):
                bt.decode_pkpasses(DEFAULT_OPTIONS)
        return output.getvalue()

    def test_decodes_each_pass(self):
        write_pkpass(self.tmp.name, "1.pkpass",
            {'barcode': {'message': SINGLE_LEG}})
        write_pkpass(self.tmp.name, "2.pkpass",
            {'barcode': {'message': "NOT A BOARDING PASS"}})
        write_pkpass(self.tmp.name, "3.pkpass", {'barcodes': []})
        text = self._run()
        self.assertIn("Archive filename: NODATE_AA_2819_MSY-PHX.pkpass", text)
        self.assertIn("2.pkpass is not valid", text)
        self.assertIn("No barcode message", text)

    def test_unreadable_files_are_skipped(self):
        (Path(self.tmp.name) / "0.pkpass").write_bytes(b"not a zip archive")
        write_pkpass(self.tmp.name, "1.pkpass", None)
        write_pkpass(self.tmp.name, "2.pkpass",
            {'barcode': {'message': MULTI_LEG}})
        text = self._run()
        self.assertIn("not a zip archive. Skipping.", text)
        self.assertIn("pass.json not found", text)
        self.assertIn("Archive filename: NODATE_AS_635_TPA-SEA_2LEGS.pkpass",
            text)

    def test_empty_folder(self):
        self.assertIn("No .pkpass files found", self._run())

    def test_missing_folder(self):
        env = {
            k: v for k, v in os.environ.items() if k != 'BCBP_IMPORT_PATH'
        }
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertRaises(KeyError, bt.decode_pkpasses, DEFAULT_OPTIONS)

    def test_folder_is_not_directory(self):
        path = os.path.join(self.tmp.name, "file.txt")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("")
        with mock.patch.dict(os.environ, {'BCBP_IMPORT_PATH': path}):
            self.assertRaises(KeyError, bt.decode_pkpasses, DEFAULT_OPTIONS)


if __name__ == "__main__":
    unittest.main()
