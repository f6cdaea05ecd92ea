import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from bcbp_samples import MULTI_LEG, SINGLE_LEG, replace_at, write_pkpass
from pbbcbp.errors import BCBPError, PKPassError
from pbbcbp.options import DecoderOptions
from pbbcbp.pkpass import PKPass


class TestPKPass(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_single_barcode(self):
        path = write_pkpass(self.tmp.name, "a.pkpass", {
            'relevantDate': "2024-01-14T16:30-06:00",
            'barcode': {
                'message': SINGLE_LEG,
                'format': "PKBarcodeFormatPDF417",
            },
        })
        pkpass = PKPass(path)
        self.assertEqual(SINGLE_LEG, pkpass.message)
        self.assertEqual(
            datetime(2024, 1, 14, 22, 30, tzinfo=timezone.utc),
            pkpass.relevant_date,
        )
        self.assertEqual("JKLEAJ", pkpass.decode().header.pnr)
        self.assertEqual(
            "20240114T2230Z_AA_2819_MSY-PHX.pkpass", pkpass.archive_filename()
        )

    def test_barcodes_list(self):
        path = write_pkpass(self.tmp.name, "b.pkpass", {
            'barcodes': [
                {'format': "PKBarcodeFormatQR"},
                {'message': MULTI_LEG, 'format': "PKBarcodeFormatAztec"},
            ],
        })
        pkpass = PKPass(path)
        self.assertEqual(MULTI_LEG, pkpass.message)
        self.assertIsNone(pkpass.relevant_date)
        self.assertEqual(
            "NODATE_AS_635_TPA-SEA_2LEGS.pkpass", pkpass.archive_filename()
        )

    def test_archive_filename_follows_options(self):
        path = write_pkpass(self.tmp.name, "c.pkpass", {
            'barcode': {'message': replace_at(SINGLE_LEG, 39, "00234")},
        })
        pkpass = PKPass(path)
        self.assertEqual(
            "NODATE_AA_234_MSY-PHX.pkpass", pkpass.archive_filename()
        )
        options = DecoderOptions(trim_leading_zeros=False)
        self.assertEqual(
            "NODATE_AA_00234_MSY-PHX.pkpass", pkpass.archive_filename(options)
        )

    def test_invalid_relevant_date(self):
        path = write_pkpass(self.tmp.name, "d.pkpass", {
            'relevantDate': "not a date",
            'barcode': {'message': SINGLE_LEG},
        })
        self.assertIsNone(PKPass(path).relevant_date)

    def test_no_message(self):
        path = write_pkpass(self.tmp.name, "e.pkpass", {'barcodes': []})
        pkpass = PKPass(path)
        self.assertIsNone(pkpass.message)
        self.assertIsNone(pkpass.decode())
        self.assertEqual("NODATE.pkpass", pkpass.archive_filename())

    def test_missing_pass_json(self):
        path = write_pkpass(self.tmp.name, "f.pkpass", None)
        with self.assertRaises(PKPassError) as ctx:
            PKPass(path)
        self.assertIn("pass.json not found", str(ctx.exception))
        self.assertEqual(path, ctx.exception.path)

    def test_not_a_zip(self):
        path = Path(self.tmp.name) / "junk.pkpass"
        path.write_bytes(b"not a zip archive")
        with self.assertRaises(PKPassError) as ctx:
            PKPass(path)
        self.assertIn("not a zip archive", str(ctx.exception))

    def test_archive_filename_reuses_decoded_pass(self):
        path = write_pkpass(self.tmp.name, "h.pkpass", {
            'barcode': {'message': MULTI_LEG},
        })
        pkpass = PKPass(path)
        bp = pkpass.decode()
        with mock.patch.object(PKPass, "decode") as decode:
            filename = pkpass.archive_filename(boarding_pass=bp)
        decode.assert_not_called()
        self.assertEqual("NODATE_AS_635_TPA-SEA_2LEGS.pkpass", filename)

    def test_invalid_message(self):
        path = write_pkpass(self.tmp.name, "g.pkpass", {
            'barcode': {'message': "NOT A BOARDING PASS"},
        })
        self.assertRaises(BCBPError, PKPass(path).decode)


if __name__ == "__main__":
    unittest.main()
