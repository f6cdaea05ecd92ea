import unittest

from pbbcbp.cursor import FieldCursor, parse_hex, parse_int
from pbbcbp.errors import (
    InvalidEncoding,
    MalformedHex,
    MalformedInteger,
    TruncatedInput,
)


class TestFieldCursor(unittest.TestCase):
    def test_take_text(self):
        cursor = FieldCursor("M1ABC")
        self.assertEqual("M", cursor.take_text(1))
        self.assertEqual("1A", cursor.take_text(2))
        self.assertEqual(3, cursor.offset)
        self.assertEqual(2, cursor.remaining)
        self.assertFalse(cursor.at_end)
        self.assertEqual("BC", cursor.take_text(2))
        self.assertTrue(cursor.at_end)

    def test_take_zero_characters(self):
        cursor = FieldCursor("AB")
        cursor.take_text(2)
        self.assertEqual("", cursor.take_text(0))
        self.assertEqual(2, cursor.offset)

    def test_truncated_read_does_not_advance(self):
        cursor = FieldCursor("ABC")
        cursor.take_text(1)
        with self.assertRaises(TruncatedInput) as ctx:
            cursor.take_text(3, "pnr")
        self.assertEqual(3, ctx.exception.requested)
        self.assertEqual(2, ctx.exception.available)
        self.assertEqual(1, ctx.exception.offset)
        self.assertEqual("pnr", ctx.exception.field)
        self.assertEqual(1, cursor.offset)

    def test_negative_length(self):
        self.assertRaises(ValueError, FieldCursor("ABC").take_text, -1)

    def test_peek(self):
        cursor = FieldCursor("^4")
        self.assertEqual("^", cursor.peek())
        self.assertEqual("^4", cursor.peek(2))
        self.assertIsNone(cursor.peek(3))
        self.assertEqual(0, cursor.offset)
        cursor.take_text(2)
        self.assertIsNone(cursor.peek())

    def test_take_hex(self):
        cursor = FieldCursor("4Aff")
        self.assertEqual(0x4A, cursor.take_hex(2))
        self.assertEqual(0xFF, cursor.take_hex(2))

    def test_take_int(self):
        cursor = FieldCursor("0059 014")
        self.assertEqual(59, cursor.take_int(5))
        self.assertEqual(14, cursor.take_int(3))

    def test_malformed_hex_reports_offset(self):
        cursor = FieldCursor("M1ZZ")
        cursor.take_text(2)
        with self.assertRaises(MalformedHex) as ctx:
            cursor.take_hex(2, "conditional_size")
        self.assertEqual(2, ctx.exception.offset)
        self.assertEqual("ZZ", ctx.exception.text)

    def test_bytes(self):
        cursor = FieldCursor(b"M1")
        self.assertEqual("M1", cursor.text)
        self.assertEqual(2, len(cursor))

    def test_non_ascii_bytes(self):
        with self.assertRaises(InvalidEncoding) as ctx:
            FieldCursor("M1É".encode('utf-8'))
        self.assertEqual(2, ctx.exception.offset)

    def test_non_ascii_text(self):
        with self.assertRaises(InvalidEncoding) as ctx:
            FieldCursor("M1AÉ")
        self.assertEqual(3, ctx.exception.offset)

    def test_wrong_type(self):
        self.assertRaises(TypeError, FieldCursor, 42)


class TestParsing(unittest.TestCase):
    def test_parse_hex(self):
        self.assertEqual(0, parse_hex("00", 0))
        self.assertEqual(0x60, parse_hex("60", 0))
        self.assertEqual(0x2A, parse_hex("2a", 0))

    def test_parse_hex_rejects_non_digits(self):
        for text in ("", " 4", "4 ", "-1", "0x", "G0", "1_"):
            with self.subTest(text=text):
                self.assertRaises(MalformedHex, parse_hex, text, 0)

    def test_parse_int(self):
        self.assertEqual(14, parse_int("014", 0))
        self.assertEqual(59, parse_int("0059 ", 0))
        self.assertEqual(0, parse_int("00000", 0))

    def test_parse_int_rejects_non_digits(self):
        for text in ("", "   ", "1A", "-1", "+1", "١٢"):
            with self.subTest(text=text):
                self.assertRaises(MalformedInteger, parse_int, text, 0)

    def test_parse_int_reports_field(self):
        with self.assertRaises(MalformedInteger) as ctx:
            parse_int("X14", 44, "julian_date")
        self.assertEqual(44, ctx.exception.offset)
        self.assertEqual("julian_date", ctx.exception.field)
        self.assertIn("field 'julian_date', offset 44", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
