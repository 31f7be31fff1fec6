import io
import unittest

from repy.decode import check_encoding, iter_lines, recode
from repy.errors import EncodingError, FatalParseError
from repy.parse import read_file

from samples import FACULTY_NAME, course_block, faculty_lines


class TestDecode(unittest.TestCase):
    def test_iter_lines_strips_terminators(self) -> None:
        self.assertEqual(list(iter_lines(b"abc\r\nd\n\ne")), ["abc", "d", "", "e"])

    def test_cp862_hebrew(self) -> None:
        # alef and bet are the first two high code points of CP862
        self.assertEqual(list(iter_lines(b"|\x80\x81|")), ["|אב|"])

    def test_recode_to_iso8859_8(self) -> None:
        self.assertEqual(recode(b"|\x80 \x9a|"), "|א ת|".encode("iso8859_8"))

    def test_read_file_from_stream(self) -> None:
        raw = "\r\n".join(faculty_lines(course_block(234111))).encode("cp862")
        catalog = read_file(io.BytesIO(raw))

        self.assertEqual(catalog[0].name, FACULTY_NAME)
        self.assertEqual(catalog[0].courses[0].id, 234111)

    def test_undecodable_line_is_fatal_with_its_line_number(self) -> None:
        raw = b"\n|\x80\x81|\n"
        with self.assertRaises(FatalParseError) as ctx:
            read_file(raw, encoding="utf-8")

        self.assertEqual(ctx.exception.line, 2)
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_unknown_encoding(self) -> None:
        self.assertEqual(check_encoding("CP862"), "cp862")
        with self.assertRaises(EncodingError):
            check_encoding("nope")
        with self.assertRaises(EncodingError):
            read_file(b"", encoding="nope")


if __name__ == "__main__":
    unittest.main()
