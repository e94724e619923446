from __future__ import annotations

import unittest

from envplus.errors import MalformedLineError
from envplus.parse import iter_entries, parse_line, split_lines


def _parse(line: str, *, comment: str = "//", delimiter: str = "=", index: int = 0):
    return parse_line(line, comment=comment, delimiter=delimiter, index=index)


class ParseLineTests(unittest.TestCase):
    def test_simple_pair(self) -> None:
        self.assertEqual(_parse("SECRET=VALUE"), ("SECRET", "VALUE"))

    def test_blank_and_comment_lines_are_skipped(self) -> None:
        for line in ["", "   ", "\t", "// comment", "   // indented comment", "//KEY=VALUE"]:
            with self.subTest(line=line):
                self.assertIsNone(_parse(line))

    def test_trailing_comment_is_cut_and_whitespace_kept(self) -> None:
        self.assertEqual(_parse("OTHER=1 // trailing # not this marker"), ("OTHER", "1 "))

    def test_only_first_delimiter_splits(self) -> None:
        self.assertEqual(_parse("URL=postgres://u:p@h/db?a=b", comment="#"), ("URL", "postgres://u:p@h/db?a=b"))

    def test_key_and_value_are_not_trimmed(self) -> None:
        self.assertEqual(_parse("  KEY = spaced value  "), ("  KEY ", " spaced value  "))

    def test_quotes_and_escapes_are_literal(self) -> None:
        self.assertEqual(_parse('NAME="a\\nb"'), ("NAME", '"a\\nb"'))

    def test_empty_key_or_value_is_valid(self) -> None:
        self.assertEqual(_parse("=value"), ("", "value"))
        self.assertEqual(_parse("KEY="), ("KEY", ""))

    def test_multi_character_markers(self) -> None:
        self.assertEqual(_parse("SECRET===YOUR_SECRET", delimiter="==="), ("SECRET", "YOUR_SECRET"))
        self.assertEqual(_parse("A||B||C", delimiter="||"), ("A", "B||C"))
        self.assertIsNone(_parse("-- note", comment="--"))
        self.assertEqual(_parse("A=B -- note", comment="--"), ("A", "B "))

    def test_markers_are_not_regular_expressions(self) -> None:
        self.assertEqual(_parse("A.*B", delimiter=".*"), ("A", "B"))
        with self.assertRaises(MalformedLineError):
            _parse("AxxB", delimiter=".*")

    def test_missing_delimiter_reports_one_based_line(self) -> None:
        with self.assertRaises(MalformedLineError) as ctx:
            _parse("NOT_A_PAIR", index=4)
        self.assertEqual(ctx.exception.lineno, 5)
        self.assertEqual(ctx.exception.line, "NOT_A_PAIR")
        self.assertEqual(
            str(ctx.exception),
            "Line 5 with content 'NOT_A_PAIR' does not appear to be formatted properly.",
        )

    def test_delimiter_only_inside_comment_is_malformed(self) -> None:
        with self.assertRaises(MalformedLineError) as ctx:
            _parse("KEY // =value", index=0)
        self.assertEqual(ctx.exception.line, "KEY // =value")

    def test_empty_comment_marker_skips_everything(self) -> None:
        self.assertIsNone(_parse("A=B", comment=""))
        self.assertIsNone(_parse("no delimiter here", comment=""))

    def test_empty_delimiter_gives_empty_key(self) -> None:
        self.assertEqual(_parse("ABC", delimiter=""), ("", "ABC"))
        self.assertEqual(_parse("ABC // tail", delimiter=""), ("", "ABC "))


class SplitLinesTests(unittest.TestCase):
    def test_lf_and_crlf(self) -> None:
        self.assertEqual(split_lines("a\r\nb\n\nc\n"), ["a", "b", "", "c"])

    def test_no_trailing_newline(self) -> None:
        self.assertEqual(split_lines("a\nb"), ["a", "b"])

    def test_empty_text(self) -> None:
        self.assertEqual(split_lines(""), [])

    def test_form_feed_is_not_a_line_break(self) -> None:
        self.assertEqual(split_lines("a\x0cb\nc"), ["a\x0cb", "c"])


class IterEntriesTests(unittest.TestCase):
    def test_example_file(self) -> None:
        text = "// comment\nSECRET=VALUE\n\nOTHER=1 // trailing # not this marker"
        self.assertEqual(
            list(iter_entries(text, comment="//", delimiter="=")),
            [("SECRET", "VALUE"), ("OTHER", "1 ")],
        )

    def test_duplicates_are_all_yielded_in_order(self) -> None:
        self.assertEqual(
            list(iter_entries("KEY=A\nKEY=B\n", comment="//", delimiter="=")),
            [("KEY", "A"), ("KEY", "B")],
        )

    def test_stops_at_first_malformed_line(self) -> None:
        it = iter_entries("A=1\n// ok\nBROKEN\nC=3\n", comment="//", delimiter="=")
        self.assertEqual(next(it), ("A", "1"))
        with self.assertRaises(MalformedLineError) as ctx:
            next(it)
        self.assertEqual(ctx.exception.lineno, 3)


if __name__ == "__main__":
    unittest.main()
