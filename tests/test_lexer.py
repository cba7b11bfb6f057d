"""Test the shared lexical helpers."""

from basica_lsp.lexer import (
    first_word, is_comment, leading_line_number, mask_literals, row_statements,
    source_lines, strip_line_number, tokenize_line, word_at,
)


class TestRows:
    def test_source_lines_drops_carriage_returns(self):
        """Windows line endings split into clean rows."""
        assert source_lines("10 PRINT\r\n20 END\r\n") == ["10 PRINT", "20 END", ""]

    def test_leading_line_number(self):
        """Line numbers report their value and columns."""
        assert leading_line_number("10 PRINT") == (10, 0, 2)
        assert leading_line_number("  20 END") == (20, 2, 4)
        assert leading_line_number("30") == (30, 0, 2)

    def test_no_line_number(self):
        """Rows without a separated leading number have none."""
        assert leading_line_number("PRINT 10") is None
        assert leading_line_number("10PRINT") is None
        assert leading_line_number("") is None

    def test_strip_line_number(self):
        """Content starts after the number and its spacing."""
        assert strip_line_number("10   PRINT X") == ("PRINT X", 5)
        assert strip_line_number("PRINT X") == ("PRINT X", 0)


class TestWords:
    def test_word_includes_dollar_suffix(self):
        """A string variable is one word."""
        assert word_at("10 PRINT A$", 10) == (9, 11, "A$")

    def test_word_touching_cursor(self):
        """A cursor just after a word still finds it."""
        assert word_at("10 PRINT X", 10) == (9, 10, "X")

    def test_no_word(self):
        """Whitespace has no word."""
        assert word_at("10   PRINT", 3) is None

    def test_column_is_clamped(self):
        """Columns past the end of the row are clamped."""
        assert word_at("10 END", 99) == (3, 6, "END")

    def test_first_word(self):
        """The statement keyword is uppercased."""
        assert first_word("print x") == "PRINT"
        assert first_word("a$ = 1") == "A$"
        assert first_word("") == ""


class TestTokens:
    def test_token_kinds(self):
        """Strings, operators and REM comments are scanned in order."""
        tokens = list(tokenize_line('PRINT "HI": REM done'))
        assert [t.kind for t in tokens] == ["identifier", "string", "operator", "comment"]
        assert (tokens[1].start, tokens[1].end) == (6, 10)
        assert tokens[3].text == "REM done"

    def test_rem_must_be_whole_word(self):
        """REMAINDER is a variable, not a comment."""
        tokens = list(tokenize_line("REMAINDER = 1"))
        assert tokens[0].kind == "identifier"
        assert tokens[0].text == "REMAINDER"

    def test_numbers(self):
        """Hex literals and exponents are single numbers."""
        assert [t.text for t in tokenize_line("&H1F + 1E5 + 2.5")
                if t.kind == "number"] == ["&H1F", "1E5", "2.5"]

    def test_exponent_needs_digits(self):
        """A trailing E without digits is not an exponent."""
        tokens = list(tokenize_line("2END"))
        assert tokens[0].text == "2"
        assert tokens[1].text == "END"

    def test_unterminated_string(self):
        """An open string runs to the end of the row."""
        tokens = list(tokenize_line('PRINT "oops'))
        assert tokens[-1].kind == "string"
        assert tokens[-1].end == 11

    def test_mask_literals(self):
        """Strings and comments become spaces, columns unchanged."""
        line = 'PRINT "GOTO 10" \' GOSUB 20'
        masked = mask_literals(line)
        assert len(masked) == len(line)
        assert "GOTO" not in masked
        assert "GOSUB" not in masked
        assert masked.startswith("PRINT ")


class TestStatements:
    def test_row_statements_columns(self):
        """Statements carry absolute columns and ignore quoted colons."""
        statements = row_statements('10 A = 1: PRINT "a:b"')
        assert statements == [(3, "A = 1"), (10, 'PRINT "a:b"')]

    def test_comment_ends_splitting(self):
        """Colons inside a trailing comment do not start statements."""
        statements = row_statements("10 X = 1 ' set: reset")
        assert len(statements) == 1
        assert statements[0][0] == 3

    def test_is_comment(self):
        """Both comment forms are recognised."""
        assert is_comment("REM hello")
        assert is_comment("' hello")
        assert is_comment("REM")
        assert not is_comment("REMARK = 1")
