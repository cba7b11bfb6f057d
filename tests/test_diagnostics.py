"""Test the diagnostics engine."""

import pytest

from basica_lsp.diagnostics import DiagnosticsChecker, check, parse_error_message
from basica_lsp.jumps import jump_targets
from basica_lsp.lexer import leading_line_number
from basica_lsp.protocol import DiagnosticSeverity, DiagnosticTag
import basictest


def span(diagnostic):
    r = diagnostic.range
    return (r.start.line, r.start.character, r.end.line, r.end.character)


class TestCleanPrograms:
    def test_simple_program(self):
        """Declared, used and reachable code has no diagnostics."""
        assert check("10 LET X = 5\n20 PRINT X\n30 GOTO 10") == []

    def test_builtin_variables(self):
        """Runtime-provided values are never undefined."""
        assert check("10 PRINT TIMER; ERR; ERL") == []

    def test_empty_document(self):
        assert check("") == []

    def test_numeric_suffix_variables(self):
        """X% and I% declare X and I."""
        text = "10 X% = 1\n20 FOR I% = 1 TO 3\n30 PRINT X% + I%\n40 NEXT"
        assert check(text) == []

    def test_let_with_suffix(self):
        assert check("10 LET A! = 1.5\n20 LET B# = A! * 2\n30 PRINT B#") == []

    @pytest.mark.parametrize("text", [
        "10 X = INP(&H60)\n20 PRINT X",
        "10 A = 1\n20 X = VARPTR(A)\n30 PRINT X",
        '10 A$ = "CDE"\n20 PLAY "X" + VARPTR$(A$)',
        "10 PRINT FRE(0)",
        '10 OPEN "F" FOR INPUT AS #1\n20 PRINT LOC(1); LOF(1)',
        '10 A$ = "X"\n20 PRINT SADD(A$)',
    ])
    def test_builtin_functions(self, text):
        """Built-in function calls are not variable usages."""
        assert check(text) == []

    def test_command_statements_keep_checks(self):
        """Device and environment commands parse, so variable checks still run."""
        diagnostics = check("10 KEY OFF\n20 OPTION BASE 1\n30 TRON\n40 PRINT Z")
        assert [d.message for d in diagnostics] == ["Variable 'Z' may not be defined"]

    def test_print_to_file_without_space(self):
        diagnostics = check("10 OPEN \"O\", #1, \"F\"\n20 PRINT#1, X")
        assert [d.message for d in diagnostics] == ["Variable 'X' may not be defined"]

    def test_conditional_goto_keeps_flow(self):
        """A GOTO behind IF does not make the next row unreachable."""
        text = "10 INPUT X\n20 IF X > 1 THEN GOTO 40\n30 PRINT X\n40 END"
        assert check(text) == []


class TestJumpTargets:
    def test_undefined_line(self):
        """Jumping to a missing line is an error on the target digits."""
        diagnostics = check("10 GOTO 99")
        assert len(diagnostics) == 1
        assert diagnostics[0].severity == DiagnosticSeverity.ERROR
        assert diagnostics[0].message == "Line 99 is not defined"
        assert span(diagnostics[0]) == (0, 8, 0, 10)

    def test_every_on_target_checked(self):
        text = "10 INPUT X\n20 ON X GOSUB 100, 200\n30 END\n100 RETURN"
        messages = [d.message for d in check(text)]
        assert messages == ["Line 200 is not defined"]


class TestVariables:
    def test_unused_variable(self):
        """A variable never read is a hint tagged unnecessary."""
        diagnostics = check("10 LET Y = 1\n20 END")
        assert len(diagnostics) == 1
        hint = diagnostics[0]
        assert hint.severity == DiagnosticSeverity.HINT
        assert hint.message == "Variable 'Y' is defined but never used"
        assert hint.tags == [DiagnosticTag.UNNECESSARY]
        assert span(hint) == (0, 7, 0, 8)

    def test_undefined_variable(self):
        """Every usage of an undeclared variable is a warning."""
        diagnostics = check("10 PRINT Z\n20 PRINT Z")
        assert [d.severity for d in diagnostics] == [DiagnosticSeverity.WARNING] * 2
        assert diagnostics[0].message == "Variable 'Z' may not be defined"
        assert span(diagnostics[0]) == (0, 9, 0, 10)
        assert span(diagnostics[1]) == (1, 9, 1, 10)

    def test_string_suffix_in_message(self):
        diagnostics = check("10 PRINT N$")
        assert diagnostics[0].message == "Variable 'N$' may not be defined"


class TestUnreachableCode:
    def test_region_after_goto(self):
        """Rows between a bare GOTO and the next jump target are unreachable."""
        text = '10 GOTO 40\n20 PRINT "A"\n30 PRINT "B"\n40 END'
        diagnostics = check(text)
        assert len(diagnostics) == 1
        assert diagnostics[0].message == "Unreachable code"
        assert diagnostics[0].severity == DiagnosticSeverity.HINT
        assert diagnostics[0].tags == [DiagnosticTag.UNNECESSARY]
        assert span(diagnostics[0]) == (1, 0, 2, 12)

    def test_end_at_last_row(self):
        """Nothing follows a final END."""
        assert check("10 PRINT 1\n20 END") == []

    def test_region_needs_a_target(self):
        """Without a later jump target nothing closes the region."""
        assert check('10 END\n20 PRINT "never"') == []

    def test_subroutine_after_end(self):
        """Subroutine bodies are reachable through GOSUB."""
        text = '10 GOSUB 100\n20 END\n100 PRINT "SUB"\n110 RETURN'
        assert check(text) == []

    @pytest.mark.parametrize("text", basictest.PROGRAMS)
    def test_targets_never_unreachable(self, text):
        """No unreachable region contains a row that is jumped to."""
        targets = jump_targets(text)
        rows = text.split("\n")
        for diagnostic in check(text):
            if diagnostic.message != "Unreachable code":
                continue
            for row in range(diagnostic.range.start.line, diagnostic.range.end.line + 1):
                number = leading_line_number(rows[row])
                assert number is None or number[0] not in targets

    def test_corpus_has_unreachable_regions(self):
        """The sample programs exercise the unreachable check."""
        hints = [d for text in basictest.PROGRAMS for d in check(text)
                 if d.message == "Unreachable code"]
        assert len(hints) >= 3


class TestSyntaxErrors:
    def test_syntax_error_only(self):
        """A syntax error suppresses the other checks."""
        diagnostics = check("10 PRINT Z\n20 FOR = 5")
        assert len(diagnostics) == 1
        error = diagnostics[0]
        assert error.severity == DiagnosticSeverity.ERROR
        assert span(error) == (1, 0, 1, 10)
        assert not error.message.startswith("Line ")

    def test_unnumbered_row_reports_row_zero(self):
        diagnostics = check("10 PRINT 1\nFOR = 5")
        assert span(diagnostics[0])[0] == 0

    def test_checker_accumulates(self):
        checker = DiagnosticsChecker("10 GOTO 99")
        assert checker.check() is checker.diagnostics


class TestParseErrorMessage:
    def test_line_prefix(self):
        assert parse_error_message("Line 20: Unexpected '='") == (20, "Unexpected '='")

    def test_at_line(self):
        assert parse_error_message("Unexpected token at line 7") == (7, "Unexpected token at line 7")

    def test_no_line(self):
        assert parse_error_message("Unexpected end of line") == (0, "Unexpected end of line")
