"""Test document symbols and folding ranges."""

import pytest

from basica_lsp.outline import document_symbols, folding_ranges
from basica_lsp.protocol import FoldingRangeKind, SymbolKind
import basictest


def regions(text):
    return [(r.start_line, r.end_line) for r in folding_ranges(text)]


class TestFoldingBlocks:
    def test_for_loop(self):
        """A FOR loop folds from FOR to NEXT."""
        ranges = folding_ranges("10 FOR I = 1 TO 10\n20 PRINT I\n30 NEXT I")
        assert len(ranges) == 1
        assert (ranges[0].start_line, ranges[0].end_line) == (0, 2)
        assert ranges[0].kind == FoldingRangeKind.REGION

    def test_nested_loops(self):
        """Inner loops close first."""
        text = "10 FOR I = 1 TO 3\n20 FOR J = 1 TO 3\n30 PRINT I * J\n40 NEXT J\n50 NEXT I"
        assert regions(text) == [(1, 3), (0, 4)]

    def test_next_with_list(self):
        """NEXT J, I closes both loops on one row."""
        text = "10 FOR I = 1 TO 3\n20 FOR J = 1 TO 3\n30 PRINT I * J\n40 NEXT J, I"
        assert regions(text) == [(1, 3), (0, 3)]

    def test_while_wend(self):
        assert regions("10 WHILE X < 5\n20 X = X + 1\n30 WEND") == [(0, 2)]

    def test_block_if(self):
        """IF folds only when THEN ends the row."""
        assert regions("10 IF X THEN\n20 PRINT X\n30 END IF") == [(0, 2)]
        assert regions("10 IF X THEN 30\n20 PRINT X\n30 END IF") == []

    def test_single_row_loop(self):
        """A loop opened and closed on one row does not fold."""
        assert regions("10 FOR I = 1 TO 3: PRINT I: NEXT I") == []

    def test_keywords_in_strings_ignored(self):
        assert regions('10 PRINT "FOR"\n20 PRINT "NEXT"') == []


class TestFoldingRuns:
    def test_comment_run(self):
        """Consecutive comment rows fold as one comment region."""
        ranges = folding_ranges("10 REM a\n20 REM b\n30 ' c\n40 PRINT")
        assert [(r.start_line, r.end_line, r.kind, r.collapsed_text) for r in ranges] == [
            (0, 2, FoldingRangeKind.COMMENT, "REM..."),
        ]

    def test_data_run(self):
        ranges = folding_ranges("10 DATA 1\n20 DATA 2\n30 END")
        assert [(r.start_line, r.end_line, r.collapsed_text) for r in ranges] == [(0, 1, "DATA...")]

    def test_run_at_end_of_document(self):
        assert regions("10 PRINT\n20 DATA 1\n30 DATA 2") == [(1, 2)]

    def test_single_comment_row(self):
        assert regions("10 REM only\n20 END") == []


class TestFoldingSubroutines:
    def test_gosub_target_to_return(self):
        text = '10 GOSUB 100\n20 END\n100 PRINT "SUB"\n110 RETURN'
        assert regions(text) == [(2, 3)]

    def test_goto_target_is_not_subroutine(self):
        text = '10 GOTO 100\n20 END\n100 PRINT "X"\n110 RETURN'
        assert regions(text) == []

    def test_consecutive_subroutines(self):
        """A new subroutine closes an open one."""
        text = ("10 GOSUB 100: GOSUB 200\n20 END\n100 PRINT 1\n110 PRINT 2\n"
                "200 PRINT 3\n210 RETURN")
        assert regions(text) == [(2, 3), (4, 5)]


class TestDocumentSymbols:
    TEXT = "\n".join([
        "10 REM Main program",
        "20 GOSUB 100",
        "30 DATA 1, 2",
        "40 DEF FNA(X) = X + 1",
        "50 FOR I = 1 TO 3",
        "60 PRINT I",
        '100 PRINT "SUB"',
        "110 RETURN",
    ])

    def test_symbol_names(self):
        """Interesting rows become symbols in document order."""
        names = [s.name for s in document_symbols(self.TEXT)]
        assert names == [
            "10 REM Main program",
            "20 GOSUB 100",
            "30 DATA",
            "40 DEF FNA",
            "50 FOR I = 1 TO 3",
            "100 (SUB)",
        ]

    def test_symbol_kinds(self):
        kinds = [s.kind for s in document_symbols(self.TEXT)]
        assert kinds == [
            SymbolKind.STRING, SymbolKind.KEY, SymbolKind.ARRAY,
            SymbolKind.FUNCTION, SymbolKind.KEY, SymbolKind.FUNCTION,
        ]

    def test_symbol_range_covers_row(self):
        symbol = document_symbols("10 FOR I = 1 TO 3")[0]
        assert symbol.range.start.character == 0
        assert symbol.range.end.character == 17
        assert symbol.to_dict()["selectionRange"] == symbol.to_dict()["range"]

    def test_long_comment_preview(self):
        """Comment previews are cut at 30 characters."""
        symbol = document_symbols("10 REM " + "x" * 40)[0]
        assert symbol.name == "10 REM " + "x" * 30 + "..."

    def test_unnumbered_rows_skipped(self):
        assert document_symbols("REM no number\nFOR I = 1 TO 2") == []


class TestFoldingShape:
    @pytest.mark.parametrize("text", basictest.PROGRAMS)
    def test_regions_span_rows(self, text):
        """Every region ends after it starts."""
        for r in folding_ranges(text):
            assert r.end_line > r.start_line

    @pytest.mark.parametrize("text", basictest.PROGRAMS)
    def test_regions_nest_or_separate(self, text):
        """Regions of one kind never partly overlap."""
        ranges = folding_ranges(text)
        for i, a in enumerate(ranges):
            for b in ranges[i + 1:]:
                if a.kind != b.kind:
                    continue
                disjoint = a.end_line < b.start_line or b.end_line < a.start_line
                a_in_b = b.start_line <= a.start_line and a.end_line <= b.end_line
                b_in_a = a.start_line <= b.start_line and b.end_line <= a.end_line
                assert disjoint or a_in_b or b_in_a

    def test_corpus_folds(self):
        """The sample programs produce every kind of region."""
        kinds = {(r.kind, r.collapsed_text) for text in basictest.PROGRAMS
                 for r in folding_ranges(text)}
        assert (FoldingRangeKind.COMMENT, "REM...") in kinds
        assert (FoldingRangeKind.REGION, "DATA...") in kinds
        assert any(kind == FoldingRangeKind.REGION and not collapsed
                   for kind, collapsed in kinds)
