"""Test the line map and jump-target index."""

from basica_lsp.jumps import (
    build_line_map, find_jump_references, gosub_targets, jump_targets,
)


class TestLineMap:
    def test_first_definition_wins(self):
        """A duplicated line number maps to its first row."""
        assert build_line_map("10 A = 1\n20 B = 2\n10 C = 3") == {10: 0, 20: 1}

    def test_unnumbered_rows_skipped(self):
        """Rows without numbers are not in the map."""
        assert build_line_map("PRINT\n\n30 END") == {30: 2}


class TestJumpReferences:
    def test_goto_columns(self):
        """The reference covers the target digits."""
        refs = find_jump_references("10 GOTO 99")
        assert len(refs) == 1
        assert (refs[0].row, refs[0].start, refs[0].end, refs[0].target) == (0, 8, 10, 99)
        assert refs[0].keyword == "GOTO"

    def test_on_goto_list(self):
        """Every target of an ON list is a reference."""
        refs = find_jump_references("10 ON X GOTO 100, 200, 300")
        assert [r.target for r in refs] == [100, 200, 300]
        assert (refs[0].start, refs[0].end) == (13, 16)
        assert (refs[1].start, refs[1].end) == (18, 21)

    def test_then_target(self):
        """THEN followed by a number jumps."""
        refs = find_jump_references("10 IF X > 1 THEN 200")
        assert [(r.keyword, r.target) for r in refs] == [("THEN", 200)]

    def test_statement_after_target(self):
        """A colon right after the target ends it."""
        assert [r.target for r in find_jump_references("10 GOTO 100:PRINT")] == [100]

    def test_restore(self):
        assert [r.target for r in find_jump_references("10 RESTORE 500")] == [500]

    def test_on_error_goto_zero(self):
        """Turning error trapping off is not a jump."""
        assert find_jump_references("10 ON ERROR GOTO 0") == []
        assert [r.target for r in find_jump_references("10 ON ERROR GOTO 500")] == [500]

    def test_strings_and_comments_ignored(self):
        """Jump keywords inside literals are not references."""
        assert find_jump_references('10 PRINT "GOTO 50" \' GOSUB 60') == []

    def test_keyword_inside_name(self):
        """MYGOTO is a variable, not a keyword."""
        assert find_jump_references("10 MYGOTO 5") == []

    def test_target_sets(self):
        """GOSUB targets are a subset of all jump targets."""
        text = "10 GOSUB 100\n20 GOTO 30\n30 END\n100 RETURN"
        assert jump_targets(text) == {100, 30}
        assert gosub_targets(text) == {100}
