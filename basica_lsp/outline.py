"""
Outline and folding
Document symbols for interesting numbered rows and folding regions for
loops, blocks, subroutines, comment runs and DATA runs
"""

import re
from typing import Dict, List, Optional

from basica_lsp.jumps import gosub_targets
from basica_lsp.lexer import (
    first_word, is_comment, leading_line_number, mask_literals, row_statements,
    source_lines, strip_line_number,
)
from basica_lsp.protocol import (
    DocumentSymbol, FoldingRange, FoldingRangeKind, Range, SymbolKind,
)

_KEY_STATEMENTS = {"FOR", "WHILE", "DO", "SELECT", "IF", "GOSUB", "ON"}

_THEN = re.compile(r'(?<![A-Za-z0-9_$])THEN(?![A-Za-z0-9_$])', re.IGNORECASE)
_RETURN = re.compile(r'(?<![A-Za-z0-9_$])RETURN(?![A-Za-z0-9_$])', re.IGNORECASE)
_GOSUB = re.compile(r'(?<![A-Za-z0-9_$])GOSUB(?![A-Za-z0-9_$])', re.IGNORECASE)
_DEF_FN = re.compile(r'DEF\s*FN\s*([^(=\s]*)', re.IGNORECASE)


def _preview(text: str, limit: int) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def _comment_text(content: str) -> str:
    if content.startswith("'"):
        return content[1:].strip()
    return content[3:].strip()


def document_symbols(text: str) -> List[DocumentSymbol]:
    """One symbol per interesting numbered row"""
    subroutines = gosub_targets(text)
    symbols = []

    for row, line in enumerate(source_lines(text)):
        number = leading_line_number(line)
        if number is None:
            continue
        line_num = number[0]
        rest = strip_line_number(line)[0].rstrip()
        keyword = first_word(rest)
        detail: Optional[str] = None

        if line_num in subroutines:
            name, kind, detail = f"{line_num} (SUB)", SymbolKind.FUNCTION, "Subroutine"
        elif is_comment(rest):
            name = f"{line_num} REM {_preview(_comment_text(rest), 30)}"
            kind, detail = SymbolKind.STRING, "Comment"
        elif keyword == "DATA":
            name, kind, detail = f"{line_num} DATA", SymbolKind.ARRAY, "Data"
        elif _DEF_FN.match(rest):
            fn_name = _DEF_FN.match(rest).group(1)
            name, kind, detail = f"{line_num} DEF FN{fn_name}", SymbolKind.FUNCTION, "User function"
        elif keyword in _KEY_STATEMENTS:
            name, kind = f"{line_num} {_preview(rest, 40)}", SymbolKind.KEY
        else:
            continue

        span = Range.on_line(row, 0, len(line))
        symbols.append(DocumentSymbol(name, kind, span, span, detail))

    return symbols


class _FoldingBuilder:
    """Stack-based matching of block constructs across rows"""

    def __init__(self):
        self.stacks: Dict[str, List[int]] = {
            "FOR": [], "WHILE": [], "DO": [], "SELECT": [], "IF": [],
        }
        self.ranges: List[FoldingRange] = []

    def open(self, construct: str, row: int):
        self.stacks[construct].append(row)

    def close(self, construct: str, row: int):
        stack = self.stacks[construct]
        if not stack:
            return
        start = stack.pop()
        if start < row:
            self.add(start, row)

    def add(self, start: int, end: int, kind: str = FoldingRangeKind.REGION,
            collapsed: str = "..."):
        self.ranges.append(FoldingRange(start, end, kind, collapsed))

    def statement(self, statement: str, row: int):
        keyword = first_word(statement)
        words = statement.upper().split()

        if keyword == "FOR":
            self.open("FOR", row)
        elif keyword == "NEXT":
            rest = statement[4:].strip()
            for _ in range(len(rest.split(',')) if rest else 1):
                self.close("FOR", row)
        elif keyword == "WHILE":
            self.open("WHILE", row)
        elif keyword == "WEND":
            self.close("WHILE", row)
        elif keyword == "DO":
            self.open("DO", row)
        elif keyword == "LOOP":
            self.close("DO", row)
        elif keyword == "SELECT" and words[1:2] == ["CASE"]:
            self.open("SELECT", row)
        elif keyword == "END" and words[1:2] == ["SELECT"]:
            self.close("SELECT", row)
        elif keyword == "END" and words[1:2] == ["IF"] or keyword == "ENDIF":
            self.close("IF", row)
        elif keyword == "IF":
            then = _THEN.search(statement)
            if then and not statement[then.end():].strip():
                self.open("IF", row)


def folding_ranges(text: str) -> List[FoldingRange]:
    lines = source_lines(text)
    builder = _FoldingBuilder()
    subroutines = gosub_targets(text)
    sub_start: Optional[int] = None
    comment_start: Optional[int] = None
    data_start: Optional[int] = None

    for row, line in enumerate(lines):
        content = strip_line_number(line)[0].strip()
        commented = bool(content) and is_comment(content)
        data = first_word(content) == "DATA"

        if not commented and comment_start is not None:
            if row - 1 > comment_start:
                builder.add(comment_start, row - 1, FoldingRangeKind.COMMENT, "REM...")
            comment_start = None
        elif commented and comment_start is None:
            comment_start = row

        if not data and data_start is not None:
            if row - 1 > data_start:
                builder.add(data_start, row - 1, FoldingRangeKind.REGION, "DATA...")
            data_start = None
        elif data and data_start is None:
            data_start = row

        if not line.strip():
            continue

        number = leading_line_number(line)
        if number is not None and number[0] in subroutines:
            if sub_start is not None and row - 1 > sub_start:
                builder.add(sub_start, row - 1)
            sub_start = row

        masked = mask_literals(line)
        if _RETURN.search(masked) and not _GOSUB.search(masked) and sub_start is not None:
            if row > sub_start:
                builder.add(sub_start, row)
            sub_start = None

        for _, statement in row_statements(masked):
            builder.statement(statement, row)

    last = len(lines) - 1
    if comment_start is not None and last > comment_start:
        builder.add(comment_start, last, FoldingRangeKind.COMMENT, "REM...")
    if data_start is not None and last > data_start:
        builder.add(data_start, last, FoldingRangeKind.REGION, "DATA...")

    return builder.ranges
