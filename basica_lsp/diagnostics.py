"""
Diagnostics engine
Syntax errors from the grammar engine, then heuristic warnings: undefined
and unused variables, unreachable code and jumps to undefined lines
"""

import re
import logging
from typing import List, Optional, Tuple

from basica_lsp.catalog import BUILTIN_VARIABLES
from basica_lsp.errors import BasicSyntaxError
from basica_lsp.grammar import parse
from basica_lsp.jumps import build_line_map, find_jump_references, jump_targets
from basica_lsp.lexer import is_comment, leading_line_number, source_lines, strip_line_number
from basica_lsp.protocol import Diagnostic, DiagnosticSeverity, DiagnosticTag, Position, Range
from basica_lsp.variables import analyze_variables

logger = logging.getLogger(__name__)

_LINE_PREFIX = re.compile(r'^Line (\d+):\s*(.*)$', re.DOTALL)
_AT_LINE = re.compile(r'at line (\d+)')


def parse_error_message(message: str) -> Tuple[int, str]:
    """Pull a BASIC line number out of a syntax error message

    Returns (line number, message); the line number is 0 when none is found.
    """
    match = _LINE_PREFIX.match(message)
    if match:
        return int(match.group(1)), match.group(2)

    match = _AT_LINE.search(message)
    if match:
        return int(match.group(1)), message

    return 0, message


def _ends_flow(content: str, line: str) -> bool:
    if content in ("END", "STOP", "RETURN"):
        return True
    upper = line.upper()
    return content.startswith("GOTO ") and "IF " not in upper and "ON " not in upper


class DiagnosticsChecker:
    """Analyze BASICA source and collect diagnostics"""

    def __init__(self, source: str):
        self.source = source
        self.lines = source_lines(source)
        self.diagnostics: List[Diagnostic] = []

    def check(self) -> List[Diagnostic]:
        """Perform full analysis"""
        try:
            parse(self.source)
        except BasicSyntaxError as e:
            logger.debug(f"Syntax error: {e.message}")
            self.check_syntax_error(e.message)
            return self.diagnostics

        self.check_variables()
        self.check_unreachable_code()
        self.check_undefined_lines()
        return self.diagnostics

    def check_syntax_error(self, message: str):
        line_number, text = parse_error_message(message)
        row = 0
        if line_number > 0:
            row = build_line_map(self.source).get(line_number, 0)
        self.add_diagnostic(row, 0, len(self.lines[row]), DiagnosticSeverity.ERROR, text)

    def check_variables(self):
        symbols = analyze_variables(self.source)

        for name, symbol in symbols.items():
            if symbol.usages and not symbol.declarations and name not in BUILTIN_VARIABLES:
                for site in symbol.usages:
                    self.add_diagnostic(
                        site.row, site.start, site.end,
                        DiagnosticSeverity.WARNING,
                        f"Variable '{name}' may not be defined",
                    )

        for name, symbol in symbols.items():
            if symbol.declarations and not symbol.usages:
                site = symbol.declarations[0]
                self.add_diagnostic(
                    site.row, site.start, site.end,
                    DiagnosticSeverity.HINT,
                    f"Variable '{name}' is defined but never used",
                    unnecessary=True,
                )

    def check_unreachable_code(self):
        """Flag rows after END, STOP, RETURN or a bare GOTO until the next jump target"""
        targets = jump_targets(self.source)
        opened_at: Optional[int] = None

        for row, line in enumerate(self.lines):
            number = leading_line_number(line)
            if opened_at is not None and number is not None and number[0] in targets:
                if row > opened_at + 1:
                    last = row - 1
                    self.diagnostics.append(Diagnostic(
                        range=Range(Position(opened_at + 1, 0), Position(last, len(self.lines[last]))),
                        severity=DiagnosticSeverity.HINT,
                        message="Unreachable code",
                        tags=[DiagnosticTag.UNNECESSARY],
                    ))
                opened_at = None

            content = strip_line_number(line)[0].strip()
            if not content or is_comment(content):
                continue
            if opened_at is not None:
                continue
            if _ends_flow(content.upper(), line):
                opened_at = row

    def check_undefined_lines(self):
        line_map = build_line_map(self.source)
        for ref in find_jump_references(self.source):
            if ref.target not in line_map:
                self.add_diagnostic(
                    ref.row, ref.start, ref.end,
                    DiagnosticSeverity.ERROR,
                    f"Line {ref.target} is not defined",
                )

    def add_diagnostic(self, line: int, start_char: int, end_char: int,
                       severity: DiagnosticSeverity, message: str,
                       unnecessary: bool = False):
        """Add diagnostic message"""
        self.diagnostics.append(Diagnostic(
            range=Range.on_line(line, start_char, end_char),
            severity=severity,
            message=message,
            tags=[DiagnosticTag.UNNECESSARY] if unnecessary else [],
        ))


def check(text: str) -> List[Diagnostic]:
    return DiagnosticsChecker(text).check()
