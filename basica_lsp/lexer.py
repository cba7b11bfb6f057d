"""
Lexical primitives for BASICA source
Row splitting, line-number stripping, word lookup and a small token scanner
shared by every analysis so they agree on what a word or statement is
"""

import re
from typing import Iterator, List, Optional, Tuple
from dataclasses import dataclass

OPERATORS = "+-*/^=<>(),;:"

_LINE_NUMBER = re.compile(r'(\s*)([0-9]+)(?=\s|$)')
_FIRST_WORD = re.compile(r'[A-Za-z_][A-Za-z0-9_]*\$?')


@dataclass
class Token:
    kind: str  # number, string, identifier, comment, operator, other
    start: int
    end: int
    text: str


def is_word_char(c: str) -> bool:
    return c.isascii() and c.isalnum() or c == '_' or c == '$'


def is_ident_char(c: str) -> bool:
    return c.isascii() and c.isalnum() or c == '_'


def source_lines(text: str) -> List[str]:
    """Split document text into rows, dropping a trailing carriage return"""
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]


def word_at(line: str, column: int) -> Optional[Tuple[int, int, str]]:
    """Find the word touching column, returning (start, end, word)"""
    column = max(0, min(column, len(line)))

    start = column
    while start > 0 and is_word_char(line[start - 1]):
        start -= 1

    end = column
    while end < len(line) and is_word_char(line[end]):
        end += 1

    if start < end:
        return start, end, line[start:end]
    return None


def leading_line_number(line: str) -> Optional[Tuple[int, int, int]]:
    """Return (number, start, end) for a row's BASIC line number"""
    match = _LINE_NUMBER.match(line)
    if not match:
        return None
    return int(match.group(2)), match.start(2), match.end(2)


def strip_line_number(line: str) -> Tuple[str, int]:
    """Remove the BASIC line number, returning the content and its column

    Rows without a line number come back unchanged with offset 0.
    """
    number = leading_line_number(line)
    if number is None:
        return line, 0

    rest = line[number[2]:]
    content = rest.lstrip()
    return content, number[2] + len(rest) - len(content)


def scan_number(line: str, i: int) -> int:
    """Return the end of the numeric literal starting at i"""
    n = len(line)
    if line[i:i + 2].upper() == '&H':
        j = i + 2
        while j < n and line[j] in '0123456789abcdefABCDEF':
            j += 1
        return j

    j = i
    seen_exponent = False
    while j < n:
        c = line[j]
        if c.isdigit() or c == '.':
            j += 1
        elif c in 'Ee' and not seen_exponent and _exponent_follows(line, j + 1):
            seen_exponent = True
            j += 1
            if line[j] in '+-':
                j += 1
        else:
            break
    return j


def _exponent_follows(line: str, j: int) -> bool:
    if j < len(line) and line[j] in '+-':
        j += 1
    return j < len(line) and line[j].isdigit()


def scan_string(line: str, i: int) -> int:
    """Return the end of the string literal starting at i

    An unterminated literal runs to the end of the line.
    """
    close = line.find('"', i + 1)
    return len(line) if close < 0 else close + 1


def scan_identifier(line: str, i: int) -> int:
    j = i + 1
    while j < len(line) and is_ident_char(line[j]):
        j += 1
    if j < len(line) and line[j] == '$':
        j += 1
    return j


def _starts_number(line: str, i: int) -> bool:
    c = line[i]
    if c.isdigit():
        return True
    if c == '.':
        return i + 1 < len(line) and line[i + 1].isdigit()
    return c == '&' and line[i + 1:i + 2] in ('H', 'h')


def _starts_identifier(c: str) -> bool:
    return c.isascii() and c.isalpha() or c == '_'


def tokenize_line(line: str, start: int = 0, end: Optional[int] = None) -> Iterator[Token]:
    """Scan line[start:end] left to right

    A comment starts at a whole-word REM or an apostrophe and swallows the rest.
    """
    n = len(line) if end is None else end
    i = start
    while i < n:
        c = line[i]
        if c.isspace():
            i += 1
        elif c == "'":
            yield Token("comment", i, n, line[i:n])
            return
        elif c == '"':
            j = min(scan_string(line, i), n)
            yield Token("string", i, j, line[i:j])
            i = j
        elif _starts_number(line, i):
            j = min(scan_number(line, i), n)
            yield Token("number", i, j, line[i:j])
            i = j
        elif _starts_identifier(c):
            j = min(scan_identifier(line, i), n)
            word = line[i:j]
            if word.upper() == "REM":
                yield Token("comment", i, n, line[i:n])
                return
            yield Token("identifier", i, j, word)
            i = j
        elif c in OPERATORS:
            yield Token("operator", i, i + 1, c)
            i += 1
        else:
            yield Token("other", i, i + 1, c)
            i += 1


def _rem_at(line: str, i: int) -> bool:
    if line[i:i + 3].upper() != "REM":
        return False
    if i > 0 and is_word_char(line[i - 1]):
        return False
    return i + 3 >= len(line) or not is_word_char(line[i + 3])


def split_statements(content: str, offset: int = 0) -> List[Tuple[int, str]]:
    """Split statement content on ':' separators

    Returns (column, text) pairs with surrounding whitespace trimmed. Columns
    are absolute, offset being the column where content starts in its row.
    A comment ends the splitting; it stays attached to the last statement.
    """
    statements = []
    seg_start = 0
    in_string = False
    i = 0
    while i < len(content):
        c = content[i]
        if in_string:
            if c == '"':
                in_string = False
        elif c == '"':
            in_string = True
        elif c == ':':
            statements.append((seg_start, content[seg_start:i]))
            seg_start = i + 1
        elif c == "'" or _rem_at(content, i):
            break
        i += 1
    statements.append((seg_start, content[seg_start:]))

    result = []
    for start, text in statements:
        stripped = text.strip()
        if stripped:
            lead = len(text) - len(text.lstrip())
            result.append((offset + start + lead, stripped))
    return result


def row_statements(line: str) -> List[Tuple[int, str]]:
    """Statements of a single row with their absolute columns"""
    content, offset = strip_line_number(line)
    return split_statements(content, offset)


def first_word(statement: str) -> str:
    """Uppercased leading identifier of a statement, or '' when there is none"""
    match = _FIRST_WORD.match(statement)
    return match.group().upper() if match else ""


def is_comment(statement: str) -> bool:
    return statement.startswith("'") or _rem_at(statement, 0)


def mask_literals(line: str) -> str:
    """Blank out string literals and comments, keeping every column in place"""
    chars = list(line)
    for token in tokenize_line(line):
        if token.kind in ("string", "comment"):
            chars[token.start:token.end] = ' ' * (token.end - token.start)
    return ''.join(chars)
