"""
Variable symbol index
Declaration and usage sites for every variable in a document. Variables are
document-global, case-insensitive, and a trailing '$' is part of the name.
"""

import re
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from basica_lsp.catalog import is_reserved
from basica_lsp.lexer import first_word, is_comment, row_statements, source_lines, tokenize_line

# Lower rank wins when several declarations share a row
FORM_RANK = {
    "DIM": 0,
    "LET": 1,
    "ASSIGN": 1,
    "DEF": 1,
    "FOR": 2,
    "INPUT": 3,
    "READ": 3,
}

_NAME = r'[A-Za-z][A-Za-z0-9_]*\$?'
# Numeric type suffixes; X% and X are the same variable
_SUFFIX = r'[%!#]?'

_DIM = re.compile(r'DIM(?:\s+SHARED)?\s+', re.IGNORECASE)
_FOR = re.compile(r'FOR\s+(' + _NAME + r')' + _SUFFIX + r'\s*=', re.IGNORECASE)
_INPUT = re.compile(
    r'(?:LINE\s+)?INPUT(?![A-Za-z0-9_$])\s*;?\s*'
    r'(?:#\s*[^,]*,\s*)?'
    r'(?:"[^"]*"?\s*[;,]\s*)?',
    re.IGNORECASE,
)
_READ = re.compile(r'READ\s+', re.IGNORECASE)
_LET = re.compile(r'LET\s+(' + _NAME + r')' + _SUFFIX + r'(?=\s*[(=])', re.IGNORECASE)
_ASSIGN = re.compile(r'(' + _NAME + r')' + _SUFFIX + r'\s*(?:\([^=]*\))?\s*=', re.IGNORECASE)
_DEF_FN = re.compile(r'DEF\s*FN\s*' + _NAME + r'\s*\(([^)]*)\)', re.IGNORECASE)
_LIST_NAME = re.compile(r'\s*(' + _NAME + r')')

_NOT_ASSIGNMENT = {"IF", "PRINT", "GOTO", "GOSUB"}


@dataclass
class Site:
    row: int
    start: int
    end: int
    form: Optional[str] = None


@dataclass
class VariableSymbol:
    name: str
    declarations: List[Site] = field(default_factory=list)
    usages: List[Site] = field(default_factory=list)

    @property
    def definition(self) -> Optional[Site]:
        """Earliest declaration, preferring DIM over assignment over FOR over INPUT/READ"""
        if not self.declarations:
            return None
        return min(self.declarations, key=lambda s: (s.row, FORM_RANK.get(s.form, 9), s.start))


def split_list(text: str, offset: int) -> List[Tuple[int, str]]:
    """Split a comma list at parenthesis depth zero, keeping absolute columns"""
    items = []
    depth = 0
    start = 0
    in_string = False
    for i, c in enumerate(text):
        if c == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
        elif c == ',' and depth <= 0:
            items.append((offset + start, text[start:i]))
            start = i + 1
    items.append((offset + start, text[start:]))
    return items


def _list_names(text: str, offset: int) -> List[Tuple[str, int]]:
    names = []
    for column, item in split_list(text, offset):
        match = _LIST_NAME.match(item)
        if match:
            names.append((match.group(1), column + match.start(1)))
    return names


def statement_declarations(statement: str, column: int) -> List[Tuple[str, int, str]]:
    """Declarations made by one statement as (name, column, form)"""
    if is_comment(statement):
        return []

    match = _DIM.match(statement)
    if match:
        return [(name, col, "DIM") for name, col in
                _list_names(statement[match.end():], column + match.end())]

    match = _FOR.match(statement)
    if match:
        return [(match.group(1), column + match.start(1), "FOR")]

    match = _INPUT.match(statement)
    if match:
        return [(name, col, "INPUT") for name, col in
                _list_names(statement[match.end():], column + match.end())]

    match = _READ.match(statement)
    if match:
        return [(name, col, "READ") for name, col in
                _list_names(statement[match.end():], column + match.end())]

    match = _LET.match(statement)
    if match:
        return [(match.group(1), column + match.start(1), "LET")]

    match = _DEF_FN.match(statement)
    if match:
        return [(name, col, "DEF") for name, col in
                _list_names(match.group(1), column + match.start(1))]

    if first_word(statement) in _NOT_ASSIGNMENT:
        return []
    match = _ASSIGN.match(statement)
    if match and not is_reserved(match.group(1)) and not _is_fn_name(match.group(1)):
        return [(match.group(1), column + match.start(1), "ASSIGN")]
    return []


def _is_fn_name(word: str) -> bool:
    return len(word) > 2 and word[:2].upper() == "FN"


def analyze_variables(text: str) -> Dict[str, VariableSymbol]:
    """Build the symbol table, keyed by uppercase name in first-seen order"""
    symbols: Dict[str, VariableSymbol] = {}

    def symbol(name: str) -> VariableSymbol:
        key = name.upper()
        if key not in symbols:
            symbols[key] = VariableSymbol(key)
        return symbols[key]

    for row, line in enumerate(source_lines(text)):
        for column, statement in row_statements(line):
            declared = set()
            for name, start, form in statement_declarations(statement, column):
                symbol(name).declarations.append(Site(row, start, start + len(name), form))
                declared.add(start)

            # DATA items are literals
            if first_word(statement) == "DATA":
                continue

            for token in tokenize_line(statement):
                if token.kind != "identifier":
                    continue
                start = column + token.start
                word = token.text
                if start in declared or is_reserved(word) or _is_fn_name(word):
                    continue
                symbol(word).usages.append(Site(row, start, start + len(word)))

    return symbols
