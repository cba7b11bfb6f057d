"""
Navigation and rename
Goto-definition, find-references and rename for variables and line numbers
"""

import re
import logging
from typing import List, Optional, Tuple

from basica_lsp.catalog import is_keyword, is_reserved
from basica_lsp.jumps import JUMP_KEYWORDS, build_line_map, find_jump_references
from basica_lsp.lexer import leading_line_number, source_lines, word_at
from basica_lsp.protocol import Location, Position, Range, TextEdit, WorkspaceEdit
from basica_lsp.variables import analyze_variables

logger = logging.getLogger(__name__)

_JUMP_CONTEXT = re.compile(r'(?<![A-Za-z0-9_$])(' + '|'.join(JUMP_KEYWORDS) + r')(?![A-Za-z0-9_$])', re.IGNORECASE)
_VALID_NAME = re.compile(r'[A-Za-z][A-Za-z0-9_]*\$?$')


def _word_at_position(lines: List[str], position: Position) -> Optional[Tuple[int, int, str]]:
    if position.line < 0 or position.line >= len(lines):
        return None
    return word_at(lines[position.line], position.character)


def _occurrence_pattern(word: str, any_suffix: bool = False):
    base = re.escape(word.rstrip('$'))
    if any_suffix:
        suffix = r'(\$?)'
    elif word.endswith('$'):
        suffix = r'(\$)'
    else:
        suffix = r'()'
    return re.compile(r'(?<![A-Za-z0-9_$])' + base + suffix + r'(?![A-Za-z0-9_$])', re.IGNORECASE)


def find_occurrences(text: str, word: str) -> List[Tuple[int, int, int]]:
    """Whole-word, case-insensitive occurrences of word as (row, start, end)"""
    pattern = _occurrence_pattern(word)
    return [
        (row, match.start(), match.end())
        for row, line in enumerate(source_lines(text))
        for match in pattern.finditer(line)
    ]


def find_definition(text: str, position: Position, uri: str) -> Optional[Location]:
    """Go to the row defining a line number, or a variable's first declaration"""
    lines = source_lines(text)
    found = _word_at_position(lines, position)
    if not found:
        return None
    word = found[2]

    if word.isdigit():
        if not _JUMP_CONTEXT.search(lines[position.line]):
            return None
        row = build_line_map(text).get(int(word))
        if row is None:
            return None
        return Location(uri, Range.on_line(row, 0, 0))

    if is_keyword(word):
        return None

    symbol = analyze_variables(text).get(word.upper())
    if symbol is None or symbol.definition is None:
        return None
    site = symbol.definition
    return Location(uri, Range.on_line(site.row, site.start, site.end))


def find_references(text: str, position: Position, uri: str) -> List[Location]:
    lines = source_lines(text)
    found = _word_at_position(lines, position)
    if not found:
        return []
    word = found[2]

    if word.isdigit():
        target = int(word)
        locations = []
        row = build_line_map(text).get(target)
        if row is not None:
            _, start, end = leading_line_number(lines[row])
            locations.append(Location(uri, Range.on_line(row, start, end)))
        for ref in find_jump_references(text):
            if ref.target == target:
                locations.append(Location(uri, Range.on_line(ref.row, ref.start, ref.end)))
        return locations

    if is_keyword(word):
        return []

    return [Location(uri, Range.on_line(row, start, end))
            for row, start, end in find_occurrences(text, word)]


def prepare_rename(text: str, position: Position) -> Optional[Range]:
    """Range of the renameable token under the cursor, or None"""
    found = _word_at_position(source_lines(text), position)
    if not found:
        return None
    start, end, word = found
    if word.isdigit() or is_reserved(word):
        return None
    return Range.on_line(position.line, start, end)


def rename(text: str, position: Position, new_name: str, uri: str) -> Optional[WorkspaceEdit]:
    """Rename a variable everywhere, keeping each occurrence's '$' suffix"""
    found = _word_at_position(source_lines(text), position)
    if not found:
        return None
    word = found[2]
    if word.isdigit() or is_reserved(word):
        return None

    if not _VALID_NAME.match(new_name) or is_reserved(new_name):
        logger.info(f"Rejected rename of {word} to {new_name!r}")
        return None

    new_base = new_name.rstrip('$')
    pattern = _occurrence_pattern(word, any_suffix=True)
    edits = []
    for row, line in enumerate(source_lines(text)):
        for match in pattern.finditer(line):
            replacement = new_base + '$' if match.group(1) else new_base
            edits.append(TextEdit(Range.on_line(row, match.start(), match.end()), replacement))

    if not edits:
        return None
    return WorkspaceEdit({uri: edits})
