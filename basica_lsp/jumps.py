"""
Jump-target index
Maps BASIC line numbers to source rows and finds every line number used as
the target of GOTO, GOSUB, THEN, RESTORE or an ON ... GOTO/GOSUB list
"""

import re
from typing import Dict, List, Set
from dataclasses import dataclass

from basica_lsp.lexer import leading_line_number, mask_literals, source_lines

JUMP_KEYWORDS = ("GOTO", "GOSUB", "THEN", "RESTORE")

_JUMP_KEYWORD = re.compile(r'(?<![A-Za-z0-9_$])(' + '|'.join(JUMP_KEYWORDS) + r')(?=\s)', re.IGNORECASE)
_TARGET = re.compile(r'\s*([0-9]+)(?![A-Za-z0-9_.$])')
_ON_ERROR = re.compile(r'ON\s+ERROR\s+$', re.IGNORECASE)


@dataclass
class JumpReference:
    row: int
    start: int
    end: int
    target: int
    keyword: str


def build_line_map(text: str) -> Dict[int, int]:
    """Map each BASIC line number to the first row that defines it"""
    line_map = {}
    for row, line in enumerate(source_lines(text)):
        number = leading_line_number(line)
        if number is not None and number[0] not in line_map:
            line_map[number[0]] = row
    return line_map


def find_jump_references(text: str) -> List[JumpReference]:
    """Collect every line-number reference in document order"""
    references = []
    for row, line in enumerate(source_lines(text)):
        references.extend(line_jump_references(row, line))
    return references


def line_jump_references(row: int, line: str) -> List[JumpReference]:
    masked = mask_literals(line)
    references = []

    for match in _JUMP_KEYWORD.finditer(masked):
        keyword = match.group(1).upper()
        on_error = keyword == "GOTO" and _ON_ERROR.search(masked[:match.start()])

        cursor = match.end()
        for part in masked[cursor:].split(','):
            target = _TARGET.match(part)
            if not target:
                break
            # ON ERROR GOTO 0 turns error trapping off
            if on_error and int(target.group(1)) == 0:
                break
            references.append(JumpReference(
                row=row,
                start=cursor + target.start(1),
                end=cursor + target.end(1),
                target=int(target.group(1)),
                keyword=keyword,
            ))
            if part[target.end():].strip():
                break
            cursor += len(part) + 1

    return references


def jump_targets(text: str) -> Set[int]:
    return {ref.target for ref in find_jump_references(text)}


def gosub_targets(text: str) -> Set[int]:
    return {ref.target for ref in find_jump_references(text) if ref.keyword == "GOSUB"}
