"""
Grammar engine for BASICA

Rows are parsed one at a time with a lark grammar. The diagnostics engine
only needs to know whether a document is syntactically valid, and if not,
a message pointing at the first failing row. No tree is kept.
"""

from typing import List

import lark
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from basica_lsp.errors import BasicSyntaxError
from basica_lsp.lexer import leading_line_number, source_lines

_parsers = {}


def get_parser(name: str = "basica") -> lark.Lark:
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"grammars/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="earley", lexer="basic", propagate_positions=True
    )
    _parsers[name] = parser
    return parser


def tokenize(line: str) -> List[lark.Token]:
    """Lex a single row into grammar tokens"""
    try:
        return list(get_parser().lex(line))
    except UnexpectedCharacters as e:
        raise BasicSyntaxError(_unexpected_character(line, e.pos_in_stream)) from e


def parse_line(line: str) -> lark.Tree:
    """Parse a single row, raising BasicSyntaxError on failure

    The whole row is lexed first, so a bad character anywhere in it is
    reported ahead of grammar errors.
    """
    tokenize(line)
    try:
        return get_parser().parse(line)
    except UnexpectedEOF:
        detail = "Unexpected end of line"
    except UnexpectedToken as e:
        if e.token.type == "$END":
            detail = "Unexpected end of line"
        else:
            detail = f"Unexpected '{e.token}'"
    raise BasicSyntaxError(detail)


def parse(text: str) -> None:
    """Check every non-blank row, stopping at the first syntax error"""
    for row, line in enumerate(source_lines(text)):
        if not line.strip():
            continue
        try:
            parse_line(line)
        except BasicSyntaxError as e:
            number = leading_line_number(line)
            if number is None:
                raise BasicSyntaxError(e.message, None, row) from e
            raise BasicSyntaxError(f"Line {number[0]}: {e.message}", number[0], row) from e


def _unexpected_character(line: str, index: int) -> str:
    if index < len(line):
        return f"Unexpected character '{line[index]}'"
    return "Unexpected end of line"
