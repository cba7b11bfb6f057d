"""
Semantic highlighting
Classifies each row left to right and encodes the result with the LSP
relative (delta) encoding
"""

from typing import List, Tuple

from basica_lsp.catalog import is_function, is_keyword
from basica_lsp.lexer import leading_line_number, source_lines, tokenize_line
from basica_lsp.protocol import SemanticTokens

TOKEN_TYPES = ["keyword", "function", "variable", "string", "number", "comment", "operator"]
TOKEN_MODIFIERS = ["declaration", "definition"]

KEYWORD, FUNCTION, VARIABLE, STRING, NUMBER, COMMENT, OPERATOR = range(len(TOKEN_TYPES))

_KIND_TYPES = {
    "comment": COMMENT,
    "string": STRING,
    "number": NUMBER,
    "operator": OPERATOR,
}


def classify_line(line: str) -> List[Tuple[int, int, int]]:
    """(start, length, token type) for every highlighted span of a row"""
    spans = []
    start = 0

    number = leading_line_number(line)
    if number is not None:
        spans.append((number[1], number[2] - number[1], NUMBER))
        start = number[2]

    for token in tokenize_line(line, start):
        if token.kind == "identifier":
            if is_keyword(token.text):
                token_type = KEYWORD
            elif is_function(token.text):
                token_type = FUNCTION
            else:
                token_type = VARIABLE
        elif token.kind in _KIND_TYPES:
            token_type = _KIND_TYPES[token.kind]
        else:
            continue
        spans.append((token.start, token.end - token.start, token_type))

    return spans


def encode(tokens: List[Tuple[int, int, int, int]]) -> List[int]:
    """Delta-encode (row, start, length, type) tuples already in document order"""
    data = []
    prev_row = 0
    prev_start = 0
    for row, start, length, token_type in tokens:
        delta_row = row - prev_row
        delta_start = start - prev_start if delta_row == 0 else start
        data.extend([delta_row, delta_start, length, token_type, 0])
        prev_row = row
        prev_start = start
    return data


def semantic_tokens(text: str) -> SemanticTokens:
    tokens = []
    for row, line in enumerate(source_lines(text)):
        for start, length, token_type in classify_line(line):
            tokens.append((row, start, length, token_type))
    return SemanticTokens(encode(tokens))
