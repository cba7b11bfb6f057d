"""
Editing assistance: completion, hover and signature help
"""

from typing import List, Optional

from basica_lsp.catalog import FUNCTIONS, KEYWORDS, documentation
from basica_lsp.lexer import is_word_char, mask_literals, source_lines, word_at
from basica_lsp.protocol import (
    CompletionItem, CompletionItemKind, Hover, ParameterInformation, Position,
    Range, SignatureHelp, SignatureInformation,
)
from basica_lsp.variables import analyze_variables


def completions(text: str, position: Position) -> List[CompletionItem]:
    """Every keyword, built-in function and declared variable"""
    items = []

    # Add keywords
    for name, entry in KEYWORDS.items():
        items.append(CompletionItem(name, CompletionItemKind.KEYWORD, entry.detail))

    # Add built-in functions
    for name, entry in FUNCTIONS.items():
        items.append(CompletionItem(
            name,
            CompletionItemKind.FUNCTION,
            entry.signature or entry.detail,
            documentation=entry.doc,
            insert_text=f"{name}($1)" if entry.parameters else None,
        ))

    # Add variables
    symbols = analyze_variables(text)
    for name in sorted(symbols):
        symbol = symbols[name]
        if not symbol.declarations:
            continue
        if any(site.form == "DIM" for site in symbol.declarations):
            items.append(CompletionItem(name, CompletionItemKind.FIELD, "Array"))
        else:
            items.append(CompletionItem(name, CompletionItemKind.VARIABLE, "Variable"))

    return items


def hover(text: str, position: Position) -> Optional[Hover]:
    lines = source_lines(text)
    if position.line < 0 or position.line >= len(lines):
        return None

    found = word_at(lines[position.line], position.character)
    if not found:
        return None
    start, end, word = found

    doc = documentation(word)
    if doc is None:
        return None
    return Hover(doc, Range.on_line(position.line, start, end))


def signature_help(text: str, position: Position) -> Optional[SignatureHelp]:
    """Signature of the built-in function whose argument list holds the cursor"""
    lines = source_lines(text)
    if position.line < 0 or position.line >= len(lines):
        return None

    line = lines[position.line]
    before = mask_literals(line[:max(0, min(position.character, len(line)))])

    # Look backwards for the unclosed open paren
    depth = 0
    open_paren = None
    for i in range(len(before) - 1, -1, -1):
        c = before[i]
        if c == ')':
            depth += 1
        elif c == '(':
            if depth == 0:
                open_paren = i
                break
            depth -= 1
    if open_paren is None:
        return None

    head = before[:open_paren].rstrip()
    start = len(head)
    while start > 0 and is_word_char(head[start - 1]):
        start -= 1
    name = head[start:].upper()
    if not name:
        return None

    active = 0
    depth = 0
    for c in before[open_paren + 1:]:
        if c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
        elif c == ',' and depth == 0:
            active += 1

    entry = FUNCTIONS.get(name)
    if entry is None or entry.signature is None:
        return None

    parameters = [
        ParameterInformation(param, f"{param} - {doc}")
        for param, doc in entry.parameters
    ]
    signature = SignatureInformation(entry.signature, entry.doc, parameters, active)
    return SignatureHelp([signature], 0, active)
