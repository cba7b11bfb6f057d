"""
LSP data types used by the BASICA language server
Each type renders itself to the JSON shape the client expects via to_dict()
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field
from enum import IntEnum


class DiagnosticSeverity(IntEnum):
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class DiagnosticTag(IntEnum):
    UNNECESSARY = 1
    DEPRECATED = 2


class CompletionItemKind(IntEnum):
    TEXT = 1
    METHOD = 2
    FUNCTION = 3
    CONSTRUCTOR = 4
    FIELD = 5
    VARIABLE = 6
    CLASS = 7
    INTERFACE = 8
    MODULE = 9
    PROPERTY = 10
    UNIT = 11
    VALUE = 12
    ENUM = 13
    KEYWORD = 14
    SNIPPET = 15


class SymbolKind(IntEnum):
    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20


class FoldingRangeKind:
    COMMENT = "comment"
    IMPORTS = "imports"
    REGION = "region"


INSERT_TEXT_SNIPPET = 2


@dataclass
class Position:
    line: int
    character: int

    def to_dict(self):
        return {"line": self.line, "character": self.character}

    @classmethod
    def from_dict(cls, data: Dict) -> "Position":
        return cls(data["line"], data["character"])


@dataclass
class Range:
    start: Position
    end: Position

    def to_dict(self):
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> "Range":
        return cls(Position(line, start), Position(line, end))


@dataclass
class Location:
    uri: str
    range: Range

    def to_dict(self):
        return {"uri": self.uri, "range": self.range.to_dict()}


@dataclass
class Diagnostic:
    range: Range
    severity: DiagnosticSeverity
    message: str
    source: str = "basica"
    tags: List[DiagnosticTag] = field(default_factory=list)

    def to_dict(self):
        result = {
            "range": self.range.to_dict(),
            "severity": int(self.severity),
            "message": self.message,
            "source": self.source,
        }
        if self.tags:
            result["tags"] = [int(t) for t in self.tags]
        return result


@dataclass
class TextEdit:
    range: Range
    new_text: str

    def to_dict(self):
        return {"range": self.range.to_dict(), "newText": self.new_text}


@dataclass
class WorkspaceEdit:
    changes: Dict[str, List[TextEdit]]

    def to_dict(self):
        return {
            "changes": {
                uri: [e.to_dict() for e in edits]
                for uri, edits in self.changes.items()
            }
        }


@dataclass
class CompletionItem:
    label: str
    kind: CompletionItemKind
    detail: Optional[str] = None
    documentation: Optional[str] = None
    insert_text: Optional[str] = None

    def to_dict(self):
        result = {"label": self.label, "kind": int(self.kind)}
        if self.detail:
            result["detail"] = self.detail
        if self.documentation:
            result["documentation"] = {"kind": "markdown", "value": self.documentation}
        if self.insert_text:
            result["insertText"] = self.insert_text
            result["insertTextFormat"] = INSERT_TEXT_SNIPPET
        return result


@dataclass
class Hover:
    contents: str
    range: Optional[Range] = None

    def to_dict(self):
        result = {"contents": {"kind": "markdown", "value": self.contents}}
        if self.range:
            result["range"] = self.range.to_dict()
        return result


@dataclass
class DocumentSymbol:
    name: str
    kind: SymbolKind
    range: Range
    selection_range: Range
    detail: Optional[str] = None
    children: List["DocumentSymbol"] = field(default_factory=list)

    def to_dict(self):
        result = {
            "name": self.name,
            "kind": int(self.kind),
            "range": self.range.to_dict(),
            "selectionRange": self.selection_range.to_dict(),
        }
        if self.detail:
            result["detail"] = self.detail
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@dataclass
class FoldingRange:
    start_line: int
    end_line: int
    kind: str = FoldingRangeKind.REGION
    collapsed_text: Optional[str] = None

    def to_dict(self):
        result = {
            "startLine": self.start_line,
            "endLine": self.end_line,
            "kind": self.kind,
        }
        if self.collapsed_text:
            result["collapsedText"] = self.collapsed_text
        return result


@dataclass
class ParameterInformation:
    label: str
    documentation: Optional[str] = None

    def to_dict(self):
        result = {"label": self.label}
        if self.documentation:
            result["documentation"] = self.documentation
        return result


@dataclass
class SignatureInformation:
    label: str
    documentation: Optional[str] = None
    parameters: List[ParameterInformation] = field(default_factory=list)
    active_parameter: int = 0

    def to_dict(self):
        return {
            "label": self.label,
            "documentation": self.documentation,
            "parameters": [p.to_dict() for p in self.parameters],
            "activeParameter": self.active_parameter,
        }


@dataclass
class SignatureHelp:
    signatures: List[SignatureInformation]
    active_signature: int = 0
    active_parameter: int = 0

    def to_dict(self):
        return {
            "signatures": [s.to_dict() for s in self.signatures],
            "activeSignature": self.active_signature,
            "activeParameter": self.active_parameter,
        }


@dataclass
class SemanticTokens:
    data: List[int]

    def to_dict(self):
        return {"data": self.data}
