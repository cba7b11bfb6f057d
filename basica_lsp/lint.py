#!/usr/bin/env python3
"""
BASICA Linter - runs the language server diagnostics from the command line
"""

import sys
from typing import List, Optional

from basica_lsp.diagnostics import check
from basica_lsp.protocol import Diagnostic, DiagnosticSeverity

SEVERITY_NAMES = {
    DiagnosticSeverity.ERROR: "error",
    DiagnosticSeverity.WARNING: "warning",
    DiagnosticSeverity.INFORMATION: "info",
    DiagnosticSeverity.HINT: "hint",
}


def format_diagnostic(filepath: str, diagnostic: Diagnostic) -> str:
    start = diagnostic.range.start
    severity = SEVERITY_NAMES[diagnostic.severity]
    return f"{filepath}:{start.line + 1}:{start.character + 1}: {severity} {diagnostic.message}"


def lint_file(filepath: str) -> List[Diagnostic]:
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()
    return check(source)


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print("Usage: basica-lint <file.bas> [file.bas ...]")
        sys.exit(1)

    errors = warnings = hints = 0
    failed = False

    for filepath in argv:
        try:
            diagnostics = lint_file(filepath)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: {filepath}: {e}")
            failed = True
            continue

        if not diagnostics:
            print(f"{filepath}: No issues found")
            continue

        for diagnostic in diagnostics:
            print(format_diagnostic(filepath, diagnostic))

        errors += sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.ERROR)
        warnings += sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.WARNING)
        hints += sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.HINT)

    print(f"\nFound {errors} errors, {warnings} warnings, {hints} hints")
    sys.exit(1 if errors > 0 or failed else 0)


if __name__ == '__main__':
    main()
