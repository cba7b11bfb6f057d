"""
Exception hierarchy for the BASICA language server
"""

from typing import Optional


class BasicaError(Exception):
    """Base exception for language server errors"""
    pass


class BasicSyntaxError(BasicaError):
    """The grammar engine rejected a source row"""

    def __init__(self, message: str, line_number: Optional[int] = None, row: int = 0):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.row = row


class ProtocolError(BasicaError):
    """Malformed JSON-RPC framing or payload"""
    pass


class ConfigError(BasicaError):
    """Invalid command line option or environment value"""
    pass
