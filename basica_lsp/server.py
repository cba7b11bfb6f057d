#!/usr/bin/env python3
"""
BASICA Language Server Protocol Implementation
JSON-RPC over stdio with diagnostics, completion, hover, definition,
references, rename, symbols, folding, signature help and semantic tokens
"""

import sys
import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, BinaryIO, Dict, List, Optional

from basica_lsp import __version__
from basica_lsp.assist import completions, hover, signature_help
from basica_lsp.config import ServerConfig, configure_logging
from basica_lsp.diagnostics import check
from basica_lsp.documents import DocumentStore
from basica_lsp.errors import ConfigError, ProtocolError
from basica_lsp.navigation import find_definition, find_references, prepare_rename, rename
from basica_lsp.outline import document_symbols, folding_ranges
from basica_lsp.protocol import Diagnostic, Position
from basica_lsp.semantic_tokens import TOKEN_MODIFIERS, TOKEN_TYPES, semantic_tokens

logger = logging.getLogger(__name__)

SERVER_NAME = "basica-lsp"

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

# Requests answered on the reader thread so lifecycle ordering is preserved
_INLINE_REQUESTS = {"initialize", "shutdown"}


class LanguageServer:
    """LSP server implementation"""

    def __init__(self, config: Optional[ServerConfig] = None,
                 stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None):
        self.config = config or ServerConfig()
        self.documents = DocumentStore()
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.executor = ThreadPoolExecutor(max_workers=self.config.workers)
        self._write_lock = threading.Lock()
        self.running = True
        self.shutdown_requested = False
        logger.info("BASICA LSP Server started")
        if self.config.extra_args:
            logger.warning(f"Ignoring arguments: {' '.join(self.config.extra_args)}")

    def handle_message(self, msg: Dict) -> Optional[Dict]:
        """Handle incoming LSP message"""
        method = msg.get("method")
        params = msg.get("params") or {}
        msg_id = msg.get("id")

        logger.debug(f"Received: {method}")

        try:
            if method == "initialize":
                return self.initialize(msg_id, params)
            elif method == "initialized":
                logger.info("Client initialized")
                self.log_message(f"{SERVER_NAME} {__version__} ready")
                return None
            elif method == "textDocument/didOpen":
                self.did_open(params)
            elif method == "textDocument/didChange":
                self.did_change(params)
            elif method == "textDocument/didClose":
                self.did_close(params)
            elif method == "textDocument/completion":
                return self.completion(msg_id, params)
            elif method == "textDocument/hover":
                return self.hover(msg_id, params)
            elif method == "textDocument/definition":
                return self.definition(msg_id, params)
            elif method == "textDocument/references":
                return self.references(msg_id, params)
            elif method == "textDocument/documentSymbol":
                return self.document_symbol(msg_id, params)
            elif method == "textDocument/signatureHelp":
                return self.signature_help(msg_id, params)
            elif method == "textDocument/prepareRename":
                return self.prepare_rename(msg_id, params)
            elif method == "textDocument/rename":
                return self.rename(msg_id, params)
            elif method == "textDocument/foldingRange":
                return self.folding_range(msg_id, params)
            elif method == "textDocument/semanticTokens/full":
                return self.semantic_tokens(msg_id, params)
            elif method == "shutdown":
                self.shutdown_requested = True
                return self._result(msg_id, None)
            elif method == "exit":
                logger.info("Exit requested")
                self.running = False
            elif msg_id is not None:
                logger.info(f"Unsupported request: {method}")
                return self._error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")
            else:
                logger.debug(f"Ignoring notification: {method}")

        except Exception as e:
            logger.error(f"Error handling {method}: {e}", exc_info=True)
            if msg_id is not None:
                return self._error(msg_id, INTERNAL_ERROR, str(e))

        return None

    def _result(self, msg_id: Any, result: Any) -> Dict:
        return {"jsonrpc": "2.0", "id": msg_id, "result": result}

    def _error(self, msg_id: Any, code: int, message: str) -> Dict:
        return {
            "jsonrpc": "2.0",
            "id": msg_id,
            "error": {
                "code": code,
                "message": message
            }
        }

    def initialize(self, msg_id: Any, params: Dict) -> Dict:
        """Handle initialize request"""
        logger.info(f"Initialize from client: {params.get('clientInfo')}")

        return self._result(msg_id, {
            "capabilities": {
                "textDocumentSync": {
                    "openClose": True,
                    "change": 1,  # Full
                },
                "definitionProvider": True,
                "hoverProvider": True,
                "completionProvider": {
                    "triggerCharacters": [" "]
                },
                "documentSymbolProvider": True,
                "referencesProvider": True,
                "signatureHelpProvider": {
                    "triggerCharacters": ["(", ","]
                },
                "renameProvider": {
                    "prepareProvider": True
                },
                "foldingRangeProvider": True,
                "semanticTokensProvider": {
                    "legend": {
                        "tokenTypes": TOKEN_TYPES,
                        "tokenModifiers": TOKEN_MODIFIERS,
                    },
                    "full": True,
                },
            },
            "serverInfo": {
                "name": SERVER_NAME,
                "version": __version__
            }
        })

    def did_open(self, params: Dict):
        """Handle document open"""
        doc = params["textDocument"]
        uri = doc["uri"]
        generation = self.documents.open(uri, doc["text"])
        self.schedule_diagnostics(uri, generation)

    def did_change(self, params: Dict):
        """Handle document change"""
        uri = params["textDocument"]["uri"]
        changes = params["contentChanges"]

        if changes:
            generation = self.documents.change(uri, changes[0]["text"])
            self.schedule_diagnostics(uri, generation)

    def did_close(self, params: Dict):
        """Handle document close"""
        uri = params["textDocument"]["uri"]
        self.documents.close(uri)
        self.publish_diagnostics(uri, [])

    def completion(self, msg_id: Any, params: Dict) -> Dict:
        """Provide completion items"""
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            items = completions(text, Position.from_dict(params["position"]))
        return self._result(msg_id, [item.to_dict() for item in items])

    def hover(self, msg_id: Any, params: Dict) -> Dict:
        """Provide hover information"""
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            info = hover(text, Position.from_dict(params["position"]))
        return self._result(msg_id, info.to_dict() if info else None)

    def definition(self, msg_id: Any, params: Dict) -> Dict:
        """Go to definition"""
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            location = find_definition(text, Position.from_dict(params["position"]), uri)
        return self._result(msg_id, location.to_dict() if location else None)

    def references(self, msg_id: Any, params: Dict) -> Dict:
        """Find references"""
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            locations = find_references(text, Position.from_dict(params["position"]), uri)
        return self._result(msg_id, [loc.to_dict() for loc in locations] or None)

    def document_symbol(self, msg_id: Any, params: Dict) -> Dict:
        """Provide document symbols"""
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            symbols = document_symbols(text)
        return self._result(msg_id, [s.to_dict() for s in symbols])

    def signature_help(self, msg_id: Any, params: Dict) -> Dict:
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            help_info = signature_help(text, Position.from_dict(params["position"]))
        return self._result(msg_id, help_info.to_dict() if help_info else None)

    def prepare_rename(self, msg_id: Any, params: Dict) -> Dict:
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            span = prepare_rename(text, Position.from_dict(params["position"]))
        return self._result(msg_id, span.to_dict() if span else None)

    def rename(self, msg_id: Any, params: Dict) -> Dict:
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            edit = rename(text, Position.from_dict(params["position"]), params["newName"], uri)
        return self._result(msg_id, edit.to_dict() if edit else None)

    def folding_range(self, msg_id: Any, params: Dict) -> Dict:
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            ranges = folding_ranges(text)
        return self._result(msg_id, [r.to_dict() for r in ranges] or None)

    def semantic_tokens(self, msg_id: Any, params: Dict) -> Dict:
        uri = params["textDocument"]["uri"]
        with self.documents.read(uri) as text:
            if text is None:
                return self._result(msg_id, None)
            tokens = semantic_tokens(text)
        return self._result(msg_id, tokens.to_dict())

    def schedule_diagnostics(self, uri: str, generation: int):
        self.executor.submit(self.run_diagnostics, uri, generation)

    def run_diagnostics(self, uri: str, generation: int):
        """Analyze a document and publish unless it changed in the meantime"""
        try:
            with self.documents.read(uri) as text:
                if text is None:
                    return
                diagnostics = check(text)
            if self.documents.generation(uri) != generation:
                logger.debug(f"Dropping stale diagnostics for {uri}")
                return
            self.publish_diagnostics(uri, diagnostics)
        except Exception as e:
            logger.error(f"Error checking {uri}: {e}", exc_info=True)

    def publish_diagnostics(self, uri: str, diagnostics: List[Diagnostic]):
        """Publish diagnostics to client"""
        self.send_message({
            "jsonrpc": "2.0",
            "method": "textDocument/publishDiagnostics",
            "params": {
                "uri": uri,
                "diagnostics": [d.to_dict() for d in diagnostics]
            }
        })

    def log_message(self, message: str, message_type: int = 3):
        self.send_message({
            "jsonrpc": "2.0",
            "method": "window/logMessage",
            "params": {"type": message_type, "message": message}
        })

    def send_message(self, msg: Dict):
        """Send message to client"""
        body = json.dumps(msg).encode('utf-8')
        header = f"Content-Length: {len(body)}\r\n\r\n".encode('ascii')
        with self._write_lock:
            self.stdout.write(header + body)
            self.stdout.flush()

    def read_message(self) -> Optional[Dict]:
        """Read one framed message, or None when the client disconnects"""
        headers = {}
        while True:
            line = self.stdin.readline()
            if not line:
                return None

            line = line.decode('ascii', errors='replace').strip()
            if not line:
                break

            if ':' in line:
                key, value = line.split(':', 1)
                headers[key.strip().lower()] = value.strip()

        try:
            content_length = int(headers.get('content-length', 0))
        except ValueError:
            raise ProtocolError(f"Bad Content-Length: {headers.get('content-length')}")
        if content_length <= 0:
            raise ProtocolError("Missing Content-Length header")

        content = self.stdin.read(content_length)
        if len(content) < content_length:
            return None

        try:
            msg = json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProtocolError(f"Invalid JSON payload: {e}")
        if not isinstance(msg, dict):
            raise ProtocolError("Payload is not a JSON object")
        return msg

    def dispatch(self, msg: Dict):
        """Answer requests on the worker pool, everything else inline"""
        if msg.get("id") is not None and msg.get("method") not in _INLINE_REQUESTS:
            self.executor.submit(self._respond, msg)
        else:
            self._respond(msg)

    def _respond(self, msg: Dict):
        response = self.handle_message(msg)
        if response:
            self.send_message(response)

    def run(self):
        """Main server loop"""
        logger.info("LSP server running")

        try:
            while self.running:
                try:
                    msg = self.read_message()
                except ProtocolError as e:
                    logger.error(f"Protocol error: {e}")
                    continue

                if msg is None:
                    logger.info("Client disconnected")
                    break
                self.dispatch(msg)
        except KeyboardInterrupt:
            logger.info("Server interrupted")
        finally:
            self.executor.shutdown(wait=True)


def print_usage():
    print(f"""{SERVER_NAME} {__version__} - language server for line-numbered BASIC

Usage: basica-lsp [options]

Options:
  --log-file PATH     Write the server log to PATH
  --log-level LEVEL   DEBUG, INFO, WARNING, ERROR or CRITICAL
  --workers N         Worker threads for requests and diagnostics
  --stdio             Talk over stdin/stdout (the default)
  --version           Show version
  --help              Show this help

Environment:
  BASICA_LSP_LOG, BASICA_LSP_LOG_LEVEL, BASICA_LSP_WORKERS
""")


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv

    if "--help" in argv or "-h" in argv:
        print_usage()
        sys.exit(0)
    if "--version" in argv:
        print(f"{SERVER_NAME} {__version__}")
        sys.exit(0)

    try:
        config = ServerConfig.from_env().apply_args(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print_usage()
        sys.exit(1)

    configure_logging(config)
    server = LanguageServer(config)
    server.run()
    sys.exit(0 if server.shutdown_requested else 1)


if __name__ == "__main__":
    main()
