#!/usr/bin/env python3
"""
JSON-RPC 2.0 Server for RegistrationService

Lets a registration form written in any language drive the validator by
spawning this process and exchanging newline-delimited JSON over
stdin/stdout. Diagnostics go to stderr only.

Usage:
    registration-validator-rpc [--debug] [--language en]
    python -m registration_validator.jsonrpc_server

Request:
    {"jsonrpc":"2.0","id":1,"method":"validate","params":{"form":{"username":"ab"}}}

Response:
    {"jsonrpc":"2.0","id":1,"result":{"accepted":false,"errors":{"username":"usernameMin",...}}}

Protocol reference: https://www.jsonrpc.org/specification
"""

import sys
import json
import signal
import logging
import argparse
from typing import Any, Dict, Optional

from registration_validator import RegistrationService

logger = logging.getLogger(__name__)


class JsonRpcError(Exception):
    """Request-level failure carrying a JSON-RPC error code."""

    def __init__(self, code: int, message: str, request_id: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.request_id = request_id


class RegistrationJsonRpcServer:
    """JSON-RPC 2.0 server wrapping RegistrationService API."""

    ERROR_PARSE = -32700
    ERROR_INVALID_REQUEST = -32600
    ERROR_METHOD_NOT_FOUND = -32601
    ERROR_INVALID_PARAMS = -32602
    ERROR_INTERNAL = -32000

    def __init__(self, debug: bool = False, service: Optional[RegistrationService] = None):
        """
        Args:
            debug: Echo traffic to stderr
            service: RegistrationService to wrap; built from the bundled
                configuration when omitted
        """
        self.service = service or RegistrationService()
        self.debug = debug
        self.running = False

        self.methods = {
            'validate': self._handle_validate,
            'validate_field': self._handle_validate_field,
            'submit': self._handle_submit,
            'discover_rules': lambda params: self.service.discover_rules(),
            'get_messages': lambda params: self.service.get_messages(params.get('language')),
            'set_language': self._handle_set_language,
            'toggle_language': self._handle_toggle_language,
        }

    def _trace(self, message: str):
        if self.debug:
            print(f"[rpc] {message}", file=sys.stderr, flush=True)

    def start_server(self):
        """
        Serve requests from stdin until EOF or stop_server().

        Blank lines are ignored; every other line gets exactly one response
        line on stdout.
        """
        self.running = True
        self._trace("server started")
        try:
            for line in sys.stdin:
                if not self.running:
                    break
                if not line.strip():
                    continue
                self._trace(f"<- {line.strip()}")
                self._write(self.handle_request(line))
        except KeyboardInterrupt:
            self._trace("interrupted")
        finally:
            self.running = False
            self._trace("server stopped")

    def stop_server(self):
        """Ask the serve loop to exit after the current request."""
        self.running = False

    def handle_request(self, request_json: str) -> Dict[str, Any]:
        """
        Process one JSON-RPC request line.

        Never raises: every failure becomes an error response.
        """
        try:
            request_id, method, params = self._parse(request_json)
            handler = self.methods.get(method)
            if handler is None:
                raise JsonRpcError(self.ERROR_METHOD_NOT_FOUND, f"Method not found: {method}", request_id)
            try:
                return {"jsonrpc": "2.0", "id": request_id, "result": handler(params)}
            except ValueError as e:
                raise JsonRpcError(self.ERROR_INVALID_PARAMS, str(e), request_id) from e
        except JsonRpcError as e:
            return self._error(e.request_id, e.code, e.message)
        except Exception as e:
            logger.exception("Unhandled error in JSON-RPC method")
            return self._error(None, self.ERROR_INTERNAL, f"Internal error: {e}")

    def _parse(self, request_json: str):
        """Check the request envelope. Returns (id, method, params)."""
        try:
            request = json.loads(request_json)
        except json.JSONDecodeError as e:
            raise JsonRpcError(self.ERROR_PARSE, f"Parse error: {e}") from e

        if not isinstance(request, dict):
            raise JsonRpcError(self.ERROR_INVALID_REQUEST, "Request must be a JSON object")
        if request.get("jsonrpc") != "2.0":
            raise JsonRpcError(self.ERROR_INVALID_REQUEST,
                               f"Invalid JSON-RPC version: {request.get('jsonrpc')}")

        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params", {})
        if not method:
            raise JsonRpcError(self.ERROR_INVALID_REQUEST, "Missing 'method' field", request_id)
        if not isinstance(params, dict):
            raise JsonRpcError(self.ERROR_INVALID_PARAMS,
                               f"Params must be an object, got {type(params).__name__}", request_id)
        return request_id, method, params

    # Method handlers

    @staticmethod
    def _form(params: Dict[str, Any]) -> Dict[str, Any]:
        form = params.get('form')
        if form is None:
            raise ValueError("Missing required parameter: form")
        if not isinstance(form, dict):
            raise ValueError(f"Parameter 'form' must be an object, got {type(form).__name__}")
        return form

    def _outcome(self, result, resolve: bool) -> Dict[str, Any]:
        outcome = result.to_dict()
        if resolve:
            outcome["messages"] = self.service.messages_for(result)
        return outcome

    def _language_state(self) -> Dict[str, str]:
        return {"language": self.service.language, "direction": self.service.direction}

    def _handle_validate(self, params: Dict[str, Any]) -> Dict[str, Any]:
        result = self.service.validate(self._form(params))
        return self._outcome(result, bool(params.get('resolve', False)))

    def _handle_validate_field(self, params: Dict[str, Any]) -> Dict[str, Any]:
        form = self._form(params)
        field = params.get('field')
        if not field:
            raise ValueError("Missing required parameter: field")
        return {"field": field, "message": self.service.validate_field(form, field)}

    def _handle_submit(self, params: Dict[str, Any]) -> Dict[str, Any]:
        result, receipt = self.service.submit(self._form(params))
        outcome = self._outcome(result, resolve=True)
        outcome["submission"] = receipt
        return outcome

    def _handle_set_language(self, params: Dict[str, Any]) -> Dict[str, str]:
        language = params.get('language')
        if not language:
            raise ValueError("Missing required parameter: language")
        self.service.set_language(language)
        return self._language_state()

    def _handle_toggle_language(self, params: Dict[str, Any]) -> Dict[str, str]:
        self.service.toggle_language()
        return self._language_state()

    # Output

    @staticmethod
    def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}

    def _write(self, response: Dict[str, Any]):
        line = json.dumps(response, ensure_ascii=False)
        self._trace(f"-> {line}")
        sys.stdout.write(line + "\n")
        sys.stdout.flush()


def main():
    """Console entry point."""
    parser = argparse.ArgumentParser(
        description="Registration form validator over JSON-RPC 2.0 (stdin/stdout)",
        epilog="Methods: validate, validate_field, submit, discover_rules, "
               "get_messages, set_language, toggle_language",
    )
    parser.add_argument('--debug', action='store_true',
                        help='Echo traffic and debug logs to stderr')
    parser.add_argument('--language', default=None,
                        help='Starting language (he or en)')
    args = parser.parse_args()

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    server = RegistrationJsonRpcServer(
        debug=args.debug,
        service=RegistrationService(language=args.language),
    )

    def shutdown(sig, frame):
        server.stop_server()

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    server.start_server()


if __name__ == "__main__":
    main()
