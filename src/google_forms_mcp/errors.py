"""Error kinds surfaced by tool handlers.

Every failure carries a JSON-RPC error code from ``mcp.types`` so the
dispatcher can report which kind of failure occurred.
"""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class FormsToolError(Exception):
    """Base error for a failed tool invocation."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidParamsError(FormsToolError):
    """Caller-supplied arguments failed local validation."""

    code = INVALID_PARAMS


class MethodNotFoundError(FormsToolError):
    """No handler is registered under the requested tool name."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InternalError(FormsToolError):
    """The Google Forms API call itself failed."""

    code = INTERNAL_ERROR
