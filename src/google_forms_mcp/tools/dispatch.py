"""Shared tool dispatch logic.

Routes a ``(name, arguments)`` invocation to exactly one handler and folds
every outcome into an ``OperationResult``.  Nothing raised by a handler
escapes ``execute_tool``.
"""

import json
import logging
from dataclasses import dataclass, field

from google_forms_mcp.errors import (
    FormsToolError,
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
)
from google_forms_mcp.tools.arguments import ARGUMENT_MODELS, decode_arguments
from google_forms_mcp.tools.schemas import validate_tool_result

logger = logging.getLogger(__name__)


def strip_nulls(value):
    """Recursively remove None values from dicts/lists.

    Empty dicts that result from stripping are collapsed to None, so an
    argument sent as JSON ``null`` is treated as absent.
    """
    if isinstance(value, dict):
        cleaned = {k: strip_nulls(v) for k, v in value.items() if v is not None}
        return cleaned or None
    if isinstance(value, list):
        return [strip_nulls(v) for v in value]
    return value


DISPATCH: dict[str, tuple[str, str]] = {
    "create_form": ("forms", "create_form"),
    "add_text_question": ("forms", "add_text_question"),
    "add_multiple_choice_question": ("forms", "add_multiple_choice_question"),
    "get_form": ("forms", "get_form"),
    "get_form_responses": ("forms", "get_form_responses"),
    "add_checkbox_question": ("forms", "add_checkbox_question"),
    "add_dropdown_question": ("forms", "add_dropdown_question"),
    "add_scale_question": ("forms", "add_scale_question"),
    "add_text_item": ("forms", "add_text_item"),
    "add_section": ("forms", "add_section"),
    "update_form_info": ("forms", "update_form_info"),
    "delete_question": ("forms", "delete_question"),
    "update_question": ("forms", "update_question"),
    "move_question": ("forms", "move_question"),
}


@dataclass(frozen=True)
class OperationResult:
    """Uniform envelope returned for every tool invocation."""

    content: list[str] = field(default_factory=list)
    is_error: bool = False
    error: FormsToolError | None = None

    @classmethod
    def success(cls, payload) -> "OperationResult":
        return cls(content=[json.dumps(payload, indent=2, default=str)])

    @classmethod
    def failure(cls, error: FormsToolError) -> "OperationResult":
        return cls(content=[f"Error: {error.message}"], is_error=True, error=error)

    @property
    def error_code(self) -> int | None:
        return self.error.code if self.error is not None else None


def create_services(settings, forms_client=None) -> dict[str, object]:
    """Instantiate all tool services.

    Returns a dict keyed by service attribute name (matching DISPATCH values).
    ``forms_client`` is built from ``settings`` unless one is injected.
    """
    from google_forms_mcp.tools.client import build_forms_client
    from google_forms_mcp.tools.forms import FormsService

    if forms_client is None:
        forms_client = build_forms_client(settings)

    return {"forms": FormsService(forms_client)}


def _run_tool(services: dict[str, object], name: str, tool_input) -> dict:
    entry = DISPATCH.get(name)
    if entry is None:
        raise MethodNotFoundError(name)

    if not isinstance(tool_input, dict):
        raise InvalidParamsError(f"Invalid tool input type for '{name}': expected object")

    service_attr, method_name = entry
    service = services.get(service_attr)
    if service is None:
        raise InternalError(f"Service '{service_attr}' not available")

    cleaned = strip_nulls(tool_input) or {}
    logger.debug(
        "Executing tool: %s with keys: %s", name, list(cleaned.keys()), extra={"tool_name": name}
    )

    arguments = decode_arguments(ARGUMENT_MODELS[name], cleaned)
    result = getattr(service, method_name)(**arguments.model_dump())
    return validate_tool_result(name, result)


def execute_tool(services: dict[str, object], name: str, tool_input) -> OperationResult:
    """Execute a tool by name using the provided services dict.

    Unknown names yield a ``MethodNotFoundError`` failure; invalid arguments
    an ``InvalidParamsError`` failure, both before any remote call is made.
    """
    try:
        result = _run_tool(services, name, tool_input)
    except FormsToolError as e:
        logger.warning(
            "Tool failed: %s: %s",
            name,
            e.message,
            extra={"tool_name": name, "error_code": e.code},
        )
        return OperationResult.failure(e)
    except Exception as e:
        logger.exception("Tool execution failed: %s", name, extra={"tool_name": name})
        return OperationResult.failure(InternalError(str(e) or type(e).__name__))
    return OperationResult.success(result)
