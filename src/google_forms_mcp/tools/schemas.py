"""Pydantic models for validating tool results before returning them.

Validation is warn-only: if a result fails validation, it is logged and
returned unchanged so a tool call is never failed by its own summary.
"""

import logging

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    """Base model for successful tool results.

    ``extra="allow"`` tolerates additional fields (e.g. the full form
    document returned by ``get_form``) while still catching missing
    required fields and wrong types.
    """

    model_config = ConfigDict(extra="allow")


# --- Forms ---


class FormCreatedResult(ToolResult):
    formId: str
    title: str
    description: str
    responderUri: str


class FormInfoUpdatedResult(ToolResult):
    success: bool
    message: str
    title: str
    description: str


# --- Items ---


class ItemChangeResult(ToolResult):
    success: bool
    message: str


class QuestionAddedResult(ItemChangeResult):
    questionTitle: str
    required: bool


class ChoiceQuestionAddedResult(QuestionAddedResult):
    options: list[str]


class ScaleQuestionAddedResult(QuestionAddedResult):
    low: int | float
    high: int | float
    lowLabel: str
    highLabel: str


class ContentItemAddedResult(ItemChangeResult):
    title: str
    description: str


class ItemDeletedResult(ItemChangeResult):
    deletedIndex: int


class ItemUpdatedResult(ItemChangeResult):
    index: int
    questionTitle: str
    description: str
    required: bool | str


class ItemMovedResult(ItemChangeResult):
    fromIndex: int
    toIndex: int


# Registry: tool name → schema class
TOOL_SCHEMAS: dict[str, type[ToolResult]] = {
    "create_form": FormCreatedResult,
    "add_text_question": QuestionAddedResult,
    "add_multiple_choice_question": ChoiceQuestionAddedResult,
    "add_checkbox_question": ChoiceQuestionAddedResult,
    "add_dropdown_question": ChoiceQuestionAddedResult,
    "add_scale_question": ScaleQuestionAddedResult,
    "add_text_item": ContentItemAddedResult,
    "add_section": ContentItemAddedResult,
    "update_form_info": FormInfoUpdatedResult,
    "delete_question": ItemDeletedResult,
    "update_question": ItemUpdatedResult,
    "move_question": ItemMovedResult,
}


def validate_tool_result(tool_name: str, result: dict) -> dict:
    """Validate a tool result against its registered schema.

    - If no schema is registered for the tool, returns the result unchanged.
    - On validation failure, logs a warning and returns the result unchanged.
    - Never raises.
    """
    if not isinstance(result, dict):
        return result

    schema = TOOL_SCHEMAS.get(tool_name)
    if schema is None:
        return result

    try:
        schema.model_validate(result)
    except Exception as e:
        logger.warning(
            "Validation failed for tool '%s': %s",
            tool_name,
            e,
        )
    return result
