"""Pydantic models for decoding tool arguments.

Arguments arrive as untyped JSON objects with camelCase keys.  The dispatcher
decodes them once into the tool's model; handlers receive the snake_case
fields as keyword arguments.  Any validation failure is reported as
``InvalidParamsError`` before a remote call is attempted.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from google_forms_mcp.errors import InvalidParamsError

NonEmptyStr = Annotated[str, Field(min_length=1)]
Number = int | float


class ToolArguments(BaseModel):
    # No coercion: `true` is not index 1 and "no" is not False
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore", strict=True)


class FormArguments(ToolArguments):
    form_id: NonEmptyStr


class CreateFormArguments(ToolArguments):
    title: NonEmptyStr
    description: str | None = None


class TextQuestionArguments(FormArguments):
    question_title: NonEmptyStr
    required: bool = False


class ChoiceQuestionArguments(TextQuestionArguments):
    options: Annotated[list[str], Field(min_length=1)]


class ScaleQuestionArguments(TextQuestionArguments):
    low: Number
    high: Number
    low_label: str | None = None
    high_label: str | None = None


class ContentItemArguments(FormArguments):
    title: NonEmptyStr
    description: str | None = None


class UpdateFormInfoArguments(FormArguments):
    title: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def _require_change(self):
        if not self.title and not self.description:
            raise ValueError("At least one of title or description is required")
        return self


class DeleteQuestionArguments(FormArguments):
    index: int


class UpdateQuestionArguments(FormArguments):
    index: int
    question_title: str | None = None
    description: str | None = None
    required: bool | None = None

    @model_validator(mode="after")
    def _require_change(self):
        if self.question_title is None and self.description is None and self.required is None:
            raise ValueError(
                "At least one of questionTitle, description, or required must be provided"
            )
        return self


class MoveQuestionArguments(FormArguments):
    from_index: int
    to_index: int


# Registry: tool name → argument model
ARGUMENT_MODELS: dict[str, type[ToolArguments]] = {
    "create_form": CreateFormArguments,
    "add_text_question": TextQuestionArguments,
    "add_multiple_choice_question": ChoiceQuestionArguments,
    "get_form": FormArguments,
    "get_form_responses": FormArguments,
    "add_checkbox_question": ChoiceQuestionArguments,
    "add_dropdown_question": ChoiceQuestionArguments,
    "add_scale_question": ScaleQuestionArguments,
    "add_text_item": ContentItemArguments,
    "add_section": ContentItemArguments,
    "update_form_info": UpdateFormInfoArguments,
    "delete_question": DeleteQuestionArguments,
    "update_question": UpdateQuestionArguments,
    "move_question": MoveQuestionArguments,
}


def required_arguments(model: type[ToolArguments]) -> list[str]:
    """Wire names of the fields a model cannot default."""
    return [
        field.alias or name for name, field in model.model_fields.items() if field.is_required()
    ]


def _describe_validation_error(exc: ValidationError) -> str:
    missing = []
    problems = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            missing.append(loc)
        elif loc:
            problems.append(f"Invalid argument '{loc}': {error['msg']}")
        else:
            problems.append(error["msg"].removeprefix("Value error, "))

    parts = []
    if missing:
        parts.append(f"Missing required arguments: {', '.join(missing)}")
    parts.extend(problems)
    return "; ".join(parts)


def decode_arguments(model: type[ToolArguments], arguments: dict) -> ToolArguments:
    """Validate raw tool arguments against ``model``.

    Raises:
        InvalidParamsError: naming every missing or malformed argument.
    """
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        raise InvalidParamsError(_describe_validation_error(e)) from e
