"""Tool definitions exposed to MCP clients.

Each entry defines a tool name, description, and input schema that the
calling agent uses to decide when and how to call the tool.

Optional parameters are omitted from ``required``.  The ``required`` list of
every schema must match the argument model in ``arguments.py`` that the
dispatcher validates against.
"""

# Shared property schemas.
_FORM_ID = {"type": "string", "description": "Form ID"}

_QUESTION_TITLE = {"type": "string", "description": "Question title"}

_REQUIRED_FLAG = {
    "type": "boolean",
    "description": "Whether required (optional, default is false)",
}

_OPTIONS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Array of choices",
}

# Schema for tools that only address a form.
_FORM_ONLY_SCHEMA = {
    "type": "object",
    "properties": {"formId": _FORM_ID},
    "required": ["formId"],
    "additionalProperties": False,
}


def _choice_question_schema() -> dict:
    return {
        "type": "object",
        "properties": {
            "formId": _FORM_ID,
            "questionTitle": _QUESTION_TITLE,
            "options": _OPTIONS,
            "required": _REQUIRED_FLAG,
        },
        "required": ["formId", "questionTitle", "options"],
        "additionalProperties": False,
    }


def _content_item_schema(kind: str) -> dict:
    return {
        "type": "object",
        "properties": {
            "formId": _FORM_ID,
            "title": {"type": "string", "description": f"{kind} title"},
            "description": {
                "type": "string",
                "description": f"{kind} description (optional)",
            },
        },
        "required": ["formId", "title"],
        "additionalProperties": False,
    }


TOOLS = [
    # --- Forms ---
    {
        "name": "create_form",
        "description": "Create a new Google Form",
        "input_schema": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Form title"},
                "description": {
                    "type": "string",
                    "description": "Form description (optional)",
                },
            },
            "required": ["title"],
            "additionalProperties": False,
        },
    },
    # --- Questions ---
    {
        "name": "add_text_question",
        "description": "Add a text question to the form",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "questionTitle": _QUESTION_TITLE,
                "required": _REQUIRED_FLAG,
            },
            "required": ["formId", "questionTitle"],
            "additionalProperties": False,
        },
    },
    {
        "name": "add_multiple_choice_question",
        "description": "Add a multiple choice question to the form",
        "input_schema": _choice_question_schema(),
    },
    # --- Reads ---
    {
        "name": "get_form",
        "description": "Get form details",
        "input_schema": _FORM_ONLY_SCHEMA,
    },
    {
        "name": "get_form_responses",
        "description": "Get form responses",
        "input_schema": _FORM_ONLY_SCHEMA,
    },
    {
        "name": "add_checkbox_question",
        "description": "Add a checkbox (multi-select) question to the form",
        "input_schema": _choice_question_schema(),
    },
    {
        "name": "add_dropdown_question",
        "description": "Add a dropdown selection question to the form",
        "input_schema": _choice_question_schema(),
    },
    {
        "name": "add_scale_question",
        "description": "Add a linear scale question to the form",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "questionTitle": _QUESTION_TITLE,
                "low": {
                    "type": "number",
                    "description": "Lowest value on the scale (typically 0 or 1)",
                },
                "high": {
                    "type": "number",
                    "description": "Highest value on the scale (typically 5 or 10)",
                },
                "lowLabel": {
                    "type": "string",
                    "description": 'Label for lowest value (optional, e.g., "Strongly disagree")',
                },
                "highLabel": {
                    "type": "string",
                    "description": 'Label for highest value (optional, e.g., "Strongly agree")',
                },
                "required": _REQUIRED_FLAG,
            },
            "required": ["formId", "questionTitle", "low", "high"],
            "additionalProperties": False,
        },
    },
    # --- Content items ---
    {
        "name": "add_text_item",
        "description": "Add a text item (static text/description block) to the form",
        "input_schema": _content_item_schema("Text item"),
    },
    {
        "name": "add_section",
        "description": "Add a section (page break) to the form for better organization",
        "input_schema": _content_item_schema("Section"),
    },
    # --- Edits ---
    {
        "name": "update_form_info",
        "description": "Update form title and/or description",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "title": {"type": "string", "description": "New form title (optional)"},
                "description": {
                    "type": "string",
                    "description": "New form description (optional)",
                },
            },
            "required": ["formId"],
            "additionalProperties": False,
        },
    },
    {
        "name": "delete_question",
        "description": "Delete a question from the form by its index",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "index": {
                    "type": "number",
                    "description": "Index of the question to delete (0-based)",
                },
            },
            "required": ["formId", "index"],
            "additionalProperties": False,
        },
    },
    {
        "name": "update_question",
        "description": "Update an existing question in the form",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "index": {
                    "type": "number",
                    "description": "Index of the question to update (0-based)",
                },
                "questionTitle": {
                    "type": "string",
                    "description": "New question title (optional)",
                },
                "description": {
                    "type": "string",
                    "description": "New question description (optional)",
                },
                "required": {"type": "boolean", "description": "Whether required (optional)"},
            },
            "required": ["formId", "index"],
            "additionalProperties": False,
        },
    },
    {
        "name": "move_question",
        "description": "Move a question to a new position in the form",
        "input_schema": {
            "type": "object",
            "properties": {
                "formId": _FORM_ID,
                "fromIndex": {
                    "type": "number",
                    "description": "Current index of the question (0-based)",
                },
                "toIndex": {
                    "type": "number",
                    "description": "Target index for the question (0-based)",
                },
            },
            "required": ["formId", "fromIndex", "toIndex"],
            "additionalProperties": False,
        },
    },
]

TOOL_NAMES: list[str] = [_tool["name"] for _tool in TOOLS]
