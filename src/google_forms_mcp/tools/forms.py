"""Google Forms tool handlers.

Every mutation is sent as a single-request ``batchUpdate``.  New items are
always inserted at the front of the form (``location.index = 0``).

Items are addressed by their current 0-based position.  Positions are only
valid as of the last read and shift on every insert, delete, or move; the
read-then-write in ``update_question`` is not isolated from concurrent edits.
"""

import logging
from contextlib import contextmanager

from googleapiclient.errors import HttpError

from google_forms_mcp.errors import InternalError, InvalidParamsError

logger = logging.getLogger(__name__)

RESPONDER_URI = "https://docs.google.com/forms/d/{form_id}/viewform"

UNCHANGED = "(unchanged)"

REQUIRED_MASK = "questionItem.question.required"


def _error_message(exc: Exception) -> str:
    if isinstance(exc, HttpError):
        return getattr(exc, "reason", None) or str(exc)
    return str(exc) or type(exc).__name__


@contextmanager
def _remote_call(action: str, form_id: str | None = None):
    """Re-raise any failure of the wrapped API call as ``InternalError``."""
    try:
        yield
    except Exception as e:
        logger.error("Error trying to %s: %s", action, e, extra={"form_id": form_id})
        raise InternalError(f"Failed to {action}: {_error_message(e)}") from e


def _question_item(title: str, question: dict) -> dict:
    return {"title": title, "questionItem": {"question": question}}


class FormsService:
    """Tool handlers backed by a Google Forms API v1 client.

    The client is the resource returned by
    ``googleapiclient.discovery.build("forms", "v1", ...)``.
    """

    def __init__(self, client):
        self.client = client

    # --- Remote calls ---

    def _batch_update(self, form_id: str, request: dict, action: str) -> dict:
        with _remote_call(action, form_id):
            return (
                self.client.forms()
                .batchUpdate(formId=form_id, body={"requests": [request]})
                .execute()
            )

    def _create_item(self, form_id: str, item: dict, action: str) -> dict:
        request = {"createItem": {"item": item, "location": {"index": 0}}}
        return self._batch_update(form_id, request, action)

    # --- Forms ---

    def create_form(self, title: str, description: str | None = None) -> dict:
        """Create a new form and return its ID and responder URL."""
        info = {"title": title, "documentTitle": title}
        if description:
            info["description"] = description

        with _remote_call("create form"):
            response = self.client.forms().create(body={"info": info}).execute()

        form_id = response.get("formId")
        logger.info("Created form %s", form_id, extra={"form_id": form_id})
        return {
            "formId": form_id,
            "title": title,
            "description": description or "",
            "responderUri": RESPONDER_URI.format(form_id=form_id),
        }

    def get_form(self, form_id: str) -> dict:
        with _remote_call("get form", form_id):
            return self.client.forms().get(formId=form_id).execute()

    def get_form_responses(self, form_id: str) -> dict:
        with _remote_call("get form responses", form_id):
            return self.client.forms().responses().list(formId=form_id).execute()

    def update_form_info(
        self, form_id: str, title: str | None = None, description: str | None = None
    ) -> dict:
        """Patch the form title and/or description.

        The update mask lists exactly the fields present in ``info``; the API
        rejects requests where the two disagree.
        """
        info = {}
        mask = []
        if title:
            info["title"] = title
            mask.append("title")
        if description is not None:
            info["description"] = description
            mask.append("description")

        self._batch_update(
            form_id,
            {"updateFormInfo": {"info": info, "updateMask": ",".join(mask)}},
            "update form info",
        )
        return {
            "success": True,
            "message": "Form info updated successfully",
            "title": title or UNCHANGED,
            "description": description if description is not None else UNCHANGED,
        }

    # --- Questions ---

    def add_text_question(self, form_id: str, question_title: str, required: bool = False) -> dict:
        item = _question_item(question_title, {"required": required, "textQuestion": {}})
        self._create_item(form_id, item, "add text question")
        return {
            "success": True,
            "message": "Text question added successfully",
            "questionTitle": question_title,
            "required": required,
        }

    def _add_choice_question(
        self,
        kind: str,
        choice_type: str,
        form_id: str,
        question_title: str,
        options: list[str],
        required: bool,
    ) -> dict:
        question = {
            "required": required,
            "choiceQuestion": {
                "type": choice_type,
                "options": [{"value": option} for option in options],
            },
        }
        item = _question_item(question_title, question)
        self._create_item(form_id, item, f"add {kind} question")
        return {
            "success": True,
            "message": f"{kind.capitalize()} question added successfully",
            "questionTitle": question_title,
            "options": options,
            "required": required,
        }

    def add_multiple_choice_question(
        self, form_id: str, question_title: str, options: list[str], required: bool = False
    ) -> dict:
        return self._add_choice_question(
            "multiple choice", "RADIO", form_id, question_title, options, required
        )

    def add_checkbox_question(
        self, form_id: str, question_title: str, options: list[str], required: bool = False
    ) -> dict:
        return self._add_choice_question(
            "checkbox", "CHECKBOX", form_id, question_title, options, required
        )

    def add_dropdown_question(
        self, form_id: str, question_title: str, options: list[str], required: bool = False
    ) -> dict:
        return self._add_choice_question(
            "dropdown", "DROP_DOWN", form_id, question_title, options, required
        )

    def add_scale_question(
        self,
        form_id: str,
        question_title: str,
        low: int | float,
        high: int | float,
        low_label: str | None = None,
        high_label: str | None = None,
        required: bool = False,
    ) -> dict:
        """Add a linear scale question. Bounds are left for the API to check."""
        scale = {"low": low, "high": high}
        if low_label:
            scale["lowLabel"] = low_label
        if high_label:
            scale["highLabel"] = high_label

        item = _question_item(question_title, {"required": required, "scaleQuestion": scale})
        self._create_item(form_id, item, "add scale question")
        return {
            "success": True,
            "message": "Scale question added successfully",
            "questionTitle": question_title,
            "low": low,
            "high": high,
            "lowLabel": low_label or "",
            "highLabel": high_label or "",
            "required": required,
        }

    # --- Content items ---

    def _add_content_item(
        self, kind: str, item_key: str, form_id: str, title: str, description: str | None
    ) -> dict:
        item = {"title": title, item_key: {}}
        if description:
            item["description"] = description

        self._create_item(form_id, item, f"add {kind}")
        return {
            "success": True,
            "message": f"{kind.capitalize()} added successfully",
            "title": title,
            "description": description or "",
        }

    def add_text_item(self, form_id: str, title: str, description: str | None = None) -> dict:
        return self._add_content_item("text item", "textItem", form_id, title, description)

    def add_section(self, form_id: str, title: str, description: str | None = None) -> dict:
        return self._add_content_item("section", "pageBreakItem", form_id, title, description)

    # --- Item edits ---

    def delete_question(self, form_id: str, index: int) -> dict:
        self._batch_update(
            form_id, {"deleteItem": {"location": {"index": index}}}, "delete question"
        )
        return {
            "success": True,
            "message": "Question deleted successfully",
            "deletedIndex": index,
        }

    def update_question(
        self,
        form_id: str,
        index: int,
        question_title: str | None = None,
        description: str | None = None,
        required: bool | None = None,
    ) -> dict:
        """Patch the item currently at ``index``.

        The form is read first to resolve the item's ``itemId`` (and
        ``questionId`` for questions), then a single ``updateItem`` is sent.
        """
        with _remote_call("update question", form_id):
            form = self.client.forms().get(formId=form_id).execute()

        items = form.get("items") or []
        if not 0 <= index < len(items):
            raise InvalidParamsError(f"Invalid index: {index}. Form has {len(items)} items.")

        existing = items[index]
        item = {"itemId": existing.get("itemId")}
        mask = []

        if question_title is not None:
            item["title"] = question_title
            mask.append("title")
        if description is not None:
            item["description"] = description
            mask.append("description")

        if "questionItem" in existing:
            question_id = existing["questionItem"].get("question", {}).get("questionId")
            item["questionItem"] = {"question": {"questionId": question_id}}
            if required is not None:
                item["questionItem"]["question"]["required"] = required
                mask.append(REQUIRED_MASK)

        if not mask:
            raise InvalidParamsError(
                f"Item at index {index} is not a question; 'required' cannot be set on it."
            )

        request = {
            "updateItem": {
                "item": item,
                "location": {"index": index},
                "updateMask": ",".join(mask),
            }
        }
        self._batch_update(form_id, request, "update question")
        return {
            "success": True,
            "message": "Question updated successfully",
            "index": index,
            "questionTitle": question_title if question_title is not None else UNCHANGED,
            "description": description if description is not None else UNCHANGED,
            "required": required if required is not None else UNCHANGED,
        }

    def move_question(self, form_id: str, from_index: int, to_index: int) -> dict:
        """Move an item. Index bounds are left for the API to check."""
        request = {
            "moveItem": {
                "originalLocation": {"index": from_index},
                "newLocation": {"index": to_index},
            }
        }
        self._batch_update(form_id, request, "move question")
        return {
            "success": True,
            "message": "Question moved successfully",
            "fromIndex": from_index,
            "toIndex": to_index,
        }
