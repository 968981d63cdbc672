from unittest.mock import MagicMock

import pytest

from google_forms_mcp.config import Settings
from google_forms_mcp.tools.forms import FormsService


@pytest.fixture
def settings():
    """Test settings with dummy credentials."""
    return Settings(
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        google_refresh_token="test-refresh-token",
    )


@pytest.fixture
def forms_client():
    """Stand-in for the discovery-built Forms API v1 resource."""
    client = MagicMock()
    forms = client.forms.return_value
    forms.create.return_value.execute.return_value = {"formId": "form-1"}
    forms.get.return_value.execute.return_value = {"formId": "form-1", "items": []}
    forms.responses.return_value.list.return_value.execute.return_value = {"responses": []}
    forms.batchUpdate.return_value.execute.return_value = {"replies": [{}]}
    return client


@pytest.fixture
def service(forms_client):
    return FormsService(forms_client)


@pytest.fixture
def services(service):
    return {"forms": service}
