"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from doc_tagger.models.llm_models import LLMModelInfo


@pytest.fixture
def mock_llm_client():
    """Mock tagging client for API unit tests."""
    mock = Mock()
    mock.model_name = "gpt-4o-mini"
    mock.model_info = LLMModelInfo(model_id="gpt-4o-mini", tool_use=True)
    mock.generate_tags = AsyncMock(return_value=["#networking", "#cisco"])
    mock.health_check = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock
