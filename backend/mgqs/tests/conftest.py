from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def stub_llm():
    """Factory for an LLM client double whose calls return canned results."""

    def _make(structured=None, *, side_effect=None, text=None, image=None, speech=None):
        llm = MagicMock()
        llm.generate_structured = AsyncMock(return_value=structured, side_effect=side_effect)
        llm.generate_text = AsyncMock(return_value=text)
        llm.generate_image = AsyncMock(return_value=image)
        llm.synthesize_speech = AsyncMock(return_value=speech)
        return llm

    return _make
