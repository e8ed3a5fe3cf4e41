import google.generativeai as genai
import pytest

from chronicle.core.config import settings
from chronicle.services.llm_service import llm_service


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeChat:
    """Stands in for ChatOpenAI; records every call it receives."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return FakeMessage(self.content)


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """Keep tests offline whatever the local environment holds."""
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(settings, "google_api_key", None)
    monkeypatch.setattr(settings, "llm_provider", "openai")
    llm_service.reset()
    yield
    llm_service.reset()


@pytest.fixture
def fake_llm(monkeypatch):
    def install(content=None, error=None, api_key="test-key"):
        monkeypatch.setattr(settings, "openai_api_key", api_key)
        chat = FakeChat(content=content, error=error)
        llm_service._llm = chat
        llm_service.llm_type = "openai"
        return chat
    return install


class FakeGeminiResponse:
    def __init__(self, text):
        self.text = text


@pytest.fixture
def fake_gemini(monkeypatch):
    """Swap google.generativeai's model for one that answers locally.

    Returns the list of models built, newest last.
    """
    def install(text=None, error=None, api_key="test-google-key"):
        monkeypatch.setattr(settings, "llm_provider", "google")
        monkeypatch.setattr(settings, "llm_model", "gemini-1.5-flash")
        monkeypatch.setattr(settings, "google_api_key", api_key)
        monkeypatch.setattr(genai, "configure", lambda **kwargs: None)
        models = []

        class FakeGenerativeModel:
            def __init__(self, model_name, generation_config=None, system_instruction=None):
                self.model_name = model_name
                self.generation_config = generation_config
                self.system_instruction = system_instruction
                self.calls = []
                models.append(self)

            async def generate_content_async(self, contents):
                self.calls.append(contents)
                if error is not None:
                    raise error
                return FakeGeminiResponse(text)

        monkeypatch.setattr(genai, "GenerativeModel", FakeGenerativeModel)
        return models
    return install
