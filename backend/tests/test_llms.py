import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage
from langchain_openai import ChatOpenAI

from interview_api.core.errors import ConfigurationError, ServiceUnavailableError
from interview_api.core.llms import ChatSession, LLMGateway, describe_llm_error

from conftest import run


class RecordingLLM:
    """Echoes how many messages it was given; can be told to fail."""

    def __init__(self, error=None, reply="ok"):
        self.error = error
        self.reply = reply
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


def test_open_chat_requires_credential(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    with pytest.raises(ConfigurationError) as exc_info:
        LLMGateway().open_chat()
    assert "LLM_API_KEY" in exc_info.value.message
    assert exc_info.value.status_code == 500


def test_gateway_construction_does_not_need_credential(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    LLMGateway()


def test_open_chat_builds_configured_client(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_MODEL", "gpt-test")
    monkeypatch.setenv("LLM_BASE_URL", "http://localhost:9999/v1")
    monkeypatch.setenv("LLM_TEMPERATURE", "0.2")

    chat = LLMGateway().open_chat()

    assert isinstance(chat, ChatSession)
    assert chat.turn_count == 0
    assert isinstance(chat._llm, ChatOpenAI)
    assert chat._llm.model_name == "gpt-test"
    assert chat._llm.temperature == 0.2


def test_each_chat_is_independent(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "sk-test")
    gateway = LLMGateway()
    assert gateway.open_chat() is not gateway.open_chat()


def test_chat_keeps_context_between_turns():
    llm = FakeListChatModel(responses=["Hello, question one?", "Good. Question two?"])
    chat = ChatSession(llm)

    assert run(chat.send("You are an interviewer...")) == "Hello, question one?"
    assert run(chat.send("My answer")) == "Good. Question two?"
    assert chat.turn_count == 4


def test_full_history_is_resent():
    llm = RecordingLLM(reply="next")
    chat = ChatSession(llm)
    run(chat.send("prompt"))
    run(chat.send("answer"))

    last_call = llm.calls[-1]
    assert [type(m) for m in last_call] == [HumanMessage, AIMessage, HumanMessage]
    assert last_call[-1].content == "answer"


def test_failed_call_maps_to_service_unavailable_and_keeps_history():
    llm = RecordingLLM(error=RuntimeError("Error code: 401 - invalid api key"))
    chat = ChatSession(llm)

    with pytest.raises(ServiceUnavailableError) as exc_info:
        run(chat.send("prompt"))
    assert "LLM_API_KEY" in exc_info.value.message
    assert chat.turn_count == 0


def test_empty_reply_is_service_unavailable():
    chat = ChatSession(RecordingLLM(reply="   "))
    with pytest.raises(ServiceUnavailableError):
        run(chat.send("prompt"))
    assert chat.turn_count == 0


def test_list_content_is_joined():
    chat = ChatSession(RecordingLLM(reply=[{"type": "text", "text": "Part one. "}, "Part two."]))
    assert run(chat.send("prompt")) == "Part one. Part two."


def test_chat_cannot_be_copied():
    import copy

    chat = ChatSession(RecordingLLM())
    with pytest.raises(TypeError):
        copy.copy(chat)
    with pytest.raises(TypeError):
        copy.deepcopy(chat)


@pytest.mark.parametrize(
    "error, expected",
    [
        ("Request timed out.", "timed out"),
        ("Connection error.", "Could not connect"),
        ("Error code: 429 - rate limit exceeded", "rate limit"),
        ("You exceeded your current quota", "quota"),
        ("The model `gpt-9` does not exist", "Model not found"),
        ("something odd", "Model API call failed: something odd"),
    ],
)
def test_describe_llm_error(error, expected):
    assert expected in describe_llm_error(RuntimeError(error))
