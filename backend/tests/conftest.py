import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from interview_api.core.errors import ServiceUnavailableError
from interview_api.services.interview_service import InterviewService
from interview_api.services.session_store import SessionStore


REPORT_REPLY = """Thank you, that concludes our interview.

```json
{
  "overallScore": 78,
  "grade": "B",
  "summary": "Solid fundamentals, light on indexing internals.",
  "strengths": ["Clear communication", "Good grasp of transactions"],
  "improvements": ["Explain B-tree indexes in more depth"],
  "recommendation": "Consider",
  "breakdown": [
    {"questionNumber": 1, "score": 8, "comment": "Good answer"},
    {"questionNumber": 2, "score": 7, "comment": "Missed isolation levels"}
  ]
}
```
"""


class FakeChat:
    """Scripted stand-in for ChatSession; pops replies from its gateway."""

    def __init__(self, gateway: "FakeGateway"):
        self.gateway = gateway
        self.sent: List[str] = []

    async def send(self, text: str) -> str:
        await asyncio.sleep(0)
        self.sent.append(text)
        self.gateway.sent.append(text)
        if self.gateway.replies:
            reply = self.gateway.replies.pop(0)
        else:
            reply = f"Interviewer reply {len(self.gateway.sent)}"
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeGateway:
    def __init__(self, replies: Optional[List[Union[str, Exception]]] = None):
        self.replies: List[Union[str, Exception]] = list(replies or [])
        self.sent: List[str] = []
        self.chats: List[FakeChat] = []
        self.open_error: Optional[Exception] = None

    def open_chat(self) -> FakeChat:
        if self.open_error is not None:
            raise self.open_error
        chat = FakeChat(self)
        self.chats.append(chat)
        return chat

    def fail_next(self, message: str = "Model API timed out") -> None:
        self.replies.append(ServiceUnavailableError(message))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def service(store, gateway):
    return InterviewService(store=store, gateway=gateway)


@pytest.fixture
def client(service, monkeypatch):
    from fastapi.testclient import TestClient

    import main
    from interview_api.api import interview

    monkeypatch.setattr(interview, "interview_service", service)
    main.limiter.reset()
    return TestClient(main.app)


def run(coro):
    return asyncio.run(coro)
