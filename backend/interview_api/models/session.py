"""
Interview session data model
The in-memory session record plus the snapshot shapes exposed over the API.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from interview_api.core.llms import ChatSession

Difficulty = Literal["easy", "medium", "hard"]
SessionStatus = Literal["active", "completed"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageItem(BaseModel):
    """One transcript turn"""
    role: Literal["interviewer", "candidate"] = Field(..., description="Who spoke")
    content: str = Field(..., description="Turn text")
    timestamp: datetime = Field(default_factory=utc_now, description="When the turn was recorded")


class AnswerItem(BaseModel):
    """A candidate answer tagged with the question it answered"""
    model_config = ConfigDict(populate_by_name=True)

    question_number: int = Field(..., alias="questionNumber", description="Question being answered")
    answer: str = Field(..., description="Answer text")


class SessionSnapshot(BaseModel):
    """Full session state as returned to callers (no chat context)"""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Session ID")
    role: str = Field(..., description="Job role")
    topic: str = Field(..., description="Interview topic")
    difficulty: Difficulty = Field(..., description="Difficulty")
    max_questions: int = Field(..., alias="maxQuestions", description="Total questions")
    question_count: int = Field(..., alias="questionCount", description="Current question number")
    status: SessionStatus = Field(..., description="Session status")
    started_at: datetime = Field(..., alias="startedAt", description="Creation time")
    completed_at: Optional[datetime] = Field(None, alias="completedAt", description="Completion time")
    answers: List[AnswerItem] = Field(default_factory=list, description="Answers in submission order")
    history: List[MessageItem] = Field(default_factory=list, description="Transcript in order")


class SessionListItem(BaseModel):
    """Session summary for listings"""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Session ID")
    role: str = Field(..., description="Job role")
    topic: str = Field(..., description="Interview topic")
    status: SessionStatus = Field(..., description="Session status")
    question_count: int = Field(..., alias="questionCount", description="Current question number")
    max_questions: int = Field(..., alias="maxQuestions", description="Total questions")
    started_at: datetime = Field(..., alias="startedAt", description="Creation time")


@dataclass(eq=False)
class InterviewSession:
    """
    Live interview session.

    Owns its chat context exclusively; the context is never copied or exposed
    through snapshots. Mutated only by the interview service, under `lock`.
    """

    session_id: str
    role: str
    topic: str
    difficulty: str
    max_questions: int
    chat: ChatSession = field(repr=False)
    question_count: int = 1
    status: str = "active"
    started_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    last_active_at: datetime = field(default_factory=utc_now)
    history: List[MessageItem] = field(default_factory=list)
    answers: List[AnswerItem] = field(default_factory=list)
    report: Optional[Dict[str, Any]] = field(default=None, repr=False)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    def touch(self) -> None:
        self.last_active_at = utc_now()

    def last_interviewer_message(self) -> Optional[MessageItem]:
        for message in reversed(self.history):
            if message.role == "interviewer":
                return message
        return None

    def to_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            role=self.role,
            topic=self.topic,
            difficulty=self.difficulty,
            max_questions=self.max_questions,
            question_count=self.question_count,
            status=self.status,
            started_at=self.started_at,
            completed_at=self.completed_at,
            answers=[a.model_copy() for a in self.answers],
            history=[m.model_copy() for m in self.history],
        )

    def to_list_item(self) -> SessionListItem:
        return SessionListItem(
            session_id=self.session_id,
            role=self.role,
            topic=self.topic,
            status=self.status,
            question_count=self.question_count,
            max_questions=self.max_questions,
            started_at=self.started_at,
        )
