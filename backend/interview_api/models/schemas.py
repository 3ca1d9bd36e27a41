"""
Pydantic request/response models
JSON field names are camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from interview_api.core.prompt import DIFFICULTIES
from interview_api.models.session import SessionListItem, SessionSnapshot


# ============================================================================
# Requests
# ============================================================================

class InterviewStartRequest(BaseModel):
    """Start a new interview"""
    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(..., description="Job role being interviewed for")
    topic: str = Field(..., description="Topic or technology")
    difficulty: str = Field(default="medium", description="easy | medium | hard")
    max_questions: int = Field(default=5, ge=1, alias="maxQuestions", description="Number of questions")

    @field_validator("role", "topic")
    @classmethod
    def _required_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} is required.")
        return value

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: str) -> str:
        if value not in DIFFICULTIES:
            raise ValueError("difficulty must be easy | medium | hard.")
        return value


class AnswerRequest(BaseModel):
    """Submit an answer to the current question"""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Session ID")
    answer: str = Field(..., description="Candidate answer")

    @field_validator("session_id")
    @classmethod
    def _session_id_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("sessionId is required.")
        return value

    @field_validator("answer")
    @classmethod
    def _answer_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("answer cannot be empty.")
        return value


# ============================================================================
# Report payload
# ============================================================================

class QuestionScore(BaseModel):
    """Per-question entry of the report breakdown"""
    model_config = ConfigDict(extra="allow")

    questionNumber: Optional[int] = None
    score: Optional[float] = None
    comment: Optional[str] = None


class StructuredReport(BaseModel):
    """
    Final report emitted by the interviewer model.

    Describes the usual shape. Blocks that do not fit it are still accepted,
    the mismatch is only logged.
    """
    model_config = ConfigDict(extra="allow")

    overallScore: Optional[float] = None
    grade: Optional[str] = None
    summary: Optional[str] = None
    strengths: Optional[List[str]] = None
    improvements: Optional[List[str]] = None
    recommendation: Optional[str] = None
    breakdown: Optional[List[QuestionScore]] = None


# ============================================================================
# Responses
# ============================================================================

class InterviewStartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="Whether the call succeeded")
    session_id: str = Field(..., alias="sessionId", description="New session ID")
    message: str = Field(..., description="Greeting and first question")
    question_number: int = Field(..., alias="questionNumber", description="Current question number")
    total_questions: int = Field(..., alias="totalQuestions", description="Total questions")


class AnswerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="Whether the call succeeded")
    message: str = Field(..., description="Feedback plus next question, or closing remarks")
    question_number: int = Field(..., alias="questionNumber", description="Current question number")
    total_questions: int = Field(..., alias="totalQuestions", description="Total questions")
    completed: bool = Field(..., description="Whether the interview has finished")


class SessionDetailResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the call succeeded")
    session: SessionSnapshot = Field(..., description="Session details")


class ReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="Whether the call succeeded")
    session_id: str = Field(..., alias="sessionId", description="Session ID")
    role: str = Field(..., description="Job role")
    topic: str = Field(..., description="Interview topic")
    difficulty: str = Field(..., description="Difficulty")
    started_at: datetime = Field(..., alias="startedAt", description="Creation time")
    completed_at: Optional[datetime] = Field(None, alias="completedAt", description="Completion time")
    total_questions: int = Field(..., alias="totalQuestions", description="Total questions")
    report: Dict[str, Any] = Field(..., description="Structured report, or {'raw': text} when none could be parsed")


class SessionListResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the call succeeded")
    count: int = Field(..., description="Number of sessions")
    sessions: List[SessionListItem] = Field(..., description="Session summaries")


class DeleteResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the call succeeded")
    message: str = Field(..., description="Confirmation")


class ErrorResponse(BaseModel):
    """Uniform error envelope"""
    success: bool = Field(default=False, description="Always false")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    stack: Optional[str] = Field(None, description="Traceback, outside production only")
