"""
Interview API routes
Thin handlers; InterviewError subclasses are turned into JSON by the handlers in main.py.
"""

import logging

from fastapi import APIRouter

from interview_api.models.schemas import (
    AnswerRequest,
    AnswerResponse,
    DeleteResponse,
    InterviewStartRequest,
    InterviewStartResponse,
    ReportResponse,
    SessionDetailResponse,
    SessionListResponse,
)
from interview_api.services.interview_service import InterviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview", tags=["Interview"])

# Process-wide service (in-memory sessions)
interview_service = InterviewService()


@router.post("/start", response_model=InterviewStartResponse)
async def start_interview(request: InterviewStartRequest):
    """
    Start a new interview session

    Returns:
        InterviewStartResponse: Session ID plus the interviewer's greeting and first question
    """
    return await interview_service.create_session(
        role=request.role,
        topic=request.topic,
        difficulty=request.difficulty,
        max_questions=request.max_questions,
    )


@router.post("/answer", response_model=AnswerResponse)
async def submit_answer(request: AnswerRequest):
    """
    Submit the candidate's answer

    Returns:
        AnswerResponse: Feedback and next question (or closing remarks) with progress
    """
    return await interview_service.submit_answer(request.session_id, request.answer)


@router.get("/session/{session_id}", response_model=SessionDetailResponse)
async def get_session(session_id: str):
    """Current session state including the full transcript."""
    return SessionDetailResponse(session=interview_service.get_session(session_id))


@router.get("/report/{session_id}", response_model=ReportResponse)
async def get_report(session_id: str):
    """Final report; only available once the interview is completed."""
    return await interview_service.get_report(session_id)


@router.delete("/session/{session_id}", response_model=DeleteResponse)
async def delete_session(session_id: str):
    interview_service.delete_session(session_id)
    return DeleteResponse(message="Session deleted.")


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions():
    """All sessions in memory (debugging aid)."""
    sessions = interview_service.list_sessions()
    return SessionListResponse(count=len(sessions), sessions=sessions)
