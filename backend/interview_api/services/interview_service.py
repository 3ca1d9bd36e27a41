"""
Interview session service
Runs the interview state machine: create, answer, complete, report.
"""

import asyncio
import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional

from interview_api.core.errors import (
    InvalidInputError,
    ServiceUnavailableError,
    SessionStateConflictError,
)
from interview_api.core.llms import LLMGateway
from interview_api.core.prompt import (
    DIFFICULTIES,
    get_interviewer_prompt,
    get_report_request_prompt,
)
from interview_api.core.report import extract_report_block, find_report_in_history, raw_report
from interview_api.models.schemas import AnswerResponse, InterviewStartResponse, ReportResponse
from interview_api.models.session import (
    AnswerItem,
    InterviewSession,
    MessageItem,
    SessionListItem,
    SessionSnapshot,
    utc_now,
)
from interview_api.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class InterviewService:
    """
    Interview state machine on top of the session store and the model gateway.

    States are "active" (waiting for an answer) and "completed" (terminal).
    Completion is decided by the local question counter alone; the model is
    trusted to ask the agreed number of questions but never checked.
    """

    def __init__(self, store: Optional[SessionStore] = None, gateway: Optional[LLMGateway] = None):
        self.store = store if store is not None else SessionStore()
        self.gateway = gateway if gateway is not None else LLMGateway()

    async def create_session(
        self,
        role: str,
        topic: str,
        difficulty: str = "medium",
        max_questions: int = 5
    ) -> InterviewStartResponse:
        """
        Start an interview and get the interviewer's opening message

        Nothing is stored unless the model replies.

        Args:
            role: Job role
            topic: Topic or technology
            difficulty: easy | medium | hard
            max_questions: Number of questions, at least 1

        Returns:
            InterviewStartResponse: New session ID, opening message and counters

        Raises:
            InvalidInputError: Bad difficulty, empty role/topic or max_questions < 1
            ConfigurationError: Model credential missing
            ServiceUnavailableError: Model call failed
        """
        role = (role or "").strip()
        topic = (topic or "").strip()
        if not role:
            raise InvalidInputError("role is required.")
        if not topic:
            raise InvalidInputError("topic is required.")
        if difficulty not in DIFFICULTIES:
            raise InvalidInputError("difficulty must be easy | medium | hard.")
        if max_questions < 1:
            raise InvalidInputError("maxQuestions must be at least 1.")

        prompt = get_interviewer_prompt(role, difficulty, topic, max_questions)
        chat = self.gateway.open_chat()
        opening_message = await chat.send(prompt)

        session = InterviewSession(
            session_id=str(uuid.uuid4()),
            role=role,
            topic=topic,
            difficulty=difficulty,
            max_questions=max_questions,
            chat=chat,
            history=[MessageItem(role="interviewer", content=opening_message)],
        )
        self.store.put(session)
        logger.info(f"Created interview session {session.session_id} ({role} / {topic} / {difficulty}, {max_questions} questions)")

        return InterviewStartResponse(
            session_id=session.session_id,
            message=opening_message,
            question_number=session.question_count,
            total_questions=session.max_questions,
        )

    async def submit_answer(self, session_id: str, answer: str) -> AnswerResponse:
        """
        Record an answer and get feedback plus the next question

        The answer goes to the model through the session's own chat, which
        already knows which question it asked. The session is only mutated
        once the model has replied.

        Raises:
            InvalidInputError: Empty answer
            SessionNotFoundError: Unknown session, or deleted before the reply arrived
            SessionStateConflictError: Interview already completed
            ServiceUnavailableError: Model call failed (session unchanged)
        """
        answer = (answer or "").strip()
        if not answer:
            raise InvalidInputError("answer cannot be empty.")

        session = self.store.get(session_id)

        async with session.lock:
            # deleted while waiting for the lock
            self.store.get(session_id)
            if session.is_completed:
                raise SessionStateConflictError("Interview is already completed. Fetch the report.")

            question_number = session.question_count
            answered_at = utc_now()
            interviewer_reply = await session.chat.send(answer)
            # deleted while the model was answering
            self.store.get(session_id)

            session.history.append(MessageItem(role="candidate", content=answer, timestamp=answered_at))
            session.answers.append(AnswerItem(question_number=question_number, answer=answer))
            session.history.append(MessageItem(role="interviewer", content=interviewer_reply))

            if question_number >= session.max_questions:
                session.status = "completed"
                session.completed_at = utc_now()
                logger.info(f"Interview session {session_id} completed after {question_number} questions")
            else:
                session.question_count += 1
            session.touch()

            return AnswerResponse(
                message=interviewer_reply,
                question_number=session.question_count,
                total_questions=session.max_questions,
                completed=session.is_completed,
            )

    def get_session(self, session_id: str) -> SessionSnapshot:
        """Snapshot of a session, without its chat context."""
        session = self.store.get(session_id)
        session.touch()
        return session.to_snapshot()

    async def get_report(self, session_id: str) -> ReportResponse:
        """
        Final report of a completed interview

        Looks for the ```json report in the last interviewer turn first. When
        it is missing or broken, asks the model once more; if that still gives
        nothing parseable the report degrades to {"raw": text}.

        Raises:
            SessionNotFoundError: Unknown session
            SessionStateConflictError: Interview not completed yet
        """
        session = self.store.get(session_id)
        if not session.is_completed:
            raise SessionStateConflictError("Interview is not completed yet.")

        async with session.lock:
            # deleted while waiting for the lock
            self.store.get(session_id)
            report = session.report
            if report is None:
                report = find_report_in_history(session.history)
                if report is None:
                    report = await self._request_report(session)
                else:
                    session.report = report
            session.touch()

            return ReportResponse(
                session_id=session.session_id,
                role=session.role,
                topic=session.topic,
                difficulty=session.difficulty,
                started_at=session.started_at,
                completed_at=session.completed_at,
                total_questions=session.max_questions,
                report=report,
            )

    async def _request_report(self, session: InterviewSession) -> Dict[str, Any]:
        logger.info(f"No report in history for session {session.session_id}, asking the model explicitly")
        try:
            text = await session.chat.send(get_report_request_prompt())
        except ServiceUnavailableError as e:
            logger.warning(f"Report request failed for session {session.session_id}: {e.message}")
            last = session.last_interviewer_message()
            return raw_report(last.content if last else "")

        report = extract_report_block(text)
        if report is None:
            logger.warning(f"Model reply for session {session.session_id} had no parseable report, returning raw text")
            return raw_report(text)

        session.report = report
        return report

    def delete_session(self, session_id: str) -> None:
        self.store.delete(session_id)
        logger.info(f"Deleted interview session {session_id}")

    def list_sessions(self) -> List[SessionListItem]:
        return [session.to_list_item() for session in self.store.list()]


async def run_idle_sweep(store: SessionStore, max_idle: timedelta, interval_seconds: float) -> None:
    """
    Periodically drop idle sessions until cancelled

    Args:
        store: Store to sweep
        max_idle: Idle time after which a session is dropped
        interval_seconds: Pause between sweeps
    """
    logger.info(f"Idle session sweep enabled: max idle {max_idle}, every {interval_seconds}s")
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            store.purge_idle(max_idle)
        except Exception as e:
            logger.error(f"Idle session sweep failed: {e}", exc_info=True)
