"""
Session services - in-memory
"""

from .session_store import SessionStore
from .interview_service import InterviewService, run_idle_sweep

__all__ = [
    'SessionStore',
    'InterviewService',
    'run_idle_sweep',
]
