"""
Final report extraction
Pure parsing helpers; no model calls happen here.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from interview_api.models.schemas import StructuredReport
from interview_api.models.session import MessageItem

logger = logging.getLogger(__name__)

JSON_BLOCK_PATTERN = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def extract_report_block(text: str) -> Optional[Dict[str, Any]]:
    """
    Find the structured report inside a model reply

    Every ```json fenced block is tried in order; the first one that decodes to
    a JSON object wins. Fields that do not fit the usual report shape are only
    logged, the object is kept as written.

    Args:
        text: Raw model reply

    Returns:
        The decoded object exactly as the model wrote it, or None
    """
    if not text:
        return None

    for match in JSON_BLOCK_PATTERN.finditer(text):
        block = match.group(1).strip()
        try:
            data = json.loads(block)
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping unparseable json block: {e}")
            continue

        if not isinstance(data, dict):
            continue

        try:
            StructuredReport.model_validate(data)
        except ValidationError as e:
            logger.info(f"Report block deviates from the usual shape ({e.error_count()} field issue(s)), keeping it as is")

        return data

    return None


def find_report_in_history(history: Iterable[MessageItem]) -> Optional[Dict[str, Any]]:
    """Parse the report out of the most recent interviewer turn, if it has one."""
    last_interviewer = None
    for message in history:
        if message.role == "interviewer":
            last_interviewer = message

    if last_interviewer is None:
        return None
    return extract_report_block(last_interviewer.content)


def raw_report(text: str) -> Dict[str, Any]:
    """Fallback report carrying only the model's text."""
    return {"raw": text}
