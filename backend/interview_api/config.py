"""
Service configuration
All settings come from environment variables; a .env file is loaded when present.
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Project root (the directory above backend/)
current_file_path = os.path.abspath(__file__)  # .../backend/interview_api/config.py
package_dir = os.path.dirname(current_file_path)  # .../backend/interview_api
backend_dir = os.path.dirname(package_dir)  # .../backend
project_root = os.path.dirname(backend_dir)
env_path = os.path.join(project_root, ".env")

# Optional: production deployments usually inject real environment variables
load_dotenv(env_path, override=False)


def _get_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {value!r}, using {default}")
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {value!r}, using {default}")
        return default


# ============================================================================
# Model gateway
# ============================================================================

def get_llm_api_key() -> Optional[str]:
    """Credential for the chat model; None when not configured."""
    return os.getenv("LLM_API_KEY") or None


def get_llm_base_url() -> Optional[str]:
    """OpenAI-compatible endpoint; None means the client library default."""
    return os.getenv("LLM_BASE_URL") or None


def get_llm_model() -> str:
    return os.getenv("LLM_MODEL", "gpt-4o-mini")


def get_llm_temperature() -> float:
    return _get_float("LLM_TEMPERATURE", 0.8)


def get_llm_max_tokens() -> int:
    return _get_int("LLM_MAX_TOKENS", 1024)


# ============================================================================
# Server
# ============================================================================

def get_app_env() -> str:
    return os.getenv("APP_ENV", "development").strip().lower()


def is_production() -> bool:
    return get_app_env() == "production"


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    return _get_int("PORT", 5000)


def is_debug() -> bool:
    return _get_bool("DEBUG", False)


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_rate_limit() -> str:
    """slowapi limit string applied to every route, per client address."""
    return os.getenv("RATE_LIMIT", "60/minute")


# ============================================================================
# Session retention
# ============================================================================

def get_session_idle_timeout_minutes() -> int:
    """0 keeps sessions until they are deleted explicitly."""
    return max(_get_int("SESSION_IDLE_TIMEOUT_MINUTES", 0), 0)


def get_session_sweep_interval_seconds() -> int:
    return max(_get_int("SESSION_SWEEP_INTERVAL_SECONDS", 60), 1)
