"""Prompts package for GovBot conversations."""

from .chat import (
    ADVISORY_DECISION_PROMPT,
    CHAT_ERROR_MESSAGE,
    CHAT_LIMIT_REACHED_MESSAGE,
    EVALUATION_COMPLETE_NOTICE,
    EVALUATION_INCOMPLETE_NOTICE,
    FINAL_EVALUATION_PROMPT,
    FINAL_WARNING_NOTICE,
    FINAL_WARNING_PROMPT,
    GOVBOT_SYSTEM_PROMPT_TEMPLATE,
    build_system_prompt,
)

__all__ = [
    "ADVISORY_DECISION_PROMPT",
    "CHAT_ERROR_MESSAGE",
    "CHAT_LIMIT_REACHED_MESSAGE",
    "EVALUATION_COMPLETE_NOTICE",
    "EVALUATION_INCOMPLETE_NOTICE",
    "FINAL_EVALUATION_PROMPT",
    "FINAL_WARNING_NOTICE",
    "FINAL_WARNING_PROMPT",
    "GOVBOT_SYSTEM_PROMPT_TEMPLATE",
    "build_system_prompt",
]
