"""System prompt for the clinic assistant."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_CLINIC_DATA = (
    "No clinic information available. Please add clinic_data.txt to the project root."
)

SYSTEM_PROMPT_TEMPLATE = """You are a helpful assistant for a dental clinic. \
Answer clinic-related questions using the clinic information provided below. \
You may also use any personal information the user has shared during this \
conversation (such as their name). For clinic-related questions not covered by \
the information below, say: "I'm not sure based on the website."

CLINIC INFORMATION:
{clinic_data}"""


def load_clinic_data(path: Path) -> str:
    """Read the clinic information text, falling back to a notice if missing."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"Clinic data not readable at {path} ({e}); using fallback content")
        return FALLBACK_CLINIC_DATA


def build_system_prompt(clinic_data: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(clinic_data=clinic_data)
