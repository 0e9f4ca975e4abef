"""
Input validation and sanitization.

OOP: Single Responsibility - Only handles input validation and sanitization.
"""

import re
from typing import Optional

from .exceptions import ValidationError


class InputValidator:
    """
    Validates user text before it reaches the matcher or the language model.

    Matching itself is safe for any text; the injection screen only decides
    whether text may be forwarded to the generative resolver.
    """

    MAX_QUERY_LENGTH = 200
    MAX_LABEL_LENGTH = 100
    MAX_LABELS = 20

    INJECTION_PATTERNS = [
        r"ignore\s+(all\s+)?(previous|above|all)\s+instructions?",
        r"(system|assistant|prompt)\s*:",
        r"you\s+are\s+now",
        r"forget\s+everything",
        r"disregard\s+(the\s+)?(above|previous)",
        r"override\s+(previous|above|all)",
        r"pretend\s+to\s+be",
        r"bestmaterialid",
    ]

    _CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

    @staticmethod
    def strip_control_chars(text: str) -> str:
        """Remove NUL and other non-printing control characters."""
        return InputValidator._CONTROL_CHARS.sub("", text)

    @staticmethod
    def sanitize_query(query: Optional[str], max_length: int = None) -> str:
        """
        Clean a free-text search query.

        :param query: Raw query (None is treated as empty)
        :param max_length: Override for MAX_QUERY_LENGTH
        :return: Query without control characters, trimmed (may be empty)
        :raises ValidationError: If the query is not a string or is too long
        """
        if query is None:
            return ""
        if not isinstance(query, str):
            raise ValidationError("Query must be a string")

        limit = max_length or InputValidator.MAX_QUERY_LENGTH
        if len(query) > limit:
            raise ValidationError(f"Query exceeds maximum length of {limit} characters")

        return InputValidator.strip_control_chars(query).strip()

    @staticmethod
    def is_safe_for_model(text: str) -> bool:
        """
        Screen text for prompt-injection phrasing.

        :return: False when the text should not be sent to a language model
        """
        if not text:
            return True

        lowered = text.lower()
        return not any(
            re.search(pattern, lowered, re.IGNORECASE)
            for pattern in InputValidator.INJECTION_PATTERNS
        )

    @staticmethod
    def validate_limit(raw: Optional[str], default: int, maximum: int = 50) -> int:
        """
        Parse a result-count query parameter.

        :raises ValidationError: If not an integer in [1, maximum]
        """
        if raw is None or raw == "":
            return default
        try:
            value = int(raw)
        except (TypeError, ValueError):
            raise ValidationError("limit must be an integer")
        if not 1 <= value <= maximum:
            raise ValidationError(f"limit must be between 1 and {maximum}")
        return value
