"""
Security module for user input validation.

Keeps malformed or adversarial text out of the resolver pipeline and away
from the generative model.
"""

from .exceptions import SecurityError, ValidationError
from .input_validator import InputValidator

__all__ = [
    "SecurityError",
    "ValidationError",
    "InputValidator",
]
