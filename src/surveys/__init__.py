"""
Surveys, tests and response records.
"""

from .responses import ResponseSet, response_prefix, sanitize_name
from .survey import Survey, Test

__all__ = [
    "ResponseSet",
    "Survey",
    "Test",
    "response_prefix",
    "sanitize_name",
]
