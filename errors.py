"""
Application errors. Each class carries the HTTP status and the message shown to
the client; main.py renders them as {"error": message}. The constructor
argument is a detail for the logs and is never returned to the caller.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request."


class NotFoundError(AppError):
    status_code = 404
    message = "Problem session not found."


class GenerationError(AppError):
    status_code = 500
    message = "An error occurred during problem generation or processing."


class FeedbackError(AppError):
    status_code = 500
    message = "An error occurred during answer submission or feedback generation."


class PersistenceError(AppError):
    status_code = 500
    message = "Failed to save problem to database."
