# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.


class MindJournalError(Exception):
    """Base error. `message` is safe to show to the user."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MindJournalError):
    status_code = 422


class NotFoundError(MindJournalError):
    status_code = 404


class NotLoggedInError(MindJournalError):
    status_code = 401

    def __init__(self, message: str = "You must be logged in to do that."):
        super().__init__(message)


class PersistenceError(MindJournalError):
    status_code = 500


# ---------------------- AI ----------------------

class UpstreamAIError(MindJournalError):
    status_code = 502


class SchemaValidationError(UpstreamAIError):
    pass


class UpstreamError(UpstreamAIError):
    pass
