"""
Typed errors for the result lookup workflow.

    ResultLookupError (base)
    |
    +-- IncompleteQueryError   missing field before submit, no query issued
    +-- RecordNotFoundError    well-formed query, zero matching rows
    +-- RecordStoreError       any other store failure
        +-- CatalogLoadError   the one-time examination list fetch failed

Each class carries a machine-readable ``code`` and the message a user may
see. Store-side detail stays on ``detail`` and only goes to the logs.
"""

from __future__ import annotations

from typing import Optional


class ResultLookupError(Exception):
    code: str = "RESULT_LOOKUP_ERROR"
    user_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(message or self.user_message)


class IncompleteQueryError(ResultLookupError):
    code = "INCOMPLETE_QUERY"
    user_message = "Please fill all fields"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(detail=f"missing: {', '.join(self.missing)}")


class RecordNotFoundError(ResultLookupError):
    code = "RECORD_NOT_FOUND"
    user_message = "No results found for the provided details"


class RecordStoreError(ResultLookupError):
    code = "RECORD_STORE_ERROR"
    user_message = "An error occurred while fetching your result"

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, detail=detail)


class CatalogLoadError(RecordStoreError):
    code = "CATALOG_LOAD_ERROR"
    user_message = "Failed to load examinations. Please try again."
