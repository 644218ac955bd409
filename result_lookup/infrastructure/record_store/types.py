"""
Record store protocol for type hints.
"""

from __future__ import annotations

from typing import List, Protocol

from result_lookup.domain.models import Examination, ResultRecord


class RecordStore(Protocol):
    async def list_examinations(self) -> List[Examination]:
        """All examinations, newest year first. Raises CatalogLoadError."""
        ...

    async def find_result(self, examination_id: str, roll_number: str, dob: str) -> ResultRecord:
        """
        Exact match on (examination_id, roll_number, dob as yyyy-MM-dd).
        Raises RecordNotFoundError for zero rows, RecordStoreError otherwise.
        """
        ...
