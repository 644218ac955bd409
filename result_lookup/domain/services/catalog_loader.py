"""
Examination Catalog Loader
One-shot fetch of the examination list for a lookup session.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from result_lookup.domain.exceptions import CatalogLoadError, RecordStoreError
from result_lookup.domain.models import Examination
from result_lookup.infrastructure.record_store.types import RecordStore

logger = logging.getLogger(__name__)


class ExaminationCatalogLoader:
    """
    Loads all examinations once, newest year first.

    A failed load leaves the catalog empty and keeps the user-facing
    error. Nothing retries; a second ``load()`` returns what the first
    one produced.
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._loaded = False
        self._examinations: Tuple[Examination, ...] = ()
        self._error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def examinations(self) -> Tuple[Examination, ...]:
        return self._examinations

    @property
    def error(self) -> Optional[str]:
        return self._error

    def get(self, examination_id: str) -> Optional[Examination]:
        for exam in self._examinations:
            if exam.id == examination_id:
                return exam
        return None

    async def load(self) -> Tuple[Examination, ...]:
        if self._loaded:
            return self._examinations
        self._loaded = True

        try:
            self._examinations = tuple(await self._store.list_examinations())
        except RecordStoreError as exc:
            logger.error("Error fetching examinations: %s", exc.detail or exc)
            self._examinations = ()
            self._error = CatalogLoadError.user_message
        except Exception:
            logger.exception("Unexpected failure while fetching examinations")
            self._examinations = ()
            self._error = CatalogLoadError.user_message
        else:
            logger.info("Examination catalog ready (%d entries)", len(self._examinations))
        return self._examinations
