"""
PostgREST Record Store Client
Read-only access to the examinations and results tables (Supabase REST API).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from result_lookup.config.record_store import RecordStoreConfig
from result_lookup.domain.exceptions import (
    CatalogLoadError,
    RecordNotFoundError,
    RecordStoreError,
)
from result_lookup.domain.models import Examination, ResultRecord

logger = logging.getLogger(__name__)

_ROW_COUNT = re.compile(r"(\d+)\s+rows?")


class PostgrestRecordStore:
    REST_PATH = "/rest/v1"
    EXAMINATIONS_TABLE = "examinations"
    RESULTS_TABLE = "results"

    # Ask for a single JSON object instead of an array
    SINGLE_OBJECT = "application/vnd.pgrst.object+json"
    # "JSON object requested, multiple (or no) rows returned"
    SINGULAR_VIOLATION = "PGRST116"

    def __init__(self, config: RecordStoreConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self, single: bool = False) -> Dict[str, str]:
        return {
            "apikey": self.config.credential,
            "Authorization": f"Bearer {self.config.credential}",
            "Accept": self.SINGLE_OBJECT if single else "application/json",
        }

    @staticmethod
    def _error_payload(response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    @classmethod
    def _is_zero_rows(cls, payload: Dict[str, Any]) -> bool:
        if payload.get("code") != cls.SINGULAR_VIOLATION:
            return False
        # The same code covers "more than one row"; that is not a miss
        match = _ROW_COUNT.search(str(payload.get("details") or ""))
        return match is None or int(match.group(1)) == 0

    async def _request_json(self, table: str, params: Dict[str, str], single: bool = False) -> Any:
        if not self.config.is_complete:
            raise RecordStoreError(detail="record store endpoint or credential is not configured")

        url = f"{self.config.endpoint}{self.REST_PATH}/{table}"
        client = await self._get_client()
        try:
            response = await client.get(url, headers=self._headers(single), params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RecordStoreError(detail=f"{table} request failed: {type(exc).__name__}: {exc}") from exc
        except RuntimeError as exc:
            # raised by httpx once the shared client has been closed
            raise RecordStoreError(detail=f"{table} request not sent: {exc}") from exc

        if response.status_code != 200:
            payload = self._error_payload(response)
            if single and self._is_zero_rows(payload):
                raise RecordNotFoundError(detail=payload.get("details"))
            message = payload.get("message") or response.text[:200]
            raise RecordStoreError(
                detail=f"{table} returned HTTP {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RecordStoreError(detail=f"{table} returned a non-JSON payload") from exc

    # ------------------------------------------------------------------
    # EXAMINATIONS
    # ------------------------------------------------------------------

    async def list_examinations(self) -> List[Examination]:
        params = {"select": "*", "order": "year.desc"}
        try:
            payload = await self._request_json(self.EXAMINATIONS_TABLE, params)
            if not isinstance(payload, list):
                raise RecordStoreError(detail="examinations payload is not a list")
            examinations = [Examination.from_row(row) for row in payload]
        except RecordStoreError as exc:
            raise CatalogLoadError(detail=exc.detail, status_code=exc.status_code) from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogLoadError(detail=f"malformed examination row: {exc!r}") from exc

        logger.debug("Loaded %d examinations", len(examinations))
        # sorted() is stable, so same-year rows keep the store's order
        return sorted(examinations, key=lambda exam: exam.year, reverse=True)

    # ------------------------------------------------------------------
    # RESULTS
    # ------------------------------------------------------------------

    async def find_result(self, examination_id: str, roll_number: str, dob: str) -> ResultRecord:
        params = {
            "select": "*",
            "examination_id": f"eq.{examination_id}",
            "roll_no": f"eq.{roll_number}",
            "dob": f"eq.{dob}",
        }
        payload = await self._request_json(self.RESULTS_TABLE, params, single=True)
        if not isinstance(payload, dict):
            raise RecordStoreError(detail="results payload is not a single object")
        try:
            return ResultRecord.from_row(payload)
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise RecordStoreError(detail=f"malformed result row: {exc!r}") from exc
