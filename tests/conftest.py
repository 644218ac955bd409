import asyncio
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional, Tuple

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from result_lookup.config import Settings
from result_lookup.domain.exceptions import RecordNotFoundError
from result_lookup.domain.models import Examination, ResultRecord
from result_lookup.domain.services.result_lookup_controller import ResultLookupController
from result_lookup.main import create_app

TODAY = date(2026, 10, 18)


class FakeRecordStore:
    """In-memory record store keyed exactly like the real results table."""

    def __init__(self, examinations=None, results=None):
        self.examinations = list(examinations or [])
        self.results: Dict[Tuple[str, str, str], ResultRecord] = dict(results or {})
        self.catalog_error: Optional[Exception] = None
        self.lookup_error: Optional[Exception] = None
        # When set, lookups wait on it before answering
        self.gate: Optional[asyncio.Event] = None
        self.catalog_calls = 0
        self.lookup_calls = []

    async def list_examinations(self):
        self.catalog_calls += 1
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.examinations)

    async def find_result(self, examination_id: str, roll_number: str, dob: str) -> ResultRecord:
        self.lookup_calls.append((examination_id, roll_number, dob))
        if self.gate is not None:
            await self.gate.wait()
        if self.lookup_error is not None:
            raise self.lookup_error
        try:
            return self.results[(examination_id, roll_number, dob)]
        except KeyError:
            raise RecordNotFoundError(detail="The result contains 0 rows")


@pytest.fixture()
def board_exam() -> Examination:
    return Examination(id="e1", name="Board Exam", year=2023)


@pytest.fixture()
def passing_record() -> ResultRecord:
    return ResultRecord(
        roll_number="12345",
        dob=date(2005, 6, 15),
        marks_obtained=Decimal("410"),
        outcome="Pass",
        division="First",
    )


@pytest.fixture()
def store(board_exam, passing_record) -> FakeRecordStore:
    return FakeRecordStore(
        examinations=[board_exam, Examination(id="e0", name="Board Exam", year=2022)],
        results={("e1", "12345", "2005-06-15"): passing_record},
    )


@pytest.fixture()
def clock():
    return lambda: TODAY


@pytest.fixture()
async def controller(store, clock) -> ResultLookupController:
    controller = ResultLookupController(store, clock=clock)
    await controller.initialize()
    return controller


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        SUPABASE_URL="https://example.supabase.co",
        SUPABASE_ANON_KEY="anon-test-key",
        SESSION_MAX_ENTRIES=10,
    )


@pytest.fixture()
def app(settings, store, clock) -> FastAPI:
    return create_app(settings=settings, store=store, clock=clock)


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
