import asyncio

import pytest

from result_lookup.domain.exceptions import RecordStoreError
from result_lookup.domain.models import LookupStatus
from result_lookup.domain.services.result_lookup_controller import ResultLookupController


def _fill(controller, exam="e1", roll="12345", day="15", month="6", year="2005"):
    if exam:
        controller.select_examination(exam)
    if roll:
        controller.set_roll_number(roll)
    for part, value in (("day", day), ("month", month), ("year", year)):
        if value:
            controller.set_date_part(part, value)


@pytest.mark.asyncio
async def test_initialize_loads_catalog_once(store, clock):
    controller = ResultLookupController(store, clock=clock)
    await controller.initialize()
    await controller.initialize()
    assert store.catalog_calls == 1
    assert [exam.year for exam in controller.examinations] == [2023, 2022]


@pytest.mark.asyncio
async def test_found_result(controller, store, passing_record):
    _fill(controller)
    assert controller.can_submit

    state = await controller.search()

    assert state.status == LookupStatus.FOUND
    assert state.result == passing_record
    assert controller.view == "result"
    assert not controller.loading
    assert store.lookup_calls == [("e1", "12345", "2005-06-15")]


@pytest.mark.asyncio
async def test_not_found_keeps_form(controller, store):
    _fill(controller, roll="99999")

    state = await controller.search()

    assert state.status == LookupStatus.NOT_FOUND
    assert state.message == "No results found for the provided details"
    assert controller.view == "form"
    assert not controller.loading


@pytest.mark.asyncio
async def test_store_fault_is_errored_not_not_found(controller, store):
    store.lookup_error = RecordStoreError(detail="HTTP 500: relation does not exist")
    _fill(controller)

    state = await controller.search()

    assert state.status == LookupStatus.ERRORED
    assert state.message == "An error occurred while fetching your result"
    assert "relation" not in state.message
    assert not controller.loading


@pytest.mark.asyncio
async def test_unexpected_exception_is_reported_as_store_error(controller, store):
    store.lookup_error = RuntimeError("bug in adapter")
    _fill(controller)

    state = await controller.search()

    assert state.status == LookupStatus.ERRORED
    assert not controller.loading


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"exam": ""},
        {"roll": ""},
        {"day": "", "month": "", "year": ""},
    ],
)
async def test_missing_field_blocks_query(controller, store, fields):
    _fill(controller, **fields)
    assert not controller.can_submit

    state = await controller.search()

    assert state.status == LookupStatus.ERRORED
    assert state.message == "Please fill all fields"
    assert store.lookup_calls == []


@pytest.mark.asyncio
async def test_whitespace_roll_number_counts_as_missing(controller, store):
    _fill(controller, roll="   ")
    state = await controller.search()
    assert state.message == "Please fill all fields"
    assert store.lookup_calls == []


@pytest.mark.asyncio
async def test_roll_number_is_trimmed_in_query(controller, store):
    _fill(controller, roll=" 12345 ")
    state = await controller.search()
    assert state.status == LookupStatus.FOUND
    assert controller.roll_number == " 12345 "


@pytest.mark.asyncio
async def test_reset_from_found_keeps_inputs(controller):
    _fill(controller)
    await controller.search()

    state = controller.reset()

    assert state.status == LookupStatus.IDLE
    assert state.result is None and state.message is None
    assert controller.view == "form"
    assert controller.selected_examination_id == "e1"
    assert controller.roll_number == "12345"
    assert controller.dob.isoformat() == "2005-06-15"


@pytest.mark.asyncio
async def test_resubmit_after_correction(controller):
    _fill(controller, roll="1234")
    assert (await controller.search()).status == LookupStatus.NOT_FOUND

    controller.set_roll_number("12345")
    assert controller.state.status == LookupStatus.IDLE
    assert (await controller.search()).status == LookupStatus.FOUND


@pytest.mark.asyncio
async def test_rejected_date_edit_keeps_error_and_date(controller):
    _fill(controller, exam="")
    await controller.search()

    assert controller.set_date_part("day", "32") is False
    assert controller.dob.day == 15
    assert controller.state.message == "Please fill all fields"


@pytest.mark.asyncio
async def test_unknown_examination_is_rejected(controller):
    with pytest.raises(ValueError):
        controller.select_examination("nope")
    assert controller.selected_examination_id == ""


@pytest.mark.asyncio
async def test_search_while_searching_is_ignored(controller, store):
    store.gate = asyncio.Event()
    _fill(controller)

    first = asyncio.create_task(controller.search())
    await asyncio.sleep(0)
    assert controller.loading
    assert not controller.can_submit

    await controller.search()
    assert len(store.lookup_calls) == 1

    store.gate.set()
    state = await first
    assert state.status == LookupStatus.FOUND
    assert not controller.loading


@pytest.mark.asyncio
async def test_reset_during_search_discards_late_result(controller, store):
    store.gate = asyncio.Event()
    _fill(controller)

    pending = asyncio.create_task(controller.search())
    await asyncio.sleep(0)
    controller.reset()
    assert controller.state.status == LookupStatus.IDLE

    store.gate.set()
    await pending

    assert controller.state.status == LookupStatus.IDLE
    assert controller.view == "form"
    assert not controller.loading


@pytest.mark.asyncio
async def test_cancelled_search_does_not_stay_loading(controller, store):
    store.gate = asyncio.Event()
    _fill(controller)

    pending = asyncio.create_task(controller.search())
    await asyncio.sleep(0)
    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert not controller.loading
    assert controller.state.status == LookupStatus.IDLE


@pytest.mark.asyncio
async def test_snapshot_reflects_inputs(controller):
    _fill(controller)
    snapshot = controller.snapshot()

    assert snapshot.selected_examination_id == "e1"
    assert (snapshot.day, snapshot.month, snapshot.year) == (15, 6, 2005)
    assert snapshot.dob == "2005-06-15"
    assert snapshot.view == "form"
    assert snapshot.can_submit
    assert snapshot.catalog_error is None


@pytest.mark.asyncio
async def test_catalog_failure_surfaces_on_snapshot(store, clock):
    store.catalog_error = RecordStoreError(detail="timeout")
    controller = ResultLookupController(store, clock=clock)
    await controller.initialize()

    snapshot = controller.snapshot()
    assert snapshot.examinations == ()
    assert snapshot.catalog_error == "Failed to load examinations. Please try again."
    assert snapshot.state.status == LookupStatus.IDLE
