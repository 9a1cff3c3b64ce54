"""
Integration tests for the pending submission store.

Tests cover:
- Submission stores id-lists unchecked and WASH as given (or null)
- Listing order (most recent first) and queue count
- Rejection removes the row and creates nothing
- Column defaults for rows inserted without the optional columns
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import text

from climate_registry.models.pending_project import PendingProject
from climate_registry.models.project import Project
from climate_registry_shared.schemas.pending_projects import PendingProjectRead
from climate_registry_shared.schemas.projects import WASHComponentData


class TestSubmit:
    async def test_submit_returns_id_and_stores_snapshot(self, pending, make_submission):
        pending_id = await pending.submit(
            make_submission(agency_ids=[1, 3], location_ids=[2], focal_area_ids=[2])
        )

        row = await pending.get(pending_id)
        assert row is not None
        assert row.pending_id == pending_id
        assert row.agency_ids == [1, 3]
        assert row.location_ids == [2]
        assert row.funding_source_ids == []
        assert row.focal_area_ids == [2]
        assert row.submitter_email == "officer@moef.gov.bd"
        assert row.submitted_at is not None

    async def test_reference_ids_are_not_checked(self, pending, make_submission):
        pending_id = await pending.submit(make_submission(agency_ids=[404, 999]))

        row = await pending.get(pending_id)
        assert row.agency_ids == [404, 999]

    async def test_absent_wash_stored_as_null(self, pending, make_submission):
        pending_id = await pending.submit(make_submission(wash_component=None))

        row = await pending.get(pending_id)
        assert row.wash_component is None

    async def test_wash_payload_kept(self, pending, make_submission):
        wash = WASHComponentData(presence=True, water_supply_percent=55, sanitation_percent=45)
        pending_id = await pending.submit(make_submission(wash_component=wash))

        row = await pending.get(pending_id)
        assert row.wash_component["presence"] is True
        assert row.wash_component["water_supply_percent"] == 55

    async def test_row_validates_as_read_schema(self, pending, make_submission):
        pending_id = await pending.submit(make_submission(agency_ids=[1]))

        read = PendingProjectRead.model_validate(await pending.get(pending_id))
        assert read.pending_id == pending_id
        assert read.title == "Coastal Embankment Improvement"
        assert read.agency_ids == [1]

    async def test_submit_creates_no_project(self, pending, make_submission, count_rows):
        await pending.submit(make_submission(agency_ids=[1]))
        assert await count_rows(Project) == 0


class TestQueue:
    async def test_list_most_recent_first(self, pending, make_submission):
        first = await pending.submit(make_submission(title="First"))
        second = await pending.submit(make_submission(title="Second"))
        third = await pending.submit(make_submission(title="Third"))

        rows = await pending.list()
        assert [r.pending_id for r in rows] == [third, second, first]

    async def test_list_empty(self, pending):
        assert await pending.list() == []

    async def test_count(self, pending, make_submission):
        assert await pending.count() == 0
        await pending.submit(make_submission())
        await pending.submit(make_submission())
        assert await pending.count() == 2

    async def test_get_missing_returns_none(self, pending):
        assert await pending.get(uuid.uuid4()) is None

    async def test_list_breaks_timestamp_ties_by_id(self, pending, reference):
        submitted_at = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
        ids = [uuid.uuid4() for _ in range(4)]
        async with reference.transaction() as session:
            session.add_all(
                PendingProject(
                    pending_id=pending_id,
                    title=f"Submission {n}",
                    type="Mitigation",
                    submitter_email="officer@moef.gov.bd",
                    submitted_at=submitted_at,
                )
                for n, pending_id in enumerate(ids)
            )

        first = [r.pending_id for r in await pending.list()]
        second = [r.pending_id for r in await pending.list()]
        assert first == sorted(ids)
        assert second == first


class TestReject:
    async def test_reject_removes_submission(self, pending, make_submission, count_rows):
        pending_id = await pending.submit(make_submission(agency_ids=[1]))

        assert await pending.reject(pending_id) is True

        assert await pending.get(pending_id) is None
        assert await count_rows(Project) == 0

    async def test_reject_missing_reports_false(self, pending):
        assert await pending.reject(uuid.uuid4()) is False

    async def test_reject_twice(self, pending, make_submission):
        pending_id = await pending.submit(make_submission())

        assert await pending.reject(pending_id) is True
        assert await pending.reject(pending_id) is False

    async def test_reject_leaves_other_submissions(self, pending, make_submission):
        keep = await pending.submit(make_submission(title="Keep"))
        drop = await pending.submit(make_submission(title="Drop"))

        await pending.reject(drop)

        assert [r.pending_id for r in await pending.list()] == [keep]


class TestServerDefaults:
    async def test_bare_insert_gets_column_defaults(self, pending, reference):
        pending_id = uuid.uuid4()
        async with reference.engine.begin() as conn:
            await conn.execute(
                text(
                    "INSERT INTO pending_projects (pending_id, title, type, submitter_email) "
                    "VALUES (:pending_id, 'Raw Intake', 'Adaptation', 'intake@moef.gov.bd')"
                ),
                {"pending_id": pending_id.hex},
            )

        row = await pending.get(pending_id)
        assert row.agency_ids == []
        assert row.location_ids == []
        assert row.funding_source_ids == []
        assert row.focal_area_ids == []
        assert row.wash_finance is False
        assert row.wash_component is None
        assert row.submitted_at is not None
