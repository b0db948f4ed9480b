from __future__ import annotations

import pytest

from interviewdesk.domain.errors import DeduplicationError
from interviewdesk.domain.model import Company, ReferenceKind, Stage, StageMethod
from interviewdesk.domain.reconciliation import (
    DeduplicationResult,
    Deduplicator,
    choose_survivor,
)
from tests.helpers.tracker import FakeStore, make_interview


def _deduplicate(store: FakeStore) -> DeduplicationResult:
    return Deduplicator(unit_of_work_factory=store.unit_of_work).run()


def test_choose_survivor_prefers_remote_identity() -> None:
    guest = Stage(name="Phone Screen", id=1)
    synced_late = Stage(name="Phone Screen", id=2, remote_id=9)
    synced_early = Stage(name="Phone Screen", id=3, remote_id=4)

    assert choose_survivor([guest, synced_late, synced_early]) is synced_early


def test_choose_survivor_falls_back_to_lowest_local_id() -> None:
    later = Stage(name="Phone Screen", id=8)
    earlier = Stage(name="Phone Screen", id=3)

    assert choose_survivor([later, earlier]) is earlier


def test_stage_duplicates_collapse_onto_remote_row(fake_store: FakeStore) -> None:
    synced = Stage(name="Phone Screen", remote_id=1)
    guest = Stage(name="Phone Screen")
    acme = Company(name="Acme", remote_id=1)
    interview = make_interview(acme, stage=guest)
    fake_store.add_all([synced, guest, acme, interview])

    result = _deduplicate(fake_store)

    assert fake_store.stages.list_all() == [synced]
    assert interview.stage is synced
    assert result.removed[ReferenceKind.STAGE] == 1
    assert result.reassigned[ReferenceKind.STAGE] == 1
    assert result.total_removed == 1


def test_company_duplicates_reassign_interviews_instead_of_deleting_them(
    fake_store: FakeStore,
) -> None:
    remote_acme = Company(name="Acme", remote_id=3)
    guest_acme = Company(name="Acme")
    synced = make_interview(remote_acme, remote_id=30)
    guest = make_interview(guest_acme, job_title="Guest role")
    fake_store.add_all([remote_acme, guest_acme, synced, guest])

    _deduplicate(fake_store)

    assert fake_store.companies.list_all() == [remote_acme]
    assert fake_store.interviews.count() == 2
    assert guest.company is remote_acme


def test_names_match_case_sensitively(fake_store: FakeStore) -> None:
    fake_store.add_all(
        [
            StageMethod(name="Video Call"),
            StageMethod(name="video call"),
            StageMethod(name="Video Call "),
        ]
    )

    result = _deduplicate(fake_store)

    assert result.total_removed == 0
    assert fake_store.stage_methods.count() == 3


def test_running_twice_converges(fake_store: FakeStore) -> None:
    fake_store.add_all(
        [
            Stage(name="Applied"),
            Stage(name="Applied"),
            Stage(name="Applied", remote_id=2),
            StageMethod(name="Phone"),
            StageMethod(name="Phone"),
        ]
    )

    first = _deduplicate(fake_store)
    second = _deduplicate(fake_store)

    assert first.total_removed == 3
    assert second.total_removed == 0
    names = [stage.name for stage in fake_store.stages.list_all()]
    assert len(names) == len(set(names))
    assert fake_store.stages.list_all()[0].remote_id == 2


def test_failure_in_one_kind_does_not_stop_the_others(fake_store: FakeStore) -> None:
    fake_store.add_all(
        [
            Stage(name="Applied"),
            Stage(name="Applied"),
            Company(name="Acme"),
            Company(name="Acme"),
        ]
    )
    fake_store.stage_methods.fail_with = RuntimeError("database is locked")

    with pytest.raises(DeduplicationError) as excinfo:
        _deduplicate(fake_store)

    assert set(excinfo.value.failures) == {ReferenceKind.STAGE_METHOD}
    assert fake_store.stages.count() == 1
    assert fake_store.companies.count() == 1
    assert fake_store.rollbacks == 1
