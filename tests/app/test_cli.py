from __future__ import annotations

from datetime import UTC, datetime

import pytest

from interviewdesk.domain.errors import NetworkError
from interviewdesk.domain.interviews import InterviewDraft, NextStage, UnknownReferenceError
from interviewdesk.domain.model import Company, Interview
from interviewdesk.domain.reconciliation import ReconcileResult
from interviewdesk.domain.stats import InterviewStats
from interviewdesk.ui import cli as cli_module
from tests.helpers.tracker import make_interview


def _stored_interview() -> Interview:
    interview = make_interview(Company(name="Acme"))
    interview.id = 7
    return interview


def test_cli_sync_runs_cleanup_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> ReconcileResult:
        captured.update(kwargs)
        return ReconcileResult()

    monkeypatch.setattr(cli_module, "sync_remote", fake_sync)

    cli_module.main(["sync"])

    assert captured == {"deduplicate": True}


def test_cli_sync_without_cleanup(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> ReconcileResult:
        captured.update(kwargs)
        return ReconcileResult()

    monkeypatch.setattr(cli_module, "sync_remote", fake_sync)

    cli_module.main(["sync", "--no-cleanup"])

    assert captured == {"deduplicate": False}


def test_cli_sign_in_reads_token_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    tokens: list[str] = []
    monkeypatch.setenv("INTERVIEWS_API_TOKEN", "from-env")
    monkeypatch.setattr(cli_module, "sign_in", tokens.append)

    cli_module.main(["sign-in"])
    cli_module.main(["sign-in", "--token", "explicit"])

    assert tokens == ["from-env", "explicit"]


def test_cli_sign_in_without_token_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INTERVIEWS_API_TOKEN", raising=False)
    monkeypatch.setattr(cli_module, "sign_in", lambda _token: None)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sign-in"])

    assert excinfo.value.code == 2


def test_cli_add_builds_draft(monkeypatch: pytest.MonkeyPatch) -> None:
    drafts: list[InterviewDraft] = []

    def fake_add(draft: InterviewDraft) -> Interview:
        drafts.append(draft)
        return _stored_interview()

    monkeypatch.setattr(cli_module, "add_local_interview", fake_add)

    cli_module.main(
        [
            "add",
            "--company",
            "Acme",
            "--job-title",
            "Backend Engineer",
            "--method",
            "Video Call",
            "--date",
            "2025-03-10T16:30:00+02:00",
            "--job-listing",
            "https://jobs.example/1",
        ]
    )

    [draft] = drafts
    assert draft.company_name == "Acme"
    assert draft.stage_name == "Applied"
    assert draft.stage_method_name == "Video Call"
    assert draft.date == datetime(2025, 3, 10, 14, 30, tzinfo=UTC)
    assert draft.application_date is None
    assert draft.job_listing == "https://jobs.example/1"


def test_cli_advance_builds_next_stage(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, NextStage]] = []

    def fake_advance(interview_id: int, next_stage: NextStage) -> Interview:
        calls.append((interview_id, next_stage))
        return _stored_interview()

    monkeypatch.setattr(cli_module, "advance_local_interview", fake_advance)

    cli_module.main(
        ["advance", "3", "--stage", "Technical Test", "--deadline", "2025-04-01T00:00:00"]
    )

    [(interview_id, next_stage)] = calls
    assert interview_id == 3
    assert next_stage.stage_name == "Technical Test"
    assert next_stage.stage_method_name is None
    assert next_stage.deadline == datetime(2025, 4, 1, tzinfo=UTC)


def test_cli_invalid_timestamp_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_add(_draft: InterviewDraft) -> Interview:
        raise AssertionError("should not be called")

    monkeypatch.setattr(cli_module, "add_local_interview", fake_add)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["add", "--company", "Acme", "--job-title", "SRE", "--date", "soon"])

    assert excinfo.value.code == 2


def test_cli_domain_validation_exits_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_add(_draft: InterviewDraft) -> Interview:
        raise UnknownReferenceError("Unknown stage 'Onsite'")

    monkeypatch.setattr(cli_module, "add_local_interview", fake_add)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["add", "--company", "Acme", "--job-title", "SRE", "--stage", "Onsite"])

    assert excinfo.value.code == 2


def test_cli_sync_failure_exits_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> ReconcileResult:
        raise NetworkError("offline")

    monkeypatch.setattr(cli_module, "sync_remote", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync"])

    assert excinfo.value.code == 1


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2


def test_cli_stats_prints_summary(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(
        cli_module,
        "compute_stats",
        lambda: InterviewStats(total_interviews=4, applied=1, passed=2, rejected=1),
    )

    cli_module.main(["stats"])

    out = capsys.readouterr().out
    assert "Total: 4" in out
    assert "Success rate: 66.7%" in out
    assert "Response rate: 100.0%" in out
