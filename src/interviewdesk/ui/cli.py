from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from interviewdesk.app import (
    add_local_interview,
    advance_local_interview,
    cleanup_local_store,
    compute_stats,
    migrate_guest_data,
    push_local_interview,
    seed_local_store,
    sign_in,
    sync_remote,
)
from interviewdesk.config import ConfigurationError, configure_logging, require_env_vars
from interviewdesk.domain.interviews import InterviewDraft, NextStage

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

TOKEN_ENV_VAR = "INTERVIEWS_API_TOKEN"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track job interviews and sync them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed", help="Insert default stages and stage methods")

    sync = subparsers.add_parser("sync", help="Pull interviews from the server")
    sync.add_argument(
        "--no-cleanup",
        action="store_true",
        help="Skip removing duplicate companies, stages and methods afterwards",
    )

    sign_in_parser = subparsers.add_parser(
        "sign-in",
        help="Push guest interviews, then sync and clean up",
    )
    sign_in_parser.add_argument(
        "--token",
        type=str,
        help=f"Bearer token (defaults to ${TOKEN_ENV_VAR})",
    )

    subparsers.add_parser("migrate", help="Push guest-local interviews to the server")
    subparsers.add_parser("cleanup", help="Remove duplicate companies, stages and methods")

    push = subparsers.add_parser("push", help="Push one interview to the server")
    push.add_argument("interview_id", type=int, help="Local interview id")

    add = subparsers.add_parser("add", help="Record a new interview")
    add.add_argument("--company", required=True, help="Company name")
    add.add_argument("--job-title", required=True, help="Job title")
    add.add_argument("--stage", default="Applied", help="Stage name (default: %(default)s)")
    add.add_argument("--method", help="Stage method name")
    add.add_argument("--client-company", help="End client when applying through an agency")
    add.add_argument("--interviewer", help="Interviewer name")
    add.add_argument("--date", help="ISO-8601 timestamp of the interview")
    add.add_argument("--deadline", help="ISO-8601 timestamp of the deadline")
    add.add_argument("--applied", help="ISO-8601 application timestamp (default: now)")
    add.add_argument("--link", help="Meeting link")
    add.add_argument("--job-listing", help="Job posting URL")
    add.add_argument("--notes", help="Free-text notes")

    advance = subparsers.add_parser("advance", help="Move an interview to its next stage")
    advance.add_argument("interview_id", type=int, help="Local id of the current interview")
    advance.add_argument("--stage", required=True, help="Next stage name")
    advance.add_argument("--method", help="Stage method (optional for Technical Test)")
    advance.add_argument("--date", help="ISO-8601 timestamp of the interview")
    advance.add_argument("--deadline", help="ISO-8601 timestamp of the deadline")
    advance.add_argument("--interviewer", help="Interviewer name")
    advance.add_argument("--link", help="Meeting link")
    advance.add_argument("--notes", help="Free-text notes")

    subparsers.add_parser("stats", help="Show pipeline statistics")

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _optional_datetime(value: str | None) -> datetime | None:
    return _parse_iso_datetime(value) if value else None


def _draft_from_args(args: argparse.Namespace) -> InterviewDraft:
    return InterviewDraft(
        company_name=args.company,
        job_title=args.job_title,
        application_date=_optional_datetime(args.applied),
        stage_name=args.stage,
        stage_method_name=args.method,
        client_company=args.client_company,
        interviewer=args.interviewer,
        date=_optional_datetime(args.date),
        deadline=_optional_datetime(args.deadline),
        notes=args.notes,
        link=args.link,
        job_listing=args.job_listing,
    )


def _next_stage_from_args(args: argparse.Namespace) -> NextStage:
    return NextStage(
        stage_name=args.stage,
        stage_method_name=args.method,
        date=_optional_datetime(args.date),
        deadline=_optional_datetime(args.deadline),
        interviewer=args.interviewer,
        link=args.link,
        notes=args.notes,
    )


def _resolve_token(args: argparse.Namespace) -> str:
    if args.token:
        return args.token
    return require_env_vars([TOKEN_ENV_VAR])[TOKEN_ENV_VAR]


def _run(args: argparse.Namespace) -> None:  # noqa: C901
    if args.command == "seed":
        seeded = seed_local_store()
        log.info(
            "Seeded %s stages and %s stage methods",
            seeded.stages_added,
            seeded.stage_methods_added,
        )
    elif args.command == "sync":
        result = sync_remote(deduplicate=not args.no_cleanup)
        log.info(
            "Sync finished: %s new, %s updated, %s skipped interviews",
            result.interviews.inserted,
            result.interviews.updated,
            result.skipped_interviews,
        )
    elif args.command == "sign-in":
        sign_in(_resolve_token(args))
        log.info("Signed in and synced")
    elif args.command == "migrate":
        migrated = migrate_guest_data()
        log.info("Migrated %s guest interviews", migrated.succeeded)
    elif args.command == "cleanup":
        cleaned = cleanup_local_store()
        log.info("Removed %s duplicate rows", cleaned.total_removed)
    elif args.command == "push":
        pushed = push_local_interview(args.interview_id)
        log.info("Interview %s is remote interview %s", args.interview_id, pushed.remote_id)
    elif args.command == "add":
        interview = add_local_interview(_draft_from_args(args))
        log.info("Added interview %s (remote id %s)", interview.id, interview.remote_id)
    elif args.command == "advance":
        interview = advance_local_interview(args.interview_id, _next_stage_from_args(args))
        log.info("Created interview %s for stage %s", interview.id, args.stage)
    elif args.command == "stats":
        stats = compute_stats()
        print(  # noqa: T201
            f"Total: {stats.total_interviews}  Applied: {stats.applied}  "
            f"Active: {stats.active_interviews}\n"
            f"Passed: {stats.passed}  Rejected: {stats.rejected}  "
            f"Offers: {stats.offer_received + stats.offer_accepted + stats.offer_declined}  "
            f"Withdrew: {stats.withdrew}\n"
            f"Success rate: {stats.success_rate:.1f}%  "
            f"Response rate: {stats.response_rate:.1f}%"
        )
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        _run(parsed_args)
    except (ValueError, LookupError, ConfigurationError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Command %s failed", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
