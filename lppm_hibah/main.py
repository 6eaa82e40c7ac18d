"""Command-line entry point for the hibah rule engine.

Usage:
    python -m lppm_hibah.main submit <proposal_id>
    python -m lppm_hibah.main review <proposal_id> <decision> [--note N] [--reviewer R] [--amount A]
    python -m lppm_hibah.main complete <proposal_id>
    python -m lppm_hibah.main disburse <proposal_id> <amount> [--date YYYY-MM-DD] [--note N]
    python -m lppm_hibah.main next-number [--year YYYY]
    python -m lppm_hibah.main grant-status <hibah_id>
    python -m lppm_hibah.main save-grant <hibah.json>
    python -m lppm_hibah.main score <originality> <methodology> <feasibility> <impact>

Exit status is 0 on success, 1 when a rule refused the operation.
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone
from typing import List, Optional

from .config import load_config, load_policy
from .database import SupabaseClient
from .disbursement import DisbursementService, DocumentNumberGenerator
from .eligibility import TeamEligibility, TeamSizePolicy
from .grants import GrantProgramService, grant_status
from .lifecycle import ProposalLifecycleService, ProposalStateMachine
from .models import GrantProgram, Outcome, ProposalStatus, ReviewScore
from .review import ReviewScorer, load_weights

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lppm_hibah", description="Hibah proposal rule engine")
    sub = parser.add_subparsers(dest="command", required=True)

    submit = sub.add_parser("submit", help="Submit a draft or revised proposal")
    submit.add_argument("proposal_id")

    review = sub.add_parser("review", help="Record a reviewer decision")
    review.add_argument("proposal_id")
    review.add_argument("decision", choices=["review", "revision", "accepted", "rejected"])
    review.add_argument("--note", default=None)
    review.add_argument("--reviewer", default=None)
    review.add_argument("--amount", type=int, default=None, help="Approved amount (accepted only)")

    complete = sub.add_parser("complete", help="Close out an accepted proposal")
    complete.add_argument("proposal_id")

    disburse = sub.add_parser("disburse", help="Issue a surat pencairan")
    disburse.add_argument("proposal_id")
    disburse.add_argument("amount", type=int)
    disburse.add_argument("--date", type=date.fromisoformat, default=None)
    disburse.add_argument("--note", default=None)

    next_number = sub.add_parser("next-number", help="Preview the next nomor surat")
    next_number.add_argument("--year", type=int, default=None)

    status = sub.add_parser("grant-status", help="Effective status of a hibah")
    status.add_argument("hibah_id")

    save_grant = sub.add_parser("save-grant", help="Create or edit a hibah from a JSON file")
    save_grant.add_argument("path", help="master_hibah row as JSON; include id to edit")

    score = sub.add_parser("score", help="Weighted review score (advisory)")
    for criterion in ("originality", "methodology", "feasibility", "impact"):
        score.add_argument(criterion, type=float)

    return parser


def _emit(outcome: Outcome) -> int:
    if outcome.ok:
        value = outcome.value
        payload = value.model_dump(mode="json", by_alias=True) if hasattr(value, "model_dump") else value
        print(json.dumps(payload, indent=2, default=str))
        return 0
    print(outcome.violation.model_dump_json(indent=2), file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    policy = load_policy()

    if args.command == "score":
        scorer = ReviewScorer(load_weights(policy.review_weights_path), policy.min_funding_score)
        verdict = scorer.evaluate(
            ReviewScore(
                originality=args.originality,
                methodology=args.methodology,
                feasibility=args.feasibility,
                impact=args.impact,
            )
        )
        print(verdict.model_dump_json(indent=2))
        return 0

    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    store = SupabaseClient(config.supabase_url, config.supabase_key)
    machine = ProposalStateMachine(
        eligibility=TeamEligibility(
            TeamSizePolicy(min_members=policy.team_min_members, max_members=policy.team_max_members)
        )
    )
    today = datetime.now(timezone.utc).date()
    logger.debug("command=%s", args.command)

    if args.command == "submit":
        return _emit(ProposalLifecycleService(store, machine).submit_proposal(args.proposal_id))

    if args.command == "review":
        outcome = ProposalLifecycleService(store, machine).review_proposal(
            args.proposal_id,
            ProposalStatus(args.decision),
            note=args.note,
            reviewer_id=args.reviewer,
            approved_amount=args.amount,
        )
        return _emit(outcome)

    if args.command == "complete":
        return _emit(ProposalLifecycleService(store, machine).complete_proposal(args.proposal_id))

    if args.command == "disburse":
        outcome = DisbursementService(store).issue_letter(
            args.proposal_id, args.date or today, args.amount, note=args.note
        )
        return _emit(outcome)

    if args.command == "next-number":
        year = args.year or today.year
        issued = store.count_disbursement_letters_issued_in_year(year)
        print(DocumentNumberGenerator().next(year, issued))
        return 0

    if args.command == "grant-status":
        program = store.load_grant_program(args.hibah_id)
        print(grant_status(program, today).value)
        return 0

    if args.command == "save-grant":
        with open(args.path, "r") as f:
            program = GrantProgram(**json.load(f))
        service = GrantProgramService(
            store, years_back=policy.budget_years_back, years_ahead=policy.budget_years_ahead
        )
        return _emit(service.save_program(program))

    return 2


if __name__ == "__main__":
    sys.exit(main())
