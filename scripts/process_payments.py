#!/usr/bin/env python3
"""Creator payment maintenance from the command line.

Examples:
  python scripts/process_payments.py report
  python scripts/process_payments.py process-pending
  python scripts/process_payments.py process 3f9c2a1b7d4e
  python scripts/process_payments.py quote --experience 3-5 --specialty wedding --projects 3 --value 500
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.config import Settings
from app.errors import EditAIError
from app.models import PaymentInput
from app.services import PaymentCalculator, PaymentConfig, PaymentService, SubmissionStore


def _service(args: argparse.Namespace) -> PaymentService:
    settings = Settings()
    store_path = Path(args.store) if args.store else settings.creators_data_path
    calculator = PaymentCalculator(PaymentConfig.load(settings.payment_config_path))
    return PaymentService(SubmissionStore(store_path), calculator)


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_report(args: argparse.Namespace) -> None:
    report = _service(args).generate_report()
    if args.json:
        _print_json(report.model_dump(mode="json", by_alias=True))
        return

    print("Payment Statistics")
    print("==================")
    print(f"Total creators:      {report.total_creators}")
    print(f"Total submissions:   {report.total_submissions}")
    print(f"Total earnings:      ${report.total_earnings}")
    print(f"Pending payments:    {report.pending_payments}")
    print(f"Processed payments:  {report.processed_payments}")
    print(f"Average payment:     ${report.average_payment}")
    if report.top_earners:
        print("\nTop earners:")
        for index, earner in enumerate(report.top_earners, start=1):
            print(f"{index}. {earner.name} ({earner.specialty}): ${earner.payment}")


def cmd_process_pending(args: argparse.Namespace) -> None:
    results = _service(args).process_all_pending()
    _print_json([r.model_dump(mode="json", by_alias=True) for r in results])
    if any(not r.success for r in results):
        raise SystemExit(1)


def cmd_process(args: argparse.Namespace) -> None:
    result = _service(args).process_payment(args.creator_id)
    _print_json(result.model_dump(mode="json", by_alias=True))


def cmd_quote(args: argparse.Namespace) -> None:
    settings = Settings()
    calculator = PaymentCalculator(PaymentConfig.load(settings.payment_config_path))
    breakdown = calculator.compute_payment(
        PaymentInput(
            experience=args.experience,
            specialty=args.specialty,
            project_count=args.projects,
            estimated_value=args.value,
        )
    )
    _print_json(breakdown.model_dump(mode="json", by_alias=True))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edit.ai creator payment processor.")
    parser.add_argument("--store", default=None, help="Path to creators-data.json (default: EDITAI_CREATORS_DATA_PATH)")
    parser.add_argument("--verbose", action="store_true", help="Log service activity")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print payment statistics")
    report.add_argument("--json", action="store_true", help="Print the report as JSON")
    report.set_defaults(func=cmd_report)

    pending = sub.add_parser("process-pending", help="Process all approved creators without a payment")
    pending.set_defaults(func=cmd_process_pending)

    single = sub.add_parser("process", help="Process the payment of one creator")
    single.add_argument("creator_id")
    single.set_defaults(func=cmd_process)

    quote = sub.add_parser("quote", help="Compute a payment without storing anything")
    quote.add_argument("--experience", required=True, help='Experience bucket, e.g. "3-5"')
    quote.add_argument("--specialty", required=True)
    quote.add_argument("--projects", type=int, default=1)
    quote.add_argument("--value", type=float, default=0.0, help="Estimated project value")
    quote.set_defaults(func=cmd_quote)
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )
    try:
        args.func(args)
    except EditAIError as exc:
        raise SystemExit(f"{exc.kind}: {exc.message}")


if __name__ == "__main__":
    main()
