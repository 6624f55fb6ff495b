"""
Settle a group from a JSON snapshot of its members and expenses.

Usage:
    splitwell settle group.json
    splitwell settle group.json --period 1mo --json
    splitwell balance group.json alice
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from splitwell.core.config import settings
from splitwell.core.exceptions import SettlementServiceError
from splitwell.schemas.group import GroupSnapshot
from splitwell.services.stats_service import (
    Period,
    calculate_group_settlement,
    get_period_start,
    get_user_balance,
)

logger = logging.getLogger(__name__)

_datetime_adapter = TypeAdapter(datetime)


def parse_datetime(value: str) -> datetime:
    """ISO 8601 timestamp, trailing Z accepted."""
    return _datetime_adapter.validate_python(value)


def load_snapshot(path: str) -> GroupSnapshot:
    return GroupSnapshot.model_validate_json(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="splitwell", description="Settle shared group expenses")
    sub = parser.add_subparsers(dest="command", required=True)

    settle = sub.add_parser("settle", help="Print the settlement plan for a group")
    settle.add_argument("snapshot", help="Path to the group snapshot JSON file")
    window = settle.add_mutually_exclusive_group()
    window.add_argument("--period", type=Period, choices=list(Period), default=None,
                        help="Only include expenses from the last day, month or year")
    window.add_argument("--since", type=parse_datetime, default=None,
                        help="Only include expenses created at or after this ISO timestamp")
    settle.add_argument("--until", type=parse_datetime, default=None,
                        help="Only include expenses created at or before this ISO timestamp")
    settle.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    balance = sub.add_parser("balance", help="Print one member's balance")
    balance.add_argument("snapshot", help="Path to the group snapshot JSON file")
    balance.add_argument("user_id")
    balance.add_argument("--json", action="store_true", help="Print JSON instead of text")
    return parser


def print_settlement(report) -> None:
    print(f"Group: {report.group_name} ({report.group_id})")
    print(f"Total expenses: {report.total_expenses}")
    print("\n--- BALANCES ---")
    for entry in report.net_balances:
        print(f"{entry.user_name:<20} net {entry.net_balance:>10}  paid {entry.total_paid:>10}  share {entry.total_share:>10}")
    print(f"\n--- SETTLEMENTS ({report.transaction_count}) ---")
    if not report.settlements:
        print("Everyone is settled up.")
    for s in report.settlements:
        print(f"{s.from_user.name} -> {s.to_user.name}: {s.amount}")


def print_balance(balance) -> None:
    print(f"{balance.user_name} in {balance.group_name}")
    print(f"  Net balance: {balance.net_balance}")
    print(f"  Total paid:  {balance.total_paid} ({balance.expense_count} expenses)")
    print(f"  Fair share:  {balance.total_share}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

    try:
        group = load_snapshot(args.snapshot)
        if args.command == "settle":
            since = get_period_start(args.period) if args.period else args.since
            report = calculate_group_settlement(group, since=since, until=args.until)
            if args.json:
                print(report.model_dump_json(by_alias=True, indent=2))
            else:
                print_settlement(report)
        else:
            balance = get_user_balance(group, args.user_id)
            if args.json:
                print(balance.model_dump_json(indent=2))
            else:
                print_balance(balance)
    except OSError as e:
        print(f"error: cannot read {args.snapshot}: {e.strerror or e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"error: invalid group snapshot: {e.error_count()} validation error(s)", file=sys.stderr)
        logger.debug(str(e))
        return 1
    except SettlementServiceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
