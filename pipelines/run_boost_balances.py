"""Pipeline entrypoint: read user balances, apply DEX boosts, write the result."""

from __future__ import annotations

import argparse
from decimal import Decimal
import json
import logging
from pathlib import Path
import sys
from typing import Any

# Allow running directly from repo root without package installation.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from config.settings import settings  # noqa: E402
from services.normalize_service import apply_modifiers  # noqa: E402
from transform.calc.totals_check import check_totals  # noqa: E402
from transform.normalize.source_balances import parse_users, serialize_user  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply DEX balance boosts to a user balances snapshot.")
    parser.add_argument("--input", required=True, help="JSON file with the list of user balances.")
    parser.add_argument(
        "--options",
        default=None,
        help="JSON file with normalize options, e.g. {\"boosBalancesDexs\": {...}}.",
    )
    parser.add_argument("--output", default=None, help="Output JSON path (default: stdout).")
    parser.add_argument(
        "--check-totals",
        action="store_true",
        help="Fail when user totals do not match the sum of their positions after boosting.",
    )
    return parser.parse_args(argv)


def _load_json(path: Path) -> Any:
    # Floats as Decimal so multipliers keep their written value.
    return json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)


def _dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"Input JSON not found: {input_path}")

    raw_users = _load_json(input_path)
    raw_options = _load_json(Path(args.options)) if args.options else {}

    users = apply_modifiers(parse_users(raw_users), raw_options)
    payload = _dump_json([serialize_user(user) for user in users])

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)

    if args.check_totals:
        passed, messages = check_totals(users)
        if not passed:
            print("run_boost_balances totals check failed", f"users={len(users)}", file=sys.stderr)
            for message in messages:
                print(" -", message, file=sys.stderr)
            return 1

    print(
        "run_boost_balances completed",
        f"users={len(users)}",
        f"output={args.output or '-'}",
        file=sys.stderr,
    )
    return 0


def main() -> int:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
