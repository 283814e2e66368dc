"""Prefect flow to read user balances, apply DEX boosts, check totals and write the result."""

from __future__ import annotations

import argparse
from decimal import Decimal
import json
from pathlib import Path
import sys
from typing import Any

from prefect import flow, get_run_logger, task

# Allow running directly from repo root without package installation.
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from models.schemas import UserBalance  # noqa: E402
from services.normalize_service import apply_modifiers  # noqa: E402
from transform.calc.totals_check import check_totals  # noqa: E402
from transform.normalize.source_balances import parse_users, serialize_user  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the DEX boost step via Prefect.")
    parser.add_argument("--input", required=True, help="JSON file with the list of user balances.")
    parser.add_argument("--options", default=None, help="JSON file with normalize options.")
    parser.add_argument("--output", required=True, help="Output JSON path.")
    parser.add_argument(
        "--skip-totals-check",
        action="store_true",
        help="Skip the totals consistency check.",
    )
    return parser.parse_args()


@task(name="load-json", retries=2, retry_delay_seconds=30)
def load_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"), parse_float=Decimal)


@task(name="boost-dex-balances")
def boost_task(raw_users: list[dict[str, Any]], raw_options: dict[str, Any] | None) -> list[UserBalance]:
    logger = get_run_logger()
    users = apply_modifiers(parse_users(raw_users), raw_options, logger=logger)
    logger.info("Boosted balances for users=%s", len(users))
    return users


@task(name="check-totals")
def check_totals_task(users: list[UserBalance]) -> None:
    logger = get_run_logger()
    passed, messages = check_totals(users)
    if not passed:
        for message in messages:
            logger.error(message)
        raise RuntimeError(f"Totals check failed with {len(messages)} mismatch(es)")
    logger.info("Totals check passed for users=%s", len(users))


@task(name="write-json")
def write_json(users: list[UserBalance], path: str) -> None:
    payload = json.dumps([serialize_user(user) for user in users], indent=2, ensure_ascii=False, default=str)
    Path(path).write_text(payload + "\n", encoding="utf-8")


@flow(name="reg-balances-boost-dexs", log_prints=True)
def boost_balances_flow(
    input_path: str,
    output_path: str,
    options_path: str | None = None,
    run_totals_check: bool = True,
) -> None:
    raw_users = load_json(input_path)
    raw_options = load_json(options_path) if options_path else None

    users = boost_task(raw_users, raw_options)
    if run_totals_check:
        check_totals_task(users)
    write_json(users, output_path)


if __name__ == "__main__":
    args = _parse_args()
    boost_balances_flow(
        input_path=args.input,
        output_path=args.output,
        options_path=args.options,
        run_totals_check=not args.skip_totals_check,
    )
