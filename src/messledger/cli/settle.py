#!/usr/bin/env python3
"""
Settlement CLI - Ledger Commands

Commands that load a ledger file and settle, list or check it.
"""

from pathlib import Path

import click

from ..core.config import get_config
from ..core.dates import MalformedDateError, MonthKey
from ..core.errors import LedgerError
from ..core.json_utils import format_json
from ..ledger.loader import LedgerData, load_ledger
from ..reporting import month_summaries, render_settlement_table, settlement_to_csv
from ..settlement import (
    DuplicateMemberError,
    available_months,
    check_unique_members,
    compute_settlement,
    find_duplicate_deposits,
    find_duplicate_meal_logs,
    find_orphans,
    group_by_month,
)

ledger_argument = click.argument(
    "ledger_file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


def _load(ledger_file: Path | None) -> LedgerData:
    try:
        return load_ledger(ledger_file)
    except LedgerError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@ledger_argument
@click.option("--month", "-m", help="Month to settle (YYYY-MM), defaults to the most recent month with data")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def settle(ctx: click.Context, ledger_file: Path | None, month: str | None, output_format: str) -> None:
    """
    Settle one month and show every member's balance.

    Examples:
      messledger settle ledger.json
      messledger settle ledger.json --month 2024-01
      messledger settle ledger.json --month 2024-01 --format json
    """
    config = get_config()
    ledger = _load(ledger_file)

    if month is None:
        months_with_data = available_months(ledger.deposits, ledger.purchases, ledger.meal_logs)
        month = months_with_data[0] if months_with_data else str(MonthKey.current())

    if ctx.obj and ctx.obj.get("verbose"):
        click.echo(f"Settling {month} from {ledger_file or config.ledger.ledger_file}")

    try:
        result = compute_settlement(ledger.members, ledger.deposits, ledger.purchases, ledger.meal_logs, month)
    except MalformedDateError as e:
        raise click.BadParameter(str(e), param_hint="--month") from e
    except LedgerError as e:
        raise click.ClickException(str(e)) from e

    places = config.display.decimal_places
    if output_format == "json":
        click.echo(format_json(result.to_dict()))
    elif output_format == "csv":
        click.echo(settlement_to_csv(result, places=places), nl=False)
    else:
        click.echo(render_settlement_table(result, config.display.currency_symbol, places))

    for issue in result.issues:
        click.echo(f"⚠️  Skipped {issue.kind} {issue.record_id}: {issue.message} ({issue.value!r})", err=True)


@click.command()
@ledger_argument
def months(ledger_file: Path | None) -> None:
    """
    List months that have data, most recent first.

    Examples:
      messledger months ledger.json
    """
    ledger = _load(ledger_file)
    month_keys = available_months(ledger.deposits, ledger.purchases, ledger.meal_logs)
    if not month_keys:
        click.echo("No months with data.")
        return

    deposits = {s.month: s for s in month_summaries(group_by_month(ledger.deposits))}
    purchases = {s.month: s for s in month_summaries(group_by_month(ledger.purchases))}
    meals = {s.month: s for s in month_summaries(group_by_month(ledger.meal_logs))}

    for key in month_keys:
        parts = [
            f"{deposits[key].entries if key in deposits else 0} deposits",
            f"{purchases[key].entries if key in purchases else 0} purchases",
            f"{meals[key].total_meals if key in meals else 0} meals",
        ]
        click.echo(f"{key}  {MonthKey.from_string(key).label():<16} {' • '.join(parts)}")


@click.command()
@ledger_argument
def validate(ledger_file: Path | None) -> None:
    """
    Check a ledger for orphaned records, bad dates and duplicates.

    Exits with an error if a member id is repeated or any record references
    an unknown member.

    Examples:
      messledger validate ledger.json
    """
    ledger = _load(ledger_file)

    repeated_members: list[str] = []
    try:
        check_unique_members(ledger.members)
    except DuplicateMemberError as e:
        repeated_members = e.member_ids
    orphans = find_orphans(ledger.members, ledger.deposits, ledger.purchases, ledger.meal_logs)
    issues = [
        issue
        for stream in (ledger.deposits, ledger.purchases, ledger.meal_logs)
        for issue in group_by_month(stream).issues
    ]
    duplicates = find_duplicate_deposits(ledger.deposits) + find_duplicate_meal_logs(ledger.meal_logs)

    for member_id in repeated_members:
        click.echo(f"❌ member id {member_id} is used by more than one member")
    for orphan in orphans:
        click.echo(f"❌ {orphan.kind} {orphan.record_id} references unknown member {orphan.member_id}")
    for issue in issues:
        click.echo(f"⚠️  {issue.kind} {issue.record_id} has an unusable date {issue.value!r}: {issue.message}")
    for dup in duplicates:
        click.echo(f"⚠️  {len(dup.record_ids)} {dup.kind}s for member {dup.member_id} in {dup.period}: {', '.join(dup.record_ids)}")

    if repeated_members:
        raise click.ClickException(f"{len(repeated_members)} repeated member id(s) found")
    if orphans:
        raise click.ClickException(f"{len(orphans)} orphaned record(s) found")

    click.echo(f"✅ Ledger OK ({len(issues)} date warning(s), {len(duplicates)} duplicate group(s))")
