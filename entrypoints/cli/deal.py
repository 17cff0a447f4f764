# entrypoints/cli/deal.py
from __future__ import annotations

import json
import math
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "src")))

import typer
from dotenv import find_dotenv, load_dotenv
from loguru import logger

# DEALDESK_* overrides from a local .env must be in the environment before config loads
load_dotenv(find_dotenv(usecwd=True))

from dealdesk.adapters.rehab_estimator import RehabTier, estimate_cost_range, tier_label
from dealdesk.adapters.storage import read_df, write_df
from dealdesk.analysis.finance_batch import projection_frame, screen_deals_df
from dealdesk.analysis.scoring import describe_condition_score, format_breakdown
from dealdesk.domain.assumptions import GlobalAssumptions, default_assumptions
from dealdesk.domain.errors import DealValidationError
from dealdesk.services import deal_analyzer
from dealdesk.services.formatting import format_currency
from dealdesk.services.validation import parse_assessment, parse_inputs

app = typer.Typer(help="Deal underwriting: projections, condition scoring, rehab budgets, offers.")


def _load_json(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        typer.echo(f"File not found: {path}", err=True)
        raise typer.Exit(code=2)
    return json.loads(p.read_text())


def _assumptions(path: Optional[str]) -> GlobalAssumptions:
    if path is None:
        return default_assumptions()
    return GlobalAssumptions.model_validate(_load_json(path))


def _jsonable(value):
    # strict JSON has no Infinity/NaN: +inf DSCR becomes "inf", undefined ratios null
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None if math.isnan(value) else ("inf" if value > 0 else "-inf")
    return value


def _emit(payload) -> None:
    typer.echo(json.dumps(_jsonable(payload), indent=2, default=str, allow_nan=False))


def _fail(err: DealValidationError) -> None:
    for reason in err.reasons:
        typer.echo(f"invalid input: {reason}", err=True)
    raise typer.Exit(code=1)


@app.command()
def project(
    deal_json: str = typer.Argument(..., help="Path to an acquisition-inputs JSON file"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", help="ltr | voucher | short_term | brrrr (default: all applicable)"
    ),
    csv: Optional[str] = typer.Option(None, "--csv", help="Write the yearly projections to this CSV/parquet path"),
    assumptions: Optional[str] = typer.Option(None, "--assumptions", help="Global assumptions JSON"),
    years: Optional[int] = typer.Option(None, help="Projection length in years"),
) -> None:
    """
    Project one deal under every applicable strategy (or just --strategy).
    """
    ga = _assumptions(assumptions)
    try:
        inputs = parse_inputs(_load_json(deal_json))
        if strategy:
            results = {strategy: deal_analyzer.project_strategy(strategy, inputs, ga, years=years)}
        else:
            results = deal_analyzer.project_all(inputs, ga, years=years)
    except DealValidationError as err:
        _fail(err)
        return
    except ValueError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)

    logger.info("Projected deal", address=inputs.address, strategies=list(results))
    if csv:
        try:
            out = write_df(projection_frame(results.values()), csv)
        except ValueError as err:
            typer.echo(str(err), err=True)
            raise typer.Exit(code=1)
        logger.info("Projection table written", path=out)
    _emit(deal_analyzer.summarize(results))


@app.command()
def score(
    assessment_json: str = typer.Argument(..., help="Path to a condition-assessment JSON file"),
    sqft: float = typer.Option(..., help="Total building square footage"),
    units: int = typer.Option(1, help="Number of units"),
) -> None:
    """
    Score a condition assessment and price the suggested rehab tier.
    """
    try:
        assessment = parse_assessment(_load_json(assessment_json))
    except DealValidationError as err:
        _fail(err)
        return
    result = deal_analyzer.score_condition(assessment, sqft, units)
    cost_range = estimate_cost_range(result.estimated_cost, assessment)

    payload = asdict(result)
    payload["tier_label"] = tier_label(result.suggested_condition)
    payload["description"] = describe_condition_score(result.condition_score)
    payload["breakdown_display"] = format_breakdown(result.breakdown)
    payload["cost_range"] = asdict(cost_range)
    _emit(payload)


@app.command()
def rehab(
    sqft: float = typer.Option(..., help="Total building square footage"),
    units: int = typer.Option(1, help="Number of units"),
    tier: RehabTier = typer.Option(RehabTier.MEDIUM, help="Rehab tier"),
) -> None:
    """
    Square-footage rehab budget for a chosen tier.
    """
    cost = deal_analyzer.estimate_rehab_cost(sqft, units, tier)
    _emit({"sqft": sqft, "units": units, "tier": tier.value, "estimated_cost": cost,
           "display": format_currency(cost)})


@app.command()
def capital(
    hard_cost: float = typer.Option(..., "--hard-cost", help="Rehab hard cost"),
    entry_points: float = typer.Option(0.0, "--entry-points", help="Entry points, percent of loan"),
    rate: float = typer.Option(0.0, "--rate", help="Annual interest rate, percent"),
    months: float = typer.Option(0.0, "--months", help="Rehab duration in months"),
    exit_points: float = typer.Option(0.0, "--exit-points", help="Exit points, percent of loan"),
) -> None:
    """
    Cash needed to carry a bridge-financed rehab.
    """
    try:
        breakdown = deal_analyzer.capital_needed(hard_cost, entry_points, rate, months, exit_points)
    except ValueError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)
    _emit(asdict(breakdown))


@app.command()
def offer(
    deal_json: str = typer.Argument(..., help="Path to an acquisition-inputs JSON file"),
    target_dscr: Optional[float] = typer.Option(None, "--target-dscr", help="Minimum year-1 DSCR"),
    strategy: str = typer.Option("ltr", "--strategy", help="ltr | voucher | short_term"),
    assumptions: Optional[str] = typer.Option(None, "--assumptions", help="Global assumptions JSON"),
) -> None:
    """
    Maximum purchase price that still meets the target DSCR.
    """
    ga = _assumptions(assumptions)
    try:
        inputs = parse_inputs(_load_json(deal_json))
        result = deal_analyzer.max_offer(strategy, inputs, ga, target_dscr)
    except DealValidationError as err:
        _fail(err)
        return
    except ValueError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)
    _emit(asdict(result))


@app.command()
def screen(
    csv: str = typer.Argument(..., help="CSV/parquet of candidate deals"),
    down_payment_pct: float = typer.Option(25.0, "--down", help="Down payment percent"),
    rate: float = typer.Option(7.0, "--rate", help="Annual interest rate, percent"),
    term: int = typer.Option(30, "--term", help="Loan term in years"),
    out: Optional[str] = typer.Option(None, "--out", help="Write the screened table here"),
    assumptions: Optional[str] = typer.Option(None, "--assumptions", help="Global assumptions JSON"),
) -> None:
    """
    Year-1 rental metrics for every row of a candidate table.
    """
    try:
        screened = screen_deals_df(
            read_df(csv),
            _assumptions(assumptions),
            down_payment_pct=down_payment_pct,
            interest_rate_pct=rate,
            loan_term_years=term,
        )
    except ValueError as err:
        typer.echo(str(err), err=True)
        raise typer.Exit(code=1)

    logger.info("Screened candidate deals", rows=len(screened))
    if out:
        write_df(screened, out)
        logger.info("Screened table written", path=out)
    cols = [c for c in ("address", "purchase_price", "noi", "cash_flow", "cap_rate", "dscr", "cash_on_cash")
            if c in screened.columns]
    _emit(screened[cols].to_dict(orient="records"))


if __name__ == "__main__":
    app()
