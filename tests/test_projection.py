import math

import pytest
from hypothesis import given, settings, strategies as st

from dealdesk.analysis.finance import project_all, project_strategy, unit_rents
from dealdesk.domain.finance import compute_payment
from dealdesk.domain.property import UnitDetail

from deal_builders import duplex_inputs, flat_assumptions, hollywood_zip_entry, market_assumptions, rehab_inputs


def test_ltr_year_one_by_hand(inputs, flat):
    res = project_strategy("ltr", inputs, flat)
    s = res.year1_summary

    payment = compute_payment(225_000.0, 7.0, 30)
    assert s.gross_income == pytest.approx(36_000.0)
    assert s.vacancy == 0.0
    assert s.expenses == pytest.approx(9_000.0)
    assert s.noi == pytest.approx(27_000.0)
    assert s.debt_service == pytest.approx(12 * payment)
    assert s.cash_flow == pytest.approx(27_000.0 - 12 * payment)
    assert s.cap_rate == pytest.approx(0.09)
    assert s.dscr == pytest.approx(27_000.0 / (12 * payment))

    # 25% down + 5% acquisition costs
    assert res.cash_invested == pytest.approx(90_000.0)
    assert s.cash_on_cash == pytest.approx(s.cash_flow / 90_000.0)
    assert res.loan_amount == pytest.approx(225_000.0)
    assert res.monthly_payment == pytest.approx(payment)


def test_maintenance_is_charged_on_collected_rent(inputs, flat):
    assumptions = flat.model_copy(update={"ltr_vacancy_months": 1.0, "maintenance_percent": 5.0})
    s = project_strategy("ltr", inputs, assumptions).year1_summary

    assert s.vacancy == pytest.approx(3_000.0)
    # 5% of (36,000 - 3,000)
    assert s.expenses == pytest.approx(6_000.0 + 3_000.0 + 1_650.0)
    assert s.noi == pytest.approx(36_000.0 - 3_000.0 - 10_650.0)


def test_growth_compounds_per_line(inputs, market):
    proj = project_strategy("ltr", inputs, market).projections

    assert proj[0].gross_income == pytest.approx(36_000.0)
    assert proj[1].gross_income == pytest.approx(36_000.0 * 1.03)
    assert proj[9].gross_income == pytest.approx(36_000.0 * 1.03 ** 9)

    # value compounds from the purchase price, so year 1 already appreciates
    assert proj[0].property_value == pytest.approx(300_000.0 * 1.03)
    assert proj[0].appreciation == pytest.approx(9_000.0)
    assert proj[29].property_value == pytest.approx(300_000.0 * 1.03 ** 30)


def test_projection_length_follows_years(inputs, market):
    assert len(project_strategy("ltr", inputs, market).projections) == 30
    assert len(project_strategy("ltr", inputs, market, years=5).projections) == 5


@pytest.mark.parametrize("strategy", ["ltr", "voucher", "short_term", "brrrr"])
def test_projection_identities(strategy, market):
    res = project_strategy(strategy, rehab_inputs(), market)
    proj = res.projections

    cumulative_cf = 0.0
    cumulative_ret = 0.0
    prior_balance = math.inf
    for p in proj:
        assert p.equity == p.property_value - p.loan_balance
        assert p.cash_flow == pytest.approx(p.noi - p.debt_service)
        assert p.annual_return == pytest.approx(p.cash_flow + p.appreciation)
        cumulative_cf += p.cash_flow
        cumulative_ret += p.annual_return
        assert p.cumulative_cash_flow == pytest.approx(cumulative_cf)
        assert p.cumulative_return == pytest.approx(cumulative_ret)
        assert p.loan_balance <= prior_balance
        prior_balance = p.loan_balance

    assert proj[-1].loan_balance == pytest.approx(0.0, abs=1.0)


def test_debt_service_stops_after_maturity(market):
    res = project_strategy("ltr", duplex_inputs(loan_term_years=10), market, years=15)
    proj = res.projections

    assert proj[9].debt_service == pytest.approx(12 * res.monthly_payment)
    assert proj[9].loan_balance == 0.0
    assert proj[10].debt_service == 0.0
    assert proj[10].cash_flow == pytest.approx(proj[10].noi)


def test_all_cash_purchase_has_infinite_dscr(flat):
    res = project_strategy("ltr", duplex_inputs(down_payment_pct=100.0), flat)

    assert res.loan_amount == 0.0
    assert res.year1_summary.debt_service == 0.0
    assert res.year1_summary.dscr == math.inf
    assert all(p.loan_balance == 0.0 for p in res.projections)


def test_zero_price_guards_ratios(flat):
    res = project_strategy(
        "ltr",
        duplex_inputs(purchase_price=0.0, acquisition_costs_amount=0.0),
        flat,
    )
    s = res.year1_summary
    assert s.cap_rate is None
    assert s.cash_on_cash is None
    assert s.dscr == math.inf


def test_zero_units_project_to_expenses_only(flat):
    res = project_strategy("ltr", duplex_inputs(units=0, unit_details=[]), flat)
    assert res.year1_summary.gross_income == 0.0
    assert res.year1_summary.noi == pytest.approx(-9_000.0)


def test_voucher_rent_from_zip_table(flat):
    assumptions = flat.model_copy(update={"voucher_zip_data": [hollywood_zip_entry()]})
    s = project_strategy("voucher", duplex_inputs(), assumptions).year1_summary
    assert s.gross_income == pytest.approx(2 * 2_000.0 * 12)


def test_voucher_falls_back_to_market_multiplier(flat):
    s = project_strategy("voucher", duplex_inputs(), flat).year1_summary
    assert s.gross_income == pytest.approx(2 * 1_650.0 * 12)


def test_voucher_uses_its_own_vacancy(flat):
    assumptions = flat.model_copy(update={"ltr_vacancy_months": 2.0, "voucher_vacancy_months": 0.5})
    s = project_strategy("voucher", duplex_inputs(), assumptions).year1_summary
    assert s.vacancy == pytest.approx(s.gross_income * 0.5 / 12)


def test_unit_voucher_rent_wins_over_table(flat):
    assumptions = flat.model_copy(update={"voucher_zip_data": [hollywood_zip_entry()]})
    units = [UnitDetail(beds=2, market_rent=1500.0, voucher_rent=2100.0), UnitDetail(beds=2, market_rent=1500.0)]
    rents = unit_rents("voucher", duplex_inputs(unit_details=units), assumptions)
    assert rents == [2100.0, 2000.0]


def test_ltr_backs_market_rent_out_of_voucher_rent(flat):
    units = [UnitDetail(beds=2, voucher_rent=1650.0), UnitDetail(beds=2, market_rent=1400.0)]
    rents = unit_rents("ltr", duplex_inputs(unit_details=units), flat)
    assert rents == [pytest.approx(1500.0), 1400.0]


def test_short_term_uses_net_revenue_without_vacancy(flat):
    assumptions = flat.model_copy(update={"ltr_vacancy_months": 2.0})
    s = project_strategy("short_term", duplex_inputs(), assumptions).year1_summary
    # (36,000 - 12,000) per unit
    assert s.gross_income == pytest.approx(48_000.0)
    assert s.vacancy == 0.0


def test_rehab_capital_counts_toward_hold_cash(flat):
    inputs = duplex_inputs(
        is_rehab=True,
        rehab_cost=40_000.0,
        rehab_entry_points=2.0,
        rehab_financing_rate=12.0,
        rehab_months=4,
        rehab_exit_points=1.0,
    )
    res = project_strategy("ltr", inputs, flat)
    # 75k down + 15k costs + (40,000 + 800 + 1,600 + 400)
    assert res.cash_invested == pytest.approx(132_800.0)


def test_brrrr_holds_on_refinance_at_arv(flat):
    res = project_strategy("brrrr", rehab_inputs(), flat)

    assert res.loan_amount == pytest.approx(240_000.0)
    assert res.monthly_payment == pytest.approx(compute_payment(240_000.0, 7.0, 30))
    # ARV-based taxes/insurance: 1.3% and 1.1% of 320k
    assert res.year1_summary.expenses == pytest.approx(4_160.0 + 3_520.0)
    assert res.year1_summary.cap_rate == pytest.approx(res.year1_summary.noi / 320_000.0)
    assert res.cash_invested == pytest.approx(48_800.0)


def test_brrrr_prefers_after_rehab_rent(flat):
    units = [UnitDetail(beds=2, market_rent=1500.0, after_rehab_market_rent=1900.0) for _ in range(2)]
    rents = unit_rents("brrrr", rehab_inputs(unit_details=units), flat)
    assert rents == [1900.0, 1900.0]


def test_project_all_includes_brrrr_only_for_rehab(market):
    assert set(project_all(duplex_inputs(), market)) == {"ltr", "voucher", "short_term"}
    assert set(project_all(rehab_inputs(), market)) == {"ltr", "voucher", "short_term", "brrrr"}


def test_unknown_strategy_is_rejected(inputs, flat):
    with pytest.raises(ValueError):
        project_strategy("flip", inputs, flat)


@settings(max_examples=50, deadline=None)
@given(
    rent=st.floats(min_value=500.0, max_value=5_000.0),
    delta=st.floats(min_value=10.0, max_value=1_000.0),
)
def test_more_rent_never_hurts_year_one(rent, delta):
    assumptions = market_assumptions()

    def units(r):
        return [UnitDetail(beds=2, market_rent=r) for _ in range(2)]

    a = project_strategy("ltr", duplex_inputs(unit_details=units(rent)), assumptions, years=1).year1_summary
    b = project_strategy("ltr", duplex_inputs(unit_details=units(rent + delta)), assumptions, years=1).year1_summary

    assert b.noi >= a.noi
    assert b.dscr >= a.dscr
    assert b.cash_on_cash >= a.cash_on_cash


@settings(max_examples=50, deadline=None)
@given(
    price=st.floats(min_value=50_000.0, max_value=2_000_000.0),
    down=st.floats(min_value=0.0, max_value=100.0),
    rate=st.floats(min_value=0.0, max_value=12.0),
)
def test_identities_hold_for_any_financing(price, down, rate):
    inputs = duplex_inputs(purchase_price=price, down_payment_pct=down, loan_interest_rate=rate)
    for p in project_strategy("ltr", inputs, market_assumptions()).projections:
        assert p.equity == p.property_value - p.loan_balance
        assert p.loan_balance >= 0.0
