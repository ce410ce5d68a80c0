import pytest
from hypothesis import given

from silverbilling.domain.invoice_models import (
    BillingType,
    GstConfig,
    LineItem,
    Payment,
)
from silverbilling.services.invoice_calculator import (
    compute_gst,
    compute_item,
    compute_labor_charge,
    compute_net_weight,
    compute_silver_weight,
    compute_totals,
)
from tests.factories import invoice_item, item_calculation_cases


def test_net_weight_is_gross_minus_stone():
    item = LineItem(gross_weight=12.345, stone_weight=2.1)
    assert compute_net_weight(item) == pytest.approx(10.245)


def test_net_weight_treats_blank_values_as_zero():
    assert compute_net_weight(LineItem()) == 0.0
    assert compute_net_weight(LineItem(gross_weight=5.0, stone_weight=None)) == 5.0


def test_net_weight_allows_stone_heavier_than_gross():
    item = LineItem(gross_weight=1.0, stone_weight=1.5)
    assert compute_net_weight(item) == pytest.approx(-0.5)


def test_net_weight_property_matches_calculator():
    item = invoice_item(gross_weight=7.777, stone_weight=0.111)
    assert item.net_weight == compute_net_weight(item)


def test_silver_weight_formula():
    assert compute_silver_weight(wastage=0.0, touch=13.0, net_weight=10.0) == pytest.approx(1.3)


def test_labor_formula():
    assert compute_labor_charge(gross_weight=100.0, labor_rate_per_kg=500.0) == pytest.approx(50.0)


def test_scenario_item():
    result = compute_item(invoice_item(), 75.0)

    assert result.net_weight == pytest.approx(90.0)
    assert result.silver_weight == pytest.approx(13.5)
    assert result.labor_charge == pytest.approx(50.0)
    assert result.amount == pytest.approx(1062.5)


def test_totals_without_gst():
    totals = compute_totals(
        [invoice_item(), invoice_item(gross_weight=50.0, stone_weight=0.0, wastage=0.0)],
        silver_rate=75.0,
        gst=GstConfig.for_billing_type(BillingType.REGULAR),
    )

    # Second item: net 50, silver 6.5, labor 25, amount 512.5
    assert totals.total_net_weight == pytest.approx(140.0)
    assert totals.total_wastage == pytest.approx(2.0)
    assert totals.total_silver_weight == pytest.approx(20.0)
    assert totals.total_labor == pytest.approx(75.0)
    assert totals.subtotal == pytest.approx(1575.0)
    assert totals.cgst == 0.0
    assert totals.sgst == 0.0
    assert totals.total_amount == totals.subtotal


def test_totals_with_gst():
    totals = compute_totals(
        [invoice_item()],
        silver_rate=75.0,
        gst=GstConfig.for_billing_type(BillingType.WHOLESALE),
    )

    assert totals.cgst == pytest.approx(1062.5 * 1.5 / 100)
    assert totals.sgst == pytest.approx(1062.5 * 1.5 / 100)
    assert totals.total_amount == pytest.approx(1062.5 * 1.03)
    assert totals.total_amount >= totals.subtotal


def test_gst_percents_are_independent():
    cgst, sgst = compute_gst(1000.0, GstConfig(applicable=True, cgst_percent=2.5, sgst_percent=1.0))
    assert cgst == pytest.approx(25.0)
    assert sgst == pytest.approx(10.0)


def test_balance_combines_cash_and_silver_payment():
    totals = compute_totals(
        [invoice_item()],
        silver_rate=75.0,
        payment=Payment(paid_amount=500.0, paid_silver=2.0),
    )

    assert totals.paid_silver_value == pytest.approx(150.0)
    assert totals.effective_paid == pytest.approx(650.0)
    assert totals.balance_amount == pytest.approx(412.5)
    assert not totals.is_overpaid


def test_overpayment_gives_negative_balance():
    totals = compute_totals(
        [invoice_item()],
        silver_rate=75.0,
        payment=Payment(paid_amount=1000.0, paid_silver=1.0),
    )

    assert totals.balance_amount == pytest.approx(-12.5)
    assert totals.is_overpaid
    assert totals.as_display()["balanceAmount"] == "-12.50"


def test_totals_accumulate_unrounded_values():
    # Each item's silver weight is 0.00065 g; rounding per item would give 0.001 x 4.
    items = [LineItem(gross_weight=0.005, touch=13.0, labor_rate_per_kg=0.0)] * 4
    totals = compute_totals(items, silver_rate=1.0)

    assert totals.total_silver_weight == pytest.approx(0.0026)
    assert totals.as_display()["totalSilverWeight"] == "0.003"


def test_display_uses_fixed_decimals_and_stable_names():
    display = compute_totals([invoice_item()], silver_rate=75.0).as_display()

    assert display == {
        "totalNetWeight": "90.000",
        "totalWastage": "2.000",
        "totalSilverWeight": "13.500",
        "totalLabor": "50.00",
        "subtotal": "1062.50",
        "cgst": "0.00",
        "sgst": "0.00",
        "totalAmount": "1062.50",
        "paidSilverValue": "0.00",
        "effectivePaid": "0.00",
        "balanceAmount": "1062.50",
    }


def test_empty_invoice_totals_are_zero():
    totals = compute_totals([], silver_rate=75.0)
    assert totals.subtotal == 0.0
    assert totals.balance_amount == 0.0
    assert totals.items == ()


def test_compute_totals_is_idempotent():
    items = [invoice_item(), invoice_item(description="Chain", gross_weight=33.3)]
    kwargs = dict(
        silver_rate=82.5,
        gst=GstConfig(applicable=True),
        payment=Payment(paid_amount=100.0, paid_silver=0.5),
    )

    first = compute_totals(items, **kwargs)
    second = compute_totals(items, **kwargs)

    assert first == second
    assert items[0] == invoice_item()


@given(case=item_calculation_cases())
def test_item_formulas_property(case):
    result = compute_item(case.to_item(), case.silver_rate)

    assert result.net_weight == pytest.approx(case.net_weight, abs=1e-9)
    assert result.silver_weight == pytest.approx(case.expected_silver, rel=1e-9, abs=1e-9)
    assert result.labor_charge == pytest.approx(case.expected_labor, rel=1e-9, abs=1e-9)
    assert result.amount == pytest.approx(
        case.expected_silver * case.silver_rate + case.expected_labor, rel=1e-9, abs=1e-6
    )


@given(case=item_calculation_cases())
def test_gst_disabled_property(case):
    totals = compute_totals(
        [case.to_item()],
        silver_rate=case.silver_rate,
        gst=GstConfig(applicable=False, cgst_percent=9.0, sgst_percent=9.0),
    )

    assert totals.cgst == 0.0
    assert totals.sgst == 0.0
    assert totals.total_amount == totals.subtotal
