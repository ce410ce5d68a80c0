"""Row layouts consumed by the spreadsheet exports."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping

from silverbilling.domain.invoice_models import coerce_number, format_money, format_weight

SALES_EXPORT_COLUMNS = [
    "Voucher Number",
    "Date",
    "Customer",
    "Type",
    "Net Weight (g)",
    "Silver Weight (kg)",
    "Total Amount",
    "Paid",
    "Balance",
    "Status",
]


def _format_day(value: Any) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        text = str(value or "").strip()
        if not text:
            return "-"
        try:
            value = date.fromisoformat(text[:10])
        except ValueError:
            return text
    return value.strftime("%d/%m/%Y")


def sale_export_row(sale: Mapping[str, Any]) -> Dict[str, str]:
    customer = sale.get("customer") or {}
    return {
        "Voucher Number": str(sale.get("voucherNumber", "") or ""),
        "Date": _format_day(sale.get("saleDate")),
        "Customer": str(customer.get("name") or "-"),
        "Type": str(sale.get("billingType", "") or "").upper(),
        "Net Weight (g)": format_weight(coerce_number(sale.get("totalNetWeight"))),
        "Silver Weight (kg)": format_weight(coerce_number(sale.get("totalSilverWeight"))),
        "Total Amount": format_money(coerce_number(sale.get("totalAmount"))),
        "Paid": format_money(coerce_number(sale.get("paidAmount"))),
        "Balance": format_money(coerce_number(sale.get("balanceAmount"))),
        "Status": str(sale.get("status", "") or "").upper(),
    }


def sales_export_rows(sales: Iterable[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """Map sale records to the sales report columns, in input order."""
    return [sale_export_row(sale) for sale in sales]
