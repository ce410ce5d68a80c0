from .invoice_items import (
    invoice_item,
    item_calculation_cases,
    sale_record,
    ItemCalculationCase,
)

__all__ = [
    "invoice_item",
    "sale_record",
    "ItemCalculationCase",
    "item_calculation_cases",
]
