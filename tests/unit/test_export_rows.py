from silverbilling.services.export_rows import SALES_EXPORT_COLUMNS, sales_export_rows
from tests.factories import sale_record


def test_sales_export_row_layout():
    rows = sales_export_rows([sale_record()])

    assert list(rows[0]) == SALES_EXPORT_COLUMNS
    assert rows[0] == {
        "Voucher Number": "WS-0001",
        "Date": "05/03/2024",
        "Customer": "Ramesh Jewellers",
        "Type": "WHOLESALE",
        "Net Weight (g)": "90.000",
        "Silver Weight (kg)": "13.500",
        "Total Amount": "1094.38",
        "Paid": "500.00",
        "Balance": "594.38",
        "Status": "PARTIAL",
    }


def test_sales_export_row_handles_missing_customer_and_date():
    row = sales_export_rows([sale_record(customer=None, saleDate=None)])[0]
    assert row["Customer"] == "-"
    assert row["Date"] == "-"
