# Overview: Pytest coverage for the reporting adapter and read-side projections.

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from sales_system.errors import InvalidArgument, ReportError
from sales_system.models import Order, Payment
from sales_system.services import order_service, reporting_service, summary_service


class _Calls(list):
    """(name, params) per procedure call; rows is what each call returns."""


@pytest.fixture
def recorder(monkeypatch):
    """Replace the procedure executor with an in-memory recorder."""
    calls = _Calls()
    calls.rows = []

    def fake_execute(name, params=None):
        calls.append((name, params or {}))
        return list(calls.rows)

    monkeypatch.setattr(reporting_service, "execute_procedure", fake_execute)
    return calls


class TestNormalizeRow:

    def test_synonyms_collapse_to_canonical_key(self):
        row = reporting_service.normalize_row({"product_name": "Tea", "ProductName": None, "Score": 3})
        assert row == {"ProductName": "Tea", "Score": 3}

    def test_first_non_null_value_wins(self):
        row = reporting_service.normalize_row({"SupplierName": "A", "supplier_name": "B"})
        assert row == {"SupplierName": "A"}

    def test_unknown_keys_pass_through(self):
        row = {"Segment": "Gold", "ShopID": 4}
        assert reporting_service.normalize_row(row) == row


class TestProcedures:

    def test_forecast_defaults_to_monthly(self, db_session, recorder):
        recorder.rows = [{"product_name": "Tea", "ForecastQuantity": Decimal("12.5")}]

        rows = reporting_service.sales_forecast(7)

        assert recorder == [(
            reporting_service.PROCEDURE_SALES_FORECAST,
            {"ProductID": 7, "IntervalType": "month", "IntervalValue": 1},
        )]
        assert rows == [{"ProductName": "Tea", "ForecastQuantity": 12.5}]

    def test_minute_forecast_uses_bucket_width(self, db_session, recorder):
        reporting_service.sales_forecast(7, interval="minute", minutes="15")
        assert recorder[0][1]["IntervalValue"] == 15

        reporting_service.sales_forecast(7, interval="minute")
        assert recorder[1][1]["IntervalValue"] == reporting_service.DEFAULT_FORECAST_MINUTES

    @pytest.mark.parametrize("kwargs", [
        {"interval": "week"},
        {"interval": "minute", "minutes": "0"},
        {"interval": "minute", "minutes": "x"},
    ])
    def test_forecast_rejects_bad_parameters(self, db_session, recorder, kwargs):
        with pytest.raises(InvalidArgument):
            reporting_service.sales_forecast(7, **kwargs)
        assert recorder == []

    def test_generate_forecast_parameters(self, db_session, recorder):
        reporting_service.generate_sales_forecast(3, forecast_periods=6, alpha="0.5")
        assert recorder[0][1] == {"ProductID": 3, "ForecastPeriods": 6, "Alpha": Decimal("0.5")}

    def test_generate_forecast_rejects_alpha_out_of_range(self, db_session, recorder):
        with pytest.raises(InvalidArgument):
            reporting_service.generate_sales_forecast(3, alpha="1.5")

    def test_associations_read_and_generate(self, db_session, recorder):
        reporting_service.product_associations()
        reporting_service.product_associations(generate=True)

        assert recorder[0] == (reporting_service.PROCEDURE_PRODUCT_ASSOCIATIONS, {})
        assert recorder[1][1] == {
            "MinSupport": reporting_service.DEFAULT_MIN_SUPPORT,
            "MinConfidence": reporting_service.DEFAULT_MIN_CONFIDENCE,
        }

    def test_recommendations_pass_shop(self, db_session, recorder):
        reporting_service.product_recommendations(12)
        assert recorder == [(reporting_service.PROCEDURE_PRODUCT_RECOMMENDATIONS, {"ShopID": 12})]

    def test_temporal_values_are_serialized(self, db_session, recorder):
        recorder.rows = [{
            "slot": time(10, 30),
            "period": date(2024, 3, 1),
            "generated_at": datetime(2024, 3, 1, 8, 15),
        }]

        rows = reporting_service.customer_segments()

        assert rows == [{
            "slot": "10:30:00",
            "period": "2024-03-01",
            "generated_at": "2024-03-01T08:15:00Z",
        }]

    def test_sqlite_has_no_procedures(self, db_session):
        with pytest.raises(ReportError):
            reporting_service.customer_segments()


class TestProductSalesAnalysis:

    def test_unsold_products_have_zero_totals(self, db_session, product):
        rows = reporting_service.product_sales_analysis()

        assert rows == [{
            "product_id": product.id,
            "ProductName": "Olive Oil",
            "SupplierName": "Acme Foods",
            "TotalQuantitySold": 0,
            "TotalRevenue": 0.0,
            "NumberOfOrders": 0,
            "NumberOfShops": 0,
        }]

    def test_totals_follow_orders(self, db_session, stocked, order_kwargs):
        order_service.place_order(**order_kwargs)
        order_kwargs["lines"] = [(stocked["product_id"], 4, "15.00")]
        order_service.place_order(**order_kwargs)

        row = reporting_service.product_sales_analysis()[0]
        assert row["TotalQuantitySold"] == 14
        assert row["TotalRevenue"] == pytest.approx(212.5)
        assert row["NumberOfOrders"] == 2
        assert row["NumberOfShops"] == 1

    def test_supplier_filter(self, db_session, product):
        assert reporting_service.product_sales_analysis(99999) == []
        assert len(reporting_service.product_sales_analysis(product.supplier_id)) == 1


class TestOrderSummary:

    def test_summary_row(self, db_session, stocked, order_kwargs):
        order_id = order_service.place_order(**order_kwargs)

        rows = summary_service.order_summaries()

        assert len(rows) == 1
        row = rows[0]
        assert row["order_id"] == order_id
        assert row["AgentName"] == "Agent One"
        assert row["ShopName"] == "Corner Shop"
        assert row["SalesRepName"] == "Rep One"
        assert row["PaymentMethod"] == "Credit Card"
        assert row["PaymentAmount"] == 152.5
        assert row["status"] == "Processing"
        assert row["TotalItems"] == 1
        assert row["TotalQuantity"] == 10
        assert row["TotalOrderValue"] == 152.5
        assert row["OrderDate"].endswith("Z")

    def test_order_without_lines_is_excluded(self, db_session, agent, shop, sales_rep):
        payment = Payment(method="Check", amount=Decimal("10.00"))
        db_session.add(payment)
        db_session.flush()
        db_session.add(Order(
            agent_id=agent.id, shop_id=shop.id, sales_rep_id=sales_rep.id, payment_id=payment.id
        ))
        db_session.commit()

        assert summary_service.order_summaries() == []
