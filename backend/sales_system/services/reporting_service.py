# Overview: Business-intelligence reports; thin adapter over the analytics
# stored procedures plus the product sales analysis.

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from flask import current_app

from ..errors import InvalidArgument, ReportError
from ..extensions import db
from ..models import Order, OrderLine, Product, Supplier
from ..time_utils import to_utc_z
from ..validation import coerce_int, require_id
"""
Reporting Adapter Semantics (authoritative)

- Forecasting, segmentation, association mining and recommendations live in
  the database as stored procedures. Nothing here computes them.
- Parameters are bound, never interpolated; procedure names come only from
  the fixed PROCEDURE_* constants below.
- Result rows are republished as-is except for FIELD_SYNONYMS: known
  snake_case/PascalCase duplicates collapse onto one canonical key, first
  non-null value wins.
"""

PROCEDURE_SALES_FORECAST = "sp_GenerateSalesForecast"
PROCEDURE_PRODUCT_ASSOCIATIONS = "sp_GenerateProductAssociations"
PROCEDURE_CUSTOMER_SEGMENTS = "sp_GenerateCustomerSegments"
PROCEDURE_PRODUCT_RECOMMENDATIONS = "sp_GenerateProductRecommendations"

FORECAST_INTERVALS = ("month", "minute")
DEFAULT_FORECAST_MINUTES = 5
DEFAULT_FORECAST_PERIODS = 12
DEFAULT_ALPHA = Decimal("0.3")
DEFAULT_MIN_SUPPORT = Decimal("0.01")
DEFAULT_MIN_CONFIDENCE = Decimal("0.2")

FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "ProductName": ("product_name", "productName"),
    "SupplierName": ("supplier_name", "supplierName"),
    "ShopName": ("shop_name", "shopName"),
    "AgentName": ("agent_name", "agentName"),
    "TotalQuantitySold": ("total_quantity_sold",),
    "TotalRevenue": ("total_revenue",),
    "NumberOfOrders": ("number_of_orders",),
    "NumberOfShops": ("number_of_shops",),
}


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Collapse synonym keys onto their canonical name; keep everything else."""
    normalized = dict(row)
    for canonical, aliases in FIELD_SYNONYMS.items():
        present = [key for key in (canonical, *aliases) if key in normalized]
        if not present:
            continue
        value = next((normalized[key] for key in present if normalized[key] is not None), None)
        for key in present:
            del normalized[key]
        normalized[canonical] = value
    return normalized


def _json_safe(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return to_utc_z(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


def _procedure_sql(name: str, params: dict[str, Any]) -> str:
    dialect = db.engine.dialect.name
    if dialect == "mssql":
        args = ", ".join(f"@{key} = :{key}" for key in params)
        return f"EXEC {name} {args}".rstrip()
    if dialect in ("mysql", "mariadb"):
        args = ", ".join(f":{key}" for key in params)
        return f"CALL {name}({args})"
    if dialect == "postgresql":
        args = ", ".join(f"{key.lower()} => :{key}" for key in params)
        return f"SELECT * FROM {name}({args})"
    raise ReportError(f"Analytics procedures are not available on {dialect}")


def execute_procedure(name: str, params: dict[str, Any] | None = None) -> list[dict]:
    """
    Run one analytics procedure and return its first result set.

    The procedure may write (the generate-* variants refresh stored results),
    so the call is committed.
    """
    params = params or {}
    sql = _procedure_sql(name, params)
    try:
        result = db.session.execute(text(sql), params)
        rows = [dict(row._mapping) for row in result] if result.returns_rows else []
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Analytics procedure %s failed", name)
        raise ReportError(f"Failed to run {name}") from exc
    return rows


def _republish(name: str, params: dict[str, Any] | None = None) -> list[dict]:
    rows = execute_procedure(name, params)
    return [
        {key: _json_safe(value) for key, value in normalize_row(row).items()}
        for row in rows
    ]


def _decimal_param(value, field: str, default: Decimal) -> Decimal:
    if value in (None, ""):
        return default
    try:
        number = Decimal(str(value))
    except ArithmeticError:
        raise InvalidArgument(f"{field} must be a number")
    if not number.is_finite() or number < 0 or number > 1:
        raise InvalidArgument(f"{field} must be between 0 and 1")
    return number


def sales_forecast(product_id, *, interval: str | None = None, minutes=None) -> list[dict]:
    """Forecast rows at monthly or N-minute granularity."""
    product_id = require_id(product_id, "product_id")
    interval = interval or "month"
    if interval not in FORECAST_INTERVALS:
        raise InvalidArgument("interval must be month or minute")

    if interval == "minute":
        value = DEFAULT_FORECAST_MINUTES if minutes in (None, "") else coerce_int(minutes, "minutes")
        if value <= 0:
            raise InvalidArgument("minutes must be greater than zero")
    else:
        value = 1

    return _republish(PROCEDURE_SALES_FORECAST, {
        "ProductID": product_id,
        "IntervalType": interval,
        "IntervalValue": value,
    })


def generate_sales_forecast(product_id, *, forecast_periods=None, alpha=None) -> list[dict]:
    product_id = require_id(product_id, "product_id")
    periods = DEFAULT_FORECAST_PERIODS if forecast_periods in (None, "") else coerce_int(forecast_periods, "forecastPeriods")
    if periods <= 0:
        raise InvalidArgument("forecastPeriods must be greater than zero")
    return _republish(PROCEDURE_SALES_FORECAST, {
        "ProductID": product_id,
        "ForecastPeriods": periods,
        "Alpha": _decimal_param(alpha, "alpha", DEFAULT_ALPHA),
    })


def product_associations(*, min_support=None, min_confidence=None, generate: bool = False) -> list[dict]:
    if not generate:
        return _republish(PROCEDURE_PRODUCT_ASSOCIATIONS)
    return _republish(PROCEDURE_PRODUCT_ASSOCIATIONS, {
        "MinSupport": _decimal_param(min_support, "minSupport", DEFAULT_MIN_SUPPORT),
        "MinConfidence": _decimal_param(min_confidence, "minConfidence", DEFAULT_MIN_CONFIDENCE),
    })


def customer_segments() -> list[dict]:
    return _republish(PROCEDURE_CUSTOMER_SEGMENTS)


def product_recommendations(shop_id) -> list[dict]:
    shop_id = require_id(shop_id, "shop_id")
    return _republish(PROCEDURE_PRODUCT_RECOMMENDATIONS, {"ShopID": shop_id})


def product_sales_analysis(supplier_id=None) -> list[dict]:
    """
    Units, revenue, order and shop reach per product, from order lines.

    Products that never sold are included with zero totals.
    """
    query = db.session.query(
        Product.id.label("product_id"),
        Product.name.label("product_name"),
        Supplier.name.label("supplier_name"),
        func.coalesce(func.sum(OrderLine.quantity), 0).label("total_quantity_sold"),
        func.coalesce(func.sum(OrderLine.quantity * OrderLine.price), 0).label("total_revenue"),
        func.count(func.distinct(OrderLine.order_id)).label("number_of_orders"),
        func.count(func.distinct(Order.shop_id)).label("number_of_shops"),
    ).join(
        Supplier, Product.supplier_id == Supplier.id
    ).outerjoin(
        OrderLine, OrderLine.product_id == Product.id
    ).outerjoin(
        Order, OrderLine.order_id == Order.id
    )

    if supplier_id not in (None, ""):
        query = query.filter(Product.supplier_id == require_id(supplier_id, "supplier_id"))

    rows = query.group_by(Product.id, Product.name, Supplier.name).order_by(Product.id).all()
    return [
        {key: _json_safe(value) for key, value in normalize_row(dict(row._mapping)).items()}
        for row in rows
    ]
