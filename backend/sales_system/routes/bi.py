# Overview: Business-intelligence routes; forward parameters to the analytics
# procedures and return their rows.

from flask import Blueprint, current_app, jsonify, request

from ..errors import ReportError, SalesError
from ..services import reporting_service


bi_bp = Blueprint("bi", __name__, url_prefix="/api/bi")


def _report(fetch, failure: str):
    try:
        return jsonify(fetch()), 200
    except ReportError:
        # Procedure detail is already logged by the reporting service
        return jsonify({"error": failure}), 500
    except SalesError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception(failure)
        return jsonify({"error": failure}), 500


@bi_bp.get("/sales-forecast/<int:product_id>")
def sales_forecast_route(product_id: int):
    """
    Query params:
    - interval: "month" (default) or "minute"
    - minutes: bucket width when interval=minute (default 5)
    """
    return _report(
        lambda: reporting_service.sales_forecast(
            product_id,
            interval=request.args.get("interval"),
            minutes=request.args.get("minutes"),
        ),
        "Failed to fetch sales forecast",
    )


@bi_bp.post("/generate-sales-forecast/<int:product_id>")
def generate_sales_forecast_route(product_id: int):
    data = request.get_json(silent=True) or {}
    return _report(
        lambda: reporting_service.generate_sales_forecast(
            product_id,
            forecast_periods=data.get("forecastPeriods"),
            alpha=data.get("alpha"),
        ),
        "Failed to generate sales forecast",
    )


@bi_bp.get("/product-associations")
def product_associations_route():
    return _report(
        reporting_service.product_associations,
        "Failed to fetch product associations",
    )


@bi_bp.post("/generate-product-associations")
def generate_product_associations_route():
    data = request.get_json(silent=True) or {}
    return _report(
        lambda: reporting_service.product_associations(
            min_support=data.get("minSupport"),
            min_confidence=data.get("minConfidence"),
            generate=True,
        ),
        "Failed to generate product associations",
    )


@bi_bp.get("/customer-segments")
def customer_segments_route():
    return _report(reporting_service.customer_segments, "Failed to fetch customer segments")


@bi_bp.post("/generate-customer-segments")
def generate_customer_segments_route():
    return _report(reporting_service.customer_segments, "Failed to generate customer segments")


@bi_bp.get("/product-recommendations/<int:shop_id>")
def product_recommendations_route(shop_id: int):
    return _report(
        lambda: reporting_service.product_recommendations(shop_id),
        "Failed to fetch product recommendations",
    )


@bi_bp.post("/generate-product-recommendations/<int:shop_id>")
def generate_product_recommendations_route(shop_id: int):
    return _report(
        lambda: reporting_service.product_recommendations(shop_id),
        "Failed to generate product recommendations",
    )
