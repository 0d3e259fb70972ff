# Overview: Error taxonomy shared by services and routes.

from __future__ import annotations


class SalesError(Exception):
    """Base for domain errors; carries an HTTP status and structured details."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidArgument(SalesError, ValueError):
    """400-level input problem. Raised before any write."""

    status_code = 400


class NotFound(SalesError):
    """Referenced agent, shop, product, order, ... does not exist."""

    status_code = 404


class ConflictError(SalesError):
    """409-level business rule conflict (e.g., deleting an agent with orders)."""

    status_code = 409


class InsufficientInventory(SalesError):
    """Requested quantity exceeds the agent's on-hand stock for a product."""

    status_code = 409

    def __init__(self, message: str, *, product_id: int, available: int, requested: int):
        super().__init__(
            message,
            details={
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class TransactionFailure(SalesError):
    """Storage failed after validation passed. The DB detail is logged, never exposed."""

    status_code = 500


class ReportError(SalesError):
    """Raised when an analytics procedure cannot be executed."""

    status_code = 500
