"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from mahnung_gateway.config import Settings, settings
from mahnung_gateway.domain.fee_table import FeeTable, fee_table_registry


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_fee_table() -> FeeTable:
    """Provide the currently published RVG table"""
    return fee_table_registry.get()
