"""
Dependency injection providers for FastAPI.

Services are built once in ``main.create_app`` and kept on ``app.state``;
these providers hand them to the routers. Tests can swap any of them with
``app.dependency_overrides``.
"""

from fastapi import Request

from services.analytics_service import AnalyticsService
from services.borrower_service import BorrowerService
from services.catalog_service import CatalogService
from services.lending_service import LendingService


def get_catalog_service(request: Request) -> CatalogService:
    """
    Provider for the catalog service.

    Args:
        request: Incoming request (injected)

    Returns:
        CatalogService bound to the application's unit of work factory
    """
    return request.app.state.catalog_service


def get_borrower_service(request: Request) -> BorrowerService:
    return request.app.state.borrower_service


def get_lending_service(request: Request) -> LendingService:
    return request.app.state.lending_service


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service
