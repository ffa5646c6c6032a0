"""Dashboard use cases."""

from .get_dashboard import GetDashboardResponse, GetDashboardUseCase

__all__ = [
    "GetDashboardResponse",
    "GetDashboardUseCase",
]
