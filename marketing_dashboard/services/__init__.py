from .dashboard_service import VIEW_NAMES, DashboardService, ViewResult

__all__ = ["VIEW_NAMES", "DashboardService", "ViewResult"]
