"""
Top-level package for the data quality dashboard.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    dq_dashboard.core
    dq_dashboard.services
    dq_dashboard.views
    dq_dashboard.ui
"""

__all__: list[str] = []
