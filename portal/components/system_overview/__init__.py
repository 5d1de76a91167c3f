"""
System Overview Component
Displays remote API health and portal counters
"""

from .routes import system_overview_bp, init_system_overview
from .service import SystemOverviewService

__all__ = ['system_overview_bp', 'init_system_overview', 'SystemOverviewService']
