"""
Admin Component
Customer, technician and vendor management, payouts, adjustments and disputes
"""
from .routes import admin_bp, init_admin
from .service import AdminService

__all__ = ['admin_bp', 'init_admin', 'AdminService']
