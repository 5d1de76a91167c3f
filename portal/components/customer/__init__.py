"""
Customer Component
"""
from .routes import customer_bp, init_customer
from .service import CustomerService, RefundCancelError

__all__ = ['customer_bp', 'init_customer', 'CustomerService', 'RefundCancelError']
