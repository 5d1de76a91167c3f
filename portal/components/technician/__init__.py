"""
Technician Component
"""
from .routes import technician_bp, init_technician
from .service import TechnicianService

__all__ = ['technician_bp', 'init_technician', 'TechnicianService']
