"""
Location Component
Place search and coordinate checks for the location picker
"""
from .routes import location_bp, init_location
from .service import LocationService

__all__ = ['location_bp', 'init_location', 'LocationService']
