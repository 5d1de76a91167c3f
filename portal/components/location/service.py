"""
Location Service
Place search through OpenStreetMap Nominatim
"""
import logging

import requests

from portal.core.api_client import ApiException
from portal.core.validation import clean_text, validate_coordinates

logger = logging.getLogger(__name__)


class LocationService:
    """Service for the location picker"""

    def __init__(self, search_url, user_agent, timeout=5, limit=5):
        self.search_url = search_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.limit = limit

    def search(self, query):
        """Search places; a blank query never reaches the geocoder"""
        query = clean_text(query)
        if not query:
            return []

        try:
            response = requests.get(
                self.search_url,
                params={'format': 'json', 'q': query, 'limit': self.limit, 'addressdetails': 1},
                headers={'Accept-Language': 'en', 'User-Agent': self.user_agent},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f'Location search failed: {e}')
            raise ApiException('Location search is not available', 503) from e

        if response.status_code != 200:
            logger.warning(f'Location search returned HTTP {response.status_code}')
            raise ApiException('Location search is not available', 503)

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f'Location search returned a non-JSON body: {e}')
            raise ApiException('Location search is not available', 503) from e
        if not isinstance(body, list):
            logger.warning('Location search returned an unexpected body')
            raise ApiException('Location search is not available', 503)

        places = []
        for result in body:
            try:
                places.append(self._normalize(result))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.debug(f'Skipping place without coordinates: {result!r}')
        return places

    @staticmethod
    def _normalize(result):
        """Raises when the place has no usable lat/lon"""
        return {
            'display_name': result.get('display_name', ''),
            'lat': float(result['lat']),
            'lng': float(result['lon']),
            'address': result.get('address') or {},
        }

    @staticmethod
    def pin(lat, lng):
        """Coordinates handed back to the parent form"""
        latitude, longitude = validate_coordinates(lat, lng)
        return {'latitude': latitude, 'longitude': longitude}
