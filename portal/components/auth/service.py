"""
Auth Service
Login, registration and logout against the remote API
"""
import logging

from flask import session

from portal.core import store
from portal.core.api_client import ApiException, current_client
from portal.core.auth import end_session, primary_role, role_home, start_session
from portal.core.validation import clean_text, optional_pin, validate_address, validate_login, validate_signup

logger = logging.getLogger(__name__)


class AuthService:
    """Service for the auth component"""

    def login(self, email, password):
        """Authenticate and open a portal session

        Returns the user and the landing page for the user's role.
        """
        email = clean_text(email)
        validate_login(email, password)

        response = current_client().post('/auth/login', {'email': email, 'password': password})
        return self._open_session(response)

    def register(self, form):
        validate_signup(
            form.get('name'),
            form.get('email'),
            form.get('password'),
            form.get('confirm_password'),
        )
        first_name, _, last_name = clean_text(form['name']).partition(' ')
        payload = {
            'first_name': first_name,
            'last_name': last_name,
            'email': clean_text(form['email']),
            'password': form['password'],
            'password_confirmation': form['confirm_password'],
            'role': form.get('role') or 'customer',
        }
        for key in ('phone', 'nationality', 'emirates_id_number'):
            if clean_text(form.get(key)):
                payload[key] = clean_text(form[key])
        payload.update(self._signup_location(form))

        response = current_client().post('/auth/register', payload)
        return self._open_session(response)

    @staticmethod
    def _signup_location(form):
        """Map pin and address from the location step, validated before sending"""
        pin = optional_pin(form)
        if not clean_text(form.get('street_address')):
            return pin
        address = {'label': form.get('label') or 'Home'}
        for key in ('street_address', 'building', 'apartment', 'city', 'emirate'):
            if clean_text(form.get(key)):
                address[key] = clean_text(form[key])
        validate_address(address)
        address.update(pin)
        return {'address': address, **pin}

    def _open_session(self, response):
        token = response.get('token')
        user = response.get('user') or {}
        if not token:
            raise ApiException(response.get('message') or 'Login failed', 401)

        start_session(user, token)
        role = primary_role(user)
        logger.info(f"User {user.get('email')} signed in as {role}")
        return {'user': user, 'role': role, 'redirect': role_home(role)}

    def logout(self):
        """Close the session; a failing API logout still clears local state"""
        try:
            current_client().post('/auth/logout')
        except ApiException as e:
            logger.warning(f'API logout failed: {e.message}')

        sid = end_session()
        if sid:
            store.drop_session(sid)
        return {'message': 'Logged out', 'redirect': '/login'}

    def me(self):
        response = current_client().get('/auth/me')
        user = response.get('user') or response.get('data') or response
        session['user'] = user
        session['role'] = primary_role(user)
        return user
