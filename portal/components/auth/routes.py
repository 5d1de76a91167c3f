"""
Auth Routes
JSON endpoints used by the widgets plus the login/signup pages
"""
import logging

from flask import Blueprint, jsonify, redirect, render_template, request, session

from portal.components import register_component
from portal.core.api_client import ApiException
from portal.core.auth import login_required, role_home
from portal.core.errors import api_route, error_status
from portal.core.validation import ValidationError
from .service import AuthService

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

# Service instance
service = AuthService()


def _form():
    return request.get_json(silent=True) or request.form


@auth_bp.route('/api/auth/login', methods=['POST'])
@api_route
def api_login():
    data = _form()
    return jsonify(service.login(data.get('email'), data.get('password')))


@auth_bp.route('/api/auth/register', methods=['POST'])
@api_route
def api_register():
    return jsonify(service.register(_form()))


@auth_bp.route('/api/auth/logout', methods=['POST'])
def api_logout():
    return jsonify(service.logout())


@auth_bp.route('/api/auth/me')
@login_required
@api_route
def api_me():
    return jsonify({'user': service.me()})


@auth_bp.route('/login', methods=['GET', 'POST'])
def login_page():
    """Login form"""
    if request.method == 'GET':
        home = role_home(session.get('role'))
        if session.get('token') and home != '/login':
            return redirect(home)
        return render_template('login.html', error=None, email='')

    email = request.form.get('email', '')
    try:
        result = service.login(email, request.form.get('password'))
    except (ValidationError, ApiException) as e:
        logger.error(f'Login failed for {email}: {e.message}')
        status = 400 if isinstance(e, ValidationError) else error_status(e)
        return render_template('login.html', error=e.message, email=email), status
    return redirect(result['redirect'])


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup_page():
    """Signup form"""
    if request.method == 'GET':
        return render_template('signup.html', errors={}, form={})

    try:
        result = service.register(request.form)
    except ValidationError as e:
        return render_template('signup.html', errors=e.errors, form=request.form), 400
    except ApiException as e:
        logger.error(f'Signup failed: {e.message}')
        return render_template('signup.html', errors=e.errors or {'form': [e.message]}, form=request.form), error_status(e)
    return redirect(result['redirect'])


@auth_bp.route('/logout')
def logout_page():
    service.logout()
    return redirect('/login')


@register_component('auth')
def init_auth(app):
    """Initialize auth component with Flask app"""
    app.register_blueprint(auth_bp)
    return auth_bp
