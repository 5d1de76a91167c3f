"""
Session-backed authentication and role guards
"""
import uuid
from functools import wraps

from flask import jsonify, redirect, request, session

from portal.config.settings import PortalConfig

ROLE_ALIASES = {
    'admin': ('admin', 'super_admin'),
    'vendor': ('vendor',),
    'customer': ('customer', 'user'),
    'technician': ('technician',),
}


def _role_names(user):
    if not user:
        return []
    names = []
    if user.get('role'):
        names.append(user['role'])
    for role in user.get('roles') or []:
        # Roles arrive either as plain strings or as {id, name} objects
        names.append(role if isinstance(role, str) else role.get('name'))
    return [name for name in names if name]


def has_role(user, role):
    """Check a user against a portal role (aliases included)"""
    accepted = ROLE_ALIASES.get(role, (role,))
    return any(name in accepted for name in _role_names(user))


def primary_role(user):
    names = _role_names(user)
    if not names:
        return None
    for portal_role, aliases in ROLE_ALIASES.items():
        if names[0] in aliases:
            return portal_role
    return names[0]


def role_home(role):
    """Landing page for a role"""
    return PortalConfig.ROLE_HOMES.get(role, '/login')


def current_user():
    return session.get('user')


def session_id():
    return session.get('sid')


def start_session(user, token):
    session.clear()
    session.permanent = True
    session['sid'] = uuid.uuid4().hex
    session['token'] = token
    session['user'] = user
    session['role'] = primary_role(user)
    return session['sid']


def end_session():
    sid = session.get('sid')
    session.clear()
    return sid


def _wants_json():
    return request.path.startswith('/api/')


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get('token'):
            if _wants_json():
                return jsonify({'error': 'Not authenticated'}), 401
            return redirect('/login')
        return view(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Allow the view only for users holding one of the given roles"""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get('token'):
                if _wants_json():
                    return jsonify({'error': 'Not authenticated'}), 401
                return redirect('/login')

            user = current_user()
            if not any(has_role(user, role) for role in roles):
                if _wants_json():
                    return jsonify({'error': 'Forbidden'}), 403
                return redirect(role_home(primary_role(user)))
            return view(*args, **kwargs)
        return wrapper
    return decorator
