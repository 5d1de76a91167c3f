"""
Main page routes for the portal
Role dashboards and the server-rendered list pages
"""
import logging
from datetime import datetime

from flask import Blueprint, abort, current_app, redirect, render_template, request, session

from portal.components.admin.service import AdminService
from portal.components.customer.service import CustomerService
from portal.components.technician.service import TechnicianService
from portal.components.vendor.service import VendorService
from portal.core.api_client import ApiException
from portal.core.auth import current_user, role_home, role_required
from portal.core.pagination import ListQuery

logger = logging.getLogger(__name__)

# Create main blueprint
main_bp = Blueprint('main', __name__)

DASHBOARDS = {
    'admin': AdminService().get_dashboard_stats,
    'vendor': VendorService().get_dashboard_stats,
    'customer': CustomerService().get_dashboard_stats,
    'technician': TechnicianService().get_job_stats,
}

# role -> list name -> (title, loader, action buttons)
LIST_PAGES = {
    'admin': {
        'customers': ('Customers', AdminService().list_customers, ('suspend', 'unsuspend')),
        'applications': ('Vendor Applications', AdminService().list_applications, ('approve',)),
        'payouts': ('Payouts', AdminService().list_payouts, ('approve', 'mark-paid', 'cancel')),
        'disputes': ('Refund Disputes', AdminService().list_disputes, ()),
    },
    'vendor': {
        'orders': ('Orders', VendorService().list_orders, ('confirm', 'start', 'complete')),
        'technicians': ('Technicians', VendorService().list_technicians, ()),
        'payouts': ('Payouts', VendorService().list_payouts, ('cancel',)),
        'services': ('Services', VendorService().list_services, ()),
    },
    'customer': {
        'orders': ('My Orders', CustomerService().list_orders, ('cancel',)),
        'recurring-orders': ('Recurring Orders', CustomerService().list_recurring_orders,
                             ('pause', 'resume', 'cancel')),
        'refund-requests': ('Refund Requests', CustomerService().list_refund_requests, ('cancel',)),
        'addresses': ('Addresses', CustomerService().list_addresses, ('primary',)),
    },
    'technician': {
        'jobs': ('My Jobs', TechnicianService().list_jobs, ('acknowledge', 'start', 'complete')),
    },
}

# Action endpoints per list, relative to the role's API prefix
ACTION_PATHS = {
    ('admin', 'applications'): 'vendors',
}


def _page_context(role):
    return {
        'app_name': current_app.config['APP_NAME'],
        'currency': current_app.config['CURRENCY'],
        'user': current_user(),
        'role': role,
        'nav': [(name, entry[0]) for name, entry in LIST_PAGES[role].items()],
        'current_time': datetime.now(),
    }


@main_bp.route('/')
def index():
    """Send users to their role home"""
    if not session.get('token'):
        return redirect('/login')
    return redirect(role_home(session.get('role')))


def _dashboard(role):
    stats, error = None, None
    try:
        stats = DASHBOARDS[role]()
    except ApiException as e:
        logger.error(f'{role} dashboard failed: {e.message}')
        error = e.message
    return render_template('dashboard.html', stats=stats, error=error,
                           retry=request.path, **_page_context(role))


@main_bp.route('/admin')
@role_required('admin')
def admin_dashboard():
    return _dashboard('admin')


@main_bp.route('/vendor')
@role_required('vendor')
def vendor_dashboard():
    return _dashboard('vendor')


@main_bp.route('/customer')
@role_required('customer')
def customer_dashboard():
    return _dashboard('customer')


@main_bp.route('/technician')
@role_required('technician')
def technician_dashboard():
    return _dashboard('technician')


@main_bp.route('/<any(admin, vendor, customer, technician):role>/<list_name>')
def list_page(role, list_name):
    """Paginated list page with search, status filter and row actions"""
    if list_name not in LIST_PAGES[role]:
        abort(404)
    return role_required(role)(_render_list)(role, list_name)


def _render_list(role, list_name):
    title, loader, actions = LIST_PAGES[role][list_name]
    query = ListQuery.from_args(request.args,
                                default_per_page=current_app.config['DEFAULT_PAGE_SIZE'])
    page, error = None, None
    try:
        page = loader(query)
    except ApiException as e:
        logger.error(f'{role}/{list_name} failed: {e.message}')
        error = e.message

    action_base = f'/api/{role}/{ACTION_PATHS.get((role, list_name), list_name)}'
    return render_template(
        'list.html',
        title=title,
        list_name=list_name,
        page=page,
        query=query,
        actions=actions,
        action_base=action_base,
        page_sizes=current_app.config['PAGE_SIZE_OPTIONS'],
        error=error,
        retry=request.full_path.rstrip('?'),
        **_page_context(role),
    )
