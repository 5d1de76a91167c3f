"""
Input hygiene checks run before anything is sent to the API
These are presence/format checks only; the API enforces the real rules.
"""
import re

from portal.config.settings import PortalConfig

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

IMAGE_TOO_LARGE = 'Image must be less than 2MB'
IMAGE_BAD_TYPE = 'Please select a valid image file (JPEG, PNG, GIF, WebP)'


class ValidationError(Exception):
    """Field errors collected before a request is made"""

    def __init__(self, errors):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(self.message)

    @property
    def message(self):
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return 'Invalid input'

    def to_dict(self):
        return {'error': self.message, 'errors': self.errors}


def clean_text(value):
    """Form value as a stripped string; JSON numbers and None are accepted"""
    if value is None:
        return ''
    return str(value).strip()


def _raise_if(errors):
    if errors:
        raise ValidationError(errors)


def is_valid_email(email):
    return bool(email) and EMAIL_RE.match(email) is not None


def check_email(email):
    """Return the email error message or None"""
    if not email:
        return 'Email is required'
    if not is_valid_email(email):
        return 'Please enter a valid email address'
    return None


def validate_login(email, password):
    errors = {}
    email_error = check_email(clean_text(email))
    if email_error:
        errors['email'] = [email_error]
    if not password:
        errors['password'] = ['Password is required']
    _raise_if(errors)


def validate_signup(name, email, password, confirm_password, min_length=None):
    """Signup form checks, first failure per field"""
    min_length = min_length or PortalConfig.MIN_PASSWORD_LENGTH
    errors = {}
    password = '' if password is None else str(password)
    confirm_password = '' if confirm_password is None else str(confirm_password)

    if not clean_text(name):
        errors['name'] = ['Name is required']

    email_error = check_email(clean_text(email))
    if email_error:
        errors['email'] = [email_error]

    if not password:
        errors['password'] = ['Password is required']
    elif len(password) < min_length:
        errors['password'] = [f'Password must be at least {min_length} characters']

    if not confirm_password:
        errors['confirm_password'] = ['Please confirm your password']
    elif password and password != confirm_password:
        errors['confirm_password'] = ['Passwords do not match']

    _raise_if(errors)


def validate_image(size, content_type, max_bytes=None, allowed_types=None):
    """Reject oversized or non-image uploads"""
    max_bytes = max_bytes or PortalConfig.MAX_IMAGE_BYTES
    allowed_types = allowed_types or PortalConfig.ALLOWED_IMAGE_TYPES

    if size is None or size > max_bytes:
        raise ValidationError({'image': [IMAGE_TOO_LARGE]})
    if (content_type or '').lower() not in allowed_types:
        raise ValidationError({'image': [IMAGE_BAD_TYPE]})


def file_size(storage):
    """Size in bytes of a werkzeug FileStorage without reading it into memory"""
    stream = storage.stream
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_refund_request(reason):
    if not clean_text(reason):
        raise ValidationError({'reason': ['Please select a reason for your refund request.']})


def _positive_amount(value):
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if amount > 0 else None


def validate_adjustment(data):
    errors = {}
    if not data.get('vendor_id'):
        errors['vendor_id'] = ['Please select a vendor']
    if data.get('type') not in ('credit', 'debit'):
        errors['type'] = ['Adjustment type must be credit or debit']
    if _positive_amount(data.get('amount')) is None:
        errors['amount'] = ['Amount must be greater than 0']
    if not clean_text(data.get('reason')):
        errors['reason'] = ['Reason is required']
    _raise_if(errors)


def validate_payout_request(data):
    amount = data.get('requested_amount')
    if amount not in (None, '') and _positive_amount(amount) is None:
        raise ValidationError({'requested_amount': ['Requested amount must be greater than 0']})


def validate_reason(reason, field='reason', message='Please provide a reason'):
    if not clean_text(reason):
        raise ValidationError({field: [message]})


def validate_review(data):
    errors = {}
    try:
        rating = int(data.get('rating'))
    except (TypeError, ValueError):
        rating = 0
    if rating < 1 or rating > 5:
        errors['rating'] = ['Please select a rating between 1 and 5']
    _raise_if(errors)


def validate_invite(data):
    errors = {}
    if not clean_text(data.get('name')):
        errors['name'] = ['Name is required']
    email_error = check_email(clean_text(data.get('email')))
    if email_error:
        errors['email'] = [email_error]
    _raise_if(errors)


def validate_coordinates(lat, lng):
    """Return (lat, lng) as floats or raise"""
    errors = {}
    try:
        lat = float(lat)
        if not -90 <= lat <= 90:
            raise ValueError
    except (TypeError, ValueError):
        errors['latitude'] = ['Latitude must be between -90 and 90']
    try:
        lng = float(lng)
        if not -180 <= lng <= 180:
            raise ValueError
    except (TypeError, ValueError):
        errors['longitude'] = ['Longitude must be between -180 and 180']
    _raise_if(errors)
    return lat, lng


def optional_pin(data):
    """Map pin from a form: both coordinates or neither"""
    lat, lng = data.get('latitude'), data.get('longitude')
    if lat in (None, '') and lng in (None, ''):
        return {}
    latitude, longitude = validate_coordinates(lat, lng)
    return {'latitude': latitude, 'longitude': longitude}


ADDRESS_LABELS = ('Home', 'Work', 'Other')


def validate_address(data, partial=False):
    """Address form checks; `partial` allows an update that omits fields"""
    errors = {}
    label = data.get('label')
    if label not in ADDRESS_LABELS and not (partial and label is None):
        errors['label'] = ['Please select Home, Work or Other']
    for field, message in (('street_address', 'Street address is required'),
                           ('city', 'City is required'),
                           ('emirate', 'Emirate is required')):
        if partial and field not in data:
            continue
        if not clean_text(data.get(field)):
            errors[field] = [message]
    try:
        optional_pin(data)
    except ValidationError as e:
        errors.update(e.errors)
    _raise_if(errors)


PAYMENT_TYPES = ('card', 'cash', 'wallet')


def validate_order(data):
    errors = {}
    if not data.get('vendor_id'):
        errors['vendor_id'] = ['Please select a vendor']
    if not data.get('address_id'):
        errors['address_id'] = ['Please select an address']
    if not clean_text(data.get('scheduled_date')):
        errors['scheduled_date'] = ['Please select a date']
    if not clean_text(data.get('scheduled_time')):
        errors['scheduled_time'] = ['Please select a time slot']
    if data.get('payment_type') not in PAYMENT_TYPES:
        errors['payment_type'] = ['Please select a payment method']
    elif data.get('payment_type') == 'card' and not data.get('payment_method_id'):
        errors['payment_method_id'] = ['Please select a card']

    items = data.get('items')
    if not isinstance(items, list) or not items:
        errors['items'] = ['Please select at least one service']
    else:
        for item in items:
            try:
                quantity = int(item.get('quantity', 1))
            except (AttributeError, TypeError, ValueError):
                quantity = 0
            if quantity < 1 or not (isinstance(item, dict) and item.get('sub_service_id')):
                errors['items'] = ['Each service needs a quantity of at least 1']
                break
    _raise_if(errors)


def validate_coupon_code(code, subtotal):
    errors = {}
    if not clean_text(code):
        errors['code'] = ['Please enter a coupon code']
    try:
        if float(subtotal) < 0:
            raise ValueError
    except (TypeError, ValueError):
        errors['subtotal'] = ['Subtotal must be a number']
    _raise_if(errors)


def validate_catalog_service(data, partial=False):
    errors = {}
    if not (partial and 'name' not in data) and not clean_text(data.get('name')):
        errors['name'] = ['Service name is required']
    if not partial and not data.get('category_id'):
        errors['category_id'] = ['Please select a category']
    _raise_if(errors)


def validate_sub_service(data, partial=False):
    errors = {}
    if not (partial and 'name' not in data) and not clean_text(data.get('name')):
        errors['name'] = ['Name is required']
    if not (partial and 'price' not in data) and _positive_amount(data.get('price')) is None:
        errors['price'] = ['Price must be greater than 0']
    if not (partial and 'duration' not in data):
        try:
            if int(data.get('duration')) < 1:
                raise ValueError
        except (TypeError, ValueError):
            errors['duration'] = ['Duration must be at least 1 minute']
    _raise_if(errors)
