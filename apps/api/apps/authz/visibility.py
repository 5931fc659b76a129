"""
Role-based data visibility.

Restricts display of sensitive data based on the requesting user's roles.
These helpers are a presentation affordance: they mask values in API
representations, while endpoint access is enforced by permission classes.
Everything here fails closed: a missing user or missing role yields the
placeholder, never an exception.
"""
import re

from rest_framework import serializers

from apps.authz.models import RoleChoices
from apps.authz.permissions import get_request_roles, get_user_roles

MASKED_PLACEHOLDER = '***'
EMPTY_PLACEHOLDER = 'N/A'
NO_PERMISSION_TITLE = 'You do not have permission to perform this action'


class FieldType:
    AADHAAR = 'aadhaar'
    PHONE = 'phone'
    EMAIL = 'email'
    ADDRESS = 'address'
    FINANCIAL = 'financial'


_CONTACT_ROLES = frozenset({
    RoleChoices.ADMIN,
    RoleChoices.DOCTOR,
    RoleChoices.NURSE,
    RoleChoices.BILLING,
})

DEFAULT_FIELD_ROLES = {
    FieldType.AADHAAR: frozenset({RoleChoices.ADMIN, RoleChoices.DOCTOR}),
    FieldType.PHONE: _CONTACT_ROLES,
    FieldType.EMAIL: _CONTACT_ROLES,
    FieldType.ADDRESS: _CONTACT_ROLES,
    FieldType.FINANCIAL: frozenset({RoleChoices.ADMIN, RoleChoices.BILLING}),
}


def _user_holds_any(user, allowed_roles):
    return bool(get_user_roles(user) & set(allowed_roles))


def _mask_unless_allowed(value, field_type, user_roles, allowed_roles=None):
    if value in (None, ''):
        return EMPTY_PLACEHOLDER

    roles = allowed_roles if allowed_roles is not None else DEFAULT_FIELD_ROLES.get(field_type, ())
    if not user_roles & set(roles):
        return MASKED_PLACEHOLDER

    return value


def restricted_data(value, allowed_roles, user, fallback=MASKED_PLACEHOLDER):
    """Return `value` only if `user` holds one of `allowed_roles`."""
    if not _user_holds_any(user, allowed_roles):
        return fallback
    return value


def sensitive_field(value, field_type, user, allowed_roles=None):
    """
    Display a sensitive field with role-based visibility.

    Empty values render as 'N/A'. The allow-list defaults to the fixed
    table for `field_type`.
    """
    return _mask_unless_allowed(value, field_type, get_user_roles(user), allowed_roles)


def role_restricted_action(required_roles, user):
    """Enabled/disabled descriptor for an action gated by role."""
    enabled = _user_holds_any(user, required_roles)
    return {
        'enabled': enabled,
        'title': None if enabled else NO_PERMISSION_TITLE,
    }


class SensitiveFieldSerializerField(serializers.Field):
    """
    Read-only serializer field that masks its value by the request user's roles.

    Usage:
        phone = SensitiveFieldSerializerField(field_type=FieldType.PHONE)
    """

    def __init__(self, field_type, allowed_roles=None, **kwargs):
        self.field_type = field_type
        self.allowed_roles = allowed_roles
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        request = self.context.get('request')
        user_roles = get_request_roles(request) if request is not None else set()
        return _mask_unless_allowed(value, self.field_type, user_roles, self.allowed_roles)


# ============================================================================
# Data masking
# ============================================================================

def mask_aadhaar(aadhaar):
    """
    Mask an Aadhaar number showing only the last 4 digits.
    Format: XXXX-XXXX-1234
    """
    if not aadhaar:
        return aadhaar

    cleaned = re.sub(r'[-\s]', '', aadhaar)
    if len(cleaned) != 12:
        return 'XXXX-XXXX-XXXX'

    return f'XXXX-XXXX-{cleaned[-4:]}'


def mask_pan(pan):
    """
    Mask a PAN showing only the last 4 characters.
    Format: XXXXXX1234
    """
    if not pan:
        return pan

    cleaned = re.sub(r'\s', '', pan)
    if len(cleaned) != 10:
        return 'X' * max(len(cleaned), 6)

    return 'XXXXXX' + cleaned[-4:]


def mask_sensitive_data(data):
    """Recursively mask aadhaar/PAN values in dicts and lists."""
    if isinstance(data, list):
        return [mask_sensitive_data(item) for item in data]
    if not isinstance(data, dict):
        return data

    masked = {}
    for key, value in data.items():
        lower_key = key.lower()
        if lower_key == 'aadhaar':
            masked[key] = mask_aadhaar(value)
        elif lower_key in ('pan', 'pannumber', 'pan_number'):
            masked[key] = mask_pan(value)
        else:
            masked[key] = mask_sensitive_data(value)
    return masked
