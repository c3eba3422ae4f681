from django import template

register = template.Library()


@register.filter
def has_role(user, role_name):
    """
    Template filter to check if a user has a specific role.
    Usage: {% if request.user|has_role:"Donation Admin" %}
    """
    if not user.is_authenticated:
        return False
    return user.has_role(role_name)


@register.filter
def rupiah(value):
    """Format an amount the way the public pages show money: Rp 1.250.000"""
    try:
        amount = int(value or 0)
    except (TypeError, ValueError):
        return value
    sign = '-' if amount < 0 else ''
    return f"Rp {sign}{abs(amount):,}".replace(',', '.')
