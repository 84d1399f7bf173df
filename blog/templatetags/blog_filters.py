from django import template
from blog.utils import format_date, estimate_read_time, get_icon_class

register = template.Library()


@register.filter(name='post_date')
def post_date(value):
    """Zero-pad a frontmatter date to YYYY-MM-DD."""
    if not value:
        return ''
    return format_date(value)


@register.filter
def read_time(content):
    return f"{estimate_read_time(content)} min read"


@register.filter
def icon_class(icon):
    return get_icon_class(icon)
