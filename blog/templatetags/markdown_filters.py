"""
Template filters for markdown processing.
"""
from django import template
from django.utils.safestring import mark_safe
from blog.services.markdown_service import MarkdownService

register = template.Library()


@register.filter(name='format_content')
def format_content(text):
    """
    Render blog markdown to terminal-themed HTML.

    Usage in templates:
        {{ post.content|format_content }}

    Returns safe HTML string.
    """
    if not text:
        return ''

    # SAFETY: MarkdownService.format_content() entity-encodes every piece of
    # author text and only emits its own fixed tag vocabulary, with link and
    # image targets restricted to an allow-list of prefixes.
    return mark_safe(MarkdownService.format_content(text))
