"""
XSS Prevention / Input Sanitization Module

Sanitizes request text before it is parsed or stored.
"""

import html
import re

CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')
HTML_TAGS = re.compile(r'<[^>]*(?:>|$)')


def sanitize_text(text, max_length=10000):
    """
    Sanitize text by HTML-escaping special characters.

    This prevents XSS by ensuring that any HTML/JS in the text
    is displayed as literal text rather than being executed.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Strip leading/trailing whitespace
    text = text.strip()

    # HTML escape special characters
    text = html.escape(text)

    # Truncate if too long
    if len(text) > max_length:
        text = text[:max_length] + '...'

    return text


def sanitize_name(name, max_length=200, default='Grocery List'):
    """
    Sanitize a short display name (grocery list or item name).

    Returns `default` when nothing is left after cleaning.
    """
    if not name:
        return default

    if not isinstance(name, str):
        name = str(name)

    name = CONTROL_CHARS.sub('', name.strip())
    name = html.escape(name)

    # Collapse multiple spaces
    name = re.sub(r'\s+', ' ', name)

    if len(name) > max_length:
        name = name[:max_length-3] + '...'

    return name or default


def sanitize_ingredient_text(text, max_length=500):
    """
    Sanitize an ingredient line from a request.

    Tags and control characters are removed. Nothing is entity-escaped,
    so '&' and apostrophes reach the parser unchanged.

    Args:
        text: Single ingredient line
        max_length: Maximum length (default 500)

    Returns:
        Sanitized ingredient text
    """
    if not text:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Remove tags (an unclosed tag runs to the end of the line)
    text = HTML_TAGS.sub('', text)

    # Remove control characters
    text = CONTROL_CHARS.sub('', text)

    # Strip whitespace
    text = text.strip()

    # Truncate
    if len(text) > max_length:
        text = text[:max_length]

    return text
