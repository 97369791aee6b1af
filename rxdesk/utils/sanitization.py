"""
Escaping of markup-significant characters in user input.

Everything crossing the request gateway goes through ``sanitize_object``
before it is validated or stored, so no stored value can carry markup into
a later rendering surface.
"""

_REPLACEMENTS = (
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&#39;'),
    ('`', '&#96;'),
    ('/', '&#x2F;'),
)


def sanitize_string(value: str) -> str:
    if not value:
        return ''
    text = str(value)
    for char, entity in _REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def sanitize_object(value):
    """Return a copy of ``value`` with every string escaped, recursively."""
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {key: sanitize_object(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_object(item) for item in value]
    return value
