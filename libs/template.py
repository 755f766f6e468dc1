import re
import html

from libs import PwExpiryError
from libs import TEMPLATE_PLACEHOLDERS


class TemplateError(PwExpiryError):
    pass


# Matches any known placeholder, longest first.
_cmp_placeholders = re.compile('|'.join(
    re.escape(p) for p in sorted(TEMPLATE_PLACEHOLDERS.values(), key=len, reverse=True)))

_placeholder_names = {v: k for (k, v) in TEMPLATE_PLACEHOLDERS.items()}


def load_template(path):
    """Read HTML template, raise `TemplateError` if unreadable or incomplete."""
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise TemplateError("Cannot read template file {}: {}".format(path, repr(e)))

    missing = [p for p in TEMPLATE_PLACEHOLDERS.values() if p not in text]
    if missing:
        raise TemplateError("Template file {} misses placeholder(s): {}".format(path, ', '.join(missing)))

    return text


def render(template, **values):
    """Replace placeholders in one pass, values are HTML-escaped.

    Text inserted for one placeholder is never scanned again, so values
    containing placeholder tokens are kept as is.

    >>> render('<p>Hi %%DISPLAY_NAME%%</p>', display_name='A & B')
    '<p>Hi A &amp; B</p>'
    """
    unknown = set(values) - set(TEMPLATE_PLACEHOLDERS)
    if unknown:
        raise TemplateError("Unknown placeholder name(s): {}".format(', '.join(sorted(unknown))))

    def _replace(m):
        name = _placeholder_names[m.group(0)]
        if name not in values:
            return m.group(0)

        return html.escape(str(values[name]))

    return _cmp_placeholders.sub(_replace, template)
