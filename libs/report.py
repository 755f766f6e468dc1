import re
import html

# Opening tag of a table row, with optional attributes.
_cmp_tr = re.compile(r'<tr(\s[^>]*)?>', re.IGNORECASE)
_cmp_class_attr = re.compile(r'\sclass\s*=\s*("[^"]*"|\'[^\']*\'|\S+)', re.IGNORECASE)

# Columns of the expired accounts report: (header, function returns cell value)
EXPIRED_REPORT_COLUMNS = [
    ('Name', lambda a: a.name),
    ('PasswordLastSet', lambda a: a.password_last_set.strftime('%Y-%m-%d %H:%M:%S') if a.password_last_set else ''),
    ('PasswordExpired', lambda a: str(a.password_expired)),
]


def build_html_table(rows, columns):
    """Render `rows` as an HTML table fragment.

    @rows -- list of objects
    @columns -- list of (header, getter) tuples, `getter(row)` returns cell value
    """
    lines = ['<table>']
    lines.append('<tr>' + ''.join('<th>{}</th>'.format(html.escape(h)) for (h, _) in columns) + '</tr>')

    for row in rows:
        cells = ''.join('<td>{}</td>'.format(html.escape(str(getter(row)))) for (_, getter) in columns)
        lines.append('<tr>' + cells + '</tr>')

    lines.append('</table>')
    return '\n'.join(lines)


def format_table(fragment):
    """Add alternating `odd` / `even` class to data rows of an HTML table.

    Rows without `<td>` cells (headers) are not changed, an existing class
    attribute of data row is replaced. Fragment without data rows is
    returned as is.

    >>> format_table('<table><tr><th>Name</th></tr><tr><td>a</td></tr></table>')
    '<table><tr><th>Name</th></tr><tr class="odd"><td>a</td></tr></table>'
    """
    matches = list(_cmp_tr.finditer(fragment))
    if not matches:
        return fragment

    parts = []
    last_end = 0
    index = 0

    for (i, m) in enumerate(matches):
        # Content of the row, up to next row (or end of fragment).
        if i + 1 < len(matches):
            next_start = matches[i + 1].start()
        else:
            next_start = len(fragment)

        parts.append(fragment[last_end:m.start()])

        if '<td' in fragment[m.end():next_start].lower():
            index += 1
            css_class = 'odd' if index % 2 == 1 else 'even'
            attrs = _cmp_class_attr.sub('', m.group(1) or '')
            parts.append('<tr{} class="{}">'.format(attrs, css_class))
        else:
            parts.append(m.group(0))

        last_end = m.end()

    parts.append(fragment[last_end:])
    return ''.join(parts)


def build_report_html(accounts, css='', heading='Users with expired passwords'):
    """Return full HTML document listing given accounts, sorted by name."""
    accounts = sorted(accounts, key=lambda a: a.name)
    table = format_table(build_html_table(accounts, EXPIRED_REPORT_COLUMNS))

    return """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{heading}</title>
<style>{css}</style>
</head>
<body>
<h1>{heading}</h1>
{table}
</body>
</html>
""".format(heading=html.escape(heading), css=css, table=table)
