from libs import report
from libs.account import Account
from tests import tdata


def test_format_table_banding():
    fragment = report.build_html_table([1, 2, 3], [('Number', lambda n: n)])
    formatted = report.format_table(fragment)

    assert '<tr><th>Number</th></tr>' in formatted
    assert '<tr class="odd"><td>1</td></tr>' in formatted
    assert '<tr class="even"><td>2</td></tr>' in formatted
    assert '<tr class="odd"><td>3</td></tr>' in formatted


def test_format_table_without_data_rows():
    fragment = report.build_html_table([], [('Name', lambda a: a)])

    assert report.format_table(fragment) == fragment
    assert report.format_table('') == ''
    assert 'class=' not in report.format_table(fragment)


def test_format_table_twice():
    fragment = report.build_html_table(['a', 'b'], [('Name', lambda a: a)])
    once = report.format_table(fragment)

    assert report.format_table(once) == once


def test_format_table_replaces_class():
    fragment = '<table><tr class="x" id="r1"><td>a</td></tr></table>'
    assert report.format_table(fragment) == '<table><tr id="r1" class="odd"><td>a</td></tr></table>'


def test_cells_escaped():
    fragment = report.build_html_table(['<b>'], [('Name', lambda a: a)])
    assert '<td>&lt;b&gt;</td>' in fragment


def test_build_report_html_sorted():
    accounts = [Account('bwayne', password_last_set=tdata.days_ago(120), password_expired=True),
                Account('aallen', password_last_set=None, password_expired=True)]

    body = report.build_report_html(accounts, css='td { color: red; }', heading='Expired')

    assert '<h1>Expired</h1>' in body
    assert 'td { color: red; }' in body
    assert body.index('aallen') < body.index('bwayne')
    assert '<tr class="odd"><td>aallen</td><td></td><td>True</td></tr>' in body
    assert '<th>PasswordLastSet</th>' in body
