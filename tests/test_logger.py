import re

from libs.logger import DIVIDER, log, setup_logging

# e.g. 2026-10-19T12:00:00+0000
regx_timestamp = r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}'


def _setup(tmp_path):
    log_file = tmp_path / 'run.log'
    error_log_file = tmp_path / 'run-errors.log'
    setup_logging(str(log_file), error_log_file=str(error_log_file))
    return (log_file, error_log_file)


def test_log_message(tmp_path):
    (log_file, error_log_file) = _setup(tmp_path)

    log('Fetched 5 accounts.')

    assert re.match(regx_timestamp + r' Fetched 5 accounts\.\n$', log_file.read_text())
    assert error_log_file.read_text() == ''


def test_log_error(tmp_path):
    (log_file, error_log_file) = _setup(tmp_path)

    log('[jsmith] Error while sending email.', to_error_log=True)

    assert 'Error while sending email' in log_file.read_text()
    assert re.match(regx_timestamp + r' \[jsmith\] Error while sending email\.\n$',
                    error_log_file.read_text())


def test_section_break(tmp_path):
    (log_file, error_log_file) = _setup(tmp_path)

    log('first')
    log(section_break=True)
    log('second')

    lines = log_file.read_text().split('\n')
    assert lines[0].endswith(' first')
    assert lines[1:4] == ['', '', '']
    assert lines[4].endswith(' second')
    assert error_log_file.read_text() == ''


def test_minor_break(tmp_path):
    (log_file, _) = _setup(tmp_path)

    log(minor_break=True)

    assert re.match(regx_timestamp + ' ' + DIVIDER + r'\n$', log_file.read_text())


def test_setup_replaces_handlers(tmp_path):
    first = tmp_path / 'first.log'
    second = tmp_path / 'second.log'

    setup_logging(str(first))
    log('one')
    setup_logging(str(second))
    log('two')

    assert 'two' not in first.read_text()
    assert 'one' not in second.read_text()
