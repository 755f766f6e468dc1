import os
import datetime
import time

from libs import utils


def test_run_stamp():
    now = datetime.datetime(2026, 10, 19, 12, 0, 0, tzinfo=datetime.timezone.utc)
    assert utils.get_run_stamp(now) == '20261019-120000'


def test_bytes2str():
    ldif = {'mail': [b'jsmith@corp.example.com'], 'pwdLastSet': [b'0']}
    assert utils.bytes2str(ldif) == {'mail': ['jsmith@corp.example.com'], 'pwdLastSet': ['0']}


def test_get_traceback():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        tb = utils.get_traceback()

    assert '\n' not in tb
    assert tb.startswith('Traceback (most recent call last):')
    assert tb.endswith('RuntimeError: boom')


def test_cleanup_old_files(tmp_path):
    now = time.time()

    audit_dir = tmp_path / 'audit'
    audit_dir.mkdir()

    old_log = tmp_path / 'pwexpiry-20260101-000000.log'
    old_audit = audit_dir / 'jsmith-20260101-000000.json'
    new_log = tmp_path / 'pwexpiry-20261019-120000.log'

    for f in [old_log, old_audit, new_log]:
        f.write_text('x')

    old = now - 100 * 86400
    os.utime(str(old_log), (old, old))
    os.utime(str(old_audit), (old, old))

    removed = utils.cleanup_old_files(str(tmp_path), 90, now=now)

    assert sorted(removed) == sorted([str(old_log), str(old_audit)])
    assert new_log.exists()
    assert audit_dir.exists()
