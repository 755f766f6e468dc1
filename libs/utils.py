import os
import time
import datetime
import traceback
from typing import Union, List, Tuple, Set, Dict, Any

from libs import FILETIME_NEVER

# Windows FILETIME counts 100-nanosecond intervals since 1601-01-01 UTC.
FILETIME_EPOCH = datetime.datetime(1601, 1, 1, tzinfo=datetime.timezone.utc)


def get_traceback():
    """Return traceback of the exception being handled, folded into one log line."""
    lines = [line.strip() for line in traceback.format_exc().splitlines()]
    return ' | '.join(line for line in lines if line)


def get_run_stamp(now=None):
    """Return timestamp used in names of log files and audit records."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    return now.strftime('%Y%m%d-%H%M%S')


def filetime_to_datetime(value):
    """Convert Windows FILETIME to an aware UTC datetime.

    Return None for 0, 'never' (0x7FFFFFFFFFFFFFFF), invalid or out of range
    values.

    >>> filetime_to_datetime(0) is None
    True
    >>> filetime_to_datetime(116444736000000000)
    datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None

    if value <= 0 or value >= FILETIME_NEVER:
        return None

    try:
        return FILETIME_EPOCH + datetime.timedelta(microseconds=value // 10)
    except OverflowError:
        return None


def datetime_to_filetime(dt):
    """Convert an aware datetime to Windows FILETIME.

    >>> datetime_to_filetime(datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc))
    116444736000000000
    """
    delta = dt - FILETIME_EPOCH
    return (delta.days * 86400 + delta.seconds) * 10000000 + delta.microseconds * 10


def cleanup_old_files(directory, max_age_days, now=None):
    """Remove regular files under `directory` older than `max_age_days`.

    Return list of removed file paths.
    """
    if now is None:
        now = time.time()

    expire_seconds = now - (max_age_days * 86400)
    removed = []

    for (_dir, _subdirs, _files) in os.walk(directory):
        for f in _files:
            path = os.path.join(_dir, f)
            if os.path.getmtime(path) < expire_seconds:
                os.remove(path)
                removed.append(path)

    return removed


def __bytes2str(b) -> str:
    """Convert object `b` to string.

    >>> __bytes2str("a")
    'a'
    >>> __bytes2str(b"a")
    'a'
    """
    if isinstance(b, str):
        return b

    if isinstance(b, (bytes, bytearray)):
        return b.decode()
    elif isinstance(b, memoryview):
        return b.tobytes().decode()
    else:
        return repr(b)


def bytes2str(b: Union[bytes, str, List, Tuple, Set, Dict])\
        -> Union[str, List[str], Tuple[str], Dict[Any, str]]:
    """Convert `b` from bytes-like type to string.

    >>> bytes2str(["a"])
    ['a']
    >>> bytes2str({"mail": [b"user@example.com"]})      # LDAP query result.
    {'mail': ['user@example.com']}
    """
    if isinstance(b, list):
        s = [bytes2str(i) for i in b]
    elif isinstance(b, tuple):
        s = tuple([bytes2str(i) for i in b])
    elif isinstance(b, set):
        s = {bytes2str(i) for i in b}
    elif isinstance(b, dict):
        new_dict = {}
        for (k, v) in list(b.items()):
            new_dict[k] = bytes2str(v)
        s = new_dict
    else:
        s = __bytes2str(b)

    return s
