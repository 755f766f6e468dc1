import datetime

from libs import PwExpiryError
from libs import ACCOUNT_STATES, UF_DONT_EXPIRE_PASSWD, UF_PASSWORD_EXPIRED
from libs import utils


class InvalidAccountError(PwExpiryError):
    pass


def _first_value(ldif, attr, default=None):
    values = ldif.get(attr) or []
    if values:
        return values[0]

    return default


def _int_value(ldif, attr, default=0):
    try:
        return int(_first_value(ldif, attr, default))
    except (TypeError, ValueError):
        raise InvalidAccountError("Invalid value of attribute {}: {}".format(attr, repr(ldif.get(attr))))


class Account:
    """User account read from Active Directory. Never modified."""

    def __init__(self,
                 name,
                 display_name='',
                 mail='',
                 password_last_set=None,
                 password_expired=False,
                 password_never_expires=False,
                 password_expiry_time=None):
        self.name = name
        self.display_name = display_name
        self.mail = mail
        self.password_last_set = password_last_set
        self.password_expired = password_expired
        self.password_never_expires = password_never_expires
        self.password_expiry_time = password_expiry_time

    def __repr__(self):
        return "<Account {}>".format(self.name)

    @classmethod
    def from_ldif(cls, ldif, now=None):
        """Create account from LDIF data, values may be bytes or str.

        Raise `InvalidAccountError` if `sAMAccountName` is missing, a value
        is not valid UTF-8 or an integer attribute has invalid value.
        """
        # python-ldap returns bytes, values must be valid UTF-8.
        try:
            ldif = utils.bytes2str(ldif)
        except UnicodeDecodeError as e:
            raise InvalidAccountError("Attribute value is not valid UTF-8: {}".format(repr(e)))

        name = _first_value(ldif, 'sAMAccountName')
        if not name:
            raise InvalidAccountError("Missing required attribute: sAMAccountName")

        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)

        uac = _int_value(ldif, 'userAccountControl')
        password_last_set = utils.filetime_to_datetime(_int_value(ldif, 'pwdLastSet'))
        password_expiry_time = utils.filetime_to_datetime(
            _int_value(ldif, 'msDS-UserPasswordExpiryTimeComputed'))

        # `msDS-User-Account-Control-Computed` is a constructed attribute,
        # compare expiry time with current time if server didn't return it.
        if ldif.get('msDS-User-Account-Control-Computed'):
            uac_computed = _int_value(ldif, 'msDS-User-Account-Control-Computed')
            password_expired = bool(uac_computed & UF_PASSWORD_EXPIRED)
        else:
            password_expired = bool(password_expiry_time and password_expiry_time <= now)

        return cls(name=name,
                   display_name=_first_value(ldif, 'displayName', name),
                   mail=_first_value(ldif, 'mail', ''),
                   password_last_set=password_last_set,
                   password_expired=password_expired,
                   password_never_expires=bool(uac & UF_DONT_EXPIRE_PASSWD),
                   password_expiry_time=password_expiry_time)


def classify(account, now, lookback_days):
    """Return state of account: 'expired', 'expiring' or 'not_due'.

    Accounts without `pwdLastSet` are treated as set before the lookback
    window.
    """
    if account.password_expired:
        return ACCOUNT_STATES['expired']

    threshold = now - datetime.timedelta(days=lookback_days)
    if account.password_last_set is None or account.password_last_set < threshold:
        return ACCOUNT_STATES['expiring']

    return ACCOUNT_STATES['not_due']
