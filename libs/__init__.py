__version__ = "1.2.0"


class PwExpiryError(Exception):
    """Base class of all errors which abort a run."""


# Account states. Every account which may expire falls in exactly one of them.
ACCOUNT_STATES = {
    'expired': 'expired',
    # password set before the lookback window, user gets a notification.
    'expiring': 'expiring',
    'not_due': 'not_due',
}

# Bits in `userAccountControl` and `msDS-User-Account-Control-Computed`.
# Reference: https://learn.microsoft.com/en-us/troubleshoot/windows-server/active-directory/useraccountcontrol-manipulate-account-properties
UF_DONT_EXPIRE_PASSWD = 0x10000
UF_PASSWORD_EXPIRED = 0x800000

# Windows FILETIME values which don't represent a real date.
FILETIME_NEVER = 0x7FFFFFFFFFFFFFFF

# LDAP attributes fetched for every user account.
ACCOUNT_ATTRLIST = [
    'sAMAccountName',
    'displayName',
    'mail',
    'pwdLastSet',
    'userAccountControl',
    # Constructed attributes, returned only when requested explicitly.
    'msDS-User-Account-Control-Computed',
    'msDS-UserPasswordExpiryTimeComputed',
]

# All user accounts, except the ones with 'password never expires' flag.
# 1.2.840.113556.1.4.803 is LDAP_MATCHING_RULE_BIT_AND.
ACCOUNT_SEARCH_FILTER = '(&' + \
                        '(objectCategory=person)' + \
                        '(objectClass=user)' + \
                        '(!(userAccountControl:1.2.840.113556.1.4.803:={}))'.format(UF_DONT_EXPIRE_PASSWD) + \
                        ')'

# Placeholders in the notification template.
TEMPLATE_PLACEHOLDERS = {
    'display_name': '%%DISPLAY_NAME%%',
    'expiry_date': '%%EXPIRY_DATE%%',
}

# Name used for audit record of the summary email sent to admins.
# '@' is not allowed in sAMAccountName, so no account can have this name.
ADMIN_REPORT_NAME = '@admin-report'
