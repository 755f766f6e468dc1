import ldap
from ldap.controls import SimplePagedResultsControl

from libs import PwExpiryError
from libs import ACCOUNT_ATTRLIST, ACCOUNT_SEARCH_FILTER
from libs.logger import logger


class DirectoryQueryError(PwExpiryError):
    pass


def get_ldap_uri(endpoint, port=389, use_ssl=False):
    """Return LDAP URI of given endpoint.

    >>> get_ldap_uri('dc1.corp.example.com')
    'ldap://dc1.corp.example.com:389'
    """
    if use_ssl:
        return 'ldaps://{}:{}'.format(endpoint, port)

    return 'ldap://{}:{}'.format(endpoint, port)


def connect(uri, binddn, bindpw, enable_tls=False, timeout=10):
    """Return an LDAP connection bound as `binddn`.

    Raise `DirectoryQueryError` if connection or bind fails.
    """
    try:
        conn = ldap.initialize(uri)
        logger.debug("LDAP connection initialized: {}".format(uri))

        # Don't chase referrals, Active Directory returns referrals of other
        # partitions which can not be queried with our credential.
        conn.set_option(ldap.OPT_REFERRALS, 0)
        conn.set_option(ldap.OPT_PROTOCOL_VERSION, ldap.VERSION3)
        conn.set_option(ldap.OPT_NETWORK_TIMEOUT, timeout)
        conn.set_option(ldap.OPT_TIMEOUT, timeout)

        if enable_tls and not uri.startswith('ldaps://'):
            conn.start_tls_s()

        conn.simple_bind_s(binddn, bindpw)
        logger.debug('LDAP bind success.')
    except ldap.INVALID_CREDENTIALS:
        raise DirectoryQueryError("LDAP bind failed: incorrect bind dn or password ({}).".format(binddn))
    except ldap.LDAPError as e:
        raise DirectoryQueryError("Failed to establish LDAP connection to {}: {}".format(uri, repr(e)))

    return conn


def search_accounts(conn,
                    base_dn,
                    search_filter=ACCOUNT_SEARCH_FILTER,
                    attrs=None,
                    page_size=500):
    """Return list of `(dn, ldif)` of all matched entries.

    Values in `ldif` are bytes as returned by server, they are decoded per
    account by `Account.from_ldif()`. Search result references (entries
    without dn) are skipped. Raise `DirectoryQueryError` on any
    LDAP error.
    """
    if not attrs:
        attrs = ACCOUNT_ATTRLIST

    logger.debug("search base dn: {}\n"
                 "search scope: SUBTREE \n"
                 "search filter: {}\n"
                 "search attributes: {}".format(base_dn, search_filter, attrs))

    ctrl = SimplePagedResultsControl(True, size=page_size, cookie='')
    entries = []
    pages = 0

    try:
        while True:
            msgid = conn.search_ext(base_dn,
                                    ldap.SCOPE_SUBTREE,
                                    search_filter,
                                    attrs,
                                    serverctrls=[ctrl])

            (_rtype, rdata, _rmsgid, serverctrls) = conn.result3(msgid)
            pages += 1

            for (_dn, _ldif) in rdata:
                if not _dn:
                    continue

                entries.append((_dn, _ldif))

            pctrls = [c for c in serverctrls or []
                      if c.controlType == SimplePagedResultsControl.controlType]

            if pctrls and pctrls[0].cookie:
                ctrl.cookie = pctrls[0].cookie
            else:
                break
    except ldap.LDAPError as e:
        raise DirectoryQueryError("Error while querying accounts under {}: {}".format(base_dn, repr(e)))

    logger.debug("Fetched {} entries in {} page(s).".format(len(entries), pages))
    return entries
