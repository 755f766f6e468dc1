import os

import ldap
from ldap.controls import SimplePagedResultsControl

from libs.context import RunContext
from tests import tdata


class FakeLDAPConn:
    """In-memory replacement of a bound python-ldap connection.

    Returns `pages` one by one, with a paged results cookie on every page
    except the last one.
    """

    def __init__(self, pages=None, error=None):
        self.pages = pages if pages is not None else [tdata.all_entries]
        self.error = error
        self.searches = []
        self.unbound = False

    def search_ext(self, base, scope, filterstr, attrlist=None, serverctrls=None):
        if self.error:
            raise self.error

        self.searches.append({'base': base,
                              'scope': scope,
                              'filter': filterstr,
                              'attrs': attrlist,
                              'cookie': serverctrls[0].cookie})
        return len(self.searches)

    def result3(self, msgid):
        index = msgid - 1
        rdata = self.pages[index]

        ctrls = []
        if index + 1 < len(self.pages):
            ctrls.append(SimplePagedResultsControl(True, size=500, cookie=b'page-%d' % (index + 1)))

        return (ldap.RES_SEARCH_RESULT, rdata, msgid, ctrls)

    def unbind_s(self):
        self.unbound = True


class MailRecorder:
    """Replacement of `libs.mailer.sendmail`, remembers notifications."""

    def __init__(self, fail_for=None):
        self.sent = []
        self.fail_for = set(fail_for or [])

    def __call__(self, notification, **kw):
        if set(notification.recipients) & self.fail_for:
            return (False, "SMTPRecipientsRefused({})".format(notification.recipients))

        self.sent.append(notification)
        return (True, )


def make_context(log_dir, **kw):
    d = {
        'smtp_server': tdata.smtp_server,
        'lookback_days': tdata.lookback_days,
        'dry_run': False,
        'log_dir': str(log_dir),
        'now': tdata.now,
        'sender': tdata.sender,
        'admin_recipients': [tdata.admin],
        'ldap_basedn': tdata.basedn,
        'template_text': tdata.template,
        'endpoint': 'dc1.' + tdata.domain,
    }
    d.update(kw)

    ctx = RunContext(**d)
    os.makedirs(ctx.audit_dir, exist_ok=True)
    return ctx
