import os
import datetime

from libs import utils


class RunContext:
    """Configuration and resolved state of one run.

    Built once by the driver from `settings` and command line arguments,
    then passed to every component which needs it.
    """

    def __init__(self,
                 smtp_server='localhost',
                 lookback_days=30,
                 dry_run=False,
                 log_dir='logs',
                 now=None,
                 **kw):
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)

        self.smtp_server = smtp_server
        self.lookback_days = int(lookback_days)
        self.dry_run = bool(dry_run)
        self.now = now
        self.run_stamp = utils.get_run_stamp(now)

        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, 'pwexpiry-{}.log'.format(self.run_stamp))
        self.error_log_file = os.path.join(log_dir, 'pwexpiry-{}-errors.log'.format(self.run_stamp))
        self.audit_dir = os.path.join(log_dir, 'audit')

        self.smtp_port = int(kw.get('smtp_port', 25))
        self.smtp_user = kw.get('smtp_user', '')
        self.smtp_password = kw.get('smtp_password', '')
        self.smtp_starttls = kw.get('smtp_starttls', False)
        self.smtp_timeout = kw.get('smtp_timeout', 30)
        self.smtp_debug_level = kw.get('smtp_debug_level', 0)

        self.sender = kw.get('sender', 'no-reply@localhost.localdomain')
        self.sender_name = kw.get('sender_name', '')
        self.subject = kw.get('subject', 'Your password will expire soon')
        self.admin_recipients = list(kw.get('admin_recipients', []))
        self.admin_subject = kw.get('admin_subject', 'Accounts with expired password')
        self.admin_heading = kw.get('admin_heading', 'Users with expired passwords')
        self.report_css = kw.get('report_css', '')

        self.ad_domain = kw.get('ad_domain', '')
        self.ad_site = kw.get('ad_site', '')
        self.ldap_servers = list(kw.get('ldap_servers', []))
        self.ldap_port = int(kw.get('ldap_port', 389))
        self.ldap_use_ssl = kw.get('ldap_use_ssl', False)
        self.ldap_enable_tls = kw.get('ldap_enable_tls', False)
        self.ldap_basedn = kw.get('ldap_basedn', '')
        self.ldap_binddn = kw.get('ldap_binddn', '')
        self.ldap_bindpw = kw.get('ldap_bindpw', '')
        self.ldap_page_size = int(kw.get('ldap_page_size', 500))
        self.ldap_network_timeout = kw.get('ldap_network_timeout', 10)
        self.probe_timeout = float(kw.get('probe_timeout', 0.25))
        self.dns_timeout = float(kw.get('dns_timeout', 3.0))

        self.template_file = kw.get('template_file', '')
        self.template_text = kw.get('template_text', '')

        # Set by driver after endpoint selection.
        self.endpoint = kw.get('endpoint')

    @classmethod
    def from_settings(cls, conf, smtp_server=None, lookback_days=None, dry_run=False, now=None):
        """Create context from settings module, command line values take precedence."""
        return cls(smtp_server=smtp_server or conf.NOTIFICATION_SMTP_SERVER,
                   lookback_days=conf.LOOKBACK_DAYS if lookback_days is None else lookback_days,
                   dry_run=dry_run,
                   log_dir=conf.LOG_DIR,
                   now=now,
                   smtp_port=conf.NOTIFICATION_SMTP_PORT,
                   smtp_user=conf.NOTIFICATION_SMTP_USER,
                   smtp_password=conf.NOTIFICATION_SMTP_PASSWORD,
                   smtp_starttls=conf.NOTIFICATION_SMTP_STARTTLS,
                   smtp_timeout=conf.NOTIFICATION_SMTP_TIMEOUT,
                   smtp_debug_level=conf.NOTIFICATION_SMTP_DEBUG_LEVEL,
                   sender=conf.NOTIFICATION_SENDER,
                   sender_name=conf.NOTIFICATION_SENDER_NAME,
                   subject=conf.NOTIFICATION_SUBJECT,
                   admin_recipients=conf.ADMIN_RECIPIENTS,
                   admin_subject=conf.ADMIN_REPORT_SUBJECT,
                   admin_heading=conf.ADMIN_REPORT_HEADING,
                   report_css=conf.REPORT_CSS,
                   ad_domain=conf.AD_DOMAIN,
                   ad_site=conf.AD_SITE,
                   ldap_servers=conf.LDAP_SERVERS,
                   ldap_port=conf.ldap_port,
                   ldap_use_ssl=conf.ldap_use_ssl,
                   ldap_enable_tls=conf.ldap_enable_tls,
                   ldap_basedn=conf.ldap_basedn,
                   ldap_binddn=conf.ldap_binddn,
                   ldap_bindpw=conf.ldap_bindpw,
                   ldap_page_size=conf.LDAP_PAGE_SIZE,
                   ldap_network_timeout=conf.LDAP_NETWORK_TIMEOUT,
                   probe_timeout=conf.ENDPOINT_PROBE_TIMEOUT,
                   dns_timeout=conf.DNS_QUERY_TIMEOUT,
                   template_file=conf.TEMPLATE_FILE)
