import os

_rootdir = os.path.abspath(os.path.dirname(__file__)) + '/..'

# Log level: info, debug.
log_level = 'info'

# Directory used to store log files, error logs and audit records.
# Every run creates its own files, named with the run timestamp.
LOG_DIR = os.path.join(_rootdir, 'logs')

# Remove log files and audit records older than given days.
# Used by script `tools/cleanup_logs.py`.
LOG_RETENTION_DAYS = 90

# ---------------
# Active Directory.
#
# DNS domain name of Active Directory, used to discover domain controllers
# with DNS SRV records. e.g. 'corp.example.com'.
AD_DOMAIN = ''

# AD site name. If set, only domain controllers of this site are used.
AD_SITE = ''

# Use given LDAP servers instead of DNS discovery.
# Sample: LDAP_SERVERS = ['dc1.corp.example.com', 'dc2.corp.example.com']
LDAP_SERVERS = []

ldap_port = 389

# Use `ldaps://`. Don't forget to set `ldap_port = 636`.
ldap_use_ssl = False

# Run STARTTLS after connected (ignored if `ldap_use_ssl = True`).
ldap_enable_tls = False

ldap_basedn = ''
ldap_binddn = ''
ldap_bindpw = ''

# Number of entries returned by server in one page. Active Directory
# returns at most 1000 entries (MaxPageSize) by default.
LDAP_PAGE_SIZE = 500

# Timeout in seconds of LDAP connection and operations.
LDAP_NETWORK_TIMEOUT = 10

# Timeout in seconds of TCP probe against each domain controller.
# Must be a float number.
ENDPOINT_PROBE_TIMEOUT = 0.25

# DNS Query.
# Timeout in seconds. Must be a float number.
DNS_QUERY_TIMEOUT = 3.0

# ---------------
# Notification.
#
# Accounts whose password was set more than given days ago will be notified.
LOOKBACK_DAYS = 30

# HTML template of notification email sent to users.
TEMPLATE_FILE = os.path.join(_rootdir, 'templates', 'password_expiry.html')

NOTIFICATION_SMTP_SERVER = 'localhost'
NOTIFICATION_SMTP_PORT = 25
NOTIFICATION_SMTP_STARTTLS = False

# Leave user and password empty to relay without authentication.
NOTIFICATION_SMTP_USER = ''
NOTIFICATION_SMTP_PASSWORD = ''
NOTIFICATION_SMTP_DEBUG_LEVEL = 0
NOTIFICATION_SMTP_TIMEOUT = 30

NOTIFICATION_SENDER = 'no-reply@localhost.localdomain'
NOTIFICATION_SENDER_NAME = 'IT Helpdesk'
NOTIFICATION_SUBJECT = 'Your password will expire soon'

# Summary of accounts with expired password.
ADMIN_RECIPIENTS = ['root']
ADMIN_REPORT_SUBJECT = 'Accounts with expired password'
ADMIN_REPORT_HEADING = 'Users with expired passwords'

# Style sheet used in the summary email.
REPORT_CSS = """
body { font-family: Calibri, Arial, sans-serif; font-size: 10pt; }
h1 { font-size: 14pt; }
table { border-collapse: collapse; border: 1px solid #999999; }
th { background-color: #4f81bd; color: #ffffff; padding: 4px 8px; text-align: left; }
td { padding: 4px 8px; }
tr.odd { background-color: #ffffff; }
tr.even { background-color: #dbe5f1; }
"""
