############################################################
# DO NOT TOUCH BELOW LINE.
#
# Import default settings.
# You can always override default settings by placing custom settings in this
# file.
from libs.default_settings import *
############################################################

# Log level: info, debug.
log_level = 'info'

# Active Directory.
AD_DOMAIN = 'corp.example.com'
AD_SITE = 'Default-First-Site-Name'

ldap_basedn = 'dc=corp,dc=example,dc=com'
ldap_binddn = 'cn=svc-pwexpiry,ou=Service Accounts,dc=corp,dc=example,dc=com'
ldap_bindpw = ''

# Mail relay and recipients.
NOTIFICATION_SMTP_SERVER = 'smtp.corp.example.com'
NOTIFICATION_SENDER = 'helpdesk@corp.example.com'
ADMIN_RECIPIENTS = ['it-admins@corp.example.com']
