import os
import json
import uuid
import smtplib

from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.header import Header
from email.utils import formatdate


class Notification:
    """Email sent to one user, or the summary sent to admins."""

    def __init__(self,
                 recipients,
                 sender,
                 subject,
                 body,
                 smtp_server,
                 account=None,
                 expiry_date=None,
                 sender_name=''):
        if isinstance(recipients, str):
            recipients = [recipients]

        self.recipients = [r for r in recipients if r]
        self.sender = sender
        self.sender_name = sender_name
        self.subject = subject
        self.body = body
        self.smtp_server = smtp_server
        self.account = account
        self.expiry_date = expiry_date

    def to_dict(self):
        return {
            'to': self.recipients,
            'from': self.sender,
            'subject': self.subject,
            'body': self.body,
            'smtp_server': self.smtp_server,
            'account': self.account,
            'expiry_date': self.expiry_date,
        }

    def as_string(self):
        """Return full email message as string."""
        msg = MIMEMultipart('alternative')

        if self.sender_name:
            msg['From'] = '{} <{}>'.format(Header(self.sender_name, 'utf-8'), self.sender)
        else:
            msg['From'] = self.sender

        msg['To'] = ','.join(self.recipients)
        msg['Subject'] = Header(self.subject, 'utf-8')
        msg['Date'] = formatdate(usegmt=True)
        msg['Message-Id'] = '<' + str(uuid.uuid4()) + '>'

        msg.attach(MIMEText(self.body, 'html', 'utf-8'))

        return msg.as_string()


def get_audit_file(audit_dir, name, run_stamp):
    """Return path of audit record.

    >>> get_audit_file('/var/log/pwexpiry/audit', 'jsmith', '20260101-000000')
    '/var/log/pwexpiry/audit/jsmith-20260101-000000.json'
    """
    # sAMAccountName can not contain '/', but don't trust it.
    name = name.replace('/', '_').replace(os.sep, '_')
    return os.path.join(audit_dir, '{}-{}.json'.format(name, run_stamp))


def save_audit_record(notification, path):
    """Write notification as json to `path`. Return `(True, )` or `(False, <reason>)`."""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(notification.to_dict(), f, indent=2, sort_keys=True)

        return (True, )
    except Exception as e:
        return (False, repr(e))


def sendmail(notification,
             port=25,
             user=None,
             password=None,
             starttls=False,
             timeout=30,
             debug_level=0):
    """Send notification through its smtp server.

    Return `(True, )` or `(False, <reason>)`.
    """
    if not notification.recipients:
        return (False, 'No recipient address.')

    message_text = notification.as_string()

    try:
        s = smtplib.SMTP(notification.smtp_server, port, timeout=timeout)
        s.set_debuglevel(debug_level)

        if starttls:
            s.ehlo()
            s.starttls()
            s.ehlo()

        if user and password:
            s.login(user, password)

        s.sendmail(notification.sender, notification.recipients, message_text)
        s.quit()
        return (True, )
    except Exception as e:
        return (False, repr(e))
