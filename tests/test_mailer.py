import json
from email import message_from_string
from email.header import decode_header, make_header

from libs import mailer
from tests import tdata


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def set_debuglevel(self, level):
        pass

    def ehlo(self):
        self.calls.append('ehlo')

    def starttls(self):
        self.calls.append('starttls')

    def login(self, user, password):
        self.calls.append(('login', user))

    def sendmail(self, sender, recipients, message):
        self.calls.append(('sendmail', sender, recipients, message))

    def quit(self):
        self.calls.append('quit')


def _notification(**kw):
    d = {
        'recipients': 'jsmith@' + tdata.domain,
        'sender': tdata.sender,
        'subject': 'Your password will expire soon',
        'body': '<p>Dear John</p>',
        'smtp_server': tdata.smtp_server,
        'account': 'jsmith',
        'expiry_date': '2026-12-03',
    }
    d.update(kw)
    return mailer.Notification(**d)


def test_message_headers():
    text = _notification(sender_name='IT Helpdesk').as_string()
    msg = message_from_string(text)

    assert msg['To'] == 'jsmith@corp.example.com'
    assert str(make_header(decode_header(msg['Subject']))) == 'Your password will expire soon'
    assert msg['From'].endswith('<' + tdata.sender + '>')
    assert 'Content-Type: text/html; charset="utf-8"' in text
    assert msg['Message-Id'].startswith('<')


def test_audit_record(tmp_path):
    path = mailer.get_audit_file(str(tmp_path), 'jsmith', '20261019-120000')
    qr = mailer.save_audit_record(_notification(), path)

    assert qr == (True, )
    assert path.endswith('jsmith-20261019-120000.json')

    with open(path) as f:
        record = json.load(f)

    assert record['to'] == ['jsmith@corp.example.com']
    assert record['from'] == tdata.sender
    assert record['smtp_server'] == tdata.smtp_server
    assert record['expiry_date'] == '2026-12-03'


def test_audit_record_failure(tmp_path):
    path = str(tmp_path / 'missing-dir' / 'jsmith.json')
    qr = mailer.save_audit_record(_notification(), path)

    assert not qr[0]
    assert 'FileNotFoundError' in qr[1]


def test_sendmail(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(mailer.smtplib, 'SMTP', FakeSMTP)

    qr = mailer.sendmail(_notification(), port=587, user='relay', password='secret', starttls=True)

    assert qr == (True, )
    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == (tdata.smtp_server, 587)
    assert smtp.calls[:4] == ['ehlo', 'starttls', 'ehlo', ('login', 'relay')]
    assert smtp.calls[4][1:3] == (tdata.sender, ['jsmith@corp.example.com'])


def test_sendmail_without_recipient():
    qr = mailer.sendmail(_notification(recipients=''))
    assert not qr[0]


def test_sendmail_error(monkeypatch):
    def _refuse(host, port, timeout=None):
        raise ConnectionRefusedError(111, 'Connection refused')

    monkeypatch.setattr(mailer.smtplib, 'SMTP', _refuse)

    qr = mailer.sendmail(_notification())
    assert not qr[0]
    assert 'ConnectionRefusedError' in qr[1]
