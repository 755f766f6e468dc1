from libs import ACCOUNT_STATES, ADMIN_REPORT_NAME
from libs import mailer, report, template
from libs.account import Account, InvalidAccountError, classify
from libs.ldaplib import conn_utils
from libs.logger import log, logger


class RunSummary:
    def __init__(self):
        self.fetched = 0
        self.skipped = 0
        self.expired = []
        self.notified = 0
        self.not_due = 0
        self.sent = 0
        self.send_failures = 0
        self.audit_failures = 0
        self.admin_report_sent = False

    def __str__(self):
        return ("fetched={}, skipped={}, expired={}, notified={}, not_due={}, "
                "sent={}, send_failures={}, audit_failures={}, "
                "admin_report_sent={}".format(self.fetched, self.skipped,
                                              len(self.expired), self.notified,
                                              self.not_due, self.sent,
                                              self.send_failures,
                                              self.audit_failures,
                                              self.admin_report_sent))


def deliver(ctx, notification, name, summary):
    """Save audit record then send (or pretend to send) the notification.

    Failures are logged to error log and counted, never raised.
    Return `(True, )` or `(False, <reason>)` of the send step.
    """
    audit_file = mailer.get_audit_file(ctx.audit_dir, name, ctx.run_stamp)
    qr = mailer.save_audit_record(notification, audit_file)
    if qr[0]:
        logger.debug("[{}] Audit record saved: {}".format(name, audit_file))
    else:
        summary.audit_failures += 1
        log("[{}] Error while saving audit record {}: {}".format(name, audit_file, qr[1]),
            to_error_log=True)

    if not notification.recipients:
        summary.send_failures += 1
        log("[{}] Error while sending email: no recipient address.".format(name),
            to_error_log=True)
        return (False, 'No recipient address.')

    recipients = ', '.join(notification.recipients)

    if ctx.dry_run:
        log("[{}] Dry run, would have sent email to {}.".format(name, recipients))
        return (True, )

    qr = mailer.sendmail(notification,
                         port=ctx.smtp_port,
                         user=ctx.smtp_user,
                         password=ctx.smtp_password,
                         starttls=ctx.smtp_starttls,
                         timeout=ctx.smtp_timeout,
                         debug_level=ctx.smtp_debug_level)
    if qr[0]:
        summary.sent += 1
        log("[{}] Email sent to {}.".format(name, recipients))
    else:
        summary.send_failures += 1
        log("[{}] Error while sending email to {} through {}: {}".format(
            name, recipients, notification.smtp_server, qr[1]),
            to_error_log=True)

    return qr


def build_user_notification(ctx, account):
    if account.password_expiry_time:
        expiry_date = account.password_expiry_time.strftime('%Y-%m-%d')
    else:
        expiry_date = 'unknown'

    body = template.render(ctx.template_text,
                           display_name=account.display_name,
                           expiry_date=expiry_date)

    return mailer.Notification(recipients=account.mail,
                               sender=ctx.sender,
                               sender_name=ctx.sender_name,
                               subject=ctx.subject,
                               body=body,
                               smtp_server=ctx.smtp_server,
                               account=account.name,
                               expiry_date=expiry_date)


def build_admin_notification(ctx, expired_accounts):
    body = report.build_report_html(expired_accounts,
                                    css=ctx.report_css,
                                    heading=ctx.admin_heading)

    return mailer.Notification(recipients=ctx.admin_recipients,
                               sender=ctx.sender,
                               sender_name=ctx.sender_name,
                               subject=ctx.admin_subject,
                               body=body,
                               smtp_server=ctx.smtp_server,
                               account=ADMIN_REPORT_NAME)


def run(ctx, conn, now=None):
    """Notify users whose password expires soon, report expired ones to admins.

    Raise `conn_utils.DirectoryQueryError` if accounts can not be fetched,
    all other errors are logged and the run continues.
    """
    if now is None:
        now = ctx.now

    summary = RunSummary()

    log("Querying accounts under {} on {}.".format(ctx.ldap_basedn, ctx.endpoint))
    entries = conn_utils.search_accounts(conn, ctx.ldap_basedn, page_size=ctx.ldap_page_size)
    summary.fetched = len(entries)
    log("Fetched {} accounts.".format(summary.fetched))
    log(minor_break=True)

    for (dn, ldif) in entries:
        try:
            account = Account.from_ldif(ldif, now=now)
        except InvalidAccountError as e:
            summary.skipped += 1
            log("Skip invalid account {}: {}".format(dn, e), to_error_log=True)
            continue

        if account.password_never_expires:
            summary.skipped += 1
            logger.debug("[{}] Password never expires, skipped.".format(account.name))
            continue

        state = classify(account, now, ctx.lookback_days)

        if state == ACCOUNT_STATES['expired']:
            logger.debug("[{}] Password expired.".format(account.name))
            summary.expired.append(account)

        elif state == ACCOUNT_STATES['expiring']:
            summary.notified += 1
            notification = build_user_notification(ctx, account)
            log("[{}] Password expires on {}, notifying {}.".format(
                account.name, notification.expiry_date, account.mail or '(no address)'))
            deliver(ctx, notification, account.name, summary)

        else:
            summary.not_due += 1
            logger.debug("[{}] Password not due yet.".format(account.name))

    log(minor_break=True)
    summary.expired.sort(key=lambda a: a.name)
    log("Sending report of {} accounts with expired password to {}.".format(
        len(summary.expired), ', '.join(ctx.admin_recipients)))

    notification = build_admin_notification(ctx, summary.expired)
    qr = deliver(ctx, notification, ADMIN_REPORT_NAME, summary)
    summary.admin_report_sent = bool(qr[0]) and not ctx.dry_run

    log("Summary: {}".format(summary))
    return summary
