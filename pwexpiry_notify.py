#!/usr/bin/env python3

# Purpose: Notify Active Directory users whose password will expire soon,
#          and send list of accounts with expired password to admins.
#
# Usage:
#
#   python3 pwexpiry_notify.py [--smtp-server <host>] [--days <n>] [--dry-run]
#
# Run it once a day with cron or a systemd timer.

import os
import sys
import argparse

# Import config file (settings.py) and modules
import settings
from libs import __version__, PwExpiryError
from libs import endpoints, notifier, template, utils
from libs.context import RunContext
from libs.ldaplib import conn_utils
from libs.logger import log, setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Notify users whose Active Directory password expires soon.')

    parser.add_argument('--smtp-server',
                        default=settings.NOTIFICATION_SMTP_SERVER,
                        help='Mail relay used to send emails (default: %(default)s).')
    parser.add_argument('--days',
                        type=int,
                        default=settings.LOOKBACK_DAYS,
                        help='Notify users whose password was set more than given days ago (default: %(default)s).')
    parser.add_argument('--dry-run',
                        action='store_true',
                        help='Log and save audit records, but do not send any email.')
    parser.add_argument('--foreground',
                        action='store_true',
                        help='Print log lines to stdout too.')
    parser.add_argument('--debug',
                        action='store_true',
                        help='Log debug messages.')

    return parser.parse_args(argv)


def get_candidates(ctx):
    if ctx.ldap_servers:
        return ctx.ldap_servers

    resv = endpoints.get_dns_resolver(timeout=ctx.dns_timeout)
    return endpoints.discover_endpoints(ctx.ad_domain, site=ctx.ad_site, resv=resv)


def process(ctx):
    """Select directory server, then run the notification pipeline."""
    ctx.template_text = template.load_template(ctx.template_file)
    log("Loaded template: {}".format(ctx.template_file))

    candidates = get_candidates(ctx)
    log("Candidate directory servers: {}".format(', '.join(candidates) or '(none)'))

    ctx.endpoint = endpoints.select_endpoint(candidates,
                                             port=ctx.ldap_port,
                                             timeout=ctx.probe_timeout)
    log("Selected directory server: {}".format(ctx.endpoint))

    uri = conn_utils.get_ldap_uri(ctx.endpoint, port=ctx.ldap_port, use_ssl=ctx.ldap_use_ssl)
    conn = conn_utils.connect(uri,
                              ctx.ldap_binddn,
                              ctx.ldap_bindpw,
                              enable_tls=ctx.ldap_enable_tls,
                              timeout=ctx.ldap_network_timeout)

    try:
        return notifier.run(ctx, conn)
    finally:
        conn.unbind_s()


def main(argv=None):
    args = parse_args(argv)

    ctx = RunContext.from_settings(settings,
                                   smtp_server=args.smtp_server,
                                   lookback_days=args.days,
                                   dry_run=args.dry_run)

    try:
        os.makedirs(ctx.audit_dir, mode=0o750, exist_ok=True)
    except OSError as e:
        sys.stderr.write("Cannot create log directory {}: {}\n".format(ctx.log_dir, repr(e)))
        return 1

    if args.debug:
        log_level = 'debug'
    else:
        log_level = settings.log_level

    try:
        setup_logging(ctx.log_file,
                      error_log_file=ctx.error_log_file,
                      level=log_level,
                      foreground=args.foreground)
    except OSError as e:
        sys.stderr.write("Cannot open log file under {}: {}\n".format(ctx.log_dir, repr(e)))
        return 1

    log(section_break=True)
    log("Starting pwexpiry-notify (version: {}), lookback: {} days, "
        "smtp server: {}, dry run: {}.".format(__version__,
                                               ctx.lookback_days,
                                               ctx.smtp_server,
                                               ctx.dry_run))

    try:
        process(ctx)
    except PwExpiryError as e:
        log("Aborted: {}".format(e), to_error_log=True)
        return 1
    except Exception:
        log("Aborted, unexpected error: {}".format(utils.get_traceback()), to_error_log=True)
        return 1

    log("Finished.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
