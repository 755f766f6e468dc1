import random
import socket
from dns import resolver  # type: ignore

from libs import PwExpiryError
from libs.logger import logger


class NoReachableEndpointError(PwExpiryError):
    pass


def get_dns_resolver(timeout=3.0):
    resv = resolver.Resolver()
    resv.timeout = timeout
    resv.lifetime = timeout

    return resv


def get_srv_name(domain, site=None):
    """Return DNS SRV record name which lists domain controllers.

    >>> get_srv_name('corp.example.com')
    '_ldap._tcp.dc._msdcs.corp.example.com'
    >>> get_srv_name('corp.example.com', site='HQ')
    '_ldap._tcp.HQ._sites.dc._msdcs.corp.example.com'
    """
    if site:
        return '_ldap._tcp.{}._sites.dc._msdcs.{}'.format(site, domain)

    return '_ldap._tcp.dc._msdcs.{}'.format(domain)


def discover_endpoints(domain, site=None, resv=None):
    """Return list of domain controller host names advertised for the site."""
    if not domain:
        return []

    if resv is None:
        resv = get_dns_resolver()

    name = get_srv_name(domain, site=site)
    hosts = []

    try:
        qr = resv.resolve(name, 'SRV')
        for r in qr:
            host = str(r.target).rstrip('.')
            logger.debug("[DNS][SRV] {} -> {}".format(name, host))

            if host and host not in hosts:
                hosts.append(host)
    except resolver.NoAnswer:
        logger.debug("[DNS][SRV] {} -> NoAnswer".format(name))
    except resolver.NXDOMAIN:
        logger.debug("[DNS][SRV] {} -> NXDOMAIN".format(name))
    except resolver.Timeout:
        logger.info("[DNS][SRV] {} -> Timeout".format(name))
    except Exception as e:
        logger.error("[DNS][SRV] {} -> Error: {}".format(name, repr(e)))

    return hosts


def probe_endpoint(host, port, timeout=0.25):
    """Return True if a TCP connection to `host:port` succeeds in `timeout` seconds."""
    try:
        s = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        logger.debug("[PROBE] {}:{} -> {}".format(host, port, repr(e)))
        return False

    s.close()
    logger.debug("[PROBE] {}:{} -> connected".format(host, port))
    return True


def select_endpoint(candidates, port, timeout=0.25, choose=random.choice):
    """Probe candidates one by one and return a random reachable one.

    Raise `NoReachableEndpointError` if no candidate accepts connection.
    """
    reachable = [host for host in candidates if probe_endpoint(host, port, timeout=timeout)]

    logger.debug("Reachable endpoints: {} of {} ({})".format(
        len(reachable), len(candidates), ', '.join(reachable)))

    if not reachable:
        raise NoReachableEndpointError(
            "None of the directory servers accepts connection on port {}: {}".format(
                port, ', '.join(candidates) or '(none discovered)'))

    return choose(reachable)
