"""
Registrable domain extraction for tab URLs.

The registrable domain here is an approximation of eTLD+1: the last two
dot-separated labels of the host. No public suffix list is consulted, so
"a.example.co.uk" becomes "co.uk".
"""
import logging
from urllib.parse import urlparse

logger = logging.getLogger('tabgroup')


def get_host(url: str) -> str:
    try:
        hostname = urlparse(url).hostname
    except ValueError as e:
        logger.info('Cannot parse URL %r: %s', url, e)
        return ''
    if not hostname:
        logger.info('Cannot parse URL %r: no host', url)
        return ''
    return hostname


def collapse_host(host: str) -> str:
    labels = host.split('.')
    if len(labels) > 2:
        return '.'.join(labels[-2:])
    return host


def get_domain(url: str) -> str:
    """
    >>> get_domain('https://a.b.example.com/x')
    'example.com'
    >>> get_domain('not a url')
    ''
    """
    host = get_host(url)
    if not host:
        return ''
    return collapse_host(host)
