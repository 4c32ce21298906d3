"""
Domain normalization

Derives the bare domain organizations are keyed on:
- from a website/URL: strip protocol, www, path, port
- from an e-mail: the part after '@'
"""

import re
from typing import Optional
from urllib.parse import urlparse


_INVALID_CHARS = re.compile(r'[^a-z0-9.-]')


def normalize_domain(domain: Optional[str]) -> str:
    """
    Normalize a domain or URL.

    Returns:
        Bare domain (e.g. "example.com"), or '' when nothing domain-like remains

    Examples:
        >>> normalize_domain("https://www.Example.com/jobs?x=1")
        'example.com'
        >>> normalize_domain("Acme GmbH")
        ''
    """
    if not domain or not isinstance(domain, str):
        return ''

    domain = domain.strip().lower()
    if not domain:
        return ''

    if not domain.startswith(('http://', 'https://', '//')):
        domain = f'http://{domain}'

    parsed = urlparse(domain)
    host = parsed.netloc or parsed.path
    host = host.split('@')[-1].split(':')[0].rstrip('/')

    if host.startswith('www.'):
        host = host[4:]

    if '.' not in host or ' ' in host:
        return ''

    return _INVALID_CHARS.sub('', host)


def extract_domain(value: Optional[str]) -> str:
    """
    Domain of an e-mail address or website.

    Examples:
        >>> extract_domain("jane@Acme.de")
        'acme.de'
    """
    if not value:
        return ''
    value = value.strip()
    if '@' in value and '/' not in value:
        return normalize_domain(value.rsplit('@', 1)[1])
    return normalize_domain(value)


def domain_label(domain: str) -> str:
    """
    Company-name guess from a domain: first label, capitalized.

    Examples:
        >>> domain_label("acme-robotics.com")
        'Acme-robotics'
    """
    label = (domain or '').split('.')[0]
    return label[:1].upper() + label[1:]
