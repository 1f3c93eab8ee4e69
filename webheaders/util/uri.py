# -*- coding: utf-8; -*-

"""Thin wrapper around :mod:`urllib.parse` for URI-valued fields.

``Link.href`` and ``Problem.instance`` are stored as
:class:`urllib.parse.SplitResult` tuples. :func:`urlsplit` on its own
accepts almost anything, so :func:`parse_uri` adds the checks that matter
for a URI reference taken from a header or a JSON document.
"""

import re
from urllib.parse import SplitResult, urlsplit


EMPTY = SplitResult(u'', u'', u'', u'', u'')

_CTL = re.compile(u'[\u0000-\u001F\u007F]')
_BAD_PERCENT = re.compile(u'%(?![0-9A-Fa-f]{2})')


class URIError(ValueError):

    pass


def parse_uri(s):
    """Parse the URI reference `s` into a :class:`SplitResult`.

    :raises URIError: if `s` is not a usable URI reference.
    """
    if isinstance(s, SplitResult):
        return s
    if not isinstance(s, str):
        raise URIError(u'URI must be a string, not %s' % type(s).__name__)
    if _CTL.search(s):
        raise URIError(u'invalid control character in URI %r' % s)
    if _BAD_PERCENT.search(s):
        raise URIError(u'invalid percent-encoding in URI %r' % s)
    try:
        r = urlsplit(s)
        r.port                  # pylint: disable=pointless-statement
    except ValueError as exc:
        raise URIError(u'%s in URI %r' % (exc, s)) from exc
    if not r.scheme and not r.netloc and u':' in r.path.split(u'/')[0]:
        # RFC 3986 Section 4.2: a relative reference cannot have
        # a colon in its first path segment.
        raise URIError(u'missing scheme in URI %r' % s)
    return r


def format_uri(uri):
    return uri.geturl()
