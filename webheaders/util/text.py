# -*- coding: utf-8; -*-

import re


def nicely_join(strings):
    """Join `strings` as alternatives, for "expected ..." messages.

    >>> print(nicely_join([u'quote']))
    quote
    >>> print(nicely_join([u'semicolon', u'end of data']))
    semicolon or end of data
    >>> print(nicely_join([u'word', u'semicolon', u'end of data']))
    word, semicolon, or end of data
    """
    strings = list(strings)
    if len(strings) <= 2:
        return u' or '.join(strings)
    return u', '.join(strings[:-1]) + u', or ' + strings[-1]


def force_unicode(x):
    if isinstance(x, bytes):
        # The historic encoding of HTTP header values.
        return x.decode('iso-8859-1')
    if isinstance(x, str):
        return x
    raise TypeError(u'expected str or bytes, not %s' % type(x).__name__)


def ellipsize(s, max_length=60):
    """
    >>> print(ellipsize(u'<https://example.com/>; rel="next"', 40))
    <https://example.com/>; rel="next"
    >>> print(ellipsize(u'<https://example.com/>; rel="next"', 20))
    <https://example....
    """
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + u'...'


_UNPRINTABLE = re.compile(
    u'[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]')

def printable(s):
    """Replace control characters, which would garble a terminal."""
    return _UNPRINTABLE.sub(u'\N{REPLACEMENT CHARACTER}', s)
