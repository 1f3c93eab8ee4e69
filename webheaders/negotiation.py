# -*- coding: utf-8; -*-

"""Proactive content negotiation with the ``Accept`` header.

>>> accept = parse_accept(u'text/plain; q=0.5, text/html, '
...                       u'text/x-dvi; q=0.8, text/x-c')
>>> print(accept.most_acceptable([u'text/plain', u'text/x-dvi']))
text/x-dvi
"""

from collections import namedtuple
import logging

from webheaders.parse import InvalidMediaRange
from webheaders.syntax.rfc7231 import parse_accept_ranges, parse_media_type


logger = logging.getLogger(__name__)


class MediaRange(namedtuple('MediaRange',
                            ('type_name', 'subtype_name', 'params', 'q'))):

    """One element of an ``Accept`` header: a pattern of media types.

    `params` never contains ``q``; the quality is in `q` instead.
    """

    __slots__ = ()

    def __new__(cls, type_name, subtype_name, params=None, q=1.0):
        if type_name == u'*' and subtype_name != u'*':
            raise ValueError(u'*/%s is not a media range' % subtype_name)
        return super(MediaRange, cls).__new__(
            cls, type_name, subtype_name, dict(params or {}), q)

    def __str__(self):
        r = u'%s/%s' % (self.type_name, self.subtype_name)
        q = _clamp(self.q)
        if q != 1.0:
            r += u'; q=%.1f' % q
        for (name, value) in self.params.items():
            if name.lower() != u'q':
                r += u'; %s=%s' % (name, value)
        return r

    def weight(self):
        """How strongly this range is preferred over others.

        The quality value dominates. Among equal qualities, ``type/subtype``
        beats ``type/*``, which beats ``*/*``, and every parameter
        makes a range a little more specific still.
        """
        q = _clamp(self.q)
        if q <= 0:
            q = 1.0
        if self.type_name == u'*':
            specificity = 0.00000
        elif self.subtype_name == u'*':
            specificity = 0.00001
        else:
            specificity = 0.00002
        return specificity + q + 0.00010 * len(self.params)

    def supports(self, candidate):
        """Does this range cover the concrete media type `candidate`?

        `candidate` is a string like ``text/html;level=1``.
        A candidate that cannot be parsed is never supported.
        """
        try:
            (type_name, subtype_name, params) = parse_media_type(candidate)
        except InvalidMediaRange:
            logger.debug(u'ignoring malformed media type %r', candidate)
            return False
        if self.type_name == u'*':
            return True
        if self.subtype_name == u'*':
            return type_name == self.type_name
        return (type_name == self.type_name and
                subtype_name == self.subtype_name and
                params == self.params)


def _clamp(q):
    return min(max(q, 0.0), 1.0)


class Accept(object):

    """A parsed ``Accept`` header value: media ranges in header order.

    An :class:`Accept` without media ranges accepts anything,
    exactly like ``*/*``.
    """

    __slots__ = ('media_ranges',)

    def __init__(self, media_ranges=None):
        self.media_ranges = tuple(media_ranges or ())

    def __repr__(self):
        return 'Accept(%r)' % (list(self.media_ranges),)

    def __str__(self):
        if not self.media_ranges:
            return u'*/*'
        return u', '.join(str(mr) for mr in self.media_ranges)

    def __eq__(self, other):
        if isinstance(other, Accept):
            return self.media_ranges == other.media_ranges
        return NotImplemented

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    __hash__ = None

    def __iter__(self):
        return iter(self.media_ranges)

    def __len__(self):
        return len(self.media_ranges)

    def acceptable(self, candidate):
        """Is the media type `candidate` acceptable at all?"""
        if not self.media_ranges:
            return True
        return any(mr.supports(candidate) for mr in self.media_ranges)

    def by_weight(self):
        """Return the media ranges from the most to the least preferred.

        Ranges of equal weight keep their order from the header.
        """
        return sorted(self.media_ranges, key=MediaRange.weight, reverse=True)

    def most_acceptable(self, candidates):
        """Pick the best of `candidates` (media type strings), or `None`.

        The most preferred media range that supports any candidate decides;
        among the candidates it supports, the first one in `candidates` wins.
        """
        candidates = list(candidates)
        ranges = self.by_weight() or [MediaRange(u'*', u'*')]
        for mr in ranges:
            for candidate in candidates:
                if mr.supports(candidate):
                    logger.debug(u'%r chosen by %s', candidate, mr)
                    return candidate
        logger.debug(u'none of %r is acceptable to %s', candidates, self)
        return None


def parse_accept(value):
    """Parse an ``Accept`` header value into an :class:`Accept`.

    An empty value (as for a request without ``Accept``)
    yields the same result as ``*/*``.

    :param value: The value as a Unicode string or a bytestring.
    :raises webheaders.parse.InvalidMediaRange: or its subclass
        :class:`~webheaders.parse.QMustBeNumberBetween0And1`.
    """
    return Accept(MediaRange(*raw) for raw in parse_accept_ranges(value))
