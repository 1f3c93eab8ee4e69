# -*- coding: utf-8; -*-

"""The ``Accept`` header value grammar (RFC 7231 Section 5.3.2)::

    Accept      = media-range *( "," media-range )
    media-range = word "/" word *( ";" word "=" word )

Parsing produces plain tuples; :mod:`webheaders.negotiation`
turns them into :class:`~webheaders.negotiation.MediaRange` objects.
"""

import math

from webheaders.citation import RFC
from webheaders.parse import (InvalidMediaRange, Parser,
                              QMustBeNumberBetween0And1, Scanner, Symbol,
                              Token, literal)


Accept = Symbol(u'Accept', RFC(7231, section=u'5.3.2'))
media_range = Symbol(u'media-range', RFC(7231, section=u'5.3.2'))
media_type = Symbol(u'media-type', RFC(7231, section=u'3.1.1.1'))
parameter = Symbol(u'parameter', RFC(7231, section=u'3.1.1.1'))
weight = Symbol(u'weight', RFC(7231, section=u'5.3.1'))


class AcceptScanner(Scanner):

    symbols = {
        u'/': Token.slash,
        u';': Token.semicolon,
        u'=': Token.equals,
        u',': Token.comma,
    }
    symbol_chars = literal(u''.join(symbols))


class AcceptParser(Parser):

    def parse(self):
        """Parse all media ranges.

        :return:
            A list of ``(type_name, subtype_name, params, q)``
            in the order of the header. An empty header yields ``*/*``.
        """
        r = []
        with self.parsing(Accept):
            while True:
                type_subtype = self.media_range()
                if type_subtype is None:
                    break
                params = self.params()
                q = self.quality(params)
                r.append(type_subtype + (params, q))
        # RFC 7231 Section 5.3.2: "A request without any Accept header field
        # implies that the user agent will accept any media type in response."
        # An empty value is how callers usually pass a missing header.
        return r or [(u'*', u'*', {}, 1.0)]

    def media_range(self, allow_comma=True):
        """Parse ``type/subtype``, or return `None` at the end of data."""
        with self.parsing(media_range):
            (token, type_name) = self.scan_ignore_whitespace()
            if token is Token.end:
                return None
            if token is Token.comma and allow_comma:
                (token, type_name) = self.scan_ignore_whitespace()
            if token is not Token.word:
                raise self.error(InvalidMediaRange, expected=[u'type'])

            (token, _) = self.scan_ignore_whitespace()
            if token is not Token.slash:
                raise self.error(InvalidMediaRange, expected=[Token.slash])

            (token, subtype_name) = self.scan_ignore_whitespace()
            if token is not Token.word:
                raise self.error(InvalidMediaRange, expected=[u'subtype'])
            if type_name == u'*' and subtype_name != u'*':
                # Only ``type/*`` and ``*/*`` are wildcards.
                raise self.error(InvalidMediaRange, expected=[u'*'])

            return (type_name.lower(), subtype_name.lower())

    def params(self, stop_at_comma=True):
        r = {}
        while True:
            (token, _) = self.scan_ignore_whitespace()
            if token is Token.end:
                break
            if token is Token.comma and stop_at_comma:
                # The comma belongs to the next media range.
                self.unscan()
                break
            if token is not Token.semicolon:
                expected = [Token.semicolon, Token.end]
                if stop_at_comma:
                    expected.insert(1, Token.comma)
                raise self.error(InvalidMediaRange, expected=expected)

            with self.parsing(parameter):
                (token, name) = self.scan_ignore_whitespace()
                if token is not Token.word:
                    raise self.error(InvalidMediaRange,
                                     expected=[u'parameter name'])
                (token, _) = self.scan_ignore_whitespace()
                if token is not Token.equals:
                    raise self.error(InvalidMediaRange,
                                     expected=[Token.equals])
                (token, value) = self.scan_ignore_whitespace()
                if token is not Token.word:
                    raise self.error(InvalidMediaRange,
                                     expected=[u'parameter value'])
            r[name.lower()] = value
        return r

    def quality(self, params):
        """Remove ``q`` from `params` and return it as a float."""
        if u'q' not in params:
            return 1.0
        value = params.pop(u'q')
        with self.parsing(weight):
            try:
                q = float(value)
            except ValueError:
                q = math.nan
            if math.isnan(q):
                raise self.error(QMustBeNumberBetween0And1,
                                 expected=[u'qvalue'])
        return q


def parse_accept_ranges(value):
    """Parse an ``Accept`` header value into a list of raw media ranges."""
    return AcceptParser(AcceptScanner(value)).parse()


def parse_media_type(value):
    """Parse one concrete media type, such as a negotiation candidate.

    Unlike media ranges in ``Accept``, a ``q`` parameter is not special here.

    :return: ``(type_name, subtype_name, params)``.
    :raises webheaders.parse.InvalidMediaRange: if `value` is malformed.
    """
    parser = AcceptParser(AcceptScanner(value))
    with parser.parsing(media_type):
        type_subtype = parser.media_range(allow_comma=False)
        if type_subtype is None:
            raise parser.error(InvalidMediaRange, expected=[u'type'])
        params = parser.params(stop_at_comma=False)
    return type_subtype + (params,)
