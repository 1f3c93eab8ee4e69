# -*- coding: utf-8; -*-

"""The ``Link`` header value grammar (RFC 8288 Section 3)::

    Link      = "<" URI-Reference ">" *( ";" attribute )
    attribute = key *( "*" ) "=" ( word / DQUOTE word DQUOTE )

The scanner is context-sensitive. Right after a double quote or ``<``
it is inside a literal: an asterisk is not a token of its own,
a word runs up to the closing ``"`` or ``>``, and reserved attribute
names are not recognized. This is how ``<https://example.com/?a=b>``
and ``title="the type; v2"`` come out as single words.
"""

import logging

from webheaders.citation import RFC
from webheaders.parse import (InvalidLink, InvalidURI, MissingAttrValue,
                              MissingClosingQuote, MissingSemicolon, Parser,
                              Scanner, Symbol, Token, literal)
from webheaders.structure import Link
from webheaders.util.uri import URIError, parse_uri


logger = logging.getLogger(__name__)


link_value = Symbol(u'link-value', RFC(8288, section=u'3'))
URI_Reference = Symbol(u'URI-Reference', RFC(3986, section=u'4.1'))
link_param = Symbol(u'link-param', RFC(8288, section=u'3'))


KEYWORDS = {
    u'rel': Token.rel,
    u'hreflang': Token.hreflang,
    u'media': Token.media,
    u'title': Token.title,
    u'type': Token.type,
}

STAR = literal(u'*')

# A word inside a literal runs up to the delimiter that closes the literal.
CLOSING = {
    Token.quote: u'"',
    Token.lt: u'>',
}


class LinkScanner(Scanner):

    symbols = {
        u'"': Token.quote,
        u';': Token.semicolon,
        u'<': Token.lt,
        u'>': Token.gt,
        u'=': Token.equals,
    }
    symbol_chars = literal(u''.join(symbols))

    def __init__(self, data):
        super(LinkScanner, self).__init__(data)
        # Quotes alternate between opening and closing.
        self.quote_open = False

    def in_literal(self):
        if self.last is Token.quote:
            return self.quote_open
        return self.last is Token.lt

    def scan(self):
        if self.in_literal():
            c = self.peek()
            if c is not None and c != CLOSING[self.last]:
                self.position = self.pos
                return self.scan_word()
        return super(LinkScanner, self).scan()

    def symbol_token(self, c):
        if c in STAR:
            return None if self.in_literal() else Token.star
        token = super(LinkScanner, self).symbol_token(c)
        if token is Token.quote:
            self.quote_open = not self.quote_open
        return token

    def ends_word(self, c):
        if self.in_literal():
            return c == CLOSING[self.last]
        return c.isspace() or c in STAR or c in self.symbol_chars

    def word_token(self, word):
        if not self.in_literal() and word in KEYWORDS:
            return KEYWORDS[word]
        return Token.word


class LinkParser(Parser):

    def parse(self):
        with self.parsing(link_value):
            link = Link(href=self.href())
            while True:
                (token, key, value, starred) = self.attribute()
                if token is Token.end:
                    break
                self._dispatch(link, token, key, value, starred)
        return link

    @staticmethod
    def _dispatch(link, token, key, value, starred):
        if token is Token.word:
            link.extend(key + u'*' if starred else key, value)
        elif token is Token.title:
            if starred:
                link.title_star = value
            else:
                link.title = value
        else:
            setattr(link, token.name, value)

    def href(self):
        (token, _) = self.scan_ignore_whitespace()
        if token is not Token.lt:
            raise self.error(InvalidLink, expected=[Token.lt])

        (token, literal_) = self.scan_ignore_whitespace()
        if token is not Token.word:
            raise self.error(InvalidLink, expected=[URI_Reference.name])
        literal_ = literal_.strip()
        if not literal_:
            raise self.error(InvalidLink, expected=[URI_Reference.name])
        with self.parsing(URI_Reference):
            try:
                uri = parse_uri(literal_)
            except URIError as exc:
                raise self.error(InvalidURI) from exc

        (token, _) = self.scan_ignore_whitespace()
        if token is not Token.gt:
            raise self.error(InvalidLink, expected=[Token.gt])

        (token, _) = self.scan_ignore_whitespace()
        if token is not Token.semicolon and token is not Token.end:
            raise self.error(MissingSemicolon,
                             expected=[Token.semicolon, Token.end])
        return uri

    def attribute(self):
        """Parse one attribute.

        :return:
            ``(token, key, value, starred)``,
            where `token` is :attr:`Token.end` if there are no more attributes.
        """
        with self.parsing(link_param):
            (token, key, starred) = self.attribute_key()
            if token is Token.end:
                return (Token.end, None, None, False)
            value = self.attribute_value()
            return (token, key, value, starred)

    def attribute_key(self):
        (token, key) = self.scan_ignore_whitespace()
        if token is Token.end:
            return (token, key, False)
        if token is not Token.word and token not in KEYWORDS.values():
            raise self.error(InvalidLink, expected=[u'attribute name'])

        starred = False
        while True:
            (next_token, _) = self.scan_ignore_whitespace()
            if next_token is Token.star:
                starred = True
            elif next_token is Token.equals:
                break
            else:
                raise self.error(InvalidLink,
                                 expected=[Token.star, Token.equals])
        return (token, key, starred)

    def attribute_value(self):
        quote_opened = quote_closed = value_read = False
        value = u''
        while True:
            (token, literal_) = self.scan_ignore_whitespace()
            if token is Token.quote:
                if quote_opened:
                    quote_closed = value_read = True
                quote_opened = True
            elif token is Token.word or token in KEYWORDS.values():
                # A value may be spelled like a reserved attribute name.
                if value_read:
                    # An unquoted value ran into another bare word.
                    raise self.error(MissingSemicolon,
                                     expected=[Token.semicolon, Token.end])
                value = literal_
                value_read = True
                break
            elif not value_read:
                raise self.error(MissingAttrValue,
                                 expected=[Token.quote, u'attribute value'])
            else:
                # Only an empty quoted value gets here.
                self.unscan()
                break

        if quote_opened and not quote_closed:
            (token, _) = self.scan_ignore_whitespace()
            if token is not Token.quote:
                raise self.error(MissingClosingQuote, expected=[Token.quote])

        (token, _) = self.scan_ignore_whitespace()
        if token is not Token.semicolon and token is not Token.end:
            raise self.error(MissingSemicolon,
                             expected=[Token.semicolon, Token.end])
        return value


def parse_link(value):
    """Parse a single ``Link`` header value into a :class:`Link`.

    :param value: The value as a Unicode string or a bytestring.
    :raises webheaders.parse.InvalidLink: or one of its subclasses.
    :raises webheaders.structure.ReservedKeyError:
        if an extension attribute is spelled like a reserved one
        in a different case, such as ``REL``.
    """
    r = LinkParser(LinkScanner(value)).parse()
    logger.debug(u'parsed link %s', r)
    return r
