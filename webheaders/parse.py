# -*- coding: utf-8; -*-

"""Building blocks for the hand-written header parsers.

Every grammar in :mod:`webheaders.syntax` is parsed in two stages.

A :class:`Scanner` turns the input string into a stream of
``(token, literal)`` pairs, one pair per call to :meth:`Scanner.scan`.
End of input is not an exception but a regular :attr:`Token.end` token,
so parsers can treat it like any other token in their loops.
Contiguous whitespace always comes out as a single :attr:`Token.whitespace`.

A :class:`Parser` pulls those tokens and builds a record by recursive
descent. It can push back exactly one token (:meth:`Parser.unscan`),
which is all the lookahead these grammars ever need: for example,
after the parameters of a media range, a comma must be left
for the next media range to consume.

Parsed bytestrings are decoded from ISO-8859-1 -- the historic encoding
of HTTP -- before scanning.

Which characters are symbols in a given grammar is described with
:class:`CharClass`, a 256-bit set of octets. Characters above U+00FF
are never symbols and always end up in words.
"""

import enum
import logging

from bitstring import BitArray, Bits

from webheaders.util.text import (ellipsize, force_unicode, nicely_join,
                                  printable)


logger = logging.getLogger(__name__)


###############################################################################
# Tokens and character classes.


class Token(enum.Enum):

    """A lexical class.

    The value of each member is its human-readable description,
    used in error messages.
    """

    end = u'end of data'
    whitespace = u'whitespace'
    word = u'word'

    quote = u'double quote (")'
    semicolon = u'semicolon (;)'
    lt = u'less-than sign (<)'
    gt = u'greater-than sign (>)'
    equals = u'equals sign (=)'
    star = u'asterisk (*)'
    slash = u'slash (/)'
    comma = u'comma (,)'

    # Reserved attribute names of the ``Link`` grammar.
    rel = u'"rel"'
    hreflang = u'"hreflang"'
    media = u'"media"'
    title = u'"title"'
    type = u'"type"'

    def __repr__(self):
        return 'Token.%s' % self.name


# One bit per octet.
_ZEROS = '0' * 256


class CharClass(object):

    """A set of octets, like a terminal symbol of an ABNF grammar."""

    __slots__ = ('bits',)

    def __init__(self, bits=None):
        self.bits = bits if bits is not None else Bits(bin=_ZEROS)

    def __repr__(self):
        return 'CharClass(%r)' % u''.join(self.chars())

    def __contains__(self, char):
        point = ord(char)
        return point < 256 and self.bits[point]

    def __or__(self, other):
        return CharClass(self.bits | as_char_class(other).bits)

    def __sub__(self, other):
        return CharClass(self.bits ^ (self.bits & as_char_class(other).bits))

    def chars(self):
        return [chr(i) for (i, v) in enumerate(self.bits) if v]


def octet_range(min_, max_):
    """Create a class of octets from `min_` to `max_` inclusive."""
    bits = BitArray(bin=_ZEROS)
    for i in range(min_, max_ + 1):
        bits[i] = True
    return CharClass(Bits(bits))

def octet(value):
    return octet_range(value, value)

def literal(s):
    """Create a class of all characters in the string `s`."""
    r = CharClass()
    for c in s:
        r = r | octet(ord(c))
    return r

def as_char_class(x):
    return x if isinstance(x, CharClass) else literal(x)


###############################################################################
# Grammar symbols and errors.


class Symbol(object):

    """A named rule of some grammar, for referring to it in parse errors."""

    __slots__ = ('name', 'citation')

    def __init__(self, name, citation=None):
        self.name = name
        self.citation = citation

    def __repr__(self):
        return '<Symbol %s>' % self.name

    def __str__(self):
        if self.citation is not None:
            return u'%s (%s)' % (self.name, self.citation)
        return self.name


class ParseError(Exception):

    """A header value does not match its grammar.

    Subclasses name specific kinds of failure, so callers can tell
    a missing semicolon from a generally malformed link, for example.
    """

    description = u'unexpected input'

    def __init__(self, position=None, found=None, expected=None, symbol=None):
        """
        :param position:
            Character offset of the offending token, or `None`.
        :param found:
            The literal text of the offending token,
            or `None` if it was the end of data.
        :param expected:
            A list of :class:`Token` or free-form strings describing
            what could have been accepted at `position`, or `None`.
        :param symbol:
            The :class:`Symbol` that was being parsed, or `None`.
        """
        message = self.description
        if position is not None:
            message += u' at position %d' % position
        super(ParseError, self).__init__(message)
        self.position = position
        self.found = found
        self.expected = expected
        self.symbol = symbol

    def explain(self):
        """Return a list of lines detailing this error for humans."""
        lines = []
        if self.symbol is not None:
            lines.append(u'while parsing %s' % self.symbol)
        if self.expected:
            lines.append(u'expected %s' % nicely_join([
                exp.value if isinstance(exp, Token) else exp
                for exp in self.expected]))
        if self.found is None:
            lines.append(u'found end of data')
        else:
            lines.append(u'found %r' % printable(ellipsize(self.found)))
        return lines


class InvalidLink(ParseError):

    description = u'invalid link'


class MissingSemicolon(InvalidLink):

    description = u'invalid link, missing semicolon'


class MissingClosingQuote(InvalidLink):

    description = u'invalid link, missing closing quote'


class MissingAttrValue(InvalidLink):

    description = u'invalid link, missing attribute value'


class InvalidURI(InvalidLink):

    description = u'invalid link, bad URI reference'


class InvalidMediaRange(ParseError):

    description = u'invalid media range'


class QMustBeNumberBetween0And1(InvalidMediaRange):

    description = \
        u'invalid media range, q must be a number between 0 and 1'


###############################################################################
# Scanning.


class Scanner(object):

    """Base class for the scanners of specific grammars.

    Subclasses set :attr:`symbols` (a mapping from a single character
    to its token) and :attr:`symbol_chars` (the same characters
    as a :class:`CharClass`), and may override the hooks
    :meth:`symbol_token`, :meth:`ends_word` and :meth:`word_token`.
    """

    symbols = {}
    symbol_chars = CharClass()

    def __init__(self, data):
        self.data = force_unicode(data)
        self.pos = 0
        # Start offset of the last token returned by `scan`.
        self.position = 0
        # The last token returned by `scan`, if any.
        self.last = None

    def read(self):
        if self.pos >= len(self.data):
            return None
        c = self.data[self.pos]
        self.pos += 1
        return c

    def unread(self):
        self.pos -= 1

    def peek(self):
        if self.pos >= len(self.data):
            return None
        return self.data[self.pos]

    def scan(self):
        self.position = self.pos
        c = self.read()
        if c is None:
            return self.scanned(Token.end, u'')
        if c.isspace():
            self.unread()
            return self.scan_whitespace()
        token = self.symbol_token(c)
        if token is not None:
            return self.scanned(token, c)
        self.unread()
        return self.scan_word()

    def scan_whitespace(self):
        chars = []
        while True:
            c = self.read()
            if c is None:
                break
            if not c.isspace():
                self.unread()
                break
            chars.append(c)
        return self.scanned(Token.whitespace, u''.join(chars))

    def scan_word(self):
        chars = []
        while True:
            c = self.read()
            if c is None:
                break
            if self.ends_word(c):
                self.unread()
                break
            chars.append(c)
        word = u''.join(chars)
        return self.scanned(self.word_token(word), word)

    def symbol_token(self, c):
        if c in self.symbol_chars:
            return self.symbols[c]
        return None

    def ends_word(self, c):
        return c.isspace() or c in self.symbol_chars

    def word_token(self, _word):
        return Token.word

    def scanned(self, token, literal_):
        self.last = token
        return (token, literal_)

    def tokens(self):
        """Iterate over all remaining tokens, up to and including the end."""
        while True:
            (token, literal_) = self.scan()
            yield (token, literal_)
            if token is Token.end:
                break


###############################################################################
# Parsing.


class Parser(object):

    """Base class for the recursive-descent parsers of specific grammars.

    Wraps a :class:`Scanner` with one token of pushback
    and keeps track of the grammar symbol being parsed,
    for the benefit of :meth:`error`.
    """

    def __init__(self, scanner):
        self.scanner = scanner
        # The last token returned by `scan`: ``(token, literal, position)``.
        self._buffer = None
        self._unscanned = False
        self._currently_parsing = [None]
        self._next_symbol = None

    def scan(self):
        if self._unscanned:
            self._unscanned = False
        else:
            (token, literal_) = self.scanner.scan()
            self._buffer = (token, literal_, self.scanner.position)
        return self._buffer[:2]

    def unscan(self):
        """Make the next :meth:`scan` return the last scanned token again."""
        if self._buffer is None or self._unscanned:
            raise RuntimeError(u'only one token can be pushed back')
        self._unscanned = True

    def scan_ignore_whitespace(self):
        # The scanner coalesces whitespace, so it never comes twice in a row.
        (token, literal_) = self.scan()
        if token is Token.whitespace:
            return self.scan()
        return (token, literal_)

    def parsing(self, symbol):
        self._next_symbol = symbol
        return self

    def __enter__(self):
        self._currently_parsing.append(self._next_symbol)
        return self

    def __exit__(self, _exc_type, _exc_value, _exc_traceback):
        self._currently_parsing.pop()
        return False

    def error(self, cls, expected=None):
        """Create (not raise) a `cls` error at the last scanned token."""
        if self._buffer is None:
            (token, literal_, position) = (None, None, 0)
        else:
            (token, literal_, position) = self._buffer
        exc = cls(position=position,
                  found=None if token is Token.end else literal_,
                  expected=expected,
                  symbol=self._currently_parsing[-1])
        logger.debug(u'%s in %r', exc, self.scanner.data)
        return exc
