# -*- coding: utf-8; -*-

from webheaders import helpers
from webheaders.__metadata__ import version as __version__
from webheaders.negotiation import Accept, MediaRange, parse_accept
from webheaders.parse import (InvalidLink, InvalidMediaRange, InvalidURI,
                              MissingAttrValue, MissingClosingQuote,
                              MissingSemicolon, ParseError,
                              QMustBeNumberBetween0And1)
from webheaders.structure import (PROBLEM_MEDIA_TYPE, FieldKindMismatch, Link,
                                  Problem, ReservedKeyError)
from webheaders.syntax.rfc7231 import parse_media_type
from webheaders.syntax.rfc8288 import parse_link

__all__ = [
    'Accept',
    'FieldKindMismatch',
    'InvalidLink',
    'InvalidMediaRange',
    'InvalidURI',
    'Link',
    'MediaRange',
    'MissingAttrValue',
    'MissingClosingQuote',
    'MissingSemicolon',
    'PROBLEM_MEDIA_TYPE',
    'ParseError',
    'Problem',
    'QMustBeNumberBetween0And1',
    'ReservedKeyError',
    'helpers',
    'parse_accept',
    'parse_link',
    'parse_media_type',
]
