# -*- coding: utf-8; -*-

"""Records produced by the parsers and their JSON document form.

:class:`Link` (RFC 8288) and :class:`Problem` (RFC 7807) share the same
pattern: a fixed set of named fields, plus any number of *extensions*
-- caller-defined key/value pairs that are kept in the order they were
added and can never shadow a named field.
"""

import json
import math

from webheaders.util.data import check_value, header_text
from webheaders.util.uri import EMPTY, URIError, format_uri, parse_uri


PROBLEM_MEDIA_TYPE = u'application/problem+json'


class ReservedKeyError(KeyError):

    """An extension key collides with a named field of the record."""

    def __init__(self, record, key):
        super(ReservedKeyError, self).__init__(key)
        self.record = record
        self.key = key

    def __str__(self):
        return u'%s: extension key %r is reserved' % (self.record, self.key)


class FieldKindMismatch(TypeError):

    """A JSON document holds the wrong kind of value for a named field."""

    def __init__(self, record, field, expected, value):
        if field is None:
            message = u'%s: expected a JSON object, got %s' % (
                record, _kind_of(value))
        else:
            message = u'%s: field %r must be %s, got %s' % (
                record, field, expected, _kind_of(value))
        super(FieldKindMismatch, self).__init__(message)
        self.record = record
        self.field = field
        self.expected = expected
        self.value = value


def _kind_of(value):
    if isinstance(value, bool):
        return u'a boolean'
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, (int, float)):
        return u'a number'
    if isinstance(value, str):
        return u'a string %r' % value
    if isinstance(value, dict):
        return u'an object'
    if isinstance(value, list):
        return u'an array'
    if value is None:
        return u'null'
    return type(value).__name__


###############################################################################
# Field kinds.
#
# A field kind knows how to tell whether a field is set,
# and how to convert the field to and from a JSON value.


class _String(object):

    name = u'a string'
    default = u''

    @staticmethod
    def is_set(value):
        return value != u''

    @staticmethod
    def to_json(value):
        return value

    @staticmethod
    def from_json(value):
        if not isinstance(value, str):
            raise TypeError(value)
        return value


class _Number(object):

    name = u'a number'
    default = 0

    @staticmethod
    def is_set(value):
        return value != 0

    @staticmethod
    def to_json(value):
        return value

    @staticmethod
    def from_json(value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(value)
        if isinstance(value, float) and not math.isfinite(value):
            # Python's json reads NaN and Infinity,
            # which are not numbers in JSON proper.
            raise TypeError(value)
        return int(value)


class _URI(object):

    name = u'a URI'
    default = EMPTY

    @staticmethod
    def is_set(value):
        return value != EMPTY

    @staticmethod
    def to_json(value):
        return format_uri(value)

    @staticmethod
    def from_json(value):
        if not isinstance(value, str):
            raise TypeError(value)
        return parse_uri(value)


###############################################################################
# Records.


class Extensible(object):

    """Base class for records with named fields and ordered extensions.

    Subclasses define :attr:`fields`: a list of
    ``(document name, attribute name, kind)`` triples, in rendering order.
    The document names of all fields are the reserved keys.
    """

    fields = []

    def __init__(self, **kwargs):
        for (_, attr, kind) in self.fields:
            value = kwargs.pop(attr, kind.default)
            if kind is _URI:
                value = parse_uri(value)
            setattr(self, attr, value)
        if kwargs:
            raise TypeError(u'unexpected fields for %s: %s' % (
                self.__class__.__name__, u', '.join(sorted(kwargs))))
        self._extension_keys = []
        self._extensions = {}

    @classmethod
    def is_reserved(cls, key):
        return key.lower() in [name for (name, _, _) in cls.fields]

    def extend(self, key, value):
        """Add, replace, or (if `value` is `None`) remove an extension.

        A new key goes to the end of :meth:`extension_keys`;
        replacing the value of an existing key keeps its place.

        :raises ReservedKeyError:
            if `key` is (case-insensitively) the name of a field.
        :raises TypeError:
            if `value` is not something a JSON document can hold.
        """
        if self.is_reserved(key):
            raise ReservedKeyError(self.__class__.__name__, key)
        if value is None:
            if key in self._extensions:
                del self._extensions[key]
                self._extension_keys.remove(key)
            return
        value = check_value(value)
        if key not in self._extensions:
            self._extension_keys.append(key)
        self._extensions[key] = value

    def extension(self, key):
        """Return ``(value, present)`` for the extension `key`."""
        if key in self._extensions:
            return (self._extensions[key], True)
        return (None, False)

    def extension_keys(self):
        return list(self._extension_keys)

    def extensions(self):
        """Return the extensions as a list of ``(key, value)`` pairs."""
        return [(k, self._extensions[k]) for k in self._extension_keys]

    def __eq__(self, other):
        if not isinstance(other, Extensible) or \
                other.__class__ is not self.__class__:
            return NotImplemented
        return all(getattr(self, attr) == getattr(other, attr)
                   for (_, attr, _) in self.fields) and \
            self.extensions() == other.extensions()

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    __hash__ = None

    def __repr__(self):
        pieces = [u'%s=%r' % (attr, getattr(self, attr))
                  for (_, attr, kind) in self.fields
                  if kind.is_set(getattr(self, attr))]
        pieces.extend(u'%s=%r' % kv for kv in self.extensions())
        return '<%s %s>' % (self.__class__.__name__, u' '.join(pieces))

    ###########################################################################
    # The JSON document form.

    def to_document(self):
        """Return a flat dict of the set fields followed by the extensions."""
        doc = {}
        for (name, attr, kind) in self.fields:
            value = getattr(self, attr)
            if kind.is_set(value):
                doc[name] = kind.to_json(value)
        for (key, value) in self.extensions():
            doc[key] = value
        return doc

    @classmethod
    def from_document(cls, doc):
        """Build a record from a dict, as produced by :func:`json.loads`.

        Keys that match a field name (case-insensitively) fill that field;
        all other keys become extensions, in the order of the dict.

        :raises FieldKindMismatch:
            if `doc` is not a dict, or if a field has the wrong kind of value.
        """
        record_name = cls.__name__
        if not isinstance(doc, dict):
            raise FieldKindMismatch(record_name, None, None, doc)
        by_name = dict((name, (attr, kind)) for (name, attr, kind)
                       in cls.fields)
        record = cls()
        for (key, value) in doc.items():
            if key.lower() in by_name:
                (attr, kind) = by_name[key.lower()]
                try:
                    value = kind.from_json(value)
                except (TypeError, URIError) as exc:
                    raise FieldKindMismatch(record_name, key.lower(),
                                            kind.name, value) from exc
                setattr(record, attr, value)
            else:
                record.extend(key, value)
        return record

    def to_json(self, **kwargs):
        return json.dumps(self.to_document(), **kwargs)

    @classmethod
    def from_json(cls, text):
        return cls.from_document(json.loads(text))


class Link(Extensible):

    """A web link (RFC 8288), as found in a ``Link`` header value.

    >>> link = Link(href=u'https://example.com/2', rel=u'next')
    >>> print(link)
    <https://example.com/2>; rel="next"
    """

    fields = [
        (u'href', 'href', _URI),
        (u'rel', 'rel', _String),
        (u'hreflang', 'hreflang', _String),
        (u'media', 'media', _String),
        (u'title', 'title', _String),
        (u'title*', 'title_star', _String),
        (u'type', 'type', _String),
    ]

    def __str__(self):
        """Render as a ``Link`` header value.

        The grammar has no escapes, so a value containing a double quote,
        or an href containing ``>``, cannot be written out.

        :raises ValueError: for such a value.
        """
        href = format_uri(self.href)
        if u'>' in href:
            raise ValueError(u'href %r cannot be put in a Link header' % href)
        pieces = [u'<%s>' % href]
        params = [(name, getattr(self, attr))
                  for (name, attr, kind) in self.fields[1:]
                  if kind.is_set(getattr(self, attr))]
        params.extend((key, header_text(value))
                      for (key, value) in self.extensions())
        for (name, text) in params:
            if u'"' in text:
                raise ValueError(u'%s value %r cannot be quoted '
                                 u'in a Link header' % (name, text))
            pieces.append(u'%s="%s"' % (name, text))
        return u'; '.join(pieces)


class Problem(Extensible, Exception):

    """Problem details for an HTTP API (RFC 7807).

    A problem can be raised like any exception; its message is its title.
    Its JSON form is sent with the :data:`PROBLEM_MEDIA_TYPE` media type.
    """

    fields = [
        (u'type', 'type', _String),
        (u'title', 'title', _String),
        (u'status', 'status', _Number),
        (u'detail', 'detail', _String),
        (u'instance', 'instance', _URI),
    ]

    def __init__(self, **kwargs):
        Extensible.__init__(self, **kwargs)
        Exception.__init__(self, self.title)

    def __str__(self):
        return self.title

    def __reduce__(self):
        # The default for exceptions would pass the title positionally.
        return (self.__class__.from_document, (self.to_document(),))
