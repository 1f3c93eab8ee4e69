# -*- coding: utf-8; -*-

"""Extension values: the kinds of data a JSON document can hold.

An extension value is a string, a number, a boolean, a list of extension
values or a dict from strings to extension values. ``None`` is not stored;
it is the sentinel for removing an extension.
"""

from functools import singledispatch
import json


@singledispatch
def check_value(value):
    """Return `value` normalized as an extension value.

    :raises TypeError: if `value` is not something JSON can represent.
    """
    raise TypeError(u'%s is not a valid extension value' %
                    type(value).__name__)

@check_value.register(str)
@check_value.register(bool)
@check_value.register(int)
@check_value.register(float)
def _check_scalar(value):
    return value

@check_value.register(type(None))
def _check_none(value):
    # Only valid nested inside a list or a dict.
    return value

@check_value.register(list)
@check_value.register(tuple)
def _check_sequence(value):
    return [check_value(x) for x in value]

@check_value.register(dict)
def _check_document(value):
    r = {}
    for k, v in value.items():
        if not isinstance(k, str):
            raise TypeError(u'document keys must be strings, not %s' %
                            type(k).__name__)
        r[k] = check_value(v)
    return r


@singledispatch
def header_text(value):
    """Render an extension value for a ``name="value"`` header parameter."""
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)

@header_text.register(str)
def _text_as_is(value):
    return value
