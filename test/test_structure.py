# -*- coding: utf-8; -*-

import copy
import json
import pickle

import pytest

from webheaders.structure import (FieldKindMismatch, Link, Problem,
                                  ReservedKeyError)
from webheaders.syntax.rfc8288 import parse_link
from webheaders.util.uri import EMPTY, URIError


def test_link_fields():
    link = Link(href=u'https://example.com/', rel=u'next')
    assert link.href.netloc == u'example.com'
    assert link.rel == u'next'
    assert link.title == link.title_star == link.type == u''
    assert repr(link) == \
        "<Link href=SplitResult(scheme='https', netloc='example.com', " \
        "path='/', query='', fragment='') rel='next'>"
    assert Link().href == EMPTY

    with pytest.raises(TypeError):
        Link(href=u'https://x/', anchor=u'#foo')
    with pytest.raises(URIError):
        Link(href=u'http://x:port/')


def test_extensions_order():
    link = Link(href=u'https://x/')
    link.extend(u'b', u'1')
    link.extend(u'a', u'2')
    link.extend(u'c', u'3')
    assert link.extension_keys() == [u'b', u'a', u'c']

    # Replacing keeps the place.
    link.extend(u'b', u'one')
    assert link.extensions() == [(u'b', u'one'), (u'a', u'2'), (u'c', u'3')]

    # Removing and adding again moves to the end.
    link.extend(u'b', None)
    assert link.extension(u'b') == (None, False)
    assert link.extension_keys() == [u'a', u'c']
    link.extend(u'b', u'1')
    assert link.extension_keys() == [u'a', u'c', u'b']

    # Removing what is not there is fine.
    link.extend(u'zzz', None)
    assert link.extension_keys() == [u'a', u'c', u'b']

    # The returned list is a copy.
    link.extension_keys().append(u'd')
    assert link.extension_keys() == [u'a', u'c', u'b']


def test_reserved_keys():
    link = Link(href=u'https://x/')
    for key in [u'href', u'rel', u'REL', u'Title', u'title*', u'TYPE']:
        with pytest.raises(ReservedKeyError) as excinfo:
            link.extend(key, u'x')
        assert excinfo.value.key == key
    with pytest.raises(ReservedKeyError):
        link.extend(u'rel', None)
    assert link.extensions() == []

    # KeyError is the base class, so it can be caught as such.
    with pytest.raises(KeyError):
        Problem().extend(u'Status', 500)
    assert Problem.is_reserved(u'instance')
    assert not Problem.is_reserved(u'href')
    assert Link.is_reserved(u'href')

    exc = ReservedKeyError(u'Link', u'rel')
    assert str(exc) == u"Link: extension key 'rel' is reserved"


def test_extension_values():
    problem = Problem()
    problem.extend(u'balance', 30)
    problem.extend(u'ratio', 0.5)
    problem.extend(u'ok', False)
    problem.extend(u'accounts', (u'/account/12345', u'/account/67890'))
    problem.extend(u'meta', {u'tags': [1, None, {u'x': True}]})
    assert problem.extensions() == [
        (u'balance', 30),
        (u'ratio', 0.5),
        (u'ok', False),
        (u'accounts', [u'/account/12345', u'/account/67890']),
        (u'meta', {u'tags': [1, None, {u'x': True}]}),
    ]

    with pytest.raises(TypeError):
        problem.extend(u'when', object())
    with pytest.raises(TypeError):
        problem.extend(u'map', {1: u'one'})
    with pytest.raises(TypeError):
        problem.extend(u'list', [u'ok', set()])
    assert problem.extension(u'when') == (None, False)
    assert problem.extension(u'map') == (None, False)


def test_link_str():
    link = Link(href=u'https://x/', type=u'text/html', rel=u'next')
    link.extend(u'n', 5)
    link.extend(u'l', [1, 2])
    link.extend(u'foo*', u'bar')
    assert str(link) == (u'<https://x/>; rel="next"; type="text/html"; '
                         u'n="5"; l="[1,2]"; foo*="bar"')
    assert parse_link(str(link)).extensions() == \
        [(u'n', u'5'), (u'l', u'[1,2]'), (u'foo*', u'bar')]


def test_link_str_unrepresentable():
    # Quoted values have no escapes, so these cannot be written out.
    with pytest.raises(ValueError):
        str(Link(href=u'https://x/', title=u'say "hi"'))
    link = Link(href=u'https://x/')
    link.extend(u'l', [1, u'x'])
    with pytest.raises(ValueError):
        str(link)
    with pytest.raises(ValueError):
        str(Link(href=u'https://x/>'))
    assert repr(Link(title=u'say "hi"')) == \
        u'<Link title=\'say "hi"\'>'


def test_equality():
    link1 = Link(href=u'https://x/', rel=u'next')
    link2 = Link(href=u'https://x/', rel=u'next')
    assert link1 == link2
    link1.extend(u'a', u'1')
    assert link1 != link2
    link2.extend(u'a', u'1')
    assert link1 == link2

    link1.extend(u'b', u'2')
    link1.extend(u'c', u'3')
    link2.extend(u'c', u'3')
    link2.extend(u'b', u'2')
    assert link1 != link2

    assert Link(href=u'https://x/') != Link(href=u'https://y/')
    assert Link() != Problem()
    assert Link() != u''
    with pytest.raises(TypeError):
        hash(Link())


def test_document():
    link = Link(href=u'https://x/', rel=u'next', title_star=u'T')
    link.extend(u'b', 1)
    link.extend(u'a', [1, u'x'])
    assert link.to_document() == {
        u'href': u'https://x/',
        u'rel': u'next',
        u'title*': u'T',
        u'b': 1,
        u'a': [1, u'x'],
    }
    assert link.to_json() == \
        u'{"href": "https://x/", "rel": "next", "title*": "T", ' \
        u'"b": 1, "a": [1, "x"]}'
    assert Link.from_json(link.to_json()) == link

    assert Link().to_document() == {}
    assert Problem().to_json() == u'{}'


def test_from_document():
    link = Link.from_document({
        u'HREF': u'/next',
        u'Rel': u'next',
        u'title*': u'UTF-8\'\'n%C3%A4chste',
        u'anchor': u'#x',
    })
    assert link.href.path == u'/next'
    assert link.rel == u'next'
    assert link.title_star == u'UTF-8\'\'n%C3%A4chste'
    assert link.extensions() == [(u'anchor', u'#x')]

    problem = Problem.from_document({u'status': 404.0})
    assert problem.status == 404
    assert isinstance(problem.status, int)


def test_field_kind_mismatch():
    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"status": "404"}')
    exc = excinfo.value
    assert exc.record == u'Problem'
    assert exc.field == u'status'
    assert exc.expected == u'a number'
    assert exc.value == u'404'
    assert str(exc) == \
        u"Problem: field 'status' must be a number, got a string '404'"
    assert isinstance(exc, TypeError)

    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"status": true}')
    assert str(excinfo.value) == \
        u"Problem: field 'status' must be a number, got a boolean"

    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"status": 1e999}')
    assert str(excinfo.value) == \
        u"Problem: field 'status' must be a number, got inf"
    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"status": NaN}')
    assert excinfo.value.field == u'status'

    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"title": ["a", "b"]}')
    assert excinfo.value.field == u'title'

    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'{"instance": "http://x:port/"}')
    assert excinfo.value.field == u'instance'
    assert isinstance(excinfo.value.__cause__, URIError)

    with pytest.raises(FieldKindMismatch) as excinfo:
        Link.from_json(u'{"href": null}')
    assert str(excinfo.value) == \
        u"Link: field 'href' must be a URI, got null"

    with pytest.raises(FieldKindMismatch) as excinfo:
        Problem.from_json(u'[1, 2]')
    assert excinfo.value.field is None
    assert str(excinfo.value) == \
        u'Problem: expected a JSON object, got an array'

    with pytest.raises(ValueError):
        Problem.from_json(u'{"title": ')


def test_problem():
    problem = Problem(
        type=u'https://example.com/probs/out-of-credit',
        title=u'You do not have enough credit.',
        status=403,
        detail=u'Your current balance is 30, but that costs 50.',
        instance=u'/account/12345/msgs/abc',
    )
    problem.extend(u'balance', 30)
    problem.extend(u'accounts', [u'/account/12345', u'/account/67890'])
    assert problem.instance.path == u'/account/12345/msgs/abc'
    assert json.loads(problem.to_json()) == {
        u'type': u'https://example.com/probs/out-of-credit',
        u'title': u'You do not have enough credit.',
        u'status': 403,
        u'detail': u'Your current balance is 30, but that costs 50.',
        u'instance': u'/account/12345/msgs/abc',
        u'balance': 30,
        u'accounts': [u'/account/12345', u'/account/67890'],
    }
    assert list(json.loads(problem.to_json())) == [
        u'type', u'title', u'status', u'detail', u'instance',
        u'balance', u'accounts',
    ]
    assert Problem.from_json(problem.to_json()) == problem

    assert repr(Problem(title=u'Gone', status=410)) == \
        "<Problem title='Gone' status=410>"


def test_problem_as_exception():
    def handler():
        raise Problem(title=u'Not Found', status=404)

    with pytest.raises(Problem) as excinfo:
        handler()
    assert str(excinfo.value) == u'Not Found'
    assert excinfo.value.status == 404
    assert isinstance(excinfo.value, Exception)


def test_problem_copy_and_pickle():
    problem = Problem(title=u'Not Found', status=404,
                      instance=u'/things/1')
    problem.extend(u'tried', [u'/things/1', u'/stuff/1'])
    for clone in [copy.copy(problem), copy.deepcopy(problem),
                  pickle.loads(pickle.dumps(problem))]:
        assert clone == problem
        assert clone is not problem
        assert str(clone) == u'Not Found'
