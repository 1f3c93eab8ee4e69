# -*- coding: utf-8; -*-

"""Functions that may be useful for integrating with a web framework."""

from webheaders.negotiation import parse_accept
from webheaders.structure import PROBLEM_MEDIA_TYPE


__all__ = ['negotiate', 'problem_response']


def negotiate(accept_value, candidates):
    """Choose the best of `candidates` for a request's ``Accept`` header.

    :param accept_value:
        The value of the ``Accept`` header (Unicode or bytes),
        or `None` if the request has no such header.
    :param candidates:
        An iterable of media types that the server can produce,
        in the server's order of preference.
    :return:
        The chosen media type, or `None` if none is acceptable.
    :raises webheaders.parse.InvalidMediaRange:
        if `accept_value` is malformed.
    """
    return parse_accept(accept_value or u'').most_acceptable(candidates)


def problem_response(problem):
    """Serialize a :class:`~webheaders.structure.Problem` for a response.

    :return:
        A pair: the ``Content-Type`` value and the body as UTF-8 bytes.
    """
    body = problem.to_json(ensure_ascii=False).encode('utf-8')
    return (PROBLEM_MEDIA_TYPE, body)
