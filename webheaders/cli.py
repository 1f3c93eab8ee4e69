# -*- coding: utf-8; -*-

"""The command-line interface to webheaders."""

import argparse
import io
import logging
import sys
import traceback

import webheaders
from webheaders.negotiation import parse_accept
from webheaders.parse import ParseError
from webheaders.structure import FieldKindMismatch, Problem, ReservedKeyError
from webheaders.syntax.rfc8288 import parse_link


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description=u'Parse and normalize HTTP header values.')
    parser.add_argument(u'--version', action='version',
                        version=u'webheaders %s' % webheaders.__version__)
    parser.add_argument(u'-v', u'--verbose', action='store_true',
                        help=u'log debugging information to stderr')
    parser.add_argument(u'--full-traceback', action='store_true',
                        help=u'do not hide the traceback on errors')
    commands = parser.add_subparsers(dest='command', metavar=u'COMMAND')
    commands.required = True

    link = commands.add_parser(
        u'link', help=u'print a Link header value as a JSON document')
    link.add_argument(u'value')

    accept = commands.add_parser(
        u'accept', help=u'normalize an Accept header value, '
                        u'or choose the most acceptable media type')
    accept.add_argument(u'value')
    accept.add_argument(u'-c', u'--candidate', action='append',
                        metavar=u'TYPE',
                        help=u'a media type the server can produce '
                             u'(may be repeated, in order of preference)')

    problem = commands.add_parser(
        u'problem', help=u'validate and normalize a problem details document')
    problem.add_argument(u'path', help=u'a JSON file, or - for stdin')

    return parser.parse_args(argv[1:])


def run_cli(args, stdout, stderr, stdin=None):
    try:
        return _commands[args.command](args, stdout, stdin or sys.stdin)
    except (ParseError, ReservedKeyError, FieldKindMismatch,
            EnvironmentError, ValueError) as exc:
        if args.full_traceback:
            traceback.print_exc(file=stderr)
        stderr.write(u'webheaders: %s\n' % exc)
        if isinstance(exc, ParseError):
            for line in exc.explain():
                stderr.write(u'  %s\n' % line)
        return 2


def _link_command(args, stdout, _stdin):
    link = parse_link(args.value)
    stdout.write(link.to_json(indent=2, ensure_ascii=False) + u'\n')
    return 0


def _accept_command(args, stdout, _stdin):
    accept = parse_accept(args.value)
    if not args.candidate:
        stdout.write(u'%s\n' % accept)
        return 0
    chosen = accept.most_acceptable(args.candidate)
    if chosen is None:
        return 1
    stdout.write(u'%s\n' % chosen)
    return 0


def _problem_command(args, stdout, stdin):
    if args.path == u'-':
        text = stdin.read()
    else:
        with io.open(args.path, 'rt', encoding='utf-8-sig') as f:
            text = f.read()
    problem = Problem.from_json(text)
    stdout.write(problem.to_json(indent=2, ensure_ascii=False) + u'\n')
    return 0


_commands = {
    u'link': _link_command,
    u'accept': _accept_command,
    u'problem': _problem_command,
}


def excepthook(_type, exc, _traceback):     # pragma: no cover
    sys.stderr.write('webheaders: unhandled exception: %r\n' % exc)


def main():     # pragma: no cover
    args = parse_args(sys.argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format=u'%(name)s: %(message)s')
    if not args.full_traceback:
        sys.excepthook = excepthook
    sys.exit(run_cli(args, sys.stdout, sys.stderr))

if __name__ == '__main__':
    main()
