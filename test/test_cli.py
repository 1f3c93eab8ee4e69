# -*- coding: utf-8; -*-

import io
import os

import pytest

import webheaders
import webheaders.cli


def run(options, stdin=None):
    argv = ['webheaders'] + options
    stdout = io.StringIO()
    stderr = io.StringIO()
    args = webheaders.cli.parse_args(argv)
    exit_status = webheaders.cli.run_cli(args, stdout, stderr,
                                         stdin=io.StringIO(stdin or u''))
    return (exit_status, stdout.getvalue(), stderr.getvalue())


def test_link():
    (code, stdout, stderr) = run(['link', u'<https://x/>; rel=next'])
    assert code == 0
    assert stdout == u'{\n  "href": "https://x/",\n  "rel": "next"\n}\n'
    assert stderr == u''


def test_link_error():
    (code, stdout, stderr) = run(['link', u'<https://x'])
    assert code == 2
    assert stdout == u''
    assert stderr == (u'webheaders: invalid link at position 10\n'
                      u'  while parsing link-value (RFC 8288 § 3)\n'
                      u'  expected greater-than sign (>)\n'
                      u'  found end of data\n')

    (code, stdout, stderr) = run(['link', u'<https://x>; REL=next'])
    assert code == 2
    assert stderr == u"webheaders: Link: extension key 'REL' is reserved\n"


def test_full_traceback():
    (code, _, stderr) = run(['--full-traceback', 'link', u'https://x'])
    assert code == 2
    assert stderr.startswith(u'Traceback')
    assert u'webheaders: invalid link at position 0\n' in stderr


def test_accept():
    (code, stdout, stderr) = run(['accept', u'text/plain;q=0.5,TEXT/html'])
    assert code == 0
    assert stdout == u'text/plain; q=0.5, text/html\n'
    assert stderr == u''

    (code, stdout, _) = run(['accept', u''])
    assert code == 0
    assert stdout == u'*/*\n'


def test_accept_candidates():
    (code, stdout, stderr) = run(['accept', u'text/*, application/json;q=0.9',
                                  '-c', u'application/json',
                                  '-c', u'text/csv'])
    assert code == 0
    assert stdout == u'text/csv\n'
    assert stderr == u''

    (code, stdout, stderr) = run(['accept', u'text/*', '-c', u'image/png'])
    assert code == 1
    assert stdout == u''
    assert stderr == u''

    (code, stdout, stderr) = run(['accept', u'text/html;q=x',
                                  '-c', u'text/html'])
    assert code == 2
    assert stderr.startswith(
        u'webheaders: invalid media range, q must be a number '
        u'between 0 and 1 at position ')


def test_problem(tmpdir):
    path = tmpdir.join('problem.json')
    path.write_text(u'{"status": 404.0, "title": "Not Found", '
                    u'"note": "caf\xe9"}', encoding='utf-8')
    (code, stdout, stderr) = run(['problem', str(path)])
    assert code == 0
    assert stdout == (u'{\n  "title": "Not Found",\n  "status": 404,\n'
                      u'  "note": "caf\xe9"\n}\n')
    assert stderr == u''


def test_problem_stdin():
    (code, stdout, _) = run(['problem', '-'], stdin=u'{"type": "about:blank"}')
    assert code == 0
    assert stdout == u'{\n  "type": "about:blank"\n}\n'

    (code, stdout, stderr) = run(['problem', '-'], stdin=u'{"status": "x"}')
    assert code == 2
    assert stdout == u''
    assert stderr == (u"webheaders: Problem: field 'status' must be "
                      u"a number, got a string 'x'\n")

    (code, _, stderr) = run(['problem', '-'], stdin=u'{"status"')
    assert code == 2
    assert stderr.startswith(u'webheaders: ')

    (code, stdout, stderr) = run(['problem', '-'], stdin=u'{"status": 1e999}')
    assert code == 2
    assert stdout == u''
    assert stderr == (u"webheaders: Problem: field 'status' must be "
                      u"a number, got inf\n")


def test_problem_missing_file(tmpdir):
    path = os.path.join(str(tmpdir), 'nonexistent.json')
    (code, stdout, stderr) = run(['problem', path])
    assert code == 2
    assert stdout == u''
    assert u'nonexistent.json' in stderr


def test_args(capsys):
    with pytest.raises(SystemExit):
        webheaders.cli.parse_args(['webheaders'])
    with pytest.raises(SystemExit):
        webheaders.cli.parse_args(['webheaders', '--version'])
    assert capsys.readouterr().out == \
        u'webheaders %s\n' % webheaders.__version__

    args = webheaders.cli.parse_args(['webheaders', '-v', 'accept', 'a/b'])
    assert args.verbose
    assert args.command == 'accept'
    assert args.candidate is None
