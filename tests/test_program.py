import logging
import sys

import pytest

from schemepeg import (
    SchemeGrammar,
    SchemeSyntaxError,
    UnterminatedLiteralError,
    parse,
    read
    )
from schemepeg.parser import program
from schemepeg.types import AppExp, DefExp, Pair, Symbol

def syntax_error(f, *args, **kwargs):
    with pytest.raises(SchemeSyntaxError) as exc:
        f(*args, **kwargs)
    return exc.value

def test_forms_in_source_order():
    forms = parse('(define x 1) ; one\n#| two |# (f x)')
    assert [type(f) for f in forms] == [DefExp, AppExp]

def test_leading_and_trailing_atmosphere():
    assert len(read('\n  ; lead\n  x  #| trail |#\n')) == 1

def test_empty_input():
    for s in ['', '   ', '; only a comment\n', '#| block |#']:
        err = syntax_error(parse, s)
        assert err.msg == 'no forms in input'
        assert err.offset == len(s)

def test_unterminated_list_at_end():
    err = syntax_error(parse, '(define x 1)\n(f x')
    assert isinstance(err, UnterminatedLiteralError)
    assert err.offset == 17
    assert (err.line, err.column) == (2, 5)

def test_expected_terminals_are_reported():
    err = syntax_error(read, '(a b')
    assert "')'" in err.expected
    assert err.rule == err.expected[0]

def test_stray_close_paren():
    err = syntax_error(read, '(a b))')
    assert not isinstance(err, UnterminatedLiteralError)
    assert err.offset == 5
    assert (err.line, err.column) == (1, 6)

def test_unterminated_string():
    err = syntax_error(read, 'x "abc')
    assert isinstance(err, UnterminatedLiteralError)
    assert err.offset == 2
    assert err.msg == 'unterminated literal'

def test_error_message_names_the_file():
    err = syntax_error(parse, '(', filename='prog.scm')
    assert err.filename == 'prog.scm'
    assert str(err).startswith('prog.scm:1:2: ')

def test_error_position_is_the_furthest_failure():
    err = syntax_error(parse, '(define x (f 1 ]))')
    assert err.offset == 15
    assert (err.line, err.column) == (1, 16)

def test_grammar_is_reusable():
    g = SchemeGrammar()
    assert len(g.parse('(f)')) == 1
    assert len(g.read('a b c')) == 3
    assert len(g.parse('(g) (h)')) == 2

def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger='schemepeg.parser.program')
    read('a b')
    assert 'built 2 top-level forms' in caplog.text
    with pytest.raises(SchemeSyntaxError):
        read('(a')
    assert 'match failed' in caplog.text

def nested(depth, inner='x'):
    return '(' * depth + inner + ')' * depth

def test_deep_nesting():
    for depth in [100, 1000]:
        [d] = read(nested(depth))
        n = 0
        while isinstance(d, Pair):
            d = d.car
            n += 1
        assert n == depth
        assert d is Symbol('x')

def test_deeply_nested_calls():
    [f] = parse(nested(1000, 'f'))
    n = 0
    while isinstance(f, AppExp):
        f = f.funcExp
        n += 1
    assert n == 1000

def test_recursion_limit_is_restored():
    limit = sys.getrecursionlimit()
    read(nested(500))
    assert sys.getrecursionlimit() == limit

def test_nesting_too_deep(monkeypatch):
    monkeypatch.setattr(program, 'max_recursion_limit', 2000)
    limit = sys.getrecursionlimit()
    err = syntax_error(read, nested(1000))
    assert err.msg == 'nesting too deep'
    assert not isinstance(err, UnterminatedLiteralError)
    assert sys.getrecursionlimit() == limit
