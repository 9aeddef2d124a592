from fractions import Fraction

import pytest

from schemepeg import (
    Actions,
    DatumActions,
    NumericFormatError,
    Position,
    SchemeSyntaxError,
    TableActions,
    parse,
    read
    )
from schemepeg.actions import rules, to_number
from schemepeg.parser.number import NumberDescriptor

def recorder():
    calls = []
    def record(rule):
        def action(**fields):
            calls.append(rule)
            return rule
        return action
    return calls, dict((r, record(r)) for r in rules)

def descriptor(**fields):
    values = dict.fromkeys(NumberDescriptor._fields)
    values.update(radix=10, sign=1)
    values.update(fields)
    return NumberDescriptor(**values)

def test_actions_run_in_source_order():
    calls, table = recorder()
    assert read('(1 . x)', table) == ['list']
    assert calls == ['decimal_number', 'symbol', 'list']

def test_no_actions_run_when_matching_fails():
    calls, table = recorder()
    with pytest.raises(SchemeSyntaxError):
        read('(1 . x', table)
    assert calls == []

def test_backtracked_alternatives_build_nothing():
    calls, table = recorder()
    parse('(define (f x) x)', table)
    assert calls == ['identifier', 'identifier', 'identifier', 'function_definition']

def test_one_action_per_capture():
    calls, table = recorder()
    parse("(lambda (x) '#(1 #t))", table)
    assert calls == [
        'identifier',
        'decimal_number',
        'boolean',
        'vector',
        'quotation',
        'lambda'
        ]

def test_labels_reach_the_actions():
    calls, table = recorder()
    read('#0=(a . #0#)', table)
    assert calls == ['label_placeholder', 'symbol', 'list', 'label']

def test_table_rejects_unknown_rules():
    with pytest.raises(ValueError):
        TableActions({'nonsense': lambda: None})

def test_table_rejects_missing_rules():
    calls, table = recorder()
    del table['symbol']
    with pytest.raises(ValueError):
        read('x', table)
    with pytest.raises(ValueError):
        TableActions({'boolean': lambda value, position: value})
    assert calls == []

def test_missing_actions():
    with pytest.raises(NotImplementedError):
        read('x', Actions())

def test_custom_actions_subclass():
    class Names(DatumActions):
        def make_symbol(self, name, position=None):
            return name.upper()
    assert read('(a b)', Names())[0].car == 'A'

def test_to_number():
    assert to_number(descriptor(whole=3)) == 3
    assert to_number(descriptor(whole=3, sign=-1)) == -3
    assert to_number(descriptor(numerator=6, denominator=4)) == Fraction(3, 2)
    assert to_number(descriptor(whole=1, fraction='25')) == 1.25
    assert to_number(descriptor(whole=1, fraction='25', exactness='exact')) == Fraction(5, 4)
    assert to_number(descriptor(whole=5, exponent=-1, exactness='exact')) == Fraction(1, 2)
    assert to_number(descriptor(whole=2, exactness='inexact')) == 2.0

def test_to_number_overflow_is_infinite():
    assert to_number(descriptor(whole=1, exponent=400)) == float('inf')

def test_to_number_rejects():
    with pytest.raises(NumericFormatError):
        to_number(descriptor(numerator=1, denominator=0))
    with pytest.raises(NumericFormatError):
        to_number(descriptor(special='nan', exactness='exact'))

def test_to_number_bounds_exact_exponents():
    assert to_number(descriptor(whole=1, exponent=10000, exactness='exact')) == 10 ** 10000
    with pytest.raises(NumericFormatError):
        to_number(descriptor(whole=1, exponent=10 ** 9, exactness='exact'))
    with pytest.raises(NumericFormatError):
        to_number(descriptor(whole=1, exponent=-10 ** 9, exactness='exact'))


class Spy(DatumActions):
    def __init__(self):
        self.seen = []

    def construct(self, rule, **fields):
        self.seen.append((rule, fields['position']))
        return super(Spy, self).construct(rule, **fields)

def test_actions_receive_positions():
    spy = Spy()
    parse('(f x)', spy)
    assert spy.seen == [
        ('identifier', Position(None, 1, 1, 2)),
        ('identifier', Position(None, 3, 1, 4)),
        ('call', Position(None, 0, 1, 1))
        ]

def test_positions_past_atmosphere():
    spy = Spy()
    parse('(define x 1) ; one\n  (f x)', spy, filename='prog.scm')
    [call] = [p for rule, p in spy.seen if rule == 'call']
    assert call == Position('prog.scm', 21, 2, 3)
    assert spy.seen[-2] == ('identifier', Position('prog.scm', 24, 2, 6))

def test_datum_positions():
    spy = Spy()
    read("(a\n 'b)", spy)
    assert spy.seen[0] == ('symbol', Position(None, 1, 1, 2))
    assert ('symbol', Position(None, 5, 2, 3)) in spy.seen
    assert spy.seen[-1] == ('list', Position(None, 0, 1, 1))

def test_table_actions_receive_positions():
    calls, table = recorder()
    positions = []
    table['symbol'] = lambda name, position: positions.append(position)
    read('  x', table)
    assert positions == [Position(None, 2, 1, 3)]
