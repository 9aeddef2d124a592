import pytest

from schemepeg import (
    DuplicateLabelError,
    SchemeSyntaxError,
    UnresolvedLabelError,
    UnterminatedLiteralError,
    read
    )
from schemepeg.parser.basetype import Number, Symbol as SymbolToken
from schemepeg.parser.datum import Datum, DottedList, ProperList
from schemepeg.sexp import equal, is_cyclic, write
from schemepeg.types import Char, Pair, Symbol, Vector, nil, to_list

def datum(s):
    [d] = read(s)
    return d

def syms(*names):
    return [Symbol(n) for n in names]

def test_proper_list():
    assert to_list(datum('(a b c)')) == syms('a', 'b', 'c')
    assert to_list(datum('( a  (b) )'))[0] is Symbol('a')

def test_empty_list_is_not_a_pair():
    assert datum('()') is nil
    assert datum('( )') is nil

def test_dotted_pair():
    p = datum('(a . b)')
    assert isinstance(p, Pair)
    assert p.car is Symbol('a')
    assert p.cdr is Symbol('b')

def test_improper_list():
    p = datum('(1 2 . 3)')
    assert p.car == 1
    assert p.cdr.car == 2
    assert p.cdr.cdr == 3

def test_dot_needs_a_leading_item():
    with pytest.raises(SchemeSyntaxError):
        read('(. a)')

def test_vector():
    v = datum('#(1 "a" #\\b ())')
    assert isinstance(v, Vector)
    assert v == [1, 'a', Char('b'), nil]
    assert datum('#()') == []

def test_bytevector():
    assert datum('#u8(0 10 199 255)') == bytes([0, 10, 199, 255])
    assert datum('#u8()') == b''

def test_bytevector_rejects_out_of_range():
    for s in ['#u8(256)', '#u8(300)', '#u8(1000)', '#u8(007)']:
        with pytest.raises(SchemeSyntaxError):
            read(s)

def test_booleans():
    assert read('#t #f #true #false') == [True, False, True, False]

def test_characters():
    assert datum('#\\newline') == Char('\n')
    assert datum('#\\x41') == Char('A')
    assert datum('#\\a') == Char('a')
    assert datum('#\\x') == Char('x')
    assert datum('#\\space') == Char(' ')
    assert datum('#\\(') == Char('(')
    assert to_list(datum('(#\\) #\\tab)')) == [Char(')'), Char('\t')]

def test_strings():
    assert datum('"string"') == 'string'
    assert datum('""') == ''
    assert datum(r'"say \"hi\""') == 'say "hi"'
    assert datum(r'"tab\ttab\\"') == 'tab\ttab\\'
    assert datum(r'"\x41;bc"') == 'Abc'
    assert datum('"two\nlines"') == 'two\nlines'

def test_string_line_continuation():
    assert datum('"abc\\  \n   def"') == 'abcdef'
    assert datum('"abc\\\r\ndef"') == 'abcdef'

def test_symbols():
    assert datum('hello') is Symbol('hello')
    assert datum('->x') is Symbol('->x')
    assert datum('a.b') is Symbol('a.b')
    assert datum('set-car!') is Symbol('set-car!')
    assert datum('|hello world|') is Symbol('hello world')
    assert datum(r'|a\|b|') is Symbol('a|b')

def test_abbreviations():
    assert equal(datum("'x"), datum('(quote x)'))
    assert to_list(datum("'x")) == syms('quote', 'x')
    assert write(datum('`(a ,b ,@c)')) == '(quasiquote (a (unquote b) (unquote-splicing c)))'
    assert write(datum("''a")) == '(quote (quote a))'

def test_comments_are_skipped():
    assert read('a ; comment\n b #| block |# c') == syms('a', 'b', 'c')

def test_self_referential_label():
    p = datum('#0=(1 . #0#)')
    assert p.car == 1
    assert p.cdr is p
    assert is_cyclic(p)

def test_label_inside_vector():
    v = datum('#1=#(1 #1#)')
    assert v[1] is v
    assert is_cyclic(v)

def test_shared_label_is_not_copied():
    lst = to_list(datum('(#0=(x) #0#)'))
    assert lst[0] is lst[1]
    assert not is_cyclic(datum('(#0=(x) #0#)'))

def test_nested_labels():
    p = datum('#0=(a #1=(b . #0#) . #1#)')
    inner = p.cdr.car
    assert inner.cdr is p
    assert p.cdr.cdr is inner

def test_reference_before_definition():
    with pytest.raises(UnresolvedLabelError):
        read('(#0# #0=a)')

def test_label_referring_only_to_itself():
    with pytest.raises(UnresolvedLabelError):
        read('#0=#0#')

def test_duplicate_label():
    with pytest.raises(DuplicateLabelError):
        read('(#0=a #0=b)')

def test_labels_are_scoped_to_one_datum():
    assert len(read('#0=(a) #1=(b)')) == 2
    with pytest.raises(UnresolvedLabelError):
        read('#0=(a) #0#')

def test_missing_close_paren():
    with pytest.raises(SchemeSyntaxError) as exc:
        read('(a b')
    assert exc.value.offset == 4
    assert isinstance(exc.value, UnterminatedLiteralError)

def test_unterminated_literals():
    for s in ['"abc', '#(1 2', '#u8(1', '(a (b c)']:
        with pytest.raises(UnterminatedLiteralError):
            read(s)

def test_numbers_come_before_symbols():
    assert Datum.index(Number) < Datum.index(SymbolToken)
    assert Datum.index(ProperList) < Datum.index(DottedList)
    assert datum('+inf.0') == float('inf')
    assert datum('-5') == -5
