import re

__all__ = [
    'delimiter',
    'initial',
    'subsequent',
    'identifier',
    'intraline_whitespace',
    'line_ending',
    'whitespace',
    'comment',
    'atmosphere',
    'keyword',
    'reserved_kwds',
    'define_kwd',
    'define_syntax_kwd',
    'lambda_kwd',
    'quote_kwd',
    'begin_kwd',
    'syntax_rules_kwd',
    'abbreviations',
    'char_names'
    ]


################################################################################
## Keywords
################################################################################

define_kwd = 'define'
define_syntax_kwd = 'define-syntax'
lambda_kwd = 'lambda'
quote_kwd = 'quote'
begin_kwd = 'begin'
syntax_rules_kwd = 'syntax-rules'

# never matched as an identifier in expression position
reserved_kwds = [
    define_syntax_kwd,
    define_kwd,
    lambda_kwd,
    quote_kwd,
    begin_kwd,
    syntax_rules_kwd
    ]

abbreviations = {
    "'": 'quote',
    '`': 'quasiquote',
    ',': 'unquote',
    ',@': 'unquote-splicing'
    }

char_names = {
    'alarm': '\x07',
    'backspace': '\x08',
    'delete': '\x7f',
    'escape': '\x1b',
    'newline': '\n',
    'null': '\x00',
    'return': '\r',
    'space': ' ',
    'tab': '\t'
    }


################################################################################
## Regular expression fragments for the lexical classes
################################################################################

# lookahead only, so the delimiter is left for the next token
delimiter = r'(?=[\s|()";]|$)'

letter = r'[^\W\d_]'
special_initial = r'[!$%&*/:<=>?^_~]'
initial = r'(?:{0}|{1})'.format(letter, special_initial)
explicit_sign = r'[+-]'
special_subsequent = r'[+\-.@]'
subsequent = r'(?:{0}|[0-9]|{1})'.format(initial, special_subsequent)
sign_subsequent = r'(?:{0}|{1}|@)'.format(initial, explicit_sign)
dot_subsequent = r'(?:{0}|\.)'.format(sign_subsequent)

intraline_whitespace = r'[ \t]'
line_ending = r'(?:\r\n|\r|\n)'
inline_hex_escape = r'\\x[0-9a-fA-F]+;'
mnemonic_escape = r'\\[abtnr]'

symbol_element = r'(?:[^|\\]|{0}|{1}|\\\||\\\\)'.format(inline_hex_escape, mnemonic_escape)

peculiar_identifier = (
    r'(?:{sign}(?:{sign_sub}{sub}*|\.{dot_sub}{sub}*)?'
    r'|\.{dot_sub}{sub}*)'
    ).format(
        sign=explicit_sign,
        sign_sub=sign_subsequent,
        dot_sub=dot_subsequent,
        sub=subsequent
        )

identifier = r'(?:{0}{1}*|\|{2}*\||{3})'.format(
    initial,
    subsequent,
    symbol_element,
    peculiar_identifier
    )


################################################################################
## Atmosphere skipped between tokens
################################################################################

whitespace = re.compile(r'\s+')
comment = re.compile(r';[^\n]*|#\|(?:[^|]|\|(?!#))*\|#')
atmosphere = re.compile(r'(?:\s+|;[^\n]*|#\|(?:[^|]|\|(?!#))*\|#)*')


def keyword(kwd):
    """A terminal matching kwd only when it stands alone."""
    return re.compile(re.escape(kwd) + delimiter)
