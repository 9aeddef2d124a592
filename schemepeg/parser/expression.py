import re

from pypeg2 import attr, maybe_some, optional, some

from schemepeg.grammar import (
    begin_kwd,
    define_kwd,
    define_syntax_kwd,
    delimiter,
    identifier,
    keyword,
    lambda_kwd,
    quote_kwd,
    reserved_kwds,
    syntax_rules_kwd
    )

from .basetype import Boolean, Character, Number, String, unescape
from .datum import Abbreviation, Bytevector, Datum, Vector, as_list

__all__ = [
    'Identifier',
    'Formals',
    'RestFormal',
    'Body',
    'LambdaExpression',
    'Sequence',
    'QuoteForm',
    'QuoteAbbreviation',
    'ProcedureCall',
    'SimpleDefinition',
    'FunctionDefinition',
    'SyntaxRule',
    'SyntaxDefinition',
    'Expression',
    'CommandOrDefinition',
    'SelfEvaluating',
    'Literal',
    'build_expression'
    ]


class Form(object):
    """A grammar node standing for a syntactic form rather than a datum."""


def build_expression(node, ctx):
    """Forms build themselves; bare data become literals."""
    if isinstance(node, Form):
        return node.build(ctx)
    return ctx.construct('literal', node, datum=node.build(ctx))


class Identifier(Form, str):
    grammar = re.compile(
        '(?!(?:{0}){1}){2}{1}'.format(
            '|'.join(re.escape(kwd) for kwd in reserved_kwds),
            delimiter,
            identifier
            )
        )

    def build(self, ctx):
        name = unescape(self[1:-1]) if self.startswith('|') else str(self)
        return ctx.construct('identifier', self, name=name)

# For every list left empty here, there
# should be an extend further down
Expression = []

CommandOrDefinition = []

class RestFormal(object):
    grammar = '.', attr('name', Identifier)

class Formals(object):
    grammar = [
        ('(', attr('fixed', maybe_some(Identifier)), attr('rest', optional(RestFormal)), ')'),
        attr('rest', Identifier)
        ]

    def build(self, ctx):
        fixed = [v.build(ctx) for v in as_list(getattr(self, 'fixed', None))]
        rest = as_list(getattr(self, 'rest', None))
        if not rest:
            return fixed, None
        rest = rest[0]
        if isinstance(rest, RestFormal):
            rest = rest.name
        return fixed, rest.build(ctx)

class Body(object):
    grammar = attr('forms', some(CommandOrDefinition))

    def build(self, ctx):
        return [build_expression(f, ctx) for f in as_list(self.forms)]

class LambdaExpression(Form):
    grammar = (
        '(', attr('keyword', keyword(lambda_kwd)),
        attr('formals', Formals), attr('body', Body), ')'
        )

    def build(self, ctx):
        fixed, rest = self.formals.build(ctx)
        return ctx.construct('lambda', self, formals=fixed, rest=rest, body=self.body.build(ctx))

class Sequence(Form):
    grammar = '(', attr('keyword', keyword(begin_kwd)), attr('body', Body), ')'

    def build(self, ctx):
        return ctx.construct('sequence', self, forms=self.body.build(ctx))

class QuoteForm(Form):
    grammar = '(', attr('keyword', keyword(quote_kwd)), attr('datum', Datum), ')'

    def build(self, ctx):
        return ctx.construct('quotation', self, datum=self.datum.build(ctx))

class QuoteAbbreviation(Form):
    grammar = "'", attr('datum', Datum)

    def build(self, ctx):
        return ctx.construct('quotation', self, datum=self.datum.build(ctx))

class ProcedureCall(Form):
    grammar = '(', attr('operator', Expression), attr('operands', maybe_some(Expression)), ')'

    def build(self, ctx):
        return ctx.construct(
            'call', self,
            operator=build_expression(self.operator, ctx),
            operands=[build_expression(e, ctx) for e in as_list(self.operands)]
            )

class SimpleDefinition(Form):
    grammar = (
        '(', attr('keyword', keyword(define_kwd)),
        attr('name', Identifier), attr('value', Expression), ')'
        )

    def build(self, ctx):
        return ctx.construct(
            'simple_definition', self,
            name=self.name.build(ctx),
            value=build_expression(self.value, ctx)
            )

class FunctionDefinition(Form):
    grammar = (
        '(', attr('keyword', keyword(define_kwd)),
        '(', attr('name', Identifier),
        attr('fixed', maybe_some(Identifier)), attr('rest', optional(RestFormal)), ')',
        attr('body', Body), ')'
        )

    def build(self, ctx):
        rest = [r.name.build(ctx) for r in as_list(self.rest)]
        return ctx.construct(
            'function_definition', self,
            name=self.name.build(ctx),
            formals=[v.build(ctx) for v in as_list(self.fixed)],
            rest=rest[0] if rest else None,
            body=self.body.build(ctx)
            )

# syntax-rules patterns and templates are restricted to these
PatternDatum = [String, Character, Boolean, Number]

class SyntaxRule(object):
    grammar = '(', attr('pattern', PatternDatum), attr('template', PatternDatum), ')'

    def build(self, ctx):
        return ctx.construct(
            'syntax_rule', self,
            pattern=self.pattern.build(ctx),
            template=self.template.build(ctx)
            )

class SyntaxDefinition(Form):
    grammar = (
        '(', attr('keyword', keyword(define_syntax_kwd)), attr('name', Identifier),
        '(', attr('transformer', keyword(syntax_rules_kwd)),
        '(', attr('literals', maybe_some(Identifier)), ')',
        attr('rules', maybe_some(SyntaxRule)), ')', ')'
        )

    def build(self, ctx):
        return ctx.construct(
            'syntax_definition', self,
            name=self.name.build(ctx),
            literals=[v.build(ctx) for v in as_list(self.literals)],
            rules=[r.build(ctx) for r in as_list(self.rules)]
            )

SelfEvaluating = [Boolean, Number, Vector, Character, String, Bytevector]

# quasiquote, unquote and unquote-splicing stay literal data;
# a bare quote never gets here since Expression tries it first
Literal = SelfEvaluating + [Abbreviation]

# Ordered choice takes the first success, so every fixed-keyword
# form comes before ProcedureCall.
Expression.extend([
    LambdaExpression,
    Sequence,
    QuoteForm,
    QuoteAbbreviation,
    ProcedureCall
    ] + Literal + [
    Identifier
    ])

CommandOrDefinition.extend([
    SimpleDefinition,
    FunctionDefinition,
    SyntaxDefinition,
    Expression
    ])
