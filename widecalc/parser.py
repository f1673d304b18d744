from pyparsing import (
    DelimitedList, Literal, OpAssoc, Opt, ParserElement, Regex, Suppress, Word,
    alphanums, alphas, infix_notation, one_of,
)

from wideword.logic import Number128

ParserElement.set_default_whitespace_chars(' \t\r')
ParserElement.enable_packrat()

LN, SEMI = map(Suppress, "\n;")

RADIX_PREFIXES = {'0x': 16, '0o': 8, '0b': 2}


def literal_to_number(text: str) -> Number128:
    """Converts an integer literal to a Number128, wrapping anything past 128 bits."""
    text = text.replace('_', '')
    base = RADIX_PREFIXES.get(text[:2].lower(), 10)
    if base != 10:
        text = text[2:]
    radix = Number128(base)
    value = Number128()
    for ch in text:
        value = value * radix + int(ch, base)
    return value


class Parser:
    """
    Statements over 128-bit values.

    A statement is an assignment (`x = e`, `x += e`, ... `x >>= e`), a pre or
    post increment/decrement of a variable, or a bare expression using the C
    operators and precedence. Results are dict nodes.
    """

    def __init__(self):
        integer = Regex(r'0[xX][0-9a-fA-F][0-9a-fA-F_]*'
                        r'|0[oO][0-7][0-7_]*'
                        r'|0[bB][01][01_]*'
                        r'|\d[\d_]*')
        integer.set_parse_action(self.make_integer)
        identifier = Word(alphas + '_', alphanums + '_')
        identifier.set_parse_action(self.make_identifier)
        operand = integer | identifier

        expr = infix_notation(operand, [
            (one_of("~ ! - +"), 1, OpAssoc.RIGHT, self.enrich_unary_expr),
            (one_of("* / %"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("+ -"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("<< >>"), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("< <= > >="), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (one_of("== !="), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Regex(r'&(?!&)'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Literal('^'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Regex(r'\|(?!\|)'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Literal('&&'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
            (Literal('||'), 2, OpAssoc.LEFT, self.enrich_binary_expr),
        ])

        name = Word(alphas + '_', alphanums + '_')
        step = one_of("++ --")
        pre_step = step + name
        pre_step.set_parse_action(self.enrich_pre_step)
        post_step = name + step
        post_step.set_parse_action(self.enrich_post_step)
        assign_op = Regex(r'(<<|>>|[-+*/%&|^])?=(?!=)')
        assignment = name + assign_op + expr
        assignment.set_parse_action(self.enrich_assignment)
        expr_stmt = expr.copy()
        expr_stmt.set_parse_action(self.enrich_expr_stmt)

        self.statement = pre_step | post_step | assignment | expr_stmt
        separator = (LN | SEMI)[1, ...]
        self.program = Opt(separator) + Opt(DelimitedList(self.statement, delim=separator)) + Opt(separator)

    def make_integer(self, tokens):
        return {'type': 'integer', 'value': literal_to_number(tokens[0]), 'text': str(tokens[0])}

    def make_identifier(self, tokens):
        return {'type': 'identifier', 'value': str(tokens[0])}

    def enrich_unary_expr(self, tokens):
        op, inner = list(tokens[0])
        return {
            'type': 'un_expr',
            'op': str(op),
            'inner': inner
        }

    def enrich_binary_expr(self, tokens):
        # Left-associative chains come in flat: a op b op c ...
        token_list = list(tokens[0])
        left = token_list[0]
        for i in range(1, len(token_list), 2):
            left = {
                'type': 'bin_expr',
                'left': left,
                'op': str(token_list[i]),
                'right': token_list[i + 1]
            }
        return left

    def enrich_pre_step(self, tokens):
        return {'type': 'step', 'op': str(tokens[0]), 'position': 'pre', 'target': str(tokens[1])}

    def enrich_post_step(self, tokens):
        return {'type': 'step', 'op': str(tokens[1]), 'position': 'post', 'target': str(tokens[0])}

    def enrich_assignment(self, tokens):
        return {
            'type': 'assignment',
            'target': str(tokens[0]),
            'op': str(tokens[1]),
            'value': tokens[2]
        }

    def enrich_expr_stmt(self, tokens):
        return {'type': 'expr_stmt', 'value': tokens[0]}

    def parse_statement(self, text: str) -> dict:
        return self.statement.parse_string(text, parse_all=True)[0]

    def parse_program(self, text: str) -> list:
        return list(self.program.parse_string(text, parse_all=True))


def parse_statement(text: str) -> dict:
    """Convenience function to parse a single statement."""
    return Parser().parse_statement(text)


def parse_program(text: str) -> list:
    """Convenience function to parse statements separated by newlines or semicolons."""
    return Parser().parse_program(text)
