from typing import Dict, Iterator, Optional

from widecalc.parser import Parser
from wideword.conversions import from_bool
from wideword.formatter import Formatter
from wideword.logic import (
    Number128, ONE, SIGNED_MAX, SIGNED_MIN, UNSIGNED_MAX, ZERO,
    logical_and, logical_not, logical_or, shift_count,
)

CONSTANTS: Dict[str, Number128] = {
    'ZERO': ZERO,
    'ONE': ONE,
    'UMAX': UNSIGNED_MAX,
    'MAX': SIGNED_MAX,
    'MIN': SIGNED_MIN,
}


class CalculationError(Exception):
    """Base class for calculation errors."""
    pass


class UndefinedVariableError(CalculationError):
    """Raised when a variable is read before it is assigned."""
    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(f"Undefined variable: {var_name}")


class ConstantAssignmentError(CalculationError):
    """Raised when a statement tries to change a named constant."""
    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(f"Cannot assign to constant: {var_name}")


class DivisionByZeroError(CalculationError):
    """Raised instead of letting the division engine end the process."""
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Division by zero in '{op}'")


class Calculator:
    def __init__(self, signed: bool = False):
        self.signed = signed
        self.parser = Parser()
        self.formatter = Formatter()
        self.variables: Dict[str, Number128] = {}

    def lookup(self, name: str) -> Number128:
        if name in CONSTANTS:
            return CONSTANTS[name]
        if name not in self.variables:
            raise UndefinedVariableError(name)
        return self.variables[name]

    def check_divisor(self, divisor: Number128, op: str):
        if not divisor:
            raise DivisionByZeroError(op)

    def evaluate(self, node: dict) -> Number128:
        node_type = node['type']
        if node_type == 'integer':
            return node['value'].copy()
        elif node_type == 'identifier':
            return self.lookup(node['value']).copy()
        elif node_type == 'un_expr':
            inner = self.evaluate(node['inner'])
            op = node['op']
            if op == '~':
                return ~inner
            elif op == '-':
                return -inner
            elif op == '+':
                return inner
            elif op == '!':
                return from_bool(logical_not(inner))
        elif node_type == 'bin_expr':
            return self.evaluate_binary(node)
        raise ValueError(f"Unknown expression type: {node_type}")

    def evaluate_binary(self, node: dict) -> Number128:
        op = node['op']
        left = self.evaluate(node['left'])
        # Short circuit like the native operators.
        if op == '&&':
            return from_bool(bool(left) and logical_and(left, self.evaluate(node['right'])))
        if op == '||':
            return from_bool(bool(left) or logical_or(left, self.evaluate(node['right'])))
        right = self.evaluate(node['right'])
        if op == '+':
            return left + right
        elif op == '-':
            return left - right
        elif op == '*':
            return left * right
        elif op == '/':
            self.check_divisor(right, op)
            return left // right
        elif op == '%':
            self.check_divisor(right, op)
            return left % right
        elif op == '&':
            return left & right
        elif op == '|':
            return left | right
        elif op == '^':
            return left ^ right
        elif op == '<<':
            return left << self.shift_amount(right)
        elif op == '>>':
            return left >> self.shift_amount(right)
        elif op == '==':
            return from_bool(left == right)
        elif op == '!=':
            return from_bool(left != right)
        elif op == '<':
            return from_bool(left < right)
        elif op == '<=':
            return from_bool(left <= right)
        elif op == '>':
            return from_bool(left > right)
        elif op == '>=':
            return from_bool(left >= right)
        raise ValueError(f"Unknown operator: {op}")

    @staticmethod
    def shift_amount(value: Number128) -> int:
        # Anything past 128 zeroes the value anyway.
        return shift_count(value)

    def assign(self, node: dict) -> Number128:
        name = node['target']
        if name in CONSTANTS:
            raise ConstantAssignmentError(name)
        value = self.evaluate(node['value'])
        op = node['op']
        if op == '=':
            self.variables[name] = value
            return value.copy()
        target = self.lookup(name)
        if op == '+=':
            target.add_assign(value)
        elif op == '-=':
            target.subtract_assign(value)
        elif op == '*=':
            target.multiply_assign(value)
        elif op == '/=':
            self.check_divisor(value, op)
            target.divide_assign(value)
        elif op == '%=':
            self.check_divisor(value, op)
            target.modulus_assign(value)
        elif op == '&=':
            target.bitwise_and_assign(value)
        elif op == '|=':
            target.bitwise_or_assign(value)
        elif op == '^=':
            target.bitwise_xor_assign(value)
        elif op == '<<=':
            target.left_shift_assign(self.shift_amount(value))
        elif op == '>>=':
            target.right_shift_assign(self.shift_amount(value))
        else:
            raise ValueError(f"Unknown assignment operator: {op}")
        return target.copy()

    def step(self, node: dict) -> Number128:
        name = node['target']
        if name in CONSTANTS:
            raise ConstantAssignmentError(name)
        target = self.lookup(name)
        if node['op'] == '++':
            res = target.pre_increment() if node['position'] == 'pre' else target.post_increment()
        else:
            res = target.pre_decrement() if node['position'] == 'pre' else target.post_decrement()
        return res.copy()

    def run_statement(self, stmt: dict) -> Number128:
        stmt_type = stmt['type']
        if stmt_type == 'assignment':
            return self.assign(stmt)
        elif stmt_type == 'step':
            return self.step(stmt)
        elif stmt_type == 'expr_stmt':
            return self.evaluate(stmt['value'])
        raise ValueError(f"Unknown statement type: {stmt_type}")

    def execute(self, text: str) -> Number128:
        return self.run_statement(self.parser.parse_statement(text))

    def iter_program(self, text: str) -> Iterator[Number128]:
        """Parses the whole text, then runs it one statement at a time, yielding each result."""
        for stmt in self.parser.parse_program(text):
            yield self.run_statement(stmt)

    def execute_program(self, text: str) -> list:
        return list(self.iter_program(text))

    def format(self, value: Number128, signed: Optional[bool] = None) -> str:
        return self.formatter.format(value, self.signed if signed is None else signed)
