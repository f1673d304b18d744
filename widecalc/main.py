import sys
from typing import List

from pyparsing import ParseException

from widecalc.calculator import Calculator, CalculationError
from wideword.formatter import Formatter
from wideword.logic import Number128


def evaluate(statements: List[str], signed: bool) -> bool:
    calculator = Calculator(signed=signed)
    for text in statements:
        try:
            value = calculator.execute(text)
        except (CalculationError, ParseException) as e:
            print(f"Error: {e}")
            return False
        print(calculator.format(value))
    return True


def run_repl(signed: bool):
    calculator = Calculator(signed=signed)
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not line.strip():
            continue
        try:
            for value in calculator.iter_program(line):
                print(calculator.format(value))
        except (CalculationError, ParseException) as e:
            print(f"Error: {e}")


def half_word(text: str) -> int:
    return int(text, 0)


def format_halves(low: int, high: int, signed: bool):
    value = Number128(low, high)
    Formatter().write(value, signed)
    print()


def main(argv=None):
    import argparse

    arg_parser = argparse.ArgumentParser(description="128-bit integer calculator")
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    eval_parser = subparsers.add_parser("eval", help="Evaluate statements and print each result")
    eval_parser.add_argument("statements", nargs="+", help="Statements such as 'x = 0xff' or 'x * 3'")
    eval_parser.add_argument("--signed", action="store_true", help="Print results as signed numbers")

    repl_parser = subparsers.add_parser("repl", help="Read statements from standard input until EOF")
    repl_parser.add_argument("--signed", action="store_true", help="Print results as signed numbers")

    format_parser = subparsers.add_parser("format", help="Print the decimal value of two 64-bit half-words")
    format_parser.add_argument("low", type=half_word, help="Low half-word (bits 0-63)")
    format_parser.add_argument("high", type=half_word, help="High half-word (bits 64-127)")
    format_parser.add_argument("--signed", action="store_true", help="Read the value as two's complement")

    args = arg_parser.parse_args(argv)

    if args.command == "eval":
        if not evaluate(args.statements, args.signed):
            sys.exit(1)
    elif args.command == "repl":
        run_repl(args.signed)
    elif args.command == "format":
        format_halves(args.low, args.high, args.signed)


if __name__ == '__main__':
    main()
