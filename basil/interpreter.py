"""Tree-walking interpreter for the Basil language.

The interpreter evaluates expressions to runtime values (``str``,
``float`` or ``bool``) and executes statements for their effects on the
global :class:`~basil.environment.Environment` and on standard
input/output.

BREAK and CONTINUE do not raise. ``execute`` returns ``None`` when a
statement completes normally and a :class:`~basil.errors.LoopSignal`
otherwise; the signal is handed back up through blocks and IF
statements until the nearest WHILE consumes it.
"""

from __future__ import annotations

import builtins
import math
import random
from typing import Optional

from .ast import (
    Binary, Block, Break, Continue, Expr, Grouping, If, Input, Let, Literal,
    Node, Print, Program, Rnd, Stmt, ToNum, ToStr, Unary, Variable, While,
)
from .environment import Environment
from .errors import BasilRuntimeError, BreakSignal, ContinueSignal, LoopSignal
from .parser import parse_program
from .values import Value, stringify, to_number, type_name

ARITHMETIC_OPS = ('-', '*', '/')
ORDERING_OPS = ('<', '>', '<=', '>=')
EQUALITY_OPS = ('==', '<>')
LOGICAL_OPS = ('and', 'or')


class Interpreter:
    """Executes a parsed Basil program."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 rng: Optional[random.Random] = None):
        self.global_env = Environment()
        self.rng = rng if rng is not None else random.Random()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        # Trace lines never go to stdout; nothing is written once closed.
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None):
        """Execute top-level statements in order.

        The first error aborts the rest of the program. A BREAK or
        CONTINUE that is not inside a WHILE is reported as an error.
        """
        if env is None:
            env = self.global_env
        self.debug(f"run: {len(program)} top-level statements")
        try:
            for stmt in program:
                signal = self.execute(stmt, env)
                if signal is not None:
                    raise BasilRuntimeError(
                        'LoopControlOutsideLoop',
                        f"{signal.keyword} used outside of a WHILE loop.",
                        signal.line,
                    )
        finally:
            self.close()

    # Statements
    def execute(self, stmt: Stmt, env: Environment) -> Optional[LoopSignal]:
        if self.debug_level >= 4:
            self.debug(f"line {stmt.line}: {type(stmt).__name__}")
        if isinstance(stmt, Print):
            print(stringify(self.evaluate(stmt.expr, env)))
            return None
        if isinstance(stmt, Input):
            prompt = stringify(self.evaluate(stmt.prompt, env))
            try:
                text = builtins.input(prompt)
            except EOFError:
                text = ''
            self.assign(env, stmt.target, text)
            return None
        if isinstance(stmt, Let):
            self.assign(env, stmt.target, self.evaluate(stmt.expr, env))
            return None
        if isinstance(stmt, ToNum):
            value = env.get(stmt.source, stmt.line)
            try:
                number = to_number(value)
            except ValueError:
                raise BasilRuntimeError('InvalidNumberFormat', 'InvalidNumberFormat', stmt.line)
            self.assign(env, stmt.dest or stmt.source, number)
            return None
        if isinstance(stmt, ToStr):
            value = env.get(stmt.source, stmt.line)
            self.assign(env, stmt.dest or stmt.source, stringify(value))
            return None
        if isinstance(stmt, Rnd):
            self.assign(env, stmt.dest, self.random_between(stmt, env))
            return None
        if isinstance(stmt, Block):
            for inner in stmt.statements:
                signal = self.execute(inner, env)
                if signal is not None:
                    return signal
            return None
        if isinstance(stmt, If):
            cond = self.condition(stmt, env)
            if self.debug_level >= 3:
                self.debug(f"line {stmt.line}: IF condition -> {stringify(cond)}")
            if cond:
                return self.execute(stmt.then_branch, env)
            if stmt.else_branch is not None:
                return self.execute(stmt.else_branch, env)
            return None
        if isinstance(stmt, While):
            iteration = 0
            while self.condition(stmt, env):
                iteration += 1
                if self.debug_level >= 3:
                    self.debug(f"line {stmt.line}: WHILE iteration {iteration}")
                signal = self.execute(stmt.body, env)
                if isinstance(signal, BreakSignal):
                    break
            return None
        if isinstance(stmt, Break):
            return BreakSignal(stmt.line)
        if isinstance(stmt, Continue):
            return ContinueSignal(stmt.line)
        raise NotImplementedError(f"execute: unexpected node type {type(stmt).__name__}")

    def assign(self, env: Environment, name: str, value: Value):
        env.set(name, value)
        if self.debug_level >= 2:
            self.debug(f"set {name}: {type_name(value)} = {value!r}")

    def condition(self, stmt: Node, env: Environment) -> bool:
        cond = self.evaluate(stmt.condition, env)
        if not isinstance(cond, bool):
            raise BasilRuntimeError('ConditionNotBoolean', 'ConditionNotBoolean', stmt.line)
        return cond

    def random_between(self, stmt: Rnd, env: Environment) -> float:
        low = self.evaluate(stmt.low, env)
        high = self.evaluate(stmt.high, env)
        if not isinstance(low, float) or not isinstance(high, float):
            raise BasilRuntimeError(
                'TypeError',
                f"'RND' is not allowed on '{type_name(low)}', '{type_name(high)}' types.",
                stmt.line,
            )
        if not (math.isfinite(low) and math.isfinite(high)):
            raise BasilRuntimeError('InvalidRange', "RND bounds must be finite numbers.", stmt.line)
        lower = math.ceil(low)
        span = math.floor(high) - lower
        if span <= 0:
            raise BasilRuntimeError(
                'InvalidRange',
                f"RND range from {stringify(low)} to {stringify(high)} contains no values.",
                stmt.line,
            )
        return float(self.rng.randrange(span) + lower)

    # Expressions
    def evaluate(self, expr: Expr, env: Environment) -> Value:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.inner, env)
        if isinstance(expr, Variable):
            return env.get(expr.name, expr.line)
        if isinstance(expr, Unary):
            operand = self.evaluate(expr.operand, env)
            if expr.op == '-' and isinstance(operand, float):
                return -operand
            if expr.op == 'not' and isinstance(operand, bool):
                return not operand
            raise BasilRuntimeError(
                'TypeError',
                f"Unary '{expr.op.upper()}' is not allowed on '{type_name(operand)}' type.",
                expr.line,
            )
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            return self.apply_binary_op(expr, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr).__name__}")

    def apply_binary_op(self, expr: Binary, a: Value, b: Value) -> Value:
        op = expr.op
        numbers = isinstance(a, float) and isinstance(b, float)
        if op == '+':
            if numbers:
                return a + b
            if isinstance(a, str) or isinstance(b, str):
                return stringify(a) + stringify(b)
        elif op in ARITHMETIC_OPS and numbers:
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if b == 0:
                raise BasilRuntimeError('DivisionByZero', 'DivisionByZero', expr.line)
            return a / b
        elif op in ORDERING_OPS and numbers:
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            return a >= b
        elif op in EQUALITY_OPS and (numbers or (isinstance(a, str) and isinstance(b, str))):
            return a == b if op == '==' else a != b
        elif op in LOGICAL_OPS and isinstance(a, bool) and isinstance(b, bool):
            return (a and b) if op == 'and' else (a or b)
        shown = op.upper()
        raise BasilRuntimeError(
            'TypeError',
            f"Binary '{shown}' is not allowed on '{type_name(a)}' {shown} '{type_name(b)}' types.",
            expr.line,
        )


def run_program(source: str, debug_level: int = 0, rng: Optional[random.Random] = None) -> Environment:
    """Parse and run Basil source code, returning the final variable table."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, rng=rng)
    interpreter.run(program)
    return interpreter.global_env
