"""
Generic value conditions.

A condition is one of:
  - a list/tuple/set: the value must be one of its items
  - a dict of operators: every operator must hold
      {'gte': 100, 'lt': 500}, {'ne': None}, {'contains': 'coffee'}
  - anything else: the value must equal it
"""
import operator
from typing import Any


def _contains(value, needle) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and isinstance(needle, str):
        return needle.upper() in value.upper()
    return needle in value


def _ordered(op):
    def check(value, bound) -> bool:
        if value is None or bound is None:
            return False
        return op(value, bound)
    return check


OPERATORS = {
    'eq': operator.eq,
    'ne': operator.ne,
    'gt': _ordered(operator.gt),
    'gte': _ordered(operator.ge),
    'lt': _ordered(operator.lt),
    'lte': _ordered(operator.le),
    'one_of': lambda value, options: value in options,
    'contains': _contains,
}


def check_value(value: Any, condition: Any) -> bool:
    if isinstance(condition, (list, tuple, set, frozenset)):
        return value in condition

    if isinstance(condition, dict):
        for op_name, operand in condition.items():
            op = OPERATORS.get(op_name)
            if op is None:
                raise ValueError(f"Unknown condition operator: {op_name}")
            if not op(value, operand):
                return False
        return True

    return value == condition
