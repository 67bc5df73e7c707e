"""
Rule primitives shared by the recommendation engine and the farming advisory.

A ``Rule`` pairs a predicate with an action. A ``RuleGroup`` tries its rules
in order and keeps the first match, which is how "if / else if" chains are
expressed. Evaluating a sequence of groups yields at most one result per
group, in group order.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[C, T]):
    name: str
    when: Callable[[C], bool]
    then: Callable[[C], T]

    def apply(self, context: C) -> Optional[T]:
        if self.when(context):
            return self.then(context)
        return None


@dataclass(frozen=True)
class RuleGroup(Generic[C, T]):
    name: str
    rules: Tuple[Rule[C, T], ...]

    def evaluate(self, context: C) -> Optional[T]:
        for rule in self.rules:
            if rule.when(context):
                return rule.then(context)
        return None


def evaluate_groups(groups: Iterable[RuleGroup[C, T]], context: C) -> List[T]:
    results = []
    for group in groups:
        result = group.evaluate(context)
        if result is not None:
            results.append(result)
    return results


def evaluate_all(rules: Iterable[Rule[C, T]], context: C) -> List[T]:
    """Apply every rule independently and keep each match."""
    results = []
    for rule in rules:
        result = rule.apply(context)
        if result is not None:
            results.append(result)
    return results


def constant(value: T) -> Callable[[object], T]:
    return lambda _context: value


def always(_context: object) -> bool:
    return True
