# -------------------------------------
# rule sets and symbols
# -------------------------------------
"""
Rule sets hold the alternatives for one level of a symbol's rule stack.

- LiteralRuleSet: ordered alternatives picked with a falloff-weighted draw
      index = floor(random() ** falloff * n)
  falloff 1 is uniform, > 1 favours earlier alternatives, < 1 later ones.
- ConditionalRuleSet: a condition rule is expanded to a key; the branch
  stored under that key is used, else the default alternatives.

Symbols own a stack of rule sets. Selection reads the top; push and pop
change it; clear_state() goes back to the declared base rules.
"""
from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from . import grammar_state as state

if TYPE_CHECKING:
    from .grammar import Grammar
    from .node import ExpansionNode, NodeRef


# ============================================================
# Rule sets
# ============================================================

class RuleSet(ABC):
    @abstractmethod
    def select_rule(self, grammar: Grammar, errors: List[str], depth: int = 0) -> Optional[str]:
        ...

    def clear_state(self) -> None:
        pass

    @abstractmethod
    def alternatives(self) -> Optional[List[str]]:
        ...

    @abstractmethod
    def to_data(self) -> Any:
        ...


class LiteralRuleSet(RuleSet):
    def __init__(self, rules: List[str], falloff: float = state.DEFAULT_FALLOFF):
        if float(falloff) < 0:
            raise ValueError(f"falloff must be >= 0, got {falloff!r}")
        self.rules = list(rules)
        self.falloff = float(falloff)
        self.uses = [0] * len(self.rules)

    def __repr__(self) -> str:
        return f"LiteralRuleSet({self.rules!r})"

    def select_rule(self, grammar: Grammar, errors: List[str], depth: int = 0) -> Optional[str]:
        if not self.rules:
            errors.append(f"No default rules defined for {self!r}")
            return None
        n = len(self.rules)
        index = min(math.floor(grammar.rng.random() ** self.falloff * n), n - 1)
        self.uses[index] += 1
        return self.rules[index]

    def clear_state(self) -> None:
        self.uses = [0] * len(self.rules)

    def alternatives(self) -> List[str]:
        return list(self.rules)

    def to_data(self) -> Any:
        if self.falloff != state.DEFAULT_FALLOFF:
            return {"rules": list(self.rules), "falloff": self.falloff}
        return list(self.rules)


class ConditionalRuleSet(RuleSet):
    def __init__(
        self,
        condition: str,
        branches: Dict[str, RuleSet],
        default: Optional[LiteralRuleSet] = None,
    ):
        self.condition = condition
        self.branches = dict(branches)
        self.default = default

    def __repr__(self) -> str:
        return f"ConditionalRuleSet({self.condition!r}, {sorted(self.branches)!r})"

    def select_rule(self, grammar: Grammar, errors: List[str], depth: int = 0) -> Optional[str]:
        value = grammar.expand(self.condition, allow_escape_chars=True, depth=depth)
        errors.extend(value.errors)
        branch = self.branches.get(str(value.finished_text))
        if branch is not None:
            rule = branch.select_rule(grammar, errors, depth)
            if rule is not None:
                return rule

        if self.default is not None:
            return self.default.select_rule(grammar, errors, depth)

        errors.append(f"No default rules defined for {self!r}")
        return None

    def clear_state(self) -> None:
        for branch in self.branches.values():
            branch.clear_state()
        if self.default is not None:
            self.default.clear_state()

    def alternatives(self) -> Optional[List[str]]:
        return None if self.default is None else self.default.alternatives()

    def to_data(self) -> Any:
        d: Dict[str, Any] = {
            "condition": self.condition,
            "values": {k: v.to_data() for k, v in self.branches.items()},
        }
        if self.default is not None:
            d["default"] = self.default.to_data()
        return d


def make_ruleset(raw: Any) -> RuleSet:
    """
    Build a rule set from grammar data:
      "rule"                                  -> one literal alternative
      ["a", "b"]                              -> literal alternatives
      {"rules": [...], "falloff": 2}          -> literal with falloff
      {"condition": "#x#", "values": {...},
       "default": [...]}                      -> conditional
    """
    if raw is None:
        return LiteralRuleSet([])
    if isinstance(raw, str):
        return LiteralRuleSet([raw])
    if isinstance(raw, Mapping):
        if "condition" in raw:
            values = raw.get("values") or {}
            default = raw.get("default")
            return ConditionalRuleSet(
                str(raw["condition"]),
                {str(k): make_ruleset(v) for k, v in values.items()},
                None if default is None else _default(default),
            )
        if "rules" in raw:
            return _literal(raw["rules"], raw.get("falloff", state.DEFAULT_FALLOFF))
        raise ValueError(f"rule mapping needs 'rules' or 'condition': {dict(raw)!r}")
    return LiteralRuleSet([str(r) for r in raw])


def _literal(raw: Any, falloff: float = state.DEFAULT_FALLOFF) -> LiteralRuleSet:
    if isinstance(raw, str):
        return LiteralRuleSet([raw], falloff)
    return LiteralRuleSet([str(r) for r in raw], falloff)


def _default(raw: Any) -> LiteralRuleSet:
    rs = make_ruleset(raw)
    if not isinstance(rs, LiteralRuleSet):
        raise ValueError(f"conditional default must be literal rules: {raw!r}")
    return rs


# ============================================================
# Symbols
# ============================================================

class Symbol:
    def __init__(self, key: str, raw_rules: Any, is_dynamic: bool = False):
        self.key = key
        self.raw_rules = raw_rules
        self.is_dynamic = is_dynamic
        self.base_rules = make_ruleset(raw_rules)
        self.stack: List[RuleSet] = []
        self.uses: List[Optional[NodeRef]] = []
        self.clear_state()

    def __repr__(self) -> str:
        return f"Symbol({self.key!r} stack:{len(self.stack)})"

    def clear_state(self) -> None:
        self.stack = [self.base_rules]
        self.uses = []
        self.base_rules.clear_state()

    def push_rules(self, raw_rules: Any) -> None:
        self.stack.append(make_ruleset(raw_rules))

    def pop_rules(self, errors: Optional[List[str]] = None) -> None:
        if not self.stack:
            if errors is not None:
                errors.append(f"Can't pop: rule stack for '{self.key}' is already empty")
            return
        self.stack.pop()

    def select_rule(
        self,
        grammar: Grammar,
        node: Optional[ExpansionNode] = None,
        errors: Optional[List[str]] = None,
        log: bool = True,
    ) -> Optional[str]:
        if errors is None:
            errors = []
        if log:
            self.uses.append(None if node is None else node.ref())

        if not self.stack:
            errors.append(f"The rule stack for '{self.key}' is empty, too many pops?")
            return f"(({self.key}))"

        depth = 0 if node is None else node.depth
        return self.stack[-1].select_rule(grammar, errors, depth)

    def get_active_rules(self) -> Optional[List[str]]:
        """Alternatives on top of the stack, without selecting one."""
        if not self.stack:
            return None
        return self.stack[-1].alternatives()

    def rules_to_json(self) -> str:
        if not self.stack:
            return json.dumps([])
        return json.dumps(self.stack[-1].to_data())
