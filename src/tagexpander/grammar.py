# -------------------------------------
# grammar registry
# -------------------------------------
"""
Grammar: symbol registry, modifier registry and fallback subgrammars.

    g = Grammar({"origin": "#greeting#, #name#!",
                 "greeting": ["Hello", "Hi"],
                 "name": "world"})
    g.flatten("#origin#")    -> "Hi, world!"

expand() returns the root node (finished_text, errors, children);
flatten() returns only the text. Push and pop actions mutate the rule
stacks in place during an expansion; clear_state() restores them.

A Grammar instance is not safe to share between concurrent expansions.
"""
from __future__ import annotations

import json
import random
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import grammar_state as state
from .modifiers import BASE_MODIFIERS
from .node import Expansion, ExpansionNode
from .rules import Symbol

Modifier = Callable[[str, List[str]], str]


class Grammar:
    def __init__(
        self,
        raw: Optional[Mapping[str, Any]] = None,
        *,
        modifiers: Optional[Mapping[str, Modifier]] = None,
        max_depth: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.modifiers: Dict[str, Modifier] = {}
        self.max_depth = None if max_depth is None else state.check_max_depth(max_depth)
        self._rng = rng
        self.errors: List[str] = []
        self.load_from_raw(raw)
        if modifiers:
            self.add_modifiers(modifiers)

    def __repr__(self) -> str:
        return f"Grammar({sorted(self.symbols)!r})"

    @property
    def rng(self) -> random.Random:
        return self._rng if self._rng is not None else state.get_rng()

    def load_from_raw(self, raw: Optional[Mapping[str, Any]]) -> None:
        self.raw = dict(raw) if raw else {}
        self.symbols: Dict[str, Symbol] = {}
        self.subgrammars: List[Grammar] = []
        for key, rules in self.raw.items():
            self.symbols[key] = Symbol(key, rules)

    def clear_state(self) -> None:
        """Back to the declared rules: stacks, usage counters, errors."""
        for key in [k for k, s in self.symbols.items() if s.is_dynamic]:
            del self.symbols[key]
        for symbol in self.symbols.values():
            symbol.clear_state()
        self.errors = []

    def add_modifiers(self, mods: Mapping[str, Modifier]) -> None:
        for key, fn in mods.items():
            self.modifiers[key] = fn

    def add_subgrammar(self, grammar: Grammar) -> None:
        self.subgrammars.append(grammar)

    # ------------------------------------------------------------
    # rule stacks
    # ------------------------------------------------------------

    def push_rules(self, key: str, raw_rules: Any, source_action: bool = False) -> None:
        """Push onto key's rule stack, creating the symbol if needed."""
        symbol = self.symbols.get(key)
        if symbol is None:
            self.symbols[key] = Symbol(key, raw_rules, is_dynamic=source_action)
        else:
            symbol.push_rules(raw_rules)

    def pop_rules(self, key: str, errors: Optional[List[str]] = None) -> None:
        if errors is None:
            errors = self.errors
        symbol = self.symbols.get(key)
        if symbol is None:
            errors.append(f"Can't pop: no symbol for key {key}")
            return
        symbol.pop_rules(errors)

    def select_rule(
        self,
        key: str,
        node: Optional[ExpansionNode] = None,
        errors: Optional[List[str]] = None,
    ) -> Optional[str]:
        if errors is None:
            errors = self.errors

        symbol = self.symbols.get(key)
        if symbol is not None:
            return symbol.select_rule(self, node, errors)

        for sub in self.subgrammars:
            symbol = sub.symbols.get(key)
            if symbol is not None:
                return symbol.select_rule(sub, node, errors, log=False)

        errors.append(f"No symbol for '{key}'")
        return f"(({key}))"

    # ------------------------------------------------------------
    # expansion
    # ------------------------------------------------------------

    def context(self, prevent_recursion: bool = False) -> Expansion:
        max_depth = self.max_depth if self.max_depth is not None else state.get_max_depth()
        return Expansion(self, state.clamp_max_depth(max_depth), prevent_recursion)

    def create_root(self, rule: Optional[str], depth: int = 0) -> ExpansionNode:
        return ExpansionNode("RAW", rule, depth=depth)

    def expand(
        self,
        rule: Optional[str],
        allow_escape_chars: bool = False,
        prevent_recursion: bool = False,
        depth: int = 0,
    ) -> ExpansionNode:
        """
        Expand rule into a node tree.

        Args:
            rule: Rule text, e.g. "#origin#"
            allow_escape_chars: Keep escape backslashes in the result
                (sub-expansions that feed further parsing).
            prevent_recursion: Only tokenize the top level.
            depth: Depth of the root node; actions and conditions pass
                the depth of the node that triggered them.
        """
        root = self.create_root(rule, depth)
        root.expand(self.context(prevent_recursion))
        if not allow_escape_chars:
            root.clear_escape_chars()
        return root

    def flatten(self, rule: Optional[str], allow_escape_chars: bool = False) -> str:
        return self.expand(rule, allow_escape_chars).finished_text

    # ------------------------------------------------------------
    # reporting
    # ------------------------------------------------------------

    def to_json(self) -> str:
        """Current top rules of every symbol, keyed by symbol name."""
        entries = [
            f" {json.dumps(key)} : {symbol.rules_to_json()}"
            for key, symbol in self.symbols.items()
        ]
        return "{\n" + ",\n".join(entries) + "\n}"

    def to_data(self) -> dict[str, Any]:
        """Current top rules of every symbol as plain grammar data."""
        return {
            key: symbol.stack[-1].to_data() if symbol.stack else []
            for key, symbol in self.symbols.items()
        }

    def usage_table(self) -> dict[str, Any]:
        rows = []
        for key, symbol in self.symbols.items():
            top = symbol.stack[-1] if symbol.stack else None
            counts = list(getattr(top, "uses", []))
            rows.append([key, len(symbol.stack), len(symbol.uses), counts])
        return {"columns": ["symbol", "depth", "uses", "counts"], "rows": rows}


def create_grammar(
    raw: Mapping[str, Any],
    modifiers: Optional[Mapping[str, Modifier]] = None,
    **kwargs,
) -> Grammar:
    """Grammar with the built-in English modifiers unless others are given."""
    if modifiers is None:
        modifiers = BASE_MODIFIERS
    return Grammar(raw, modifiers=modifiers, **kwargs)
