# -------------------------------------
# node actions
# -------------------------------------
"""
Actions mutate grammar state while a rule is being expanded.

    target:rule1,rule2   push   (each rule is expanded now, literals pushed)
    target:POP           pop    one level off target's rule stack
    target               call   expand target for its side effects only

A push returns a PushHandle. The tag that ran the push keeps the handle
and releases it exactly once, when its own subtree is finished.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Literal, Optional

if TYPE_CHECKING:
    from .grammar import Grammar
    from .node import Expansion, ExpansionNode

ActionKind = Literal["PUSH", "POP", "CALL"]

POP_RULE = "POP"


@dataclass
class PushHandle:
    target: str
    released: bool = False

    def release(self, grammar: Grammar, errors: List[str]) -> None:
        """Pop the pushed rules. Repeated calls do nothing."""
        if self.released:
            return
        self.released = True
        grammar.pop_rules(self.target, errors)


@dataclass
class NodeAction:
    kind: ActionKind
    target: str
    rule: Optional[str] = None

    def activate(self, ctx: Expansion, node: ExpansionNode) -> Optional[PushHandle]:
        grammar = ctx.grammar

        if self.kind == "PUSH":
            finished = []
            for section in self.rule.split(","):
                sub = grammar.expand(section, allow_escape_chars=True, depth=node.depth)
                node.errors.extend(sub.errors)
                finished.append(sub.finished_text)
            grammar.push_rules(self.target, finished, source_action=True)
            return PushHandle(self.target)

        if self.kind == "POP":
            grammar.pop_rules(self.target, node.errors)
            return None

        sub = grammar.expand(self.target, allow_escape_chars=True, depth=node.depth)
        node.errors.extend(sub.errors)
        return None

    def to_text(self) -> str:
        if self.kind == "PUSH":
            return f"{self.target}:{self.rule}"
        if self.kind == "POP":
            return f"{self.target}:{POP_RULE}"
        return "((some function))"


def parse_action(raw: str) -> NodeAction:
    """
    "hero:#name#"  -> push
    "hero:POP"     -> pop
    "#setHero#"    -> call
    """
    target, sep, rule = raw.partition(":")
    if not sep:
        return NodeAction("CALL", target)
    if rule == POP_RULE:
        return NodeAction("POP", target)
    return NodeAction("PUSH", target, rule)
