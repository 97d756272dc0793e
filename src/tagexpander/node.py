# -------------------------------------
# expansion tree
# -------------------------------------
"""
Expansion nodes.

A root RAW node tokenizes its rule into TEXT / TAG / ACTION children,
expands them depth-first and joins their text. A TAG node runs its
pre-actions, resolves its symbol through the grammar, expands the chosen
rule as its own children, applies modifiers, then releases its pushes.

The grammar is not stored on the nodes; it travels in an Expansion
context passed down the recursive expand() calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Literal, Optional

from . import grammar_state as state
from .actions import NodeAction, PushHandle, parse_action
from .scanner import Act, Lit, Tag, join_segments, parse_modifier, parse_tag, scan_segments

if TYPE_CHECKING:
    from .grammar import Grammar

NodeKind = Literal["RAW", "TEXT", "TAG", "ACTION"]

_KIND_OF = {Lit: "TEXT", Tag: "TAG", Act: "ACTION"}

_DOUBLE_BACKSLASH = "\x00DOUBLEBACKSLASH\x00"


@dataclass(frozen=True)
class NodeRef:
    index: int
    depth: int


@dataclass
class Expansion:
    grammar: Grammar
    max_depth: int = state.MAX_DEPTH
    prevent_recursion: bool = False


class ExpansionNode:
    def __init__(
        self,
        kind: NodeKind,
        raw: Optional[str],
        depth: int = 0,
        index: int = 0,
        parent: Optional[NodeRef] = None,
    ):
        self.errors: List[str] = []
        if raw is None:
            self.errors.append("Empty input for node")
            raw = ""

        self.kind = kind
        self.raw = raw
        self.depth = depth
        self.index = index
        self.parent = parent

        self.is_expanded = False
        self.children: List[ExpansionNode] = []
        self.child_rule: Optional[str] = None
        self.finished_text: Optional[str] = None

        self.symbol: Optional[str] = None
        self.modifiers: List[str] = []
        self.preactions: List[NodeAction] = []
        self.postactions: List[PushHandle] = []
        self.action: Optional[NodeAction] = None

    def __repr__(self) -> str:
        return f"Node('{self.raw}' {self.kind} d:{self.depth})"

    def ref(self) -> NodeRef:
        return NodeRef(self.index, self.depth)

    def source_text(self) -> str:
        """The node's text as written in its rule, delimiters included."""
        if self.kind == "TAG":
            return join_segments([Tag(self.raw)])
        if self.kind == "ACTION":
            return join_segments([Act(self.raw)])
        return self.raw

    def walk(self) -> Iterator[ExpansionNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    # ------------------------------------------------------------
    # expansion
    # ------------------------------------------------------------

    def expand_children(self, ctx: Expansion, child_rule: Optional[str]) -> None:
        self.children = []
        self.child_rule = child_rule
        if child_rule is None:
            self.errors.append("No child rule provided, can't expand children")
            self.finished_text = ""
            return

        scan = scan_segments(child_rule)
        self.errors.extend(scan.errors)

        parts = []
        for i, seg in enumerate(scan):
            child = ExpansionNode(
                _KIND_OF[type(seg)], seg.raw, depth=self.depth + 1, index=i, parent=self.ref()
            )
            self.children.append(child)
            if ctx.prevent_recursion:
                parts.append(child.source_text())
                continue
            child.expand(ctx)
            self.errors.extend(child.errors)
            parts.append(child.finished_text)
        self.finished_text = "".join(parts)

    def expand(self, ctx: Expansion) -> None:
        if self.is_expanded:
            return
        self.is_expanded = True

        if self.kind == "RAW":
            self.expand_children(ctx, self.raw)
        elif self.kind == "TEXT":
            self.finished_text = self.raw
        elif self.kind == "TAG":
            self._expand_tag(ctx)
        elif self.kind == "ACTION":
            # a bare action has no subtree of its own, so its push stays in
            # effect for the rest of the enclosing rule
            self.action = parse_action(self.raw)
            self.action.activate(ctx, self)
            self.finished_text = ""

    def _expand_tag(self, ctx: Expansion) -> None:
        parsed = parse_tag(self.raw)
        self.errors.extend(parsed.errors)
        self.symbol = parsed.symbol
        self.modifiers = parsed.modifiers
        self.finished_text = self.raw

        if self.depth > ctx.max_depth:
            self.errors.append(
                f"Maximum expansion depth {ctx.max_depth} exceeded at '{self.symbol}'"
            )
            self.finished_text = f"(({self.symbol}))"
            return

        self.preactions = [parse_action(raw) for raw in parsed.preactions]
        self.postactions = []
        try:
            for action in self.preactions:
                handle = action.activate(ctx, self)
                if handle is not None:
                    self.postactions.append(handle)

            rule = ctx.grammar.select_rule(self.symbol, self, self.errors)
            if rule is None:
                rule = f"(({self.symbol}))"
            self.expand_children(ctx, rule)
            self._apply_modifiers(ctx.grammar)
        finally:
            for handle in self.postactions:
                handle.release(ctx.grammar, self.errors)

    def _apply_modifiers(self, grammar: Grammar) -> None:
        for spec in self.modifiers:
            name, params = parse_modifier(spec)
            mod = grammar.modifiers.get(name)
            if mod is None:
                self.errors.append(f"Missing modifier {name}")
                self.finished_text += f"((.{name}))"
            else:
                self.finished_text = mod(self.finished_text, params)

    def clear_escape_chars(self) -> None:
        """Drop escape backslashes; an escaped backslash stays as one."""
        if self.finished_text is None:
            return
        self.finished_text = (
            self.finished_text.replace("\\\\", _DOUBLE_BACKSLASH)
            .replace("\\", "")
            .replace(_DOUBLE_BACKSLASH, "\\")
        )
