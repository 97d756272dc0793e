"""
scanner.py

Tokenizer for the tag-and-action rule language.

Scanner output (structure, no expansion):
  - Lit(raw)    plain text, copied verbatim
  - Tag(raw)    inner text of "#...#": symbol, modifiers, pre-actions
  - Act(raw)    inner text of a top-level "[...]"

Rules:
  - "[" at depth 0 outside a tag opens an action; brackets nest and only
    the outermost pair delimits the segment.
  - "#" at depth 0 toggles the tag state.
  - "\\X" makes X literal. The backslash stays in the segment raw text;
    it is removed once, when the root of an expansion is finished.

Malformed input never raises here: errors are collected next to the
best-effort segmentation. The one fatal case lives in parse_tag().
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

__all__ = [
    "TagParseError",
    "Lit",
    "Tag",
    "Act",
    "Segment",
    "Scan",
    "TagParts",
    "scan_segments",
    "join_segments",
    "parse_tag",
    "parse_modifier",
]


# ============================================================
# Errors
# ============================================================

class TagParseError(ValueError):
    pass


# ============================================================
# Segments (scanner output)
# ============================================================

@dataclass(frozen=True)
class Lit:
    raw: str


@dataclass(frozen=True)
class Tag:
    raw: str


@dataclass(frozen=True)
class Act:
    raw: str


Segment = Union[Lit, Tag, Act]


@dataclass(frozen=True)
class Scan:
    segments: Tuple[Segment, ...] = ()
    errors: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, i: int) -> Segment:
        return self.segments[i]


# ============================================================
# Scanner
# ============================================================

def scan_segments(rule: Optional[str]) -> Scan:
    """
    One left-to-right pass over rule, tracking bracket depth, tag state
    and escapes. None yields an empty scan with no errors.
    """
    if rule is None:
        return Scan()

    segs: List[Segment] = []
    errors: List[str] = []

    depth = 0
    in_tag = False
    escaped = False
    start = 0

    def add(kind, end: int) -> None:
        raw = rule[start:end]
        if not raw:
            if kind is Tag:
                errors.append(f"{start}: empty tag")
            elif kind is Act:
                errors.append(f"{start}: empty action")
            else:
                return
        segs.append(kind(raw))

    for i, ch in enumerate(rule):
        if escaped:
            escaped = False
            continue

        if ch == "\\":
            escaped = True

        elif ch == "[":
            if depth == 0 and not in_tag:
                add(Lit, i)
                start = i + 1
            depth += 1

        elif ch == "]":
            depth -= 1
            if depth == 0 and not in_tag:
                add(Act, i)
                start = i + 1

        # "#" inside brackets belongs to the action
        elif ch == "#" and depth == 0:
            add(Tag if in_tag else Lit, i)
            start = i + 1
            in_tag = not in_tag

    if start < len(rule):
        add(Lit, len(rule))

    if in_tag:
        errors.append("Unclosed tag")
    if depth > 0:
        errors.append("Too many [")
    if depth < 0:
        errors.append("Too many ]")

    return Scan(tuple(segs), tuple(errors))


def join_segments(segments) -> str:
    """Rebuild rule text from segments, reinserting the delimiters."""
    out = []
    for s in segments:
        if isinstance(s, Tag):
            out.append(f"#{s.raw}#")
        elif isinstance(s, Act):
            out.append(f"[{s.raw}]")
        else:
            out.append(s.raw)
    return "".join(out)


# ============================================================
# Tag heads
# ============================================================

@dataclass
class TagParts:
    symbol: str = ""
    modifiers: List[str] = field(default_factory=list)
    preactions: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def parse_tag(tag_contents: Optional[str]) -> TagParts:
    """
    Split the inside of a tag into symbol, modifier chain and pre-actions.

      "[hero:#name#]story.capitalize.s"
        -> symbol "story", modifiers ["capitalize", "s"],
           preactions ["hero:#name#"]

    Raises TagParseError if more than one plain-text section is present,
    since there is no way to tell which one names the symbol.
    """
    scan = scan_segments(tag_contents)
    parts = TagParts(errors=list(scan.errors))

    symbol_section = None
    for s in scan:
        if isinstance(s, Lit):
            if symbol_section is not None:
                raise TagParseError(f"multiple main sections in {tag_contents!r}")
            symbol_section = s.raw
        else:
            parts.preactions.append(s.raw)

    if symbol_section is not None:
        components = symbol_section.split(".")
        parts.symbol = components[0]
        parts.modifiers = components[1:]
    return parts


_MOD_PARAMS_RE = re.compile(r"\(([^)]+)\)")


def parse_modifier(spec: str) -> Tuple[str, List[str]]:
    """
    "replace(a,b)" -> ("replace", ["a", "b"])
    "capitalize"   -> ("capitalize", [])

    Parameters are split on every comma; commas and parentheses
    inside parameters cannot be escaped.
    """
    if spec.find("(") > 0:
        m = _MOD_PARAMS_RE.search(spec)
        if m:
            return spec[: spec.index("(")], m.group(1).split(",")
    return spec, []

