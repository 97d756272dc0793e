# -------------------------------------
# grammar file loading
# -------------------------------------
"""
Load grammars from JSON or YAML files.

A grammar file is a mapping of symbol name to rules:

    origin: "#hero# went to #place#."
    hero: [Ana, Bo, Cy]
    place:
      rules: [the market, the sea, the moon]
      falloff: 2
"""
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .grammar import Grammar, create_grammar


# Module-level cache for loaded grammar data
_GRAMMAR_CACHE: dict[str, dict[str, Any]] = {}

YAML_SUFFIXES = (".yml", ".yaml")


def load_grammar_data(path: str | Path) -> dict[str, Any]:
    """
    Load a grammar file and return the raw symbol -> rules mapping.

    Args:
        path: Path to a .json, .yml or .yaml file

    Returns:
        Parsed grammar data as a dict

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError / yaml.YAMLError: If the file does not parse
        ValueError: If the data is not a mapping of name to rules
    """
    path = Path(path)
    path_str = str(path.resolve())

    if path_str in _GRAMMAR_CACHE:
        return _GRAMMAR_CACHE[path_str]

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"grammar file '{path}' must contain a mapping, got {type(data).__name__}")
    for key, rules in data.items():
        _check_rules(str(key), rules)

    data = {str(k): v for k, v in data.items()}
    _GRAMMAR_CACHE[path_str] = data
    return data


def _check_rules(key: str, rules: Any) -> None:
    if isinstance(rules, str):
        return
    if isinstance(rules, list):
        for r in rules:
            if not isinstance(r, (str, int, float)):
                raise ValueError(f"symbol '{key}': rule {r!r} is not text")
        return
    if isinstance(rules, Mapping):
        if "condition" in rules:
            for k, v in (rules.get("values") or {}).items():
                _check_rules(f"{key}.{k}", v)
            default = rules.get("default")
            if isinstance(default, Mapping) and "condition" in default:
                raise ValueError(f"symbol '{key}': a conditional default must be literal rules")
            if default is not None:
                _check_rules(f"{key}.default", default)
            return
        if "rules" in rules:
            _check_rules(key, rules["rules"])
            if float(rules.get("falloff", 1)) < 0:
                raise ValueError(f"symbol '{key}': falloff must be >= 0")
            return
    raise ValueError(f"symbol '{key}': rules must be text, a list or a rule mapping")


def clear_cache() -> None:
    """Clear the grammar file cache."""
    _GRAMMAR_CACHE.clear()


def load_grammar(path: str | Path, modifiers=None, **kwargs) -> Grammar:
    """Load a grammar file into a Grammar with the built-in modifiers."""
    return create_grammar(load_grammar_data(path), modifiers=modifiers, **kwargs)


def dump_grammar_data(data: dict[str, Any], path: str | Path) -> None:
    """Write grammar data as JSON or YAML, chosen by the file suffix."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)
