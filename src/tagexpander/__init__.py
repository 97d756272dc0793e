# -------------------------------------
# tagexpander
# -------------------------------------
"""
Generative text from tag grammars.

A grammar maps symbol names to rule alternatives. Rules embed
"#symbol.modifier#" tags and "[target:rule]" actions; expansion picks
alternatives at random and resolves tags recursively.

This package provides:
- Scanning rules into text / tag / action segments (scanner)
- Rule sets, symbols and rule stacks (rules)
- Grammar registry and expansion (grammar, node, actions)
- Built-in English modifiers (modifiers)
- Grammar files in JSON or YAML (loader)

Imports are lazy so submodules can be run as scripts.
Use: from tagexpander import Grammar, create_grammar, load_grammar
"""

__all__ = [
    # grammar
    "Grammar",
    "create_grammar",
    # node
    "ExpansionNode",
    "Expansion",
    # rules
    "Symbol",
    "RuleSet",
    "LiteralRuleSet",
    "ConditionalRuleSet",
    "make_ruleset",
    # actions
    "NodeAction",
    "PushHandle",
    "parse_action",
    # scanner
    "TagParseError",
    "scan_segments",
    "join_segments",
    "parse_tag",
    "parse_modifier",
    # modifiers
    "BASE_MODIFIERS",
    # loader
    "load_grammar",
    "load_grammar_data",
    "clear_cache",
    # state
    "seed",
]

# Lazy import mapping: attribute -> (module, name)
_LAZY_IMPORTS = {
    # grammar
    "Grammar": (".grammar", "Grammar"),
    "create_grammar": (".grammar", "create_grammar"),
    # node
    "ExpansionNode": (".node", "ExpansionNode"),
    "Expansion": (".node", "Expansion"),
    # rules
    "Symbol": (".rules", "Symbol"),
    "RuleSet": (".rules", "RuleSet"),
    "LiteralRuleSet": (".rules", "LiteralRuleSet"),
    "ConditionalRuleSet": (".rules", "ConditionalRuleSet"),
    "make_ruleset": (".rules", "make_ruleset"),
    # actions
    "NodeAction": (".actions", "NodeAction"),
    "PushHandle": (".actions", "PushHandle"),
    "parse_action": (".actions", "parse_action"),
    # scanner
    "TagParseError": (".scanner", "TagParseError"),
    "scan_segments": (".scanner", "scan_segments"),
    "join_segments": (".scanner", "join_segments"),
    "parse_tag": (".scanner", "parse_tag"),
    "parse_modifier": (".scanner", "parse_modifier"),
    # modifiers
    "BASE_MODIFIERS": (".modifiers", "BASE_MODIFIERS"),
    # loader
    "load_grammar": (".loader", "load_grammar"),
    "load_grammar_data": (".loader", "load_grammar_data"),
    "clear_cache": (".loader", "clear_cache"),
    # state
    "seed": (".grammar_state", "seed"),
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_name, __package__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
