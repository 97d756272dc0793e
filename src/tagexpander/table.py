# -------------------------------------
# table output
# -------------------------------------
"""
Tab-separated output for {"columns": [...], "rows": [[...], ...]} tables.
"""
from typing import Any


def _format_value(v: Any) -> str:
    """Format a value for table output.

    Floats are formatted to 3 significant figures, lists as
    space-separated items, everything else with str().
    """
    if isinstance(v, float):
        if v == 0:
            return "0"
        return f"{v:.3g}"
    if isinstance(v, (list, tuple)):
        return " ".join(_format_value(x) for x in v)
    return str(v)


def format_table(table: dict[str, Any]) -> str:
    """Format a table dict as a tab-separated string with header."""
    lines = ["\t".join(str(c) for c in table["columns"])]
    for row in table["rows"]:
        lines.append("\t".join(_format_value(v) for v in row))
    return "\n".join(lines)


def print_table(table: dict[str, Any]) -> None:
    """Print a table with header and rows to stdout."""
    print(format_table(table))
