# -------------------------------------
# built-in English modifiers
# -------------------------------------
"""
Modifiers available as "#symbol.name#" or "#symbol.name(p1,p2)#".
Each takes the finished text and the parameter list and returns text.
"""
from typing import Callable, List


def _is_vowel(c: str) -> bool:
    return c.lower() in ("a", "e", "i", "o", "u")


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def replace(s: str, params: List[str]) -> str:
    """replace(old,new): replace every occurrence of old."""
    if len(params) < 2:
        return s
    return s.replace(params[0], params[1])


def capitalize_all(s: str, params: List[str] = ()) -> str:
    out = []
    cap_next = True
    for ch in s:
        if not _is_alnum(ch):
            cap_next = True
            out.append(ch)
        elif cap_next:
            out.append(ch.upper())
            cap_next = False
        else:
            out.append(ch)
    return "".join(out)


def capitalize(s: str, params: List[str] = ()) -> str:
    return s[:1].upper() + s[1:]


def a(s: str, params: List[str] = ()) -> str:
    """Indefinite article: "a cat", "an owl", "a unicorn"."""
    if s:
        if s[0].lower() == "u" and len(s) > 2 and s[2].lower() == "i":
            return "a " + s
        if _is_vowel(s[0]):
            return "an " + s
    return "a " + s


def s(text: str, params: List[str] = ()) -> str:
    """Plural."""
    last = text[-1:]
    if last in ("s", "h", "x"):
        return text + "es"
    if last == "y":
        if not _is_vowel(text[-2:-1]):
            return text[:-1] + "ies"
        return text + "s"
    return text + "s"


def ed(text: str, params: List[str] = ()) -> str:
    """Past tense."""
    last = text[-1:]
    if last == "e":
        return text + "d"
    if last in ("s", "h", "x"):
        return text + "ed"
    if last == "y":
        if not _is_vowel(text[-2:-1]):
            return text[:-1] + "ied"
        return text + "ed"
    return text + "ed"


def first_s(text: str, params: List[str] = ()) -> str:
    """Plural of the first word only."""
    words = text.split(" ")
    return " ".join([s(words[0])] + words[1:])


# ============================================================
# Function registry
# ============================================================

BASE_MODIFIERS: dict[str, Callable[[str, List[str]], str]] = {
    "replace":       replace,
    "capitalizeAll": capitalize_all,
    "capitalize":    capitalize,
    "a":             a,
    "firstS":        first_s,
    "s":             s,
    "ed":            ed,
}
