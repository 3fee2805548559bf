from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class RenameRule(str, Enum):
    """Renaming conventions, spelled the way serde spells them."""

    LOWER_CASE = "lowercase"
    UPPER_CASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"


RuleLike = Union[RenameRule, str, None]


def parse_rule(rule: RuleLike) -> Optional[RenameRule]:
    if rule is None or isinstance(rule, RenameRule):
        return rule
    try:
        return RenameRule(rule)
    except ValueError as exc:
        known = ", ".join(r.value for r in RenameRule)
        raise ValueError(f"Unknown rename rule {rule!r}; expected one of: {known}") from exc


def _snake_to_joined(name: str, *, capitalize_first: bool) -> str:
    out = []
    capitalize = capitalize_first
    for ch in name:
        if ch == "_":
            capitalize = True
        elif capitalize:
            out.append(ch.upper())
            capitalize = False
        else:
            out.append(ch)
    return "".join(out)


def _pascal_to_separated(name: str, separator: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if i > 0 and ch.isupper():
            out.append(separator)
        out.append(ch.lower())
    return "".join(out)


def rename_field(rule: RuleLike, name: str) -> str:
    """Rename a snake_case field name according to `rule`."""
    rule = parse_rule(rule)
    if rule is None or rule is RenameRule.SNAKE_CASE:
        return name
    if rule is RenameRule.LOWER_CASE:
        return name.lower()
    if rule in (RenameRule.UPPER_CASE, RenameRule.SCREAMING_SNAKE_CASE):
        return name.upper()
    if rule is RenameRule.PASCAL_CASE:
        return _snake_to_joined(name, capitalize_first=True)
    if rule is RenameRule.CAMEL_CASE:
        return _snake_to_joined(name, capitalize_first=False)
    if rule is RenameRule.KEBAB_CASE:
        return name.replace("_", "-")
    return name.upper().replace("_", "-")


def rename_type(rule: RuleLike, name: str) -> str:
    """Rename a PascalCase type or variant name according to `rule`."""
    rule = parse_rule(rule)
    if rule is None or rule is RenameRule.PASCAL_CASE or not name:
        return name
    if rule is RenameRule.LOWER_CASE:
        return name.lower()
    if rule is RenameRule.UPPER_CASE:
        return name.upper()
    if rule is RenameRule.CAMEL_CASE:
        return name[:1].lower() + name[1:]
    if rule is RenameRule.SNAKE_CASE:
        return _pascal_to_separated(name, "_")
    if rule is RenameRule.SCREAMING_SNAKE_CASE:
        return _pascal_to_separated(name, "_").upper()
    if rule is RenameRule.KEBAB_CASE:
        return _pascal_to_separated(name, "-")
    return _pascal_to_separated(name, "-").upper()
