"""
Field Resolution

HTML forms, older front-end builds and API clients send the same data under
different names (``parentEmail``, ``parent_email``, ``email``). Each canonical
field declares an ordered alias tuple; the first alias carrying a non-blank
value wins.
"""

from collections.abc import Mapping

AliasMap = Mapping[str, tuple[str, ...]]


def resolve_field(data: Mapping[str, str], aliases: tuple[str, ...], default: str = "") -> str:
    """
    Return the first non-blank value among ``aliases``.

    Args:
        data: Flat input mapping from the request
        aliases: Acceptable input names, in precedence order
        default: Value returned when no alias carries a value

    Returns:
        The stripped value, or ``default``
    """
    for name in aliases:
        value = data.get(name)
        if value is not None and value.strip():
            return value.strip()
    return default


def resolve_fields(
    data: Mapping[str, str],
    alias_map: AliasMap,
    defaults: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Resolve every canonical field in ``alias_map``, preserving its order."""
    defaults = defaults or {}
    return {
        canonical: resolve_field(data, aliases, defaults.get(canonical, ""))
        for canonical, aliases in alias_map.items()
    }
