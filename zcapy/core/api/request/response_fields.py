"""
Response field remapping.

Endpoint callers translate the server's field names into their own with a
table of external name -> internal name. Payload keys that are already in
internal form pass through, so a camelCase and a snake_case payload map to
the same result.
"""
from typing import Any, Dict, Mapping


def remap_fields(payload: Mapping[str, Any], table: Mapping[str, str]) -> Dict[str, Any]:
    """
    Rename payload keys using an external -> internal table.

    Keys missing from the table are kept as they are. When both spellings
    of a field are present, the internal one wins.

    Example:
        >>> remap_fields({'groupId': '1'}, {'groupId': 'group_id'})
        {'group_id': '1'}
    """
    internal_names = set(table.values())
    result: Dict[str, Any] = {}
    for key, value in payload.items():
        name = table.get(str(key), str(key))
        if name in result and key not in internal_names:
            continue
        result[name] = value
    return result


def pick(payload: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Value of the first present alias, or default."""
    for name in names:
        if name in payload:
            return payload[name]
    return default
