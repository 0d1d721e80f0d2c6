from typing import Any, Dict, Iterable, List, Optional


def matches_search(row: Dict[str, Any], query: Optional[str], fields: Iterable[str]) -> bool:
    """Case-insensitive substring match over the given fields; nested keys use dots (profiles.full_name)"""
    if not query or not query.strip():
        return True
    q = query.strip().lower()
    for field in fields:
        value: Any = row
        for part in field.split("."):
            if isinstance(value, list):
                value = value[0] if value else None
            value = value.get(part) if isinstance(value, dict) else None
        if isinstance(value, str) and q in value.lower():
            return True
    return False


def filter_rows(rows: List[Dict[str, Any]], query: Optional[str], fields: Iterable[str]) -> List[Dict[str, Any]]:
    fields = list(fields)
    return [row for row in rows if matches_search(row, query, fields)]
