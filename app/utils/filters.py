"""
Lecture des filtres "façon PostgREST" passés en query params :

    GET /game-boards?user_id=eq.42&order=created_at.desc

Seule l'égalité (`eq.`) est supportée ; les colonnes sont limitées à une liste blanche
par ressource pour ne jamais exposer un attribut arbitraire du modèle.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple

RESERVED_PARAMS = {"order", "select", "limit", "offset"}


@dataclass
class QueryFilters:
    filters: Dict[str, str] = field(default_factory=dict)
    order_by: Optional[str] = None
    descending: bool = True
    offset: int = 0
    # None : toutes les lignes visibles
    limit: Optional[int] = None


def parse_order(raw: str, orderable: Iterable[str]) -> Tuple[str, bool]:
    column, _, direction = raw.partition(".")
    direction = direction or "asc"
    if column not in set(orderable):
        raise ValueError(f"Cannot order by column: {column}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown order direction: {direction}")
    return column, direction == "desc"


def parse_query(
    params: Mapping[str, str],
    *,
    filterable: Iterable[str],
    orderable: Iterable[str],
    default_order: Optional[str] = None,
) -> QueryFilters:
    """Lève ValueError si un paramètre est inconnu ou mal formé."""
    allowed = set(filterable)
    query = QueryFilters()

    for key, raw in params.items():
        if key in RESERVED_PARAMS:
            continue
        if key not in allowed:
            raise ValueError(f"Unknown filter column: {key}")
        operator, sep, value = raw.partition(".")
        if not sep or operator != "eq":
            raise ValueError(f"Unsupported filter for {key}: {raw}")
        query.filters[key] = value

    order = params.get("order") or default_order
    if order:
        query.order_by, query.descending = parse_order(order, orderable)

    try:
        if "offset" in params:
            query.offset = max(0, int(params["offset"]))
        if "limit" in params:
            query.limit = min(1000, max(1, int(params["limit"])))
    except ValueError:
        raise ValueError("offset and limit must be integers")

    return query
