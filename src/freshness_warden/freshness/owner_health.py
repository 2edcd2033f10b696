"""
Owner-level fold of SourceHealth records. Group first, then reduce each group with sums and a max;
no per-owner accumulator is mutated while scanning.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from freshness_warden.freshness.model import OwnerHealth, SourceHealth


def owner_key(owner: str) -> str:
    """Case-insensitive grouping key for owner names."""
    return owner.casefold()


def group_by_owner(sources: Iterable[SourceHealth]) -> Dict[str, List[SourceHealth]]:
    """Groups in first-seen order; each group keeps input order."""
    groups: Dict[str, List[SourceHealth]] = {}
    for source in sources:
        groups.setdefault(owner_key(source.owner), []).append(source)
    return groups


def _latest_member(members: List[SourceHealth]) -> Optional[SourceHealth]:
    checked = [m for m in members if m.last_checked_at is not None]
    if not checked:
        return None
    # max() keeps the first maximal member on ties.
    return max(checked, key=lambda m: m.last_checked_at)


def fold_owner(members: List[SourceHealth]) -> OwnerHealth:
    """Reduce one non-empty owner group. Display name is the first member's owner spelling."""
    latest = _latest_member(members)
    return OwnerHealth(
        owner=members[0].owner,
        source_count=len(members),
        stale_count=sum(1 for m in members if m.is_stale),
        ok_count=sum(m.ok_count for m in members),
        warning_count=sum(m.warning_count for m in members),
        failed_count=sum(m.failed_count for m in members),
        breach_count=sum(m.breach_count for m in members),
        last_checked_at=latest.last_checked_at if latest is not None else None,
        last_status=latest.last_status if latest is not None else None,
    )


def build_owner_health(sources: Iterable[SourceHealth]) -> List[OwnerHealth]:
    """
    Aggregate per owner (case-insensitive), ordered by display name. The ordering is
    ordinal (code point), so "Zeta" sorts before "alpha".
    Expects input in source-name order so the display name is deterministic.
    """
    owners = [fold_owner(members) for members in group_by_owner(sources).values()]
    owners.sort(key=lambda o: o.owner)
    return owners
