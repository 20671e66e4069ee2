# dls_api/store.py
from __future__ import annotations

import itertools
import threading
import time
from typing import Dict, Iterable, List, Optional, Tuple

from dls_api.config import MAX_MATCHES
from dls_api.errors import MatchNotFoundError
from dls_api.log import get_logger
from dls_api.match import CricketMatch

logger = get_logger("dls.store")

# Simple in-memory match registry (single process, lost on restart)
# match_id -> (created_at_epoch, match)
_matches: Dict[int, Tuple[float, CricketMatch]] = {}

# Ids are never reused, even after a delete
_ids = itertools.count(1)

# Guards _matches and _ids. Re-entrant so request handlers can hold it
# across a get + mutate of one match (see `locked`).
_lock = threading.RLock()


def locked() -> threading.RLock:
    """
    Registry lock for read-modify-write sequences on a stored match, e.g.

        with store.locked():
            store.get(match_id).record_interruption(...)
    """
    return _lock


def add(match: CricketMatch) -> int:
    with _lock:
        match_id = next(_ids)
        _matches[match_id] = (time.time(), match)

        while len(_matches) > MAX_MATCHES:
            oldest = min(_matches, key=lambda k: (_matches[k][0], k))
            _matches.pop(oldest, None)
            logger.warning("Match registry full (%d), dropped match %d", MAX_MATCHES, oldest)

    return match_id


def get(match_id: Optional[int] = None) -> CricketMatch:
    """A match by id; with no id, the most recently created one."""
    with _lock:
        if match_id is None:
            match_id = latest_id()
        item = _matches.get(match_id)
        if item is None:
            raise MatchNotFoundError(f"match with id {match_id} not found")
        return item[1]


def latest_id() -> int:
    with _lock:
        if not _matches:
            raise MatchNotFoundError("no matches created yet")
        return max(_matches, key=lambda k: (_matches[k][0], k))


def delete(match_ids: Iterable[int]) -> List[int]:
    removed: List[int] = []
    with _lock:
        for match_id in match_ids:
            if _matches.pop(match_id, None) is not None:
                removed.append(match_id)
    return removed


def list_matches() -> List[dict]:
    with _lock:
        items = sorted(_matches.items())

    out: List[dict] = []
    for match_id, (created, match) in items:
        out.append({
            "match_id": match_id,
            "created": created,
            "team1": match.team1_name,
            "team2": match.team2_name,
            "starting_overs": match.setup.starting_overs,
            "category": match.setup.category.value,
        })
    return out


def clear() -> None:
    """Empty the registry and restart ids from 1."""
    global _ids
    with _lock:
        _matches.clear()
        _ids = itertools.count(1)
