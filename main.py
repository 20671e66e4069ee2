# main.py (Duckworth-Lewis Standard Edition calculator)
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from dls_api import store
from dls_api.categories import list_categories
from dls_api.config import validate_config
from dls_api.errors import DLSError, MatchNotFoundError, OutOfRangeError
from dls_api.log import get_logger
from dls_api.match import new_match
from dls_api.overs_math import balls_to_overs, balls_to_overs_str, overs_to_balls
from dls_api.resource_table import resource_percentage
from dls_api.snapshot import MatchSnapshot, from_snapshot, to_snapshot

logger = get_logger("dls.api")

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Duckworth-Lewis Target Calculator API",
    version="0.1.0",
    description=(
        "Revised targets for the team batting second in interrupted limited-overs matches, "
        "using the Duckworth-Lewis Standard Edition method"
    ),
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
def _http_error(e: DLSError) -> HTTPException:
    status = 404 if isinstance(e, MatchNotFoundError) else 400
    logger.warning("Request failed | %s | %s", e.kind, e.message)
    return HTTPException(status_code=status, detail=e.to_dict())


def _match_view(match_id: int) -> dict:
    match = store.get(match_id)
    first = match.first_innings
    second = match.second_innings
    return {
        "match_id": match_id,
        "snapshot": to_snapshot(match).model_dump(),
        "first_innings_allocation": balls_to_overs_str(first.allocation_balls),
        "second_innings_allocation": balls_to_overs_str(second.allocation_balls),
        "second_innings_started": match.second_innings_started,
    }


# -----------------------
# Reference data
# -----------------------
@app.get("/api/categories")
def get_categories():
    return {"categories": list_categories()}


@app.get("/api/resources")
def get_resources(overs: str, wickets: int):
    """Single table lookup; overs in notation, e.g. 7.4 = 7 overs 4 balls."""
    try:
        balls = overs_to_balls(overs)
    except ValueError as e:
        raise _http_error(OutOfRangeError(str(e)))

    try:
        pct = resource_percentage(balls_to_overs(balls), wickets)
    except DLSError as e:
        raise _http_error(e)

    return {"overs": balls_to_overs_str(balls), "wickets": wickets, "resources": round(float(pct), 4)}


# -----------------------
# Matches
# -----------------------
class NewMatchRequest(BaseModel):
    starting_overs: int = Field(..., description="Overs per side when the first ball is bowled (1-50)")
    category: Optional[str] = Field(None, description="e.g. icc_full_member, icc_associate_member")
    g50: Optional[int] = Field(None, description="Custom G50; omit for the category default")
    team1_name: str = Field("Team 1", description="Team batting first")
    team2_name: str = Field("Team 2", description="Team batting second")


class InterruptionRequest(BaseModel):
    wickets_lost: int = Field(..., description="Total wickets down when play stopped")
    overs_completed: str = Field(..., description="Overs bowled in the innings when play stopped, e.g. 12.0 or 30.2")
    overs_removed: str = Field(..., description="Overs this stoppage takes off THIS innings, e.g. 10.0")
    innings: Literal["first", "second"] = "first"


class WicketRequest(BaseModel):
    innings: Literal["first", "second"] = "first"


class TargetRequest(BaseModel):
    team1_score: Optional[int] = Field(None, description="Runs scored by team 1 (not the par score)")


class DeleteRequest(BaseModel):
    match_ids: List[int] = Field(default_factory=list)


@app.post("/api/matches")
def create_match(req: NewMatchRequest):
    try:
        match = new_match(
            req.starting_overs,
            req.category,
            g50=req.g50,
            team1_name=req.team1_name,
            team2_name=req.team2_name,
        )
    except DLSError as e:
        raise _http_error(e)

    match_id = store.add(match)
    with store.locked():
        return _match_view(match_id)


@app.get("/api/matches")
def get_matches():
    return {"matches": store.list_matches()}


@app.get("/api/matches/{match_id}")
def get_match(match_id: int):
    try:
        with store.locked():
            return _match_view(match_id)
    except DLSError as e:
        raise _http_error(e)


@app.delete("/api/matches/{match_id}")
def delete_match(match_id: int):
    removed = store.delete([match_id])
    if not removed:
        raise _http_error(MatchNotFoundError(f"match with id {match_id} not found"))
    return {"deleted": removed}


@app.post("/api/matches/delete")
def delete_matches(req: DeleteRequest):
    return {"deleted": store.delete(req.match_ids)}


@app.post("/api/matches/{match_id}/interruptions")
def add_interruption(match_id: int, req: InterruptionRequest):
    try:
        with store.locked():
            match = store.get(match_id)
            interruption = match.record_interruption(
                req.wickets_lost,
                req.overs_completed,
                req.overs_removed,
                req.innings,
            )
            view = _match_view(match_id)
    except DLSError as e:
        raise _http_error(e)

    view["recorded"] = {
        "innings": interruption.innings.value,
        "wickets_lost": interruption.wickets_lost,
        "overs_completed": balls_to_overs_str(interruption.overs_completed_balls),
        "overs_left": balls_to_overs_str(interruption.overs_left_balls),
        "overs_removed": balls_to_overs_str(interruption.overs_removed_balls),
    }
    return view


@app.post("/api/matches/{match_id}/wickets")
def add_wicket(match_id: int, req: WicketRequest):
    try:
        with store.locked():
            wickets = store.get(match_id).record_wicket(req.innings)
            view = _match_view(match_id)
    except DLSError as e:
        raise _http_error(e)
    view["wickets_lost"] = wickets
    return view


@app.post("/api/matches/{match_id}/target")
def match_target(match_id: int, req: TargetRequest):
    try:
        with store.locked():
            match = store.get(match_id)
            result = match.compute_target(req.team1_score)
            # Only a score that produced a target is kept on the match
            if req.team1_score is not None:
                match.record_team1_score(req.team1_score)
    except DLSError as e:
        raise _http_error(e)

    return {"match_id": match_id, "result": result.to_dict()}


# -----------------------
# Stateless target (full snapshot in, result out)
# -----------------------
@app.post("/api/target")
def stateless_target(snapshot: MatchSnapshot):
    try:
        match = from_snapshot(snapshot)
        result = match.compute_target()
    except DLSError as e:
        raise _http_error(e)

    return {"input": snapshot.model_dump(), "result": result.to_dict()}
