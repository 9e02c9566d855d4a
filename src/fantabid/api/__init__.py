"""REST API for the fantabid draft assistant."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sqlite3
from typing import Any

from fastapi import Body, FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response

from fantabid.api.schemas import (
    BalanceResponse,
    BudgetResponse,
    InitResponse,
    MutationResponse,
    NeededResponse,
    OpponentPlayerResponse,
    OpponentResponse,
    PickRequest,
    PlayerResponse,
    PlayerSearchResponse,
    RoleBudgetResponse,
    RoleSuggestionsResponse,
    SuggestionsResponse,
    UnavailableRequest,
)
from fantabid.draft import (
    DraftState,
    balance_band,
    balance_score,
    budget_breakdown,
    cap_warning,
    from_snapshot,
    get_suggestions,
    initialize,
    mark_unavailable,
    opponent_summary,
    opponent_warning,
    pick,
    remaining_needed,
    to_snapshot,
    top_by_role,
)
from fantabid.errors import InvalidConfiguration, MalformedSnapshot, NotFoundError
from fantabid.ingest import parse_roster_csv
from fantabid.models import normalize_role
from fantabid.persistence import SnapshotStore
from fantabid.pool import PlayerFilter, export_players_to_csv, filter_players


logger = logging.getLogger(__name__)

SESSION_ENV = "FANTABID_SESSION"


def _default_session() -> str:
    return os.getenv(SESSION_ENV, "default")


def _parse_json_field(raw: str | None, *, field_name: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail=f"{field_name} must be a JSON object")
    return data


def _resolve_role(role: str) -> str:
    try:
        return normalize_role(role)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _mutation_response(
    session_id: str,
    state: DraftState,
    warnings: list[str],
    persisted: bool,
) -> MutationResponse:
    return MutationResponse(
        session_id=session_id,
        budget_remaining=state.budget_remaining,
        picked_count=len(state.picked),
        unavailable_count=len(state.unavailable),
        warnings=warnings,
        persisted=persisted,
    )


def create_app(store: SnapshotStore | None = None) -> FastAPI:
    app = FastAPI(title="fantabid Draft Assistant")
    sessions: dict[str, DraftState] = {}
    mutation_lock = asyncio.Lock()
    snapshot_store = store or SnapshotStore()
    app.state.sessions = sessions
    app.state.store = snapshot_store

    def _get_state(session_id: str) -> DraftState:
        state = sessions.get(session_id)
        if state is None:
            raise HTTPException(
                status_code=409,
                detail=f"Session {session_id!r} is not initialized",
            )
        return state

    def _persist(session_id: str, state: DraftState) -> bool:
        try:
            snapshot_store.save(session_id, state)
        except (sqlite3.Error, OSError):
            logger.exception("Failed to persist session %s", session_id)
            return False
        return True

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/draft/init", response_model=InitResponse)
    async def init_draft(
        roster: UploadFile = File(...),
        config: str | None = Form(None),
        roster_mapping: str | None = Form(None),
        session: str | None = Query(None),
    ):
        session_id = session or _default_session()
        settings = _parse_json_field(config, field_name="config")
        mapping = _parse_json_field(roster_mapping, field_name="roster_mapping")
        contents = await roster.read()
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="Roster file must be UTF-8 CSV") from exc

        players, report = parse_roster_csv(text, mapping=mapping or None)
        try:
            state = initialize(players, settings)
        except InvalidConfiguration as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        async with mutation_lock:
            sessions[session_id] = state
            persisted = _persist(session_id, state)

        return InitResponse(
            session_id=session_id,
            total_rows=report.total_rows,
            loaded_players=report.loaded_players,
            skipped_rows=report.skipped_rows,
            budget=state.config.budget,
            top_k=state.config.top_k,
            persisted=persisted,
        )

    @app.get("/draft/suggestions", response_model=SuggestionsResponse)
    async def suggestions(session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        roles = {
            role: RoleSuggestionsResponse(
                standard=[PlayerResponse.from_player(p) for p in result.standard],
                optimized=[PlayerResponse.from_player(p) for p in result.optimized],
            )
            for role, result in get_suggestions(state).items()
        }
        return SuggestionsResponse(budget_remaining=state.budget_remaining, roles=roles)

    @app.post("/draft/pick", response_model=MutationResponse)
    async def pick_player(payload: PickRequest, session: str | None = Query(None)):
        session_id = session or _default_session()
        async with mutation_lock:
            state = _get_state(session_id)
            try:
                updated = pick(state, payload.name, payload.price)
            except NotFoundError as exc:
                raise HTTPException(status_code=404, detail=str(exc)) from exc
            sessions[session_id] = updated
            persisted = _persist(session_id, updated)

        warnings: list[str] = []
        role = updated.picked[-1].role
        warning = cap_warning(updated, role)
        if warning:
            warnings.append(warning)
        return _mutation_response(session_id, updated, warnings, persisted)

    @app.post("/draft/unavailable", response_model=MutationResponse)
    async def unavailable(payload: UnavailableRequest, session: str | None = Query(None)):
        session_id = session or _default_session()
        async with mutation_lock:
            state = _get_state(session_id)
            updated = mark_unavailable(state, payload.name, payload.price, payload.owner)
            sessions[session_id] = updated
            persisted = _persist(session_id, updated)

        warnings: list[str] = []
        if updated is state:
            warnings.append(f"{payload.name} is already on your roster")
        elif payload.owner:
            warning = opponent_warning(updated, payload.owner.strip())
            if warning:
                warnings.append(warning)
        return _mutation_response(session_id, updated, warnings, persisted)

    @app.get("/draft/budget", response_model=BudgetResponse)
    async def budget(session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        roles = {
            role: RoleBudgetResponse(
                cap=item.cap,
                spent=item.spent,
                remaining=item.remaining,
                adjusted=item.adjusted,
                picked_count=item.picked_count,
                target_count=item.target_count,
            )
            for role, item in budget_breakdown(state).items()
        }
        return BudgetResponse(
            budget_total=state.config.budget,
            budget_remaining=state.budget_remaining,
            roles=roles,
        )

    @app.get("/draft/balance", response_model=BalanceResponse)
    async def balance(session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        score = balance_score(state)
        return BalanceResponse(score=score, band=balance_band(score))

    @app.get("/draft/needed", response_model=NeededResponse)
    async def needed(session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        return NeededResponse(needed=dict(remaining_needed(state)))

    @app.get("/draft/top/{role}", response_model=list[PlayerResponse])
    async def top(role: str, k: int | None = Query(None, ge=1), session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        resolved = _resolve_role(role)
        players = top_by_role(state, resolved, k or state.config.top_k)
        return [PlayerResponse.from_player(player) for player in players]

    @app.get("/draft/top/{role}/export.csv")
    async def top_csv(role: str, k: int | None = Query(None, ge=1), session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        resolved = _resolve_role(role)
        players = top_by_role(state, resolved, k or state.config.top_k)
        return Response(
            content=export_players_to_csv(players),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="top_{resolved}.csv"'},
        )

    @app.get("/draft/opponents", response_model=list[OpponentResponse])
    async def opponents(session: str | None = Query(None)):
        state = _get_state(session or _default_session())
        return [
            OpponentResponse(
                owner=summary.owner,
                budget_remaining=summary.budget_remaining,
                spent=summary.spent,
                players_by_role={
                    key: [OpponentPlayerResponse(name=p.name, price=p.price) for p in players]
                    for key, players in summary.players_by_role.items()
                },
                counts=dict(summary.counts),
                missing=dict(summary.missing),
                warnings=summary.warnings,
            )
            for summary in opponent_summary(state)
        ]

    @app.get("/players/search", response_model=PlayerSearchResponse)
    async def search_players(
        name: str | None = Query(None),
        team: str | None = Query(None),
        role: str | None = Query(None),
        available_only: bool = Query(False),
        limit: int | None = Query(None, ge=1, le=500),
        session: str | None = Query(None),
    ):
        state = _get_state(session or _default_session())
        criteria = PlayerFilter(
            name=name,
            team=team,
            role=_resolve_role(role) if role else None,
            available_only=available_only,
            limit=limit,
        )
        if criteria.is_empty():
            raise HTTPException(status_code=400, detail="Provide at least one search criterion")
        players = filter_players(state, criteria)
        return PlayerSearchResponse(
            total=len(players),
            players=[PlayerResponse.from_player(player) for player in players],
        )

    @app.get("/draft/state")
    async def export_state(session: str | None = Query(None)):
        return to_snapshot(_get_state(session or _default_session()))

    @app.put("/draft/state", response_model=MutationResponse)
    async def import_state(
        payload: dict[str, Any] = Body(...),
        session: str | None = Query(None),
    ):
        session_id = session or _default_session()
        try:
            state = from_snapshot(payload)
        except MalformedSnapshot as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        async with mutation_lock:
            sessions[session_id] = state
            persisted = _persist(session_id, state)
        return _mutation_response(session_id, state, [], persisted)

    @app.post("/api/save")
    async def save_state(session: str | None = Query(None)):
        session_id = session or _default_session()
        state = _get_state(session_id)
        if not _persist(session_id, state):
            raise HTTPException(status_code=500, detail="Failed to save draft state")
        return {"success": True, "session_id": session_id}

    @app.get("/api/load")
    async def load_state(session: str | None = Query(None)):
        session_id = session or _default_session()
        try:
            state = snapshot_store.load(session_id)
        except MalformedSnapshot as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if state is None:
            raise HTTPException(status_code=404, detail=f"No saved state for {session_id!r}")
        async with mutation_lock:
            sessions[session_id] = state
        return {"success": True, "session_id": session_id, "data": to_snapshot(state)}

    return app


__all__ = ["create_app"]
