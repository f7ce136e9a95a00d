"""REST API for the playlytics comparison service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from playlytics.analysis import CompareRequestHandler
from playlytics.api.schemas import (
    ComparisonResponse,
    ErrorResponse,
    PlayerResponse,
    SportResponse,
)
from playlytics.config import iter_sports
from playlytics.config_loader import Settings
from playlytics.errors import ComparisonError
from playlytics.models import PlayerDraft, PlayerUpdate
from playlytics.persistence import PlayerStore


logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def _error_response(exc: ComparisonError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": exc.render()})


def create_app(store: PlayerStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store or PlayerStore(settings.db_path)

    app = FastAPI(title="playlytics comparison service")
    app.state.settings = settings
    app.state.player_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(ComparisonError)
    async def comparison_error_handler(request: Request, exc: ComparisonError) -> JSONResponse:
        return _error_response(exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/sports", response_model=list[SportResponse])
    async def list_sports():
        return [SportResponse(key=sport.key, label=sport.label) for sport in iter_sports()]

    @app.get("/players", response_model=list[PlayerResponse])
    async def list_players(sport: str | None = Query(default=None)):
        return [PlayerResponse.from_record(player) for player in store.list_players(sport=sport)]

    @app.post("/players", response_model=PlayerResponse, status_code=201)
    async def create_player(draft: PlayerDraft):
        player = store.create_player(draft)
        logger.info("Created player %s (%s)", player.id, player.sport)
        return PlayerResponse.from_record(player)

    def _fetch_player_or_404(player_id: str):
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str):
        return PlayerResponse.from_record(_fetch_player_or_404(player_id))

    @app.patch("/players/{player_id}", response_model=PlayerResponse)
    async def update_player(player_id: str, update: PlayerUpdate):
        try:
            player = store.update_player(player_id, update)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Player not found") from exc
        return PlayerResponse.from_record(player)

    @app.delete("/players/{player_id}", status_code=204)
    async def delete_player(player_id: str):
        if not store.delete_player(player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        return Response(status_code=204)

    async def compare(request: Request):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        handler = CompareRequestHandler(store, thresholds=settings.thresholds)
        result = handler.handle_body(await request.body())
        return result.to_payload()

    for path in ("/compare-players", "/functions/v1/compare-players"):
        app.add_api_route(
            path,
            compare,
            methods=["POST", "OPTIONS"],
            response_model=ComparisonResponse,
            responses={500: {"model": ErrorResponse}},
        )

    return app


__all__ = ["create_app"]
