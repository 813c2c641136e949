"""Lightweight HTTP API for dashboards.

Read-only JSON endpoints over the same CivIntel facade the MCP tools use.
Runs embedded inside the MCP server process when ``--web-port`` is given.
"""

import dataclasses
import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from civ_intel.intel import CivIntel
from civ_intel.save import SaveFormatError

log = logging.getLogger(__name__)


def create_app(intel: CivIntel) -> FastAPI:
    """Create a FastAPI app wired to the given CivIntel."""
    app = FastAPI(
        title="civ6-intel API",
        description="Read-only save and log data for Civilization VI",
    )
    app.state.intel = intel

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3001"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(SaveFormatError)
    async def save_format_error_handler(request, exc):
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid save file", "detail": str(exc)},
        )

    @app.exception_handler(FileNotFoundError)
    async def not_found_handler(request, exc):
        return JSONResponse(
            status_code=404,
            content={"error": "File not found", "detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request, exc):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc)},
        )

    @app.get("/api/saves")
    async def saves(request: Request, filter: str = Query("all")):
        return to_dict(request.app.state.intel.list_saves(filter))

    @app.get("/api/game-state")
    async def game_state(request: Request, path: str = Query(..., description="Save file path")):
        return to_dict(request.app.state.intel.game_state(path))

    @app.get("/api/stats")
    async def stats(request: Request, turn: Optional[int] = Query(None)):
        intel = request.app.state.intel
        data = intel.stats_for_turn(turn) if turn is not None else intel.latest_stats()
        return to_dict(data)

    @app.get("/api/victory")
    async def victory(request: Request):
        return to_dict(request.app.state.intel.victory_progress())

    @app.get("/api/trends")
    async def trends(request: Request, turns: int = Query(10, ge=1)):
        return to_dict(request.app.state.intel.trends(turns))

    @app.get("/api/scores")
    async def scores(request: Request):
        return to_dict(request.app.state.intel.score_breakdown())

    @app.get("/api/diplomacy")
    async def diplomacy(request: Request):
        return to_dict(request.app.state.intel.diplomacy())

    @app.get("/api/military")
    async def military(request: Request):
        return to_dict(request.app.state.intel.military_intel())

    @app.get("/api/combat")
    async def combat(request: Request):
        return to_dict(request.app.state.intel.combat_log())

    @app.get("/api/cities")
    async def cities(request: Request):
        return to_dict(request.app.state.intel.city_production())

    @app.get("/api/congress")
    async def congress(request: Request):
        return to_dict(request.app.state.intel.world_congress())

    @app.get("/api/great-people")
    async def great_people(request: Request):
        return to_dict(request.app.state.intel.great_people())

    @app.get("/api/overview")
    async def overview(request: Request, civilization: Optional[str] = Query(None)):
        return to_dict(request.app.state.intel.strategic_overview(civilization))

    return app


def to_dict(obj):
    """Serialize dataclass instances (including nested) to plain dicts."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {k: to_dict(v) for k, v in obj.items()}
    return obj
