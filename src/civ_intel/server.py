"""MCP server for Civilization VI strategic intel.

Reads save files and the game's CSV telemetry logs; never talks to a
running game. Uses FastMCP with the lifespan pattern to hold the CivIntel
facade and the player's free-text game notes for the life of the process.
"""

import argparse
import asyncio
import json
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Optional

import uvicorn
from mcp.server.fastmcp import Context, FastMCP

from civ_intel import narrate as nr
from civ_intel import paths
from civ_intel.intel import CivIntel
from civ_intel.logs import owned_tech_counts
from civ_intel.web_api import create_app, to_dict

log = logging.getLogger(__name__)

GAME_CONTEXT = "game"

NO_STATS = (
    "Game history logging is not enabled or no game data found.\n\n"
    "To enable logging, set GameHistoryLogLevel to 1 in UserOptions.txt:\n"
    "{options}\n\nThen play at least one turn."
)


@dataclass
class ServerOptions:
    logs_dir: Optional[Path] = None
    saves_dir: Optional[Path] = None
    web_port: Optional[int] = None


@dataclass
class AppContext:
    intel: CivIntel
    notes: dict[str, str] = field(default_factory=dict)


_options = ServerOptions()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    intel = CivIntel(logs_dir=_options.logs_dir, saves_dir=_options.saves_dir)
    log.info("Logs: %s", intel.logs_dir)
    log.info("Saves: %s", intel.saves_dir)

    uvi_server = None
    api_task = None
    if _options.web_port:
        web_app = create_app(intel)
        uvi_config = uvicorn.Config(
            web_app, host="127.0.0.1", port=_options.web_port, log_level="info"
        )
        uvi_server = uvicorn.Server(uvi_config)
        api_task = asyncio.create_task(uvi_server.serve())
        log.info("Web API starting on http://127.0.0.1:%d", _options.web_port)

    try:
        yield AppContext(intel=intel)
    finally:
        if uvi_server is not None:
            uvi_server.should_exit = True
            await api_task


mcp = FastMCP(
    "Civilization VI Intel",
    instructions=(
        "Strategic intelligence for Civilization VI, read from save files and "
        "the game's history logs. Call get_strategic_overview first to orient yourself."
    ),
    lifespan=lifespan,
)


def _get_intel(ctx: Context) -> CivIntel:
    return ctx.request_context.lifespan_context.intel


def _get_notes(ctx: Context) -> dict[str, str]:
    return ctx.request_context.lifespan_context.notes


async def _logged(
    ctx: Context,
    tool_name: str,
    params: dict[str, Any],
    fn: Callable[[], str],
) -> str:
    """Run a tool function with timing, error handling, and logging."""
    start = time.monotonic()
    try:
        result = fn()
    except (ValueError, OSError) as e:
        result = f"Error: {e}"
        log.warning("%s(%s) failed: %s", tool_name, params, e)
        return result
    ms = int((time.monotonic() - start) * 1000)
    log.info("%s(%s) -> %d chars in %dms", tool_name, params, len(result), ms)
    return result


def _no_stats() -> str:
    return NO_STATS.format(options=paths.user_options_path())


# ---------------------------------------------------------------------------
# Save tools
# ---------------------------------------------------------------------------


@mcp.tool(annotations={"readOnlyHint": True})
async def list_saves(ctx: Context, filter: str = "all") -> str:
    """List Civilization VI save files, newest first.

    Args:
        filter: all, autosave, manual or quicksave.
    """
    intel = _get_intel(ctx)

    def _run():
        return nr.narrate_saves(intel.list_saves(filter), filter, str(intel.saves_dir))

    return await _logged(ctx, "list_saves", {"filter": filter}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def read_game_state(ctx: Context, save_path: str) -> str:
    """Decode a save file and return its game state as JSON.

    Args:
        save_path: Full path to a .Civ6Save file, or a path relative to the saves directory.
    """
    intel = _get_intel(ctx)

    def _run():
        return json.dumps(to_dict(intel.game_state(save_path)), indent=2)

    return await _logged(ctx, "read_game_state", {"save_path": save_path}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_strategy_brief(ctx: Context, save_path: str) -> str:
    """Strategy briefing for a save, enriched with the latest log statistics.

    Includes any context stored with set_game_context.

    Args:
        save_path: Full path to a .Civ6Save file, or a path relative to the saves directory.
    """
    intel = _get_intel(ctx)
    notes = _get_notes(ctx)

    def _run():
        state = intel.game_state(save_path)
        stats = intel.latest_full_stats()
        progress = intel.victory_progress()
        return nr.narrate_strategy_brief(state, stats, progress, notes.get(GAME_CONTEXT))

    return await _logged(ctx, "get_strategy_brief", {"save_path": save_path}, _run)


@mcp.tool()
async def set_game_context(ctx: Context, context: str) -> str:
    """Store free-text notes about the current game (goals, alliances, plans).

    The notes are appended to future strategy briefs and last until the server stops.
    """
    notes = _get_notes(ctx)

    def _run():
        notes[GAME_CONTEXT] = context
        return (
            "Game context saved. This information will be included in future strategy briefs."
        )

    return await _logged(ctx, "set_game_context", {"chars": len(context)}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_game_context(ctx: Context) -> str:
    """Return the notes stored with set_game_context."""
    notes = _get_notes(ctx)

    def _run():
        context = notes.get(GAME_CONTEXT)
        if not context:
            return (
                "No game context has been set. Use set_game_context to add "
                "information about your current game state."
            )
        return f"Current game context:\n\n{context}"

    return await _logged(ctx, "get_game_context", {}, _run)


# ---------------------------------------------------------------------------
# Empire statistics
# ---------------------------------------------------------------------------


@mcp.tool(annotations={"readOnlyHint": True})
async def get_civ_statistics(ctx: Context, turn: Optional[int] = None) -> str:
    """Raw per-civ statistics (yields, units, territory, score) as JSON.

    Args:
        turn: Turn to report. Defaults to the latest logged turn.
    """
    intel = _get_intel(ctx)

    def _run():
        if not intel.logging_enabled():
            return _no_stats()
        stats = intel.stats_for_turn(turn) if turn is not None else intel.latest_stats()
        if not stats:
            return f"No statistics logged for turn {turn}."
        return json.dumps(to_dict(stats), indent=2)

    return await _logged(ctx, "get_civ_statistics", {"turn": turn}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_victory_progress(ctx: Context) -> str:
    """Rank every major civ on science, culture, domination and score."""
    intel = _get_intel(ctx)

    def _run():
        progress = intel.victory_progress()
        if not progress:
            return _no_stats()
        return nr.narrate_victory_progress(progress)

    return await _logged(ctx, "get_victory_progress", {}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_yield_comparison(ctx: Context) -> str:
    """Side-by-side yields, treasury and territory for every major civ."""
    intel = _get_intel(ctx)

    def _run():
        stats = intel.latest_full_stats()
        if not stats:
            return _no_stats()
        return nr.narrate_stats_comparison(stats)

    return await _logged(ctx, "get_yield_comparison", {}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_score_breakdown(ctx: Context) -> str:
    """Score by category (empire, tech, civics, wonders, great people, religion)."""
    intel = _get_intel(ctx)
    return await _logged(
        ctx, "get_score_breakdown", {}, lambda: nr.narrate_score_breakdown(intel.score_breakdown())
    )


@mcp.tool(annotations={"readOnlyHint": True})
async def get_trend_analysis(ctx: Context, turns: int = 10) -> str:
    """How each civ's score, yields, military and territory moved recently.

    Args:
        turns: How many turns back to compare against (default 10).
    """
    intel = _get_intel(ctx)
    return await _logged(
        ctx, "get_trend_analysis", {"turns": turns}, lambda: nr.narrate_trends(intel.trends(turns))
    )


# ---------------------------------------------------------------------------
# Diplomacy / military
# ---------------------------------------------------------------------------


@mcp.tool(annotations={"readOnlyHint": True})
async def get_diplomatic_status(ctx: Context, civilization: Optional[str] = None) -> str:
    """How each civ regards the others: diplomatic state, score, threat and trust.

    Args:
        civilization: Only show relations held by this civ (e.g. "Georgia").
    """
    intel = _get_intel(ctx)

    def _run():
        relations = intel.diplomacy()
        if not relations:
            return (
                "No diplomatic data available. Make sure game logging is enabled "
                "(GameHistoryLogLevel=1 in UserOptions.txt)."
            )
        return nr.narrate_diplomacy(relations, civilization)

    return await _logged(ctx, "get_diplomatic_status", {"civilization": civilization}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_diplomatic_modifiers(ctx: Context, civilization: Optional[str] = None) -> str:
    """The individual opinion modifiers behind each diplomatic relationship.

    Args:
        civilization: Only show modifiers held by this civ.
    """
    intel = _get_intel(ctx)

    def _run():
        return nr.narrate_diplomatic_modifiers(intel.diplomatic_modifiers(), civilization)

    return await _logged(ctx, "get_diplomatic_modifiers", {"civilization": civilization}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_military_intelligence(ctx: Context) -> str:
    """AI military strength, combat desire and research priorities."""
    intel = _get_intel(ctx)
    return await _logged(
        ctx, "get_military_intelligence", {}, lambda: nr.narrate_military(intel.military_intel())
    )


@mcp.tool(annotations={"readOnlyHint": True})
async def get_combat_log(ctx: Context, turns: int = 5) -> str:
    """Recent battles grouped by turn, with the pairs currently fighting.

    Args:
        turns: How many turns of combat to show (default 5).
    """
    intel = _get_intel(ctx)
    return await _logged(
        ctx,
        "get_combat_log",
        {"turns": turns},
        lambda: nr.narrate_combat_log(intel.combat_log(), turns),
    )


# ---------------------------------------------------------------------------
# Cities / tech / world
# ---------------------------------------------------------------------------


@mcp.tool(annotations={"readOnlyHint": True})
async def get_city_production(ctx: Context) -> str:
    """What every city is building, highlighting game-changing projects."""
    intel = _get_intel(ctx)

    def _run():
        production = intel.city_production()
        return nr.narrate_city_production(production, intel.strategic_production())

    return await _logged(ctx, "get_city_production", {}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_city_status(ctx: Context, player_id: int = 0) -> str:
    """Your cities' food and production outlook at founding, with current builds.

    Args:
        player_id: Log player index (0 is usually the human player).
    """
    intel = _get_intel(ctx)

    def _run():
        return nr.narrate_city_status(
            intel.city_production(), intel.city_founding_stats(), player_id
        )

    return await _logged(ctx, "get_city_status", {"player_id": player_id}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_tech_status(ctx: Context) -> str:
    """Technologies owned by each civ on the latest logged turn."""
    intel = _get_intel(ctx)

    def _run():
        progress = intel.tech_status()
        turn = max((p.turn for p in progress), default=None)
        return nr.narrate_tech_status(owned_tech_counts(progress), turn)

    return await _logged(ctx, "get_tech_status", {}, _run)


@mcp.tool(annotations={"readOnlyHint": True})
async def get_world_congress(ctx: Context) -> str:
    """World Congress resolutions and how each civ voted."""
    intel = _get_intel(ctx)
    return await _logged(
        ctx, "get_world_congress", {}, lambda: nr.narrate_world_congress(intel.world_congress())
    )


@mcp.tool(annotations={"readOnlyHint": True})
async def get_great_people(ctx: Context) -> str:
    """Great people recently claimed and those available for recruitment."""
    intel = _get_intel(ctx)
    return await _logged(
        ctx, "get_great_people", {}, lambda: nr.narrate_great_people(intel.great_people())
    )


@mcp.tool(annotations={"readOnlyHint": True})
async def get_great_people_culture(ctx: Context) -> str:
    """Artists, writers and musicians per civ: the cultural victory race."""
    intel = _get_intel(ctx)
    return await _logged(
        ctx,
        "get_great_people_culture",
        {},
        lambda: nr.narrate_cultural_great_people(intel.cultural_great_people()),
    )


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------


@mcp.tool(annotations={"readOnlyHint": True})
async def get_strategic_overview(ctx: Context, civilization: Optional[str] = None) -> str:
    """Threats, friends, wars, victory race and doomsday builds in one report.

    Args:
        civilization: Whose perspective to take. Defaults to the first civ in the logs.
    """
    intel = _get_intel(ctx)

    def _run():
        overview = intel.strategic_overview(civilization)
        if overview is None:
            return (
                "No game data available. Enable logging (GameHistoryLogLevel=1) "
                "and play at least one turn."
            )
        return nr.narrate_strategic_overview(overview)

    return await _logged(ctx, "get_strategic_overview", {"civilization": civilization}, _run)


def main():
    """Entry point for the MCP server."""
    global _options

    parser = argparse.ArgumentParser(description="Civilization VI strategic intel MCP server")
    parser.add_argument("--logs-dir", type=Path, help="Directory holding the game's CSV logs")
    parser.add_argument("--saves-dir", type=Path, help="Directory holding Single/ saves")
    parser.add_argument("--web-port", type=int, help="Also serve the JSON API on this port")
    args = parser.parse_args()
    _options = ServerOptions(
        logs_dir=args.logs_dir, saves_dir=args.saves_dir, web_port=args.web_port
    )

    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")
