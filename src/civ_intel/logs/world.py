"""World_Congress.csv and Game_GreatPeople.csv."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from civ_intel.logs import _csv
from civ_intel.logs._csv import format_enum_name
from civ_intel.logs.models import (
    CongressResult,
    CongressVote,
    GreatPersonEvent,
    WorldCongress,
)
from civ_intel.logs.players import build_player_id_map, civ_name

GRANTED = "Granted to Player"
ADDED = "Added to Present Timeline"
ACTIVATED = "Great Person Activated"

CULTURAL_CLASSES = ("ARTIST", "WRITER", "MUSICIAN")


def parse_world_congress(logs_dir: Path) -> WorldCongress:
    """Votes cast and resolutions decided.

    An OPTIONS row carries the option a player voted for; it is copied onto
    the matching VOTES row (same turn, player and resolution).
    """
    rows = _csv.read_rows(logs_dir, _csv.WORLD_CONGRESS, 3)
    if not rows:
        return WorldCongress()
    votes: list[CongressVote] = []
    results: list[CongressResult] = []
    player_map = build_player_id_map(logs_dir)
    for row in rows:
        turn = _csv.to_int(row[0])
        if turn is None:
            continue
        action, resolution = row[1], format_enum_name(row[2])
        if action == "VOTES" and len(row) >= 5:
            player_id = _csv.to_int(row[3])
            if player_id is None:
                continue
            votes.append(
                CongressVote(
                    turn=turn,
                    resolution=resolution,
                    player_id=player_id,
                    player=civ_name(player_id, player_map),
                    votes=_csv.to_int(row[4]) or 0,
                )
            )
        elif action == "OPTIONS" and len(row) >= 6:
            player_id = _csv.to_int(row[3])
            for i, vote in enumerate(votes):
                if (vote.turn, vote.player_id, vote.resolution) == (turn, player_id, resolution):
                    votes[i] = replace(vote, target_option=_csv.to_int(row[5]) or 0)
                    break
        elif action == "RESOLUTION DECIDED" and len(row) >= 5:
            results.append(
                CongressResult(
                    turn=turn,
                    resolution=resolution,
                    winning_option=_csv.to_int(row[3]) or 0,
                    vote_count=_csv.to_int(row[4]) or 0,
                )
            )
    return WorldCongress(votes=votes, results=results)


def parse_great_people(logs_dir: Path) -> list[GreatPersonEvent]:
    rows = _csv.read_rows(logs_dir, _csv.GREAT_PEOPLE, 7)
    if not rows:
        return []
    player_map = build_player_id_map(logs_dir)
    events = []
    for row in rows:
        turn = _csv.to_int(row[0])
        if turn is None:
            continue
        recipient_id = _csv.to_int(row[6])
        if recipient_id is not None and recipient_id < 0:
            recipient_id = None
        events.append(
            GreatPersonEvent(
                turn=turn,
                event=row[1],
                individual=row[2],
                display_name=format_enum_name(row[2]),
                gp_class=format_enum_name(row[3]),
                era=format_enum_name(row[4]),
                cost=_csv.to_int(row[5]),
                recipient_id=recipient_id,
                recipient=civ_name(recipient_id, player_map) if recipient_id is not None else None,
            )
        )
    return events


def cultural_class(event: GreatPersonEvent) -> str | None:
    """ARTIST, WRITER or MUSICIAN for cultural great people, else None."""
    normalized = event.gp_class.upper().replace(" ", "_")
    for cls in CULTURAL_CLASSES:
        if cls in normalized:
            return cls
    return None


def parse_cultural_great_people(logs_dir: Path) -> list[GreatPersonEvent]:
    return [e for e in parse_great_people(logs_dir) if cultural_class(e)]
