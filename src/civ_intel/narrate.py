"""Markdown narration of save and log data for LLM consumption.

All functions are pure: data in, string out. No side effects, no I/O.
"""

from __future__ import annotations

from civ_intel.logs import models as lm
from civ_intel.logs.world import ACTIVATED, ADDED, GRANTED, cultural_class
from civ_intel.save.models import GameState, SaveFileInfo

LOGGING_HINT = (
    "Enable game logging with GameHistoryLogLevel=1 in UserOptions.txt "
    "and play at least one turn."
)

_MEDALS = {1: "1st", 2: "2nd", 3: "3rd"}


def _signed(value: float) -> str:
    return f"+{value:g}" if value >= 0 else f"{value:g}"


def _same_civ(a: str | None, b: str | None) -> bool:
    """Loose match between save names and log names ("Ottoman" ~ "Ottoman Empire")."""
    if not a or not b:
        return False
    a, b = a.lower(), b.lower()
    return a in b or b in a


# ---------------------------------------------------------------------------
# Saves
# ---------------------------------------------------------------------------


def narrate_saves(saves: list[SaveFileInfo], filter: str, saves_dir: str) -> str:
    if not saves:
        return f"No save files found with filter: {filter}\n\nSave directory: {saves_dir}"
    lines = [f"Found {len(saves)} save file(s):", ""]
    for i, s in enumerate(saves, start=1):
        leader = f" ({s.leader})" if s.leader else ""
        turn = f" Turn {s.turn}" if s.turn else ""
        lines.append(f"{i}. {s.name}{leader}{turn}")
        lines.append(f"   Modified: {s.modified}")
        lines.append(f"   Path: {s.path}")
    return "\n".join(lines)


def narrate_strategy_brief(
    state: GameState,
    stats: list[lm.CivStatistics],
    progress: list[lm.VictoryProgress],
    context: str | None = None,
) -> str:
    """Briefing combining the save with the latest complete log turn."""
    civ = state.civilization
    lines = [
        "# Civilization VI Strategy Brief",
        "",
        "## Current Game State",
        f"- **Leader**: {state.leader or 'Unknown'} of {civ or 'Unknown'}",
        f"- **Turn**: {state.turn if state.turn is not None else 'Unknown'}",
        f"- **Era**: {state.era or 'Unknown'}",
        f"- **Difficulty**: {state.difficulty or 'Unknown'}",
        "",
        "## Map Settings",
        f"- **Type**: {state.map_type or 'Unknown'}",
        f"- **Size**: {state.map_size or 'Unknown'}",
        f"- **Speed**: {state.game_speed or 'Standard'}",
        "",
    ]

    content = state.content
    if content and content.player_cities:
        lines.append(f"## Your Cities ({len(content.player_cities)} found)")
        lines.append(", ".join(content.player_cities))
        lines.append("")

    me = next((s for s in stats if _same_civ(s.civilization, civ)), None)
    if me:
        lines += [
            f"## Your Empire Status (Turn {me.turn})",
            f"- **Population**: {me.population} across {me.cities} cities",
            f"- **Science**: {me.science_per_turn}/turn ({me.techs_researched} techs researched)",
            f"- **Culture**: {me.culture_per_turn}/turn ({me.civics_researched} civics researched)",
            f"- **Gold**: {me.gold_per_turn}/turn ({me.gold_balance} in treasury)",
            f"- **Faith**: {me.faith_per_turn}/turn ({me.faith_balance} accumulated)",
            f"- **Military**: {me.land_units} land units, {me.naval_units} naval units",
            f"- **Territory**: {me.tiles_owned} tiles owned, {me.tiles_improved} improved",
            "",
        ]

    if progress:
        mine = next((p for p in progress if _same_civ(p.civilization, civ)), None)
        if mine:
            lines += [
                "## Victory Progress",
                f"- **Science Victory**: Position #{mine.science.position} "
                f"({mine.science.value} techs, {mine.science_per_turn}/turn)",
                f"- **Culture Victory**: Position #{mine.culture.position} "
                f"({mine.culture.value} culture/turn)",
                f"- **Domination**: Position #{mine.domination.position} "
                f"({mine.domination.value} military units)",
                f"- **Overall Score**: Position #{mine.score.position}",
                "",
            ]
        lines.append("## Victory Leaders")
        for p in progress:
            if p.science.position == 1:
                lines.append(
                    f"- **Science**: {p.leader} ({p.science.value} techs, {p.science_per_turn}/turn)"
                )
        for p in progress:
            if p.culture.position == 1:
                lines.append(f"- **Culture**: {p.leader} ({p.culture.value}/turn)")
        for p in progress:
            if p.domination.position == 1:
                lines.append(f"- **Military**: {p.leader} ({p.domination.value} units)")
        lines.append("")

    if stats:
        lines += [
            "## Civilization Comparison",
            "| Civ | Pop | Cities | Sci/t | Cul/t | Gold/t | Military |",
            "|-----|-----|--------|-------|-------|--------|----------|",
        ]
        for s in sorted(stats, key=lambda s: s.population, reverse=True):
            mark = "**" if _same_civ(s.civilization, civ) else ""
            lines.append(
                f"| {mark}{s.leader}{mark} | {s.population} | {s.cities} | {s.science_per_turn} "
                f"| {s.culture_per_turn} | {s.gold_per_turn} | {s.military_units} |"
            )
        lines.append("")

    if state.other_civs:
        lines.append(f"## Other Civilizations ({len(state.other_civs)})")
        for c in state.other_civs:
            lines.append(f"- **{c.leader}** of {c.civilization}")
        lines.append("")

    if state.city_states:
        lines.append(f"## City-States ({len(state.city_states)})")
        lines.append(", ".join(state.city_states))
        lines.append("")

    if content and content.wonders:
        lines += ["## Wonders Built", ", ".join(content.wonders), ""]
    if content and content.great_people:
        lines += ["## Great People", ", ".join(content.great_people[:10]), ""]

    if state.mods:
        lines.append(f"## Active Mods ({len(state.mods)})")
        for mod in state.mods[:5]:
            lines.append(f"- {mod.title}")
        if len(state.mods) > 5:
            lines.append(f"- ... and {len(state.mods) - 5} more")
        lines.append("")

    lines += ["## Game Version", state.game_version or "Unknown"]

    if context:
        lines += ["", "## Player-Provided Context", context]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Empire statistics
# ---------------------------------------------------------------------------


def narrate_stats_comparison(stats: list[lm.CivStatistics]) -> str:
    majors = [s for s in stats if not s.is_city_state]
    if not majors:
        return "No statistics available."
    ranked = sorted(majors, key=lambda s: s.score, reverse=True)
    lines = [
        "# Civilization Statistics Comparison",
        f"Turn: {majors[0].turn}",
        "",
        "| Rank | Civilization | Score | Cities | Science/t | Culture/t | Gold/t | Faith/t | Military |",
        "|------|--------------|-------|--------|-----------|-----------|--------|---------|----------|",
    ]
    for i, s in enumerate(ranked, start=1):
        lines.append(
            f"| {i} | {s.leader} ({s.civilization}) | {s.score} | {s.cities} | {s.science_per_turn} "
            f"| {s.culture_per_turn} | {s.gold_per_turn} | {s.faith_per_turn} | {s.military_units} |"
        )
    lines += [
        "",
        "## Resources & Progress",
        "| Civilization | Gold | Faith | Techs | Civics | Pop | Tiles |",
        "|--------------|------|-------|-------|--------|-----|-------|",
    ]
    for s in ranked:
        lines.append(
            f"| {s.civilization} | {s.gold_balance} | {s.faith_balance} | {s.techs_researched} "
            f"| {s.civics_researched} | {s.population} | {s.tiles_owned} |"
        )
    return "\n".join(lines)


def _medal(position: int) -> str:
    return _MEDALS.get(position, f"{position}.")


def narrate_victory_progress(progress: list[lm.VictoryProgress]) -> str:
    if not progress:
        return "No victory progress data available."
    lines = ["# Victory Progress", "", "## Science Victory (by Techs Researched)"]
    for p in sorted(progress, key=lambda p: p.science.position):
        lines.append(
            f"{_medal(p.science.position)} **{p.leader}** ({p.civilization}) - "
            f"{p.science.value} techs, {p.science_per_turn}/turn"
        )
    lines += ["", "## Culture Victory (by Culture/turn)"]
    for p in sorted(progress, key=lambda p: p.culture.position):
        lines.append(
            f"{_medal(p.culture.position)} **{p.leader}** ({p.civilization}) - {p.culture.value}/turn"
        )
    lines += ["", "## Domination (by Military Strength)"]
    for p in sorted(progress, key=lambda p: p.domination.position):
        lines.append(
            f"{_medal(p.domination.position)} **{p.leader}** ({p.civilization}) - "
            f"{p.domination.value} units"
        )
    lines += ["", "## Score"]
    for p in sorted(progress, key=lambda p: p.score.position):
        lines.append(f"{_medal(p.score.position)} **{p.leader}** ({p.civilization}) - {p.score.value}")
    return "\n".join(lines)


def narrate_score_breakdown(scores: list[lm.ScoreBreakdown]) -> str:
    if not scores:
        return f"No score data available. {LOGGING_HINT}"
    lines = [
        f"# Score Breakdown (Turn {scores[0].turn})",
        "",
        "| Civilization | Total | Empire | Tech | Civics | Wonders | Great People | Religion |",
        "|--------------|-------|--------|------|--------|---------|--------------|----------|",
    ]
    for s in scores:
        lines.append(
            f"| {s.civilization} | {s.total} | {s.empire} | {s.tech} | {s.civics} "
            f"| {s.wonder} | {s.great_people} | {s.religion} |"
        )

    categories = (
        ("Empire", "empire"),
        ("Tech", "tech"),
        ("Civics", "civics"),
        ("Wonders", "wonder"),
        ("Great People", "great_people"),
        ("Religion", "religion"),
    )
    lines += ["", "## Category Leaders"]
    for label, attr in categories:
        best = max(scores, key=lambda s: getattr(s, attr))
        lines.append(f"- **{label}**: {best.civilization} ({getattr(best, attr)})")
    return "\n".join(lines)


def _arrow(change: float) -> str:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "flat"


def narrate_trends(trends: list[lm.CivTrend]) -> str:
    if not trends:
        return "No trend data available. Need at least 2 turns of game history."
    t0 = trends[0]
    lines = [f"# Trend Analysis (Turns {t0.start_turn} -> {t0.end_turn})", ""]

    lines += [
        "## Score Trends",
        "| Civilization | Score | Change | Growth |",
        "|--------------|-------|--------|--------|",
    ]
    for t in sorted(trends, key=lambda t: t.score.change, reverse=True):
        lines.append(
            f"| {t.leader} | {t.score.end} | {_signed(t.score.change)} ({_arrow(t.score.change)}) "
            f"| {_signed(t.score.percent_change)}% |"
        )

    lines += [
        "",
        "## Science Trends",
        "| Civilization | Science/turn | Change | Techs Gained |",
        "|--------------|--------------|--------|--------------|",
    ]
    for t in sorted(trends, key=lambda t: t.science.change, reverse=True):
        lines.append(
            f"| {t.leader} | {t.science.end} | {_signed(t.science.change)} "
            f"({_arrow(t.science.change)}) | {_signed(t.techs.change)} |"
        )

    lines += [
        "",
        "## Culture Trends",
        "| Civilization | Culture/turn | Change | Growth |",
        "|--------------|--------------|--------|--------|",
    ]
    for t in sorted(trends, key=lambda t: t.culture.change, reverse=True):
        lines.append(
            f"| {t.leader} | {t.culture.end} | {_signed(t.culture.change)} "
            f"({_arrow(t.culture.change)}) | {_signed(t.culture.percent_change)}% |"
        )

    lines += [
        "",
        "## Military Trends",
        "| Civilization | Units | Change | Growth |",
        "|--------------|-------|--------|--------|",
    ]
    for t in sorted(trends, key=lambda t: t.military.change, reverse=True):
        warning = " (!)" if t.military.change >= 5 else ""
        lines.append(
            f"| {t.leader} | {t.military.end} | {_signed(t.military.change)}{warning} "
            f"| {_signed(t.military.percent_change)}% |"
        )

    lines += [
        "",
        "## Expansion Trends",
        "| Civilization | Cities | Territory | Change |",
        "|--------------|--------|-----------|--------|",
    ]
    for t in sorted(trends, key=lambda t: t.territory.change, reverse=True):
        city_change = "=" if t.cities.change == 0 else _signed(t.cities.change)
        lines.append(
            f"| {t.leader} | {t.cities.end} ({city_change}) | {t.territory.end} tiles "
            f"| {_signed(t.territory.change)} |"
        )

    lines += ["", "## Key Insights"]
    buildups = sorted(
        (t for t in trends if t.military.change >= 3),
        key=lambda t: t.military.change,
        reverse=True,
    )
    if buildups:
        lines.append("### Military Buildups")
        for t in buildups:
            lines.append(
                f"- **{t.leader}**: +{t.military.change} units "
                f"({_signed(t.military.percent_change)}%) - Potential threat"
            )
        lines.append("")
    fastest = max(trends, key=lambda t: t.score.percent_change)
    if fastest.score.percent_change > 0:
        lines.append(
            f"### Fastest Growing: **{fastest.leader}** (+{fastest.score.percent_change}% score)"
        )
    science_leader = max(trends, key=lambda t: t.science.end)
    if science_leader.science.change > 0:
        lines.append(
            f"### Science Leader: **{science_leader.leader}** at {science_leader.science.end}/turn "
            f"(+{science_leader.science.change})"
        )
    declining = sorted((t for t in trends if t.score.change < 0), key=lambda t: t.score.change)
    if declining:
        lines.append("### Declining Civilizations")
        for t in declining:
            lines.append(f"- **{t.leader}**: {t.score.change} score ({t.score.percent_change}%)")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Diplomacy / military
# ---------------------------------------------------------------------------


def _threat_label(threat: float) -> str:
    if threat > 50:
        return "High"
    if threat > 25:
        return "Medium"
    return "Low"


def narrate_diplomacy(relations: list[lm.DiplomaticRelation], civilization: str | None = None) -> str:
    """Latest turn's relations grouped by the civ holding the opinion."""
    if not relations:
        return "No diplomatic data available."
    latest = max(r.turn for r in relations)
    current = [r for r in relations if r.turn == latest]

    by_civ: dict[str, list[lm.DiplomaticRelation]] = {}
    for rel in current:
        by_civ.setdefault(rel.from_civ, []).append(rel)
    order = list(by_civ)
    if civilization:
        order = [c for c in order if _same_civ(c, civilization)]
        if not order:
            return f"No diplomatic data for {civilization}."

    lines = [f"# Diplomatic Status (Turn {latest})", ""]
    for from_civ in order:
        you = " (You)" if civilization else ""
        lines += [
            f"## {from_civ}{you}",
            "",
            "| Civilization | Status | Score | Threat | Trust |",
            "|--------------|--------|-------|--------|-------|",
        ]
        for rel in sorted(by_civ[from_civ], key=lambda r: r.score, reverse=True):
            state = rel.state.replace("_", " ").lower()
            lines.append(
                f"| {rel.to_civ} | {state} | {_signed(rel.score)} "
                f"| {_threat_label(rel.threat)} ({rel.threat:.0f}) | {rel.trust:.0f} |"
            )
        lines.append("")

    wars = sorted({" vs ".join(sorted((r.from_civ, r.to_civ))) for r in current if r.state == "WAR"})
    if wars:
        lines.append("## Active Wars")
        lines += [f"- {pair}" for pair in wars]
    return "\n".join(lines).rstrip()


def narrate_diplomatic_modifiers(
    modifiers: list[lm.DiplomaticModifier], civilization: str | None = None
) -> str:
    if not modifiers:
        return "No diplomatic modifiers available."
    latest = max(m.turn for m in modifiers)
    by_player: dict[str, dict[str, list[lm.DiplomaticModifier]]] = {}
    for m in modifiers:
        if m.turn != latest or (civilization and not _same_civ(m.player, civilization)):
            continue
        by_player.setdefault(m.player, {}).setdefault(m.opponent, []).append(m)
    if not by_player:
        return f"No diplomatic modifiers for {civilization} on turn {latest}."

    lines = [f"# Diplomatic Modifiers (Turn {latest})", ""]
    for player, by_opponent in by_player.items():
        lines += [f"## {player}", ""]
        for opponent, mods in by_opponent.items():
            parts = [f"{m.modifier} ({_signed(m.value)})" for m in mods if m.value != 0][:5]
            if parts:
                lines.append(f"**{opponent}**: {', '.join(parts)}")
        lines.append("")
    return "\n".join(lines).rstrip()


def _desire_label(desire: float) -> str:
    if desire > 10:
        return "HIGH"
    if desire > 5:
        return "MEDIUM"
    return "LOW"


def narrate_military(intel: list[lm.MilitaryIntelligence]) -> str:
    if not intel:
        return "No military intelligence available."
    latest = max(i.turn for i in intel)
    current = sorted(
        (i for i in intel if i.turn == latest), key=lambda i: i.regional_strength, reverse=True
    )
    lines = [
        f"# Military Intelligence (Turn {latest})",
        "",
        "## Threat Assessment",
        "",
        "| Civilization | Strength | Combat Desire | Threat Level | Explorers |",
        "|--------------|----------|---------------|--------------|-----------|",
    ]
    for i in current:
        lines.append(
            f"| {i.civilization} | {i.regional_strength} | {i.combat_desire:.1f} "
            f"| {_desire_label(i.combat_desire)} | {i.current_explorers}/{i.desired_explorers} |"
        )
    priorities = [i for i in current if i.favorite_tech and i.favorite_tech != "No Tech"]
    if priorities:
        lines += ["", "## AI Military Priorities", ""]
        lines += [f"- **{i.civilization}**: Targeting {i.favorite_tech}" for i in priorities]

    pressured = [i for i in current if i.enemy_strength > 0]
    if pressured:
        lines += ["", "## Civs Under Military Pressure", ""]
        for i in pressured:
            ratio = i.regional_strength / i.enemy_strength
            status = "CRITICAL" if ratio < 0.5 else "Threatened" if ratio < 1 else "Defending"
            lines.append(
                f"- **{i.civilization}**: {i.regional_strength} vs {i.enemy_strength} "
                f"enemy strength ({status})"
            )
    return "\n".join(lines)


def narrate_combat_log(records: list[lm.CombatRecord], turns: int = 5) -> str:
    if not records:
        return "No combat records available."
    latest = max(r.turn for r in records)
    recent = [r for r in records if r.turn >= latest - turns]
    lines = [f"# Combat Log (Last {turns} Turns)", ""]
    if not recent:
        lines.append("No combat in recent turns.")
        return "\n".join(lines)

    by_turn: dict[int, list[lm.CombatRecord]] = {}
    for r in recent:
        by_turn.setdefault(r.turn, []).append(r)
    for turn in sorted(by_turn, reverse=True):
        lines += [f"## Turn {turn}", ""]
        for r in by_turn[turn]:
            outcome = "successful" if r.defender_damage > r.attacker_damage else "repelled"
            lines.append(
                f"- **{r.attacker_civ}** {r.attacker_unit} vs **{r.defender_civ}** {r.defender_unit}: "
                f"{r.defender_damage} damage dealt, {r.attacker_damage} taken ({outcome})"
            )
        lines.append("")

    pairs = dict.fromkeys(" vs ".join(sorted((r.attacker_civ, r.defender_civ))) for r in recent)
    lines.append("## Active Conflicts")
    lines += [f"- {pair}" for pair in pairs]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Cities / tech / world
# ---------------------------------------------------------------------------


def narrate_city_production(
    production: list[lm.CityProduction], strategic: list[lm.CityProduction]
) -> str:
    if not production:
        return "No city production data available."
    turn = production[0].turn
    lines = [f"# City Production (Turn {turn})", ""]
    if strategic:
        lines += ["## Strategic Production (Watch These!)", ""]
        for p in strategic:
            lines.append(
                f"- **{p.city_display_name}**: {p.item_display_name} "
                f"({p.percent_complete}%) - {p.turns_remaining} turns"
            )
        lines.append("")
    lines += [
        "## All Production",
        "",
        "| City | Building | Progress | Turns |",
        "|------|----------|----------|-------|",
    ]
    for p in sorted(production, key=lambda p: p.turns_remaining)[:30]:
        lines.append(
            f"| {p.city_display_name} | {p.item_display_name} | {p.percent_complete}% | {p.turns_remaining} |"
        )
    return "\n".join(lines)


def narrate_city_status(
    production: list[lm.CityProduction], founding: list[lm.CityFoundingStats], player_id: int = 0
) -> str:
    mine = [f for f in founding if f.player_id == player_id]
    if not mine:
        return f"No city data available for player {player_id}. {LOGGING_HINT}"
    latest = production[0].turn if production else None
    by_city = {p.city: p for p in production}

    def row(stat: lm.CityFoundingStats, food: str) -> str:
        prod = by_city.get(stat.city)
        building = prod.item_display_name if prod else "-"
        turns = str(prod.turns_remaining) if prod else "-"
        return f"| {stat.city_display_name} | T{stat.turn} | {food} | {building} | {turns} |"

    header = [
        "| City | Founded | Food Adv. | Building | Turns |",
        "|------|---------|-----------|----------|-------|",
    ]
    challenged = sorted((f for f in mine if f.food_advantage < 0), key=lambda f: f.food_advantage)
    good = sorted(
        (f for f in mine if f.food_advantage >= 0), key=lambda f: f.food_advantage, reverse=True
    )

    lines = [
        f"# City Status (Turn {latest if latest is not None else '?'})",
        "",
        "*Food advantage is measured at founding. Negative values mark hard-to-grow sites.*",
        "",
    ]
    if challenged:
        lines += [
            "## Cities with Food Challenges",
            "",
            "These cities may struggle to grow without Granaries, Farms or trade routes:",
            "",
            *header,
        ]
        lines += [row(f, f"{f.food_advantage:.2f}") for f in challenged]
        lines.append("")
    if good:
        lines += ["## Cities with Good Food", "", *header]
        lines += [row(f, f"+{f.food_advantage:.2f}") for f in good]
        lines.append("")

    lines += [
        "## Summary",
        "",
        f"- **Total cities**: {len(mine)}",
        f"- **Food-challenged cities**: {len(challenged)}",
    ]
    if challenged:
        worst = challenged[0]
        lines.append(f"- **Worst food city**: {worst.city_display_name} ({worst.food_advantage:.2f})")
    if good:
        best = good[0]
        lines.append(f"- **Best food city**: {best.city_display_name} (+{best.food_advantage:.2f})")
    return "\n".join(lines)


def narrate_tech_status(counts: list[tuple[str, int]], turn: int | None) -> str:
    if turn is None:
        return "No technology data available."
    lines = [
        f"# Technology Status (Turn {turn})",
        "",
        "## Tech Progress by Civilization",
        "",
        "| Civilization | Techs Researched |",
        "|--------------|------------------|",
    ]
    lines += [f"| {civ} | {count} |" for civ, count in counts]
    return "\n".join(lines)


def narrate_world_congress(congress: lm.WorldCongress) -> str:
    if not congress.votes and not congress.results:
        return "No World Congress data available. Congress may not have convened yet."
    lines = ["# World Congress", ""]
    if congress.results:
        lines += ["## Recent Resolutions", ""]
        for r in congress.results:
            lines.append(
                f"- **{r.resolution}** (T{r.turn}): Option {r.winning_option} passed ({r.vote_count} votes)"
            )
        lines.append("")
    if congress.votes:
        lines += ["## Voting Record", ""]
        by_resolution: dict[str, list[lm.CongressVote]] = {}
        for v in congress.votes:
            by_resolution.setdefault(v.resolution, []).append(v)
        for resolution, votes in by_resolution.items():
            lines += [f"### {resolution}", ""]
            lines += [f"- {v.player}: {v.votes} votes for option {v.target_option}" for v in votes]
            lines.append("")
    return "\n".join(lines).rstrip()


def narrate_great_people(events: list[lm.GreatPersonEvent]) -> str:
    if not events:
        return "No Great People data available."
    lines = ["# Great People", ""]
    claimed = [e for e in events if e.event == GRANTED]
    available = [e for e in events if e.event == ADDED]
    if claimed:
        lines += ["## Recently Claimed", ""]
        lines += [
            f"- **{e.display_name}** ({e.gp_class}) - Claimed by {e.recipient or 'unknown'}"
            for e in claimed
        ]
        lines.append("")
    if available:
        lines += ["## Available for Recruitment", ""]
        lines += [
            f"- **{e.display_name}** ({e.gp_class}, {e.era}) - Cost: {e.cost if e.cost is not None else '?'}"
            for e in available
        ]
    return "\n".join(lines).rstrip()


def narrate_cultural_great_people(events: list[lm.GreatPersonEvent]) -> str:
    """Who is collecting Artists, Writers and Musicians."""
    if not events:
        return (
            "No cultural Great People data available. "
            "Artists, Writers, and Musicians have not been recruited yet."
        )
    owner_of = {e.individual: e.recipient for e in events if e.event == GRANTED and e.recipient}
    tallies: dict[str, dict[str, int]] = {}
    for e in events:
        if e.event == GRANTED and e.recipient:
            counts = tallies.setdefault(
                e.recipient, {"ARTIST": 0, "WRITER": 0, "MUSICIAN": 0, "works": 0}
            )
            counts[cultural_class(e)] += 1
        elif e.event == ACTIVATED:
            owner = owner_of.get(e.individual)
            if owner in tallies:
                tallies[owner]["works"] += 1

    lines = [
        "# Cultural Victory - Great People",
        "",
        "## Cultural Victory Race",
        "",
        "| Civilization | Artists | Writers | Musicians | Total | Works Created |",
        "|--------------|---------|---------|-----------|-------|---------------|",
    ]

    def total(c: dict[str, int]) -> int:
        return c["ARTIST"] + c["WRITER"] + c["MUSICIAN"]

    for civ, c in sorted(tallies.items(), key=lambda kv: total(kv[1]), reverse=True):
        lines.append(
            f"| {civ} | {c['ARTIST']} | {c['WRITER']} | {c['MUSICIAN']} | {total(c)} | {c['works']} |"
        )
    lines.append("")

    claimed = sorted((e for e in events if e.event == GRANTED), key=lambda e: e.turn, reverse=True)
    if claimed:
        lines += ["## Recent Acquisitions", ""]
        for e in claimed[:10]:
            lines.append(
                f"- T{e.turn}: {cultural_class(e).title()} **{e.display_name}** -> {e.recipient or 'unknown'}"
            )
        lines.append("")

    newest: dict[str, lm.GreatPersonEvent] = {}
    for e in events:
        if e.event != ADDED:
            continue
        cls = cultural_class(e)
        if cls not in newest or e.turn > newest[cls].turn:
            newest[cls] = e
    if newest:
        lines += ["## Currently Available", ""]
        for e in newest.values():
            lines.append(
                f"- **{e.display_name}** ({e.gp_class}, {e.era}) - "
                f"Cost: {e.cost if e.cost is not None else '?'}"
            )
    return "\n".join(lines).rstrip()


# ---------------------------------------------------------------------------
# Strategic overview
# ---------------------------------------------------------------------------


def narrate_strategic_overview(ov: lm.StrategicOverview) -> str:
    lines = [f"# Strategic Overview (Turn {ov.turn})", f"Perspective: {ov.player_civ}", ""]

    lines += ["## Immediate Threats", ""]
    if not ov.threats:
        lines.append("No immediate threats detected.")
    for t in ov.threats:
        bullet = "1." if t.level == "HIGH" else "-"
        lines.append(f"{bullet} **{t.civilization}** [{t.level}] - {t.reason}")
        lines.append(f"   {t.details}")
    lines.append("")

    lines += ["## Diplomatic Opportunities", ""]
    if not ov.opportunities:
        lines.append("No strong allies or friends.")
    for o in ov.opportunities:
        lines.append(f"- **{o.civilization}**: {o.state} ({_signed(o.score)}) - {o.suggestion}")
    lines.append("")

    if ov.conflicts:
        lines += ["## Active Conflicts", ""]
        lines += [f"- {c.pair}: {c.battles} recent battles" for c in ov.conflicts]
        lines.append("")

    if ov.victory_race:
        lines += [
            "## Victory Race",
            "",
            "| Victory Type | Leader | Your Position |",
            "|--------------|--------|---------------|",
        ]
        units = {"Score": "", "Science": " techs", "Culture": "/turn", "Domination": " units"}
        for v in ov.victory_race:
            position = f"#{v.player_position}" if v.player_position else "N/A"
            lines.append(f"| {v.category} | {v.leader} ({v.value}{units[v.category]}) | {position} |")
        lines.append("")

    if ov.key_production:
        lines += ["## Key Production to Watch", ""]
        for p in ov.key_production:
            lines.append(
                f"- **{p.city_display_name}**: {p.item_display_name} "
                f"({p.percent_complete}%) - {p.turns_remaining} turns"
            )
    return "\n".join(lines).rstrip()
