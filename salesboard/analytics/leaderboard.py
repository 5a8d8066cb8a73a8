from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Mapping

from salesboard.analytics.budget_pacing import pace
from salesboard.analytics.name_matching import AliasTable, canonicalize
from salesboard.models.sales import SaleRecord
from salesboard.schemas.leaderboard import LeaderboardResponse, LeaderboardRow, LeaderboardTotals
from salesboard.shared.time import resolve_window_start


@dataclass
class _Tally:
    db: float = 0.0
    meetings: int = 0
    retention: float = 0.0
    month_to_date_db: float = 0.0


def resolve_goal(name: str, goals_by_person: Mapping[str, float], default_goal: float) -> float:
    goal = goals_by_person.get(name)
    return goal if goal is not None and goal > 0 else default_goal


def aggregate_leaderboard(
    records: Iterable[SaleRecord],
    window: str,
    today: date,
    alias_table: AliasTable,
    goals_by_person: Mapping[str, float],
    default_goal: float,
) -> LeaderboardResponse:
    window_start = resolve_window_start(window, today)
    month_start = today.replace(day=1)
    tallies: Dict[str, _Tally] = {name: _Tally() for name in alias_table.display_names}

    for record in records:
        in_window = record.date >= window_start
        in_month = record.date >= month_start
        if not in_window and not in_month:
            continue
        person = canonicalize(record.raw_seller_name, alias_table)
        if person is None:
            continue
        tally = tallies[person.display_name]
        if in_month:
            tally.month_to_date_db += record.amount
        if not in_window:
            continue
        tally.db += record.amount
        if record.is_meeting:
            tally.meetings += 1
        if record.is_retention:
            tally.retention += record.amount

    rows: List[LeaderboardRow] = []
    for name, tally in tallies.items():
        goal = resolve_goal(name, goals_by_person, default_goal)
        rows.append(
            LeaderboardRow(
                name=name,
                db=tally.db,
                meetings=tally.meetings,
                retention=tally.retention,
                goal=goal,
                goal_progress=(tally.db / goal) * 100,
                budget=pace(max(tally.month_to_date_db, 0.0), goal, today),
            )
        )
    rows.sort(key=lambda row: row.db, reverse=True)

    totals = LeaderboardTotals(
        db=sum(row.db for row in rows),
        meetings=sum(row.meetings for row in rows),
        retention=sum(row.retention for row in rows),
    )
    return LeaderboardResponse(time_period=window, leaderboard=rows, totals=totals)
