from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from salesboard.analytics.name_matching import (
    MATCH_THRESHOLD,
    AliasTable,
    canonicalize,
    confidence_label,
    similarity,
)
from salesboard.models.sales import SaleRecord
from salesboard.schemas.meetings import MeetingCandidate, MeetingStatsResponse, MeetingStatsRow
from salesboard.shared.time import resolve_window_start

DEFAULT_LOOKBACK_DAYS = 90


def find_meeting_candidates(
    salesperson: str,
    customer_name: str,
    meetings: Iterable[SaleRecord],
    alias_table: AliasTable,
    today: date,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    threshold: float = MATCH_THRESHOLD,
) -> List[MeetingCandidate]:
    """Rank the salesperson's open meetings that could have produced a sale.

    Only pure meeting log entries count: unconverted, with a customer name,
    dated within the lookback window. Ties keep input order.
    """
    person = canonicalize(salesperson, alias_table)
    if person is None:
        return []
    cutoff = today - timedelta(days=lookback_days)

    candidates: List[MeetingCandidate] = []
    for meeting in meetings:
        if not meeting.is_meeting_log or meeting.converted:
            continue
        meeting_customer = (meeting.customer_name or "").strip()
        if not meeting_customer:
            continue
        if meeting.date < cutoff:
            continue
        owner = canonicalize(meeting.raw_seller_name, alias_table)
        if owner is None or owner.display_name != person.display_name:
            continue
        score = similarity(customer_name, meeting_customer)
        if score < threshold:
            continue
        candidates.append(
            MeetingCandidate(
                meeting_id=meeting.row_number,
                date=meeting.date,
                salesperson=person.display_name,
                customer_name=meeting_customer,
                match_score=score,
                confidence=confidence_label(score),
                converted=False,
            )
        )
    candidates.sort(key=lambda candidate: candidate.match_score, reverse=True)
    return candidates


def mark_converted(meeting: SaleRecord, order_id: str) -> SaleRecord:
    return meeting.model_copy(update={"linked_order_id": order_id})


def find_meeting(meetings: Iterable[SaleRecord], meeting_id: int) -> Optional[SaleRecord]:
    for meeting in meetings:
        if meeting.row_number == meeting_id and meeting.is_meeting_log:
            return meeting
    return None


def summarize_meeting_conversions(
    records: Iterable[SaleRecord],
    window: str,
    today: date,
    alias_table: AliasTable,
) -> MeetingStatsResponse:
    window_start = resolve_window_start(window, today)
    counts: Dict[str, List[int]] = {name: [0, 0] for name in alias_table.display_names}
    for record in records:
        if not record.is_meeting_log or record.date < window_start:
            continue
        person = canonicalize(record.raw_seller_name, alias_table)
        if person is None:
            continue
        counts[person.display_name][0] += 1
        if record.converted:
            counts[person.display_name][1] += 1

    people = [
        MeetingStatsRow(
            name=name,
            meetings=meetings,
            converted=converted,
            conversion_rate=(converted / meetings) if meetings else 0.0,
        )
        for name, (meetings, converted) in counts.items()
    ]
    people.sort(key=lambda row: row.meetings, reverse=True)
    total_meetings = sum(row.meetings for row in people)
    total_converted = sum(row.converted for row in people)
    return MeetingStatsResponse(
        time_period=window,
        people=people,
        total_meetings=total_meetings,
        total_converted=total_converted,
        conversion_rate=(total_converted / total_meetings) if total_meetings else 0.0,
    )
