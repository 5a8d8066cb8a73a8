from __future__ import annotations

from typing import Dict, List, Optional

from salesboard.core.config import get_settings
from salesboard.core.sheets import SheetsClient, quote_range
from salesboard.models.sales import GoalRecord
from salesboard.repositories.sales_sheet_repository import cell_text
from salesboard.shared.currency import to_amount

FIRST_DATA_ROW = 2


class GoalsRepository:
    def __init__(self, client: Optional[SheetsClient] = None) -> None:
        self.client = client or SheetsClient()
        self.tab = get_settings().goals_sheet_tab

    def list_goal_records(self) -> List[GoalRecord]:
        rows = self.client.get_values(quote_range(self.tab, f"A{FIRST_DATA_ROW}:B"))
        records: List[GoalRecord] = []
        for offset, row in enumerate(rows):
            name = cell_text(row[0]) if row else None
            if not name:
                continue
            amount = to_amount(row[1]) if len(row) > 1 else 0.0
            records.append(GoalRecord(row_number=FIRST_DATA_ROW + offset, salesperson=name, amount=amount))
        return records

    def list_goals(self) -> Dict[str, float]:
        return {
            record.salesperson: record.amount
            for record in self.list_goal_records()
            if record.amount > 0
        }

    def upsert_goal(self, name: str, goal: float) -> None:
        for record in self.list_goal_records():
            if record.salesperson.lower() == name.lower():
                self.client.update_values(
                    quote_range(self.tab, f"A{record.row_number}:B{record.row_number}"),
                    [[name, goal]],
                )
                return
        self.client.append_row(quote_range(self.tab, "A:B"), [name, goal])
