from __future__ import annotations

from datetime import date
from typing import List

import pytest

from salesboard.analytics.name_matching import AliasTable
from salesboard.models.sales import SaleRecord
from tests.factories import InMemoryGoalsRepository, InMemorySalesRepository, make_meeting, make_record


@pytest.fixture()
def alias_table() -> AliasTable:
    return AliasTable(
        [
            ("Niels Larsen", ["niels larsen", "niels"]),
            ("Robert", ["robert"]),
            ("Søgaard", ["søgaard", "sogaard"]),
        ]
    )


@pytest.fixture()
def sales_records() -> List[SaleRecord]:
    return [
        make_record(2, date(2024, 2, 28), "Robert", 50000, order_id="900"),
        make_record(3, date(2024, 3, 5), "Robert", 30000, order_id="1001", is_retention=True),
        make_meeting(4, date(2024, 3, 1), "Robert", "Acme Holding"),
        make_record(5, date(2024, 3, 10), "Ukendt Sælger", 99999, order_id="1002"),
        make_meeting(6, date(2024, 3, 10), "robert", "Acme A/S"),
        make_meeting(7, date(2024, 3, 12), "Robert", "Acme A/S", linked_order_id="999"),
        make_meeting(8, date(2024, 3, 15), "Niels", "Acme A/S"),
        make_record(9, date(2024, 3, 20), "Niels Larsen", 20000, order_id="1003"),
        make_record(10, date(2024, 3, 21), "Robert H", 10000, order_id="1004", is_meeting=True),
    ]


@pytest.fixture()
def sales_repository(sales_records: List[SaleRecord]) -> InMemorySalesRepository:
    return InMemorySalesRepository(sales_records)


@pytest.fixture()
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository({"Robert": 80000.0})
