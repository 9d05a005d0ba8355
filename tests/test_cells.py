from collections import Counter

import pytest

from legislativas_live.model.cells import (
    CELL_STYLES,
    CellCategory,
    classify_cells,
    next_contenders,
    seats_at_risk,
)
from legislativas_live.model.seats import compute_quotients

PARTIES = [("A", 9000), ("B", 7000), ("C", 4000), ("D", 1500)]


@pytest.fixture
def quotients():
    return compute_quotients(PARTIES, max_divisor=20)


def by_rank(quotients, categories):
    return [categories.get(cell.key) for cell in quotients]


class TestClassifyCells:
    """Test labelling of the divisor table by rank."""

    def test_rank_layout(self, quotients):
        """A=3, S=4: three finalized, four simulated (two borderline), two pulsing contenders."""
        categories = classify_cells(quotients, attributed=3, available=4)
        ranks = by_rank(quotients, categories)

        assert ranks[:9] == [
            CellCategory.FINALIZED,
            CellCategory.FINALIZED,
            CellCategory.FINALIZED,
            CellCategory.SIMULATED,
            CellCategory.SIMULATED,
            CellCategory.BORDERLINE_SIMULATED,
            CellCategory.BORDERLINE_SIMULATED,
            CellCategory.PULSING_CONTENDER,
            CellCategory.PULSING_CONTENDER,
        ]
        assert all(category is None for category in ranks[9:])

    @pytest.mark.parametrize("attributed,available", [(0, 0), (0, 1), (2, 1), (5, 2), (0, 9), (9, 0), (4, 6)])
    def test_coverage(self, quotients, attributed, available):
        categories = classify_cells(quotients, attributed, available)
        counts = Counter(categories.values())

        assert counts[CellCategory.FINALIZED] == attributed
        assert sum(1 for c in categories.values() if c.is_simulated) == available
        assert counts[CellCategory.BORDERLINE_SIMULATED] == min(available, 2)
        assert counts[CellCategory.CONTENDER] + counts[CellCategory.PULSING_CONTENDER] == 2
        assert len(categories) == attributed + available + 2

    def test_single_available_mandate(self, quotients):
        """Only the last simulated seat is borderline when one mandate is open."""
        categories = classify_cells(quotients, attributed=2, available=1)
        ranks = by_rank(quotients, categories)

        assert ranks[:3] == [
            CellCategory.FINALIZED,
            CellCategory.FINALIZED,
            CellCategory.BORDERLINE_SIMULATED,
        ]

    def test_contenders_not_pulsing_without_simulation(self, quotients):
        categories = classify_cells(quotients, attributed=5, available=0)
        ranks = by_rank(quotients, categories)

        assert ranks[5:7] == [CellCategory.CONTENDER, CellCategory.CONTENDER]
        assert CellCategory.PULSING_CONTENDER not in categories.values()

    def test_short_sequence(self):
        """Fewer cells than T+2: classify what exists and stop."""
        quotients = compute_quotients([("A", 100)], max_divisor=3)

        categories = classify_cells(quotients, attributed=1, available=1)

        assert by_rank(quotients, categories) == [
            CellCategory.FINALIZED,
            CellCategory.BORDERLINE_SIMULATED,
            CellCategory.PULSING_CONTENDER,
        ]

    def test_empty_sequence(self):
        assert classify_cells([], attributed=3, available=2) == {}

    def test_keyed_by_party_and_divisor(self, quotients):
        categories = classify_cells(quotients, attributed=1, available=0)

        assert categories[("A", 1)] is CellCategory.FINALIZED
        assert categories[("B", 1)] is CellCategory.CONTENDER

    def test_every_category_has_a_style(self):
        assert set(CELL_STYLES) == set(CellCategory)

    def test_holds_seat(self):
        assert CellCategory.BORDERLINE_SIMULATED.holds_seat
        assert not CellCategory.PULSING_CONTENDER.holds_seat


class TestSummaries:
    """Test the next-quotient and at-risk summaries."""

    def test_next_contenders(self, quotients):
        contenders = next_contenders(quotients, total_mandates=4)

        assert contenders == quotients[4:6]

    def test_next_contenders_short(self):
        quotients = compute_quotients([("A", 100)], max_divisor=3)

        assert [c.key for c in next_contenders(quotients, total_mandates=2)] == [("A", 3)]
        assert next_contenders(quotients, total_mandates=3) == []

    def test_seats_at_risk(self, quotients):
        at_risk = seats_at_risk(quotients, available=5)

        assert at_risk == quotients[3:5]

    def test_seats_at_risk_single(self, quotients):
        assert seats_at_risk(quotients, available=1) == quotients[:1]

    def test_seats_at_risk_without_simulation(self, quotients):
        assert seats_at_risk(quotients, available=0) == []
