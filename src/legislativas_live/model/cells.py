from enum import Enum
from typing import Dict, List, Sequence, Tuple

from legislativas_live.model.seats import QuotientCell

CellKey = Tuple[str, int]


class CellCategory(str, Enum):
    FINALIZED = "finalized"
    SIMULATED = "simulated"
    BORDERLINE_SIMULATED = "borderline-simulated"
    CONTENDER = "contender"
    PULSING_CONTENDER = "pulsing-contender"

    @property
    def holds_seat(self) -> bool:
        return self in (CellCategory.FINALIZED, CellCategory.SIMULATED, CellCategory.BORDERLINE_SIMULATED)

    @property
    def is_simulated(self) -> bool:
        return self in (CellCategory.SIMULATED, CellCategory.BORDERLINE_SIMULATED)


# Background/foreground used by the divisor table.
CELL_STYLES = {
    CellCategory.FINALIZED: "background-color: #166534; color: white",
    CellCategory.SIMULATED: "background-color: #16a34a; color: white",
    CellCategory.BORDERLINE_SIMULATED: "background-color: #16a34a; color: white; font-weight: bold; border: 2px dashed #fde047",
    CellCategory.CONTENDER: "background-color: #d4d4d8; color: black",
    CellCategory.PULSING_CONTENDER: "background-color: #d4d4d8; color: black; font-weight: bold; border: 2px dashed #f97316",
}


def classify_cells(
    quotients: Sequence[QuotientCell], attributed: int, available: int
) -> Dict[CellKey, CellCategory]:
    """
    Label the leading cells of a region's sorted quotient sequence.

    With ``A`` attributed and ``S`` available mandates (``T = A + S``):

    - ranks ``0..A-1`` are finalized,
    - ranks ``A..T-1`` are simulated; rank ``T-1`` (if ``S >= 1``) and
      rank ``T-2`` (if ``S >= 2``) are borderline,
    - ranks ``T`` and ``T+1`` are contenders, pulsing while ``S > 0``.

    Anything past ``T+1`` or past the end of the sequence is left out.
    """
    attributed = max(attributed, 0)
    available = max(available, 0)
    total = attributed + available

    categories: Dict[CellKey, CellCategory] = {}
    for rank, cell in enumerate(quotients[: total + 2]):
        if rank < attributed:
            category = CellCategory.FINALIZED
        elif rank < total:
            borderline = rank == total - 1 or (available >= 2 and rank == total - 2)
            category = CellCategory.BORDERLINE_SIMULATED if borderline else CellCategory.SIMULATED
        elif available > 0:
            category = CellCategory.PULSING_CONTENDER
        else:
            category = CellCategory.CONTENDER
        categories[cell.key] = category
    return categories


def next_contenders(
    quotients: Sequence[QuotientCell], total_mandates: int, count: int = 2
) -> List[QuotientCell]:
    """Highest quotients left out once every physical mandate is filled."""
    start = max(total_mandates, 0)
    return list(quotients[start : start + count])


def seats_at_risk(
    quotients: Sequence[QuotientCell], available: int, count: int = 2
) -> List[QuotientCell]:
    """Last seats won by a D'Hondt run over the available mandates only."""
    if available <= 0:
        return []
    won = quotients[:available]
    return list(won[-count:])
