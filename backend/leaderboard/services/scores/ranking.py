from dataclasses import asdict, dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class PlacementRow:
    nickname: str
    score: int
    placement: int

    def to_dict(self):
        return asdict(self)


def rank_scores(rows: Iterable[Tuple[str, int]]) -> List[PlacementRow]:
    """Assign competition-style placements to (nickname, score) rows.

    Equal scores share a placement and the next lower score is placed at its
    1-based position, so two tied leaders give 1, 1, 3. Rows are sorted by
    descending score first; the sort is stable, so ties keep input order.
    """
    ordered = sorted(rows, key=lambda row: row[1], reverse=True)
    # Scores are validated non-negative, -1 never matches
    last_score = -1
    last_placement = 1
    placements = []
    for i, (nickname, score) in enumerate(ordered):
        if score != last_score:
            last_score = score
            last_placement = i + 1
        placements.append(PlacementRow(nickname=nickname, score=score, placement=last_placement))
    return placements
