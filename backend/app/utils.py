import time
from typing import Dict, List


def now_ts() -> float:
    return time.time()


def sort_leaderboard(players: List[str], scores: Dict[str, int]) -> List[dict]:
    ordered = sorted(players, key=lambda name: (-scores.get(name, 0), name.lower()))
    top = scores.get(ordered[0], 0) if ordered else 0
    rows = []
    for rank, name in enumerate(ordered, start=1):
        score = scores.get(name, 0)
        rows.append({"rank": rank, "name": name, "score": score, "winner": top > 0 and score == top})
    return rows
