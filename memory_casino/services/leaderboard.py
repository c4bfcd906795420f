from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class LeaderboardEntry:
    player_id: int
    player_name: str
    score: int
    games_won: int

    def to_dict(self):
        return asdict(self)


def rebuild(players: Iterable) -> List[LeaderboardEntry]:
    """Project player rows into leaderboard entries, highest score first.

    The sort is stable, so equal scores keep the order of `players`.
    """
    entries = [
        LeaderboardEntry(
            player_id=p.id,
            player_name=p.name,
            score=p.score or 0,
            games_won=p.games_won or 0,
        )
        for p in players
    ]
    entries.sort(key=lambda e: e.score, reverse=True)
    return entries


def top_player(entries: List[LeaderboardEntry]) -> Optional[LeaderboardEntry]:
    return entries[0] if entries else None


def recent_winners(entries: List[LeaderboardEntry], count: int = 5) -> List[LeaderboardEntry]:
    return [e for e in entries if e.games_won > 0][:count]


def build_stats(players: List, active_games: int) -> dict:
    entries = rebuild(players)
    top = top_player(entries)
    return {
        'total_players': len(players),
        'total_games': sum(p.games_played or 0 for p in players),
        'active_games': active_games,
        'top_player': top.to_dict() if top else None,
        'recent_winners': [e.to_dict() for e in recent_winners(entries)],
    }
