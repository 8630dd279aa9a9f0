"""Statistical analysis over saved game transcripts."""

from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import numpy as np
import pandas as pd
from scipy import stats as scipy_stats

from wgm.core.types import Role, Team
from wgm.logging.transcript import WINNER_LABELS, FileTranscriptStore, GameTranscript


GAME_COLUMNS = ["game_id", "winner", "reason", "rounds", "duration", "n_players", "completed"]
PLAYER_COLUMNS = ["game_id", "player_id", "role", "team", "survived", "death_round", "death_reason", "won"]


def load_transcripts(directory: Path) -> List[GameTranscript]:
    """Load every readable transcript in a directory."""
    store = FileTranscriptStore(directory)
    transcripts = []
    for summary in store.list_summaries():
        transcript = store.load(summary["gameId"])
        if transcript is not None:
            transcripts.append(transcript)
    return transcripts


def summaries_frame(transcripts: Iterable[GameTranscript]) -> pd.DataFrame:
    """One row per game."""
    rows = []
    for t in transcripts:
        rows.append({
            "game_id": t.game_id,
            "winner": t.result["winner"] if t.result else None,
            "reason": t.result["reason"] if t.result else None,
            "rounds": t.total_rounds,
            "duration": t.duration_seconds,
            "n_players": len(t.players),
            "completed": t.is_completed,
        })
    return pd.DataFrame(rows, columns=GAME_COLUMNS)


def players_frame(transcripts: Iterable[GameTranscript]) -> pd.DataFrame:
    """One row per seat per game."""
    wolf_label = WINNER_LABELS[Team.WEREWOLVES]
    rows = []
    for t in transcripts:
        winner = t.result["winner"] if t.result else None
        for p in t.players:
            team = wolf_label if p.role == Role.WEREWOLF.value else WINNER_LABELS[Team.VILLAGE]
            rows.append({
                "game_id": t.game_id,
                "player_id": p.id,
                "role": p.role,
                "team": team,
                "survived": p.is_alive,
                "death_round": p.death_round,
                "death_reason": p.death_reason,
                "won": winner is not None and winner == team,
            })
    return pd.DataFrame(rows, columns=PLAYER_COLUMNS)


def _finished(games: pd.DataFrame) -> pd.DataFrame:
    return games[games["completed"].astype(bool)]


def team_win_rates(games: pd.DataFrame) -> Dict[str, float]:
    """Share of completed games won by each team."""
    finished = _finished(games)
    if finished.empty:
        return {label: 0.0 for label in WINNER_LABELS.values()}
    counts = finished["winner"].value_counts()
    return {
        label: float(counts.get(label, 0)) / len(finished)
        for label in WINNER_LABELS.values()
    }


def role_survival_rates(players: pd.DataFrame) -> pd.DataFrame:
    """Per-role games played, survival rate and win rate."""
    if players.empty:
        return pd.DataFrame(columns=["role", "games", "survival_rate", "win_rate"])
    grouped = players.groupby("role").agg(
        games=("game_id", "count"),
        survival_rate=("survived", "mean"),
        win_rate=("won", "mean"),
    )
    return grouped.reset_index().sort_values("role").reset_index(drop=True)


def death_causes(players: pd.DataFrame) -> pd.DataFrame:
    """Count of deaths per role and cause."""
    dead = players[~players["survived"].astype(bool)]
    if dead.empty:
        return pd.DataFrame(columns=["role", "death_reason", "count"])
    return dead.groupby(["role", "death_reason"]).size().reset_index(name="count")


def win_rate_confidence_interval(
    games: pd.DataFrame,
    team: str = "werewolf",
    confidence_level: float = 0.95
) -> Tuple[float, float]:
    """Confidence interval for a team's win rate.

    Args:
        games: Frame from summaries_frame
        team: "werewolf" or "villager"
        confidence_level: Confidence level

    Returns:
        Tuple of (lower_bound, upper_bound), clipped to [0, 1]
    """
    finished = _finished(games)
    wins = (finished["winner"] == team).to_numpy(dtype=float)
    if len(wins) < 2:
        return (0.0, 0.0)

    mean = np.mean(wins)
    std_err = scipy_stats.sem(wins)
    if std_err == 0 or np.isnan(std_err):
        return (float(mean), float(mean))
    margin = std_err * scipy_stats.t.ppf((1 + confidence_level) / 2, len(wins) - 1)

    return (float(max(0.0, mean - margin)), float(min(1.0, mean + margin)))


def summarize(transcripts: List[GameTranscript]) -> Dict[str, object]:
    """Headline numbers for a batch of games."""
    games = summaries_frame(transcripts)
    players = players_frame(transcripts)
    finished = _finished(games)
    return {
        "games": len(games),
        "completed": len(finished),
        "win_rates": team_win_rates(games),
        "werewolf_win_rate_ci": win_rate_confidence_interval(games),
        "avg_rounds": float(finished["rounds"].mean()) if not finished.empty else 0.0,
        "role_survival": role_survival_rates(players),
    }
