"""Analysis tools for saved games."""

from wgm.analysis.stats import (
    load_transcripts,
    summaries_frame,
    players_frame,
    team_win_rates,
    role_survival_rates,
    death_causes,
    win_rate_confidence_interval,
    summarize,
)

__all__ = [
    "load_transcripts",
    "summaries_frame",
    "players_frame",
    "team_win_rates",
    "role_survival_rates",
    "death_causes",
    "win_rate_confidence_interval",
    "summarize",
]
