"""Game state for Werewolf."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from wgm.core.types import (
    AllSpeeches,
    AllVotes,
    GamePhase,
    InvestigatedPlayers,
    Role,
    Speech,
    Vote,
)
from wgm.engine.player import Player
from wgm.engine.types import NightIntentions


class SpeechLog:
    """Append-only speech history keyed by round."""

    def __init__(self):
        self._speeches: Dict[int, List[Speech]] = {}

    def add(self, round_number: int, speech: Speech) -> None:
        self._speeches.setdefault(round_number, []).append(speech)

    def get_round(self, round_number: int) -> List[Speech]:
        return list(self._speeches.get(round_number, []))

    def all(self, public_only: bool = False) -> AllSpeeches:
        """Copy of the history. Speech entries are immutable."""
        return {
            r: [s for s in speeches if s.is_public or not public_only]
            for r, speeches in self._speeches.items()
        }

    def __len__(self) -> int:
        return sum(len(speeches) for speeches in self._speeches.values())

    def __iter__(self):
        for r in sorted(self._speeches):
            for speech in self._speeches[r]:
                yield r, speech


@dataclass
class GameState:
    """Complete state of a Werewolf game.

    Attributes:
        players: Seat id -> Player, in seat order
        phase: Current game phase
        round_number: 0 while preparing, first night is round 1
        votes: Current voting phase, voter -> target
        all_votes: Per-round vote ledger
        night: Declared night actions of the current night
        investigations: Seer results keyed by round
        last_werewolf_kill: Most recent werewolf target
    """
    players: Dict[int, Player] = field(default_factory=dict)
    phase: GamePhase = GamePhase.PREPARING
    round_number: int = 0

    speeches: SpeechLog = field(default_factory=SpeechLog)
    votes: Dict[int, int] = field(default_factory=dict)
    all_votes: AllVotes = field(default_factory=dict)

    night: NightIntentions = field(default_factory=NightIntentions)
    investigations: InvestigatedPlayers = field(default_factory=dict)
    last_werewolf_kill: Optional[int] = None

    def get_alive_players(self) -> List[int]:
        """Return alive player IDs in seat order."""
        return [pid for pid, p in self.players.items() if p.is_alive]

    def get_alive_werewolves(self) -> List[int]:
        """Return alive werewolf IDs in seat order."""
        return [
            pid for pid, p in self.players.items()
            if p.is_alive and p.role == Role.WEREWOLF
        ]

    def get_alive_villagers(self) -> List[int]:
        """Return alive non-werewolf IDs in seat order."""
        return [
            pid for pid, p in self.players.items()
            if p.is_alive and p.role != Role.WEREWOLF
        ]

    def get_werewolves(self) -> List[int]:
        return [pid for pid, p in self.players.items() if p.role == Role.WEREWOLF]

    def get_alive_player_by_role(self, role: Role) -> Optional[Player]:
        """First living seat with the role, by seat id."""
        for player in self.players.values():
            if player.is_alive and player.role == role:
                return player
        return None

    def is_player_alive(self, player_id: int) -> bool:
        return player_id in self.players and self.players[player_id].is_alive

    def record_vote(self, voter_id: int, target_id: int) -> None:
        """Record a vote; a revote supersedes the voter's earlier one."""
        self.votes[voter_id] = target_id
        ledger = self.all_votes.setdefault(self.round_number, [])
        vote = Vote(voter_id=voter_id, target_id=target_id)
        for i, existing in enumerate(ledger):
            if existing.voter_id == voter_id:
                ledger[i] = vote
                break
        else:
            ledger.append(vote)

    def current_votes(self) -> List[Vote]:
        return [Vote(voter_id=v, target_id=t) for v, t in self.votes.items()]
