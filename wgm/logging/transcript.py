"""Human-readable game transcripts and where they are stored.

A transcript is the audit record of one game: who played what, every
public utterance, every vote and night action (with the agents' private
reasoning and trace ids) and the final result. It is finalized once, when
the game ends, and handed to a TranscriptStore.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from wgm.core.exceptions import TranscriptError
from wgm.core.types import Role, Team
from wgm.core.utils import get_timestamp, safe_json_dumps


WINNER_LABELS = {
    Team.WEREWOLVES: "werewolf",
    Team.VILLAGE: "villager",
}


@dataclass
class TranscriptPlayer:
    """Per-seat entry of the transcript."""
    id: int
    role: str
    is_alive: bool = True
    personality: Optional[str] = None
    death_round: Optional[int] = None
    death_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "role": self.role, "isAlive": self.is_alive}
        if self.personality:
            data["personality"] = self.personality
        if self.death_round is not None:
            data["deathRound"] = self.death_round
            data["deathReason"] = self.death_reason
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptPlayer":
        return cls(
            id=data["id"],
            role=data["role"],
            is_alive=data.get("isAlive", True),
            personality=data.get("personality"),
            death_round=data.get("deathRound"),
            death_reason=data.get("deathReason"),
        )


def _compact(record: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in record.items() if v is not None}


@dataclass
class GameTranscript:
    """Full record of one game."""
    game_id: str
    role_counts: Dict[Role, int]
    players: List[TranscriptPlayer] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    total_rounds: int = 0
    speeches: List[Dict[str, Any]] = field(default_factory=list)
    votes: List[Dict[str, Any]] = field(default_factory=list)
    night_actions: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    result: Optional[Dict[str, Any]] = None

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def player(self, player_id: int) -> Optional[TranscriptPlayer]:
        return next((p for p in self.players if p.id == player_id), None)

    def add_event(self, event_type: str, description: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.events.append(_compact({
            "type": event_type,
            "description": description,
            "data": data,
            "timestamp": get_timestamp(),
        }))

    def add_speech(self, round_number: int, player_id: int, content: str,
                   thinking: Optional[str] = None, trace_id: Optional[str] = None) -> None:
        self.speeches.append(_compact({
            "round": round_number,
            "playerId": player_id,
            "content": content,
            "thinking": thinking,
            "traceId": trace_id,
            "timestamp": get_timestamp(),
        }))

    def add_vote(self, round_number: int, voter_id: int, target_id: int, reason: str = "",
                 thinking: Optional[str] = None, trace_id: Optional[str] = None) -> None:
        self.votes.append(_compact({
            "round": round_number,
            "voterId": voter_id,
            "targetId": target_id,
            "reason": reason,
            "thinking": thinking,
            "traceId": trace_id,
            "timestamp": get_timestamp(),
        }))

    def add_night_action(self, round_number: int, player_id: int, role: Role, action: str,
                         **details: Any) -> None:
        record = {
            "round": round_number,
            "playerId": player_id,
            "role": role.name,
            "action": action,
        }
        record.update(details)
        record["timestamp"] = get_timestamp()
        self.night_actions.append(_compact(record))

    def mark_death(self, player_id: int, round_number: int, reason: str) -> None:
        entry = self.player(player_id)
        if entry is not None and entry.is_alive:
            entry.is_alive = False
            entry.death_round = round_number
            entry.death_reason = reason

    def finalize(self, winner: Team, reason: str, surviving_players: List[int]) -> None:
        """Record the result. Only the first call has any effect."""
        if self.result is not None:
            return
        self.end_time = datetime.now()
        label = WINNER_LABELS[winner]
        self.result = {
            "winner": label,
            "reason": reason,
            "survivingPlayers": list(surviving_players),
        }
        self.add_event("game_end", f"Game over: {reason}", {"winner": label, "reason": reason})

    def summary(self) -> Dict[str, Any]:
        """Short listing entry for this transcript."""
        return {
            "gameId": self.game_id,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "duration": self.duration_seconds,
            "playerCount": len(self.players),
            "totalRounds": self.total_rounds,
            "winner": self.result["winner"] if self.result else None,
            "isCompleted": self.is_completed,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "gameId": self.game_id,
            "startTime": self.start_time.isoformat(),
            "config": {
                "playerCount": len(self.players),
                "roles": {role.value: self.role_counts.get(role, 0) for role in Role},
            },
            "players": [p.to_dict() for p in self.players],
            "totalRounds": self.total_rounds,
            "speeches": self.speeches,
            "votes": self.votes,
            "nightActions": self.night_actions,
            "events": self.events,
        }
        if self.end_time is not None:
            data["endTime"] = self.end_time.isoformat()
            data["duration"] = self.duration_seconds
        if self.result is not None:
            data["result"] = self.result
        return data

    def to_json(self, indent: int = 2) -> str:
        return safe_json_dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameTranscript":
        roles = data.get("config", {}).get("roles", {})
        end_time = data.get("endTime")
        return cls(
            game_id=data["gameId"],
            role_counts={Role(name): count for name, count in roles.items()},
            players=[TranscriptPlayer.from_dict(p) for p in data.get("players", [])],
            start_time=datetime.fromisoformat(data["startTime"]),
            end_time=datetime.fromisoformat(end_time) if end_time else None,
            total_rounds=data.get("totalRounds", 0),
            speeches=list(data.get("speeches", [])),
            votes=list(data.get("votes", [])),
            night_actions=list(data.get("nightActions", [])),
            events=list(data.get("events", [])),
            result=data.get("result"),
        )


class TranscriptStore(ABC):
    """Destination for finalized transcripts."""

    @abstractmethod
    async def save(self, transcript: GameTranscript) -> None:
        """Persist a transcript.

        Raises:
            TranscriptError: If the transcript could not be saved
        """
        pass


class FileTranscriptStore(TranscriptStore):
    """Stores one ``<game_id>.json`` file per game in a directory."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def path_for(self, game_id: str) -> Path:
        return self.output_dir / f"{game_id}.json"

    async def save(self, transcript: GameTranscript) -> None:
        self.save_sync(transcript)

    def save_sync(self, transcript: GameTranscript) -> Path:
        path = self.path_for(transcript.game_id)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(transcript.to_json())
        except OSError as e:
            raise TranscriptError(
                f"Failed to save transcript {transcript.game_id}",
                details={"path": str(path), "error": str(e)},
            )
        return path

    def load(self, game_id: str) -> Optional[GameTranscript]:
        """Load a transcript, or None if it does not exist.

        Raises:
            TranscriptError: If the file exists but cannot be parsed
        """
        path = self.path_for(game_id)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("transcript is not a JSON object")
            return GameTranscript.from_dict(data)
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise TranscriptError(
                f"Corrupt transcript {game_id}",
                details={"path": str(path), "error": str(e)},
            )

    def list_summaries(self) -> List[Dict[str, Any]]:
        """Summaries of all stored transcripts, newest first."""
        if not self.output_dir.exists():
            return []

        summaries = []
        for path in sorted(self.output_dir.glob("*.json")):
            try:
                transcript = self.load(path.stem)
            except TranscriptError as e:
                print(f"Warning: Skipping unreadable transcript {path.name}: {e}")
                continue
            if transcript is not None:
                summaries.append(transcript.summary())

        return sorted(summaries, key=lambda s: s["startTime"], reverse=True)

    def delete(self, game_id: str) -> bool:
        path = self.path_for(game_id)
        if not path.exists():
            return False
        path.unlink()
        return True
