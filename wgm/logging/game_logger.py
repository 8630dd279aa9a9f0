"""Structured event log for a Werewolf game."""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime

from wgm.logging.formats import LogEntry, EventType
from wgm.core.utils import generate_game_id


class GameLogger:
    """Event log for one game, kept in memory and optionally as JSONL.

    Private entries (role assignment, night actions, seer results, agent
    failures) are dropped at write time when ``log_private`` is False, and
    hidden from ``get_entries`` unless asked for.
    """

    def __init__(
        self,
        game_id: Optional[str] = None,
        output_dir: Optional[Path] = None,
        log_private: bool = True,
    ):
        """Initialize game logger.

        Args:
            game_id: Game the entries belong to
            output_dir: Directory for ``<game_id>.jsonl`` (None keeps entries in memory only)
            log_private: Whether to record private entries at all
        """
        self.game_id = game_id or generate_game_id()
        self.output_dir = Path(output_dir) if output_dir else None
        self.log_private = log_private

        self.entries: List[LogEntry] = []
        self.current_round = 0
        self.current_phase: Optional[str] = None

        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.output_dir / f"{self.game_id}.jsonl"
        else:
            self.log_file = None

    def log(
        self,
        event_type: EventType,
        data: Dict[str, Any],
        player_id: Optional[int] = None,
        is_private: bool = False,
    ) -> None:
        if is_private and not self.log_private:
            return

        entry = LogEntry(
            timestamp=datetime.now(),
            event_type=event_type,
            game_id=self.game_id,
            round_number=self.current_round,
            phase=self.current_phase,
            data=data,
            player_id=player_id,
            is_private=is_private,
        )
        self.entries.append(entry)

        if self.log_file:
            self._append(entry)

    def _append(self, entry: LogEntry) -> None:
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(entry.to_json() + '\n')
        except OSError as e:
            print(f"Warning: Failed to write log entry: {e}")

    # Typed helpers used by the engine

    def log_round_start(self, round_number: int) -> None:
        """Start tagging entries with a new round."""
        self.current_round = round_number
        self.log(EventType.ROUND_START, {"round": round_number})

    def log_phase_change(self, old_phase: str, new_phase: str) -> None:
        self.current_phase = new_phase
        self.log(EventType.PHASE_CHANGE, {"old_phase": old_phase, "new_phase": new_phase})

    def log_action(
        self,
        player_id: int,
        action_type: str,
        target: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Night action (kill / heal / poison). Always private."""
        self.log(
            EventType.PLAYER_ACTION,
            {"action_type": action_type, "target": target, "data": data or {}},
            player_id=player_id,
            is_private=True,
        )

    def log_vote(self, voter_id: int, target_id: int) -> None:
        self.log(EventType.VOTE_CAST, {"voter": voter_id, "target": target_id}, player_id=voter_id)

    def log_elimination(self, player_id: int, role: str, cause: str) -> None:
        self.log(EventType.PLAYER_ELIMINATED, {"role": role, "by": cause}, player_id=player_id)

    def log_agent_error(self, player_id: int, call: str, error: str) -> None:
        """A decision-agent call timed out, raised or returned garbage."""
        self.log(
            EventType.AGENT_ERROR,
            {"call": call, "error": error},
            player_id=player_id,
            is_private=True,
        )

    def log_error(self, error_type: str, message: str, details: Optional[Dict] = None,
                  player_id: Optional[int] = None, is_private: bool = False) -> None:
        """A rule violation or an infrastructure failure the game survived.

        Rejected night actions pass ``is_private=True``: their messages name
        the acting seat and its target.
        """
        self.log(
            EventType.ERROR,
            {"error_type": error_type, "message": message, "details": details or {}},
            player_id=player_id,
            is_private=is_private,
        )

    # Reading back

    def get_entries(
        self,
        event_type: Optional[EventType] = None,
        player_id: Optional[int] = None,
        round_number: Optional[int] = None,
        include_private: bool = False
    ) -> List[LogEntry]:
        """Filter the in-memory entries.

        Args:
            event_type: Only this event type
            player_id: Only entries about this seat
            round_number: Only entries logged during this round
            include_private: Include private entries

        Returns:
            Matching entries in logging order
        """
        return [
            e for e in self.entries
            if (event_type is None or e.event_type == event_type)
            and (player_id is None or e.player_id == player_id)
            and (round_number is None or e.round_number == round_number)
            and (include_private or not e.is_private)
        ]

    def export_to_json(self, filepath: Path, include_private: bool = False) -> None:
        """Write the entries as one JSON array."""
        data = [entry.to_dict() for entry in self.get_entries(include_private=include_private)]
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)

    def get_stats(self) -> Dict[str, Any]:
        counts = Counter(entry.event_type.name for entry in self.entries)
        return {
            "game_id": self.game_id,
            "total_entries": len(self.entries),
            "current_round": self.current_round,
            "private_entries": sum(1 for e in self.entries if e.is_private),
            "agent_errors": counts.get(EventType.AGENT_ERROR.name, 0),
            "event_type_counts": dict(counts),
        }

    @staticmethod
    def read_jsonl(path: Path) -> List[LogEntry]:
        """Load a JSONL event log written by a previous game."""
        entries = []
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                if line.strip():
                    entries.append(LogEntry.from_dict(json.loads(line)))
        return entries
