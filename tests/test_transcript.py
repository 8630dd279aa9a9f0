"""Tests for game transcripts, the file store and the event logger."""

import json

import pytest

from wgm.core.exceptions import TranscriptError
from wgm.core.types import Role, Team
from wgm.logging.formats import EventType
from wgm.logging.game_logger import GameLogger
from wgm.logging.transcript import FileTranscriptStore, GameTranscript, TranscriptPlayer


def make_transcript(game_id: str = "game_1") -> GameTranscript:
    transcript = GameTranscript(
        game_id=game_id,
        role_counts={Role.WEREWOLF: 1, Role.SEER: 1, Role.VILLAGER: 1},
        players=[
            TranscriptPlayer(id=1, role="werewolf"),
            TranscriptPlayer(id=2, role="seer"),
            TranscriptPlayer(id=3, role="villager", personality="cautious"),
        ],
    )
    transcript.total_rounds = 1
    transcript.add_speech(1, 2, "Player 1 is a werewolf!", thinking="I checked them", trace_id="t-1")
    transcript.add_vote(1, 2, 1, "seer result")
    transcript.add_night_action(1, 1, Role.WEREWOLF, "kill", target=3, reason=None)
    return transcript


class TestGameTranscript:

    def test_mark_death_once(self):
        transcript = make_transcript()
        transcript.mark_death(3, 1, "werewolf_kill")
        transcript.mark_death(3, 2, "vote")

        player = transcript.player(3)
        assert player.is_alive is False
        assert (player.death_round, player.death_reason) == (1, "werewolf_kill")

    def test_finalize_once(self):
        transcript = make_transcript()
        transcript.finalize(Team.VILLAGE, "All werewolves eliminated", [2, 3])
        transcript.finalize(Team.WEREWOLVES, "late", [1])

        assert transcript.result["winner"] == "villager"
        assert transcript.result["survivingPlayers"] == [2, 3]
        assert transcript.is_completed
        assert [e["type"] for e in transcript.events].count("game_end") == 1

    def test_camel_case_wire_format(self):
        transcript = make_transcript()
        transcript.mark_death(1, 1, "vote")
        transcript.finalize(Team.VILLAGE, "All werewolves eliminated", [2, 3])

        data = transcript.to_dict()

        assert data["gameId"] == "game_1"
        assert data["config"] == {
            "playerCount": 3,
            "roles": {"villager": 1, "werewolf": 1, "seer": 1, "witch": 0},
        }
        assert data["players"][0] == {"id": 1, "role": "werewolf", "isAlive": False,
                                      "deathRound": 1, "deathReason": "vote"}
        assert data["players"][2]["personality"] == "cautious"
        assert data["speeches"][0]["traceId"] == "t-1"
        assert data["votes"][0]["voterId"] == 2
        assert data["nightActions"][0]["role"] == "WEREWOLF"
        assert "reason" not in data["nightActions"][0]
        assert "duration" in data and "endTime" in data

    def test_dict_round_trip_keeps_result(self):
        transcript = make_transcript()
        transcript.finalize(Team.WEREWOLVES, "parity", [1])

        restored = GameTranscript.from_dict(json.loads(transcript.to_json()))

        assert restored.game_id == transcript.game_id
        assert restored.role_counts[Role.WEREWOLF] == 1
        assert restored.result == transcript.result
        assert restored.player(1).role == "werewolf"
        assert restored.summary()["winner"] == "werewolf"


class TestFileTranscriptStore:

    @pytest.mark.asyncio
    async def test_save_and_load(self, tmp_path):
        store = FileTranscriptStore(tmp_path / "transcripts")
        await store.save(make_transcript())

        assert store.path_for("game_1").exists()
        loaded = store.load("game_1")
        assert loaded.speeches[0]["content"] == "Player 1 is a werewolf!"

    def test_load_missing_returns_none(self, tmp_path):
        assert FileTranscriptStore(tmp_path).load("nope") is None

    def test_corrupt_file_raises(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json")

        with pytest.raises(TranscriptError):
            FileTranscriptStore(tmp_path).load("bad")

    def test_list_summaries_skips_corrupt(self, tmp_path):
        store = FileTranscriptStore(tmp_path)
        store.save_sync(make_transcript("game_a"))
        store.save_sync(make_transcript("game_b"))
        (tmp_path / "broken.json").write_text("[]")

        summaries = store.list_summaries()

        assert {s["gameId"] for s in summaries} == {"game_a", "game_b"}
        assert summaries[0]["startTime"] >= summaries[1]["startTime"]

    def test_delete(self, tmp_path):
        store = FileTranscriptStore(tmp_path)
        store.save_sync(make_transcript())

        assert store.delete("game_1") is True
        assert store.delete("game_1") is False


class TestGameLogger:

    def test_private_entries_filtered(self):
        logger = GameLogger(game_id="g", log_private=False)
        logger.log(EventType.ROLE_ASSIGNMENT, {"roles": {}}, is_private=True)
        logger.log(EventType.ANNOUNCEMENT, {"content": "hi"})

        assert len(logger.entries) == 1

    def test_jsonl_output(self, tmp_path):
        logger = GameLogger(game_id="g", output_dir=tmp_path)
        logger.log_round_start(1)
        logger.log_elimination(3, "villager", "vote")

        lines = (tmp_path / "g.jsonl").read_text().splitlines()
        assert len(lines) == 2
        last = json.loads(lines[-1])
        assert last["round_number"] == 1
        assert last["player_id"] == 3

    def test_stats(self):
        logger = GameLogger(game_id="g")
        logger.log_action(1, "kill", 3)
        logger.log_error("invalid_vote", "Cannot vote for yourself", player_id=2)

        stats = logger.get_stats()
        assert stats["total_entries"] == 2
        assert stats["private_entries"] == 1
        assert stats["event_type_counts"] == {"PLAYER_ACTION": 1, "ERROR": 1}

    def test_entries_stamped_with_round_and_phase(self):
        logger = GameLogger(game_id="g")
        logger.log_round_start(1)
        logger.log_phase_change("preparing", "night")
        logger.log_agent_error(4, "use_ability", "timed out after 1.0s")
        logger.log_round_start(2)
        logger.log_phase_change("voting", "night")
        logger.log_vote(2, 5)

        error = logger.get_entries(EventType.AGENT_ERROR, include_private=True)[0]
        assert (error.round_number, error.phase) == (1, "night")
        assert [e.event_type for e in logger.get_entries(round_number=2)] == [
            EventType.ROUND_START, EventType.PHASE_CHANGE, EventType.VOTE_CAST,
        ]
        assert logger.get_stats()["agent_errors"] == 1

    def test_read_back_jsonl_and_export(self, tmp_path):
        logger = GameLogger(game_id="g", output_dir=tmp_path)
        logger.log_round_start(1)
        logger.log_action(1, "kill", 3, {"reason": "quiet"})

        entries = GameLogger.read_jsonl(tmp_path / "g.jsonl")
        assert [e.event_type for e in entries] == [EventType.ROUND_START, EventType.PLAYER_ACTION]
        assert entries[1].is_private and entries[1].data["target"] == 3

        export = tmp_path / "public.json"
        logger.export_to_json(export)
        assert [e["event_type"] for e in json.loads(export.read_text())] == ["ROUND_START"]
