"""Werewolf game master: phase state machine and round resolution."""

import asyncio
import random
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence

from wgm.core.base_agent import BaseAgent
from wgm.core.exceptions import (
    ConfigurationError,
    InvalidActionError,
    InvalidTransitionError,
    PhaseInProgressError,
    TranscriptError,
)
from wgm.core.types import (
    SYSTEM_SEAT,
    DeathCause,
    GamePhase,
    GameSummary,
    Role,
    Speech,
    SpeechKind,
    WinCondition,
)
from wgm.core.utils import generate_game_id
from wgm.engine.config import GameConfig
from wgm.engine.player import Player
from wgm.engine.rules import (
    NIGHT_ORDER,
    assign_roles,
    check_win_condition,
    investigate,
    resolve_night,
    tally_votes,
    validate_night_action,
    validate_vote,
    validate_witch_action,
    winning_team,
)
from wgm.engine.state import GameState
from wgm.engine.types import (
    NightIntentions,
    NightResolution,
    PlayerContext,
    SeerAbilityResponse,
    SeerContext,
    VoteResult,
    WerewolfAbilityResponse,
    WerewolfContext,
    WitchAbilityResponse,
    WitchContext,
)
from wgm.logging.formats import EventType
from wgm.logging.game_logger import GameLogger
from wgm.logging.transcript import (
    FileTranscriptStore,
    GameTranscript,
    TranscriptPlayer,
    TranscriptStore,
)


PHASE_ORDER = (GamePhase.NIGHT, GamePhase.DAY, GamePhase.VOTING)

PHASE_ANNOUNCEMENTS = {
    GamePhase.NIGHT: "🌙 Night {round} falls.",
    GamePhase.DAY: "☀️ Day {round} begins.",
    GamePhase.VOTING: "🗳️ Day {round}: time to vote.",
}

NIGHT_PROMPTS = {
    Role.WEREWOLF: "Werewolves, choose your target.",
    Role.SEER: "Seer, choose a player to check.",
    Role.WITCH: "Witch, decide whether to use your potions.",
}

SpeechListener = Callable[[int, Speech], None]


class GameMaster:
    """Runs one Werewolf game.

    The game master owns phase, round, night intentions and votes. It is
    driven from outside by ``start()`` and ``advance_phase()``; each call
    runs the actions of the phase it enters and may suspend while waiting for
    decision agents. Seats are queried one at a time, in a fixed order, and
    a single ``is_processing`` flag rejects overlapping calls.
    """

    def __init__(
        self,
        agents: Sequence[BaseAgent],
        config: Optional[GameConfig] = None,
        game_id: Optional[str] = None,
        logger: Optional[GameLogger] = None,
        transcript_store: Optional[TranscriptStore] = None,
        role_assignment: Optional[Sequence[Role]] = None,
    ):
        """Initialize the game master.

        Args:
            agents: One agent per seat; seat ids are 1..N in list order
            config: GameConfig instance
            game_id: Optional game ID (generated if None)
            logger: Optional GameLogger (one is created from config if None)
            transcript_store: Where the finalized transcript is saved
            role_assignment: Fixed roles in seat order instead of a shuffle
        """
        if not agents:
            raise ConfigurationError("A game needs at least one seat")

        self.game_config = config or GameConfig()
        self.agents = list(agents)
        self.num_players = len(self.agents)
        self.game_id = game_id or generate_game_id()

        if role_assignment is not None and len(role_assignment) != self.num_players:
            raise ConfigurationError(
                f"role_assignment has {len(role_assignment)} roles for {self.num_players} seats"
            )
        self.role_assignment = list(role_assignment) if role_assignment is not None else None

        self.logger = logger or GameLogger(
            game_id=self.game_id,
            output_dir=self.game_config.log_dir,
            log_private=self.game_config.log_private,
        )
        if transcript_store is None and self.game_config.transcript_dir:
            transcript_store = FileTranscriptStore(self.game_config.transcript_dir)
        self.transcript_store = transcript_store

        self.rng = random.Random(self.game_config.seed)
        self.state = GameState()
        self.transcript: Optional[GameTranscript] = None
        self.summary: Optional[GameSummary] = None
        self.is_processing = False
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.speech_listeners: List[SpeechListener] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def round_number(self) -> int:
        return self.state.round_number

    @property
    def players(self) -> List[Player]:
        return list(self.state.players.values())

    @property
    def alive_players(self) -> List[Player]:
        return [p for p in self.state.players.values() if p.is_alive]

    @property
    def roles_assigned(self) -> bool:
        return bool(self.state.players)

    def get_player(self, player_id: int) -> Player:
        if player_id not in self.state.players:
            raise InvalidActionError(f"Unknown player {player_id}")
        return self.state.players[player_id]

    def get_winner(self) -> Optional[str]:
        """Get the winning team."""
        return self.summary.winner.value if self.summary else None

    def get_win_reason(self) -> Optional[str]:
        """Get the reason for winning."""
        return self.summary.reason if self.summary else None

    def get_speeches(self, public_only: bool = False):
        return self.state.speeches.all(public_only=public_only)

    def get_game_state(self) -> Dict:
        """Snapshot for UIs and callers."""
        return {
            "game_id": self.game_id,
            "current_phase": self.state.phase.value,
            "round": self.state.round_number,
            "is_processing": self.is_processing,
            "players": [
                {"id": p.id, "role": p.role.value, "is_alive": p.is_alive, "name": p.name}
                for p in self.state.players.values()
            ],
            "winner": self.get_winner(),
        }

    def add_speech_listener(self, listener: SpeechListener) -> None:
        """Register a callback invoked with (round, speech) for every speech."""
        self.speech_listeners.append(listener)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def assign_roles(self) -> Dict[int, Role]:
        """Assign roles once, before the game starts.

        Raises:
            InvalidTransitionError: If roles were already assigned
        """
        if self.roles_assigned:
            raise InvalidTransitionError("Roles have already been assigned")

        if self.role_assignment is not None:
            roles = list(self.role_assignment)
        else:
            counts = self.game_config.resolve_role_counts(self.num_players)
            roles = assign_roles(self.num_players, counts, self.rng)

        for seat, (agent, role) in enumerate(zip(self.agents, roles), start=1):
            self.state.players[seat] = Player(
                player_id=seat,
                role=role,
                agent=agent,
                decision_timeout=self.game_config.decision_timeout,
                logger=self.logger,
                verbose=self.game_config.verbose,
            )

        role_counts = Counter(roles)
        self.transcript = GameTranscript(
            game_id=self.game_id,
            role_counts=dict(role_counts),
            players=[
                TranscriptPlayer(id=p.id, role=p.role.value, personality=p.agent.personality)
                for p in self.state.players.values()
            ],
        )
        self.transcript.add_event("game_created", f"Game created with {self.num_players} players")

        self.logger.log(
            EventType.GAME_START,
            {
                "n_players": self.num_players,
                "role_counts": {role.value: count for role, count in role_counts.items()},
                "agents": {str(p.id): {"name": p.name, "type": p.agent.__class__.__name__}
                           for p in self.state.players.values()},
            },
        )
        self.logger.log(
            EventType.ROLE_ASSIGNMENT,
            {"roles": {str(p.id): p.role.value for p in self.state.players.values()}},
            is_private=True,
        )
        self._log(f"🎭 Roles assigned: {', '.join(str(p) for p in self.state.players.values())}")

        return {p.id: p.role for p in self.state.players.values()}

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def start(self) -> GamePhase:
        """Start the game: enter night 1, notify seats and run the night.

        Raises:
            PhaseInProgressError: If another transition is still running
            InvalidTransitionError: If the game is not in PREPARING
        """
        if self.is_processing:
            raise PhaseInProgressError("A phase is already being processed")
        if self.state.phase != GamePhase.PREPARING:
            raise InvalidTransitionError(
                "Game has already started",
                details={"phase": self.state.phase.value},
            )
        if not self.roles_assigned:
            self.assign_roles()

        self.is_processing = True
        try:
            self.start_time = time.time()
            self.state.phase = GamePhase.NIGHT
            self.state.round_number = 1
            self.transcript.total_rounds = 1
            self.transcript.add_event("game_start", "Game started")
            self.logger.log_round_start(1)
            self.logger.log_phase_change(GamePhase.PREPARING.value, GamePhase.NIGHT.value)

            self.announce("The game begins! Night 1 falls.")
            await self._notify_players_game_start()
            await self._run_phase_actions()
            return self.state.phase
        finally:
            self.is_processing = False

    async def advance_phase(self) -> GamePhase:
        """Move to the next phase and run its actions.

        Returns:
            The phase after processing (ENDED if a win condition fired).
            Calling this on an ended game is a no-op that returns ENDED.

        Raises:
            PhaseInProgressError: If another transition is still running
            InvalidTransitionError: If the game has not started
        """
        if self.is_processing:
            raise PhaseInProgressError("A phase is already being processed")
        if self.state.phase == GamePhase.ENDED:
            self._log("🏁 Game has already ended, cannot advance phase")
            return self.state.phase
        if self.state.phase == GamePhase.PREPARING:
            raise InvalidTransitionError("Game has not started; call start() first")

        self.is_processing = True
        try:
            old_phase = self.state.phase
            next_phase = PHASE_ORDER[(PHASE_ORDER.index(old_phase) + 1) % len(PHASE_ORDER)]

            if next_phase == GamePhase.NIGHT:
                self.state.round_number += 1
                self.transcript.total_rounds = self.state.round_number
                self.logger.log_round_start(self.state.round_number)

            self.state.phase = next_phase
            self.logger.log_phase_change(old_phase.value, next_phase.value)
            self.transcript.add_event(
                f"{next_phase.value}_start",
                f"Entering {next_phase.value} phase",
                {"phase": next_phase.value, "round": self.state.round_number},
            )
            self.announce(PHASE_ANNOUNCEMENTS[next_phase].format(round=self.state.round_number))
            self._log(f"🔄 Game {self.game_id} advanced to {next_phase.value}, round {self.state.round_number}")

            await self._run_phase_actions()
            return self.state.phase
        finally:
            self.is_processing = False

    async def run_to_completion(self) -> Optional[GameSummary]:
        """Start (if needed) and advance until the game ends.

        Stops after the voting phase of ``max_rounds`` without a winner, in
        which case None is returned.
        """
        if self.state.phase == GamePhase.PREPARING:
            await self.start()

        while self.state.phase != GamePhase.ENDED:
            if (self.state.phase == GamePhase.VOTING
                    and self.state.round_number >= self.game_config.max_rounds):
                self.logger.log(EventType.WARNING, {"message": "Maximum rounds reached"})
                self._log(f"⚠️  Maximum rounds ({self.game_config.max_rounds}) reached without a winner")
                break
            await self.advance_phase()

        return self.summary

    async def _run_phase_actions(self) -> None:
        match self.state.phase:
            case GamePhase.NIGHT:
                await self._run_night()
            case GamePhase.DAY:
                await self._run_day()
            case GamePhase.VOTING:
                await self._run_voting()

    async def _notify_players_game_start(self) -> None:
        werewolves = self.state.get_werewolves()
        for player in self.state.players.values():
            teammates = [w for w in werewolves if w != player.id] if player.role == Role.WEREWOLF else []
            if not await player.start_game(self.game_id, teammates):
                self._log(f"❌ Failed to notify player {player.id}")

    # ------------------------------------------------------------------
    # Night
    # ------------------------------------------------------------------

    async def _run_night(self) -> None:
        self.state.night = NightIntentions()

        for role in NIGHT_ORDER:
            actor = self.state.get_alive_player_by_role(role)
            if actor is None:
                continue

            self.announce(NIGHT_PROMPTS[role])
            if self.game_config.announcement_delay:
                await asyncio.sleep(self.game_config.announcement_delay)

            response = await actor.use_ability(self.build_context(actor))
            if response is None:
                self._log(f"💤 {role.value} {actor.id} took no action")
                continue

            match role:
                case Role.WEREWOLF:
                    self._process_werewolf_action(actor, response)
                case Role.SEER:
                    self._process_seer_action(actor, response)
                case Role.WITCH:
                    self._process_witch_action(actor, response)

        resolution = resolve_night(self.state.night)
        await self._apply_night_resolution(resolution)

    def _process_werewolf_action(self, actor: Player, result: WerewolfAbilityResponse) -> None:
        self.transcript.add_night_action(
            self.state.round_number, actor.id, actor.role, result.action,
            target=result.target, reason=result.reason,
            thinking=result.thinking, traceId=result.trace_id,
        )
        if not result.is_kill:
            self._log(f"🐺 Werewolf {actor.id} chose not to kill")
            return

        valid, error = validate_night_action("kill", result.target, self.state.get_alive_players(), actor.id)
        if not valid:
            self.logger.log_error("invalid_action", error, player_id=actor.id, is_private=True)
            self._log(f"⚠️  Werewolf {actor.id}: {error}")
            return

        self.state.night.werewolf_target = result.target
        self.state.last_werewolf_kill = result.target
        self.logger.log_action(actor.id, "kill", result.target, {"reason": result.reason})
        self.add_speech(
            SYSTEM_SEAT, f"Werewolves target player {result.target}.", SpeechKind.NIGHT_ACTION,
            thinking=result.thinking, trace_id=result.trace_id,
        )

    def _process_seer_action(self, actor: Player, result: SeerAbilityResponse) -> None:
        valid, error = validate_night_action("investigate", result.target, self.state.get_alive_players(), actor.id)
        if not valid:
            self.logger.log_error("invalid_action", error, player_id=actor.id, is_private=True)
            self._log(f"⚠️  Seer {actor.id}: {error}")
            return

        target = self.state.players[result.target]
        finding = investigate(target.id, target.role)
        self.state.night.seer_target = target.id
        self.state.investigations[self.state.round_number] = finding
        actor.record_investigation(self.state.round_number, finding)

        self.transcript.add_night_action(
            self.state.round_number, actor.id, actor.role, result.action,
            target=target.id, isGood=finding.is_good, reason=result.reason,
            thinking=result.thinking, traceId=result.trace_id,
        )
        self.logger.log(
            EventType.INVESTIGATION_RESULT,
            {"target": target.id, "is_good": finding.is_good, "reason": result.reason},
            player_id=actor.id,
            is_private=True,
        )
        self.add_speech(
            SYSTEM_SEAT, f"The seer checks player {target.id}.", SpeechKind.NIGHT_ACTION,
            thinking=result.thinking, trace_id=result.trace_id,
        )

    def _process_witch_action(self, actor: Player, result: WitchAbilityResponse) -> None:
        self.transcript.add_night_action(
            self.state.round_number, actor.id, actor.role, result.action,
            healTarget=result.heal_target, poisonTarget=result.poison_target,
            healReason=result.heal_reason or None, poisonReason=result.poison_reason or None,
            thinking=result.thinking, traceId=result.trace_id,
        )
        if not result.is_using:
            self._log(f"🧪 Witch {actor.id} chose not to use potions")
            return

        heal, poison, errors = validate_witch_action(
            result.heal_target, result.poison_target, actor.potions, self.state.get_alive_players()
        )
        for error in errors:
            self.logger.log_error("invalid_action", error, player_id=actor.id, is_private=True)
            self._log(f"⚠️  Witch {actor.id}: {error}")

        used = []
        if heal is not None and actor.use_heal(heal):
            self.state.night.heal_target = heal
            self.logger.log_action(actor.id, "heal", heal, {"reason": result.heal_reason})
            used.append(f"heals player {heal}")
        if poison is not None and actor.use_poison(poison):
            self.state.night.poison_target = poison
            self.logger.log_action(actor.id, "poison", poison, {"reason": result.poison_reason})
            used.append(f"poisons player {poison}")

        if used:
            self.add_speech(
                SYSTEM_SEAT, f"The witch {' and '.join(used)}.", SpeechKind.NIGHT_ACTION,
                thinking=result.thinking, trace_id=result.trace_id,
            )

    async def _apply_night_resolution(self, resolution: NightResolution) -> None:
        self.logger.log(
            EventType.NIGHT_RESULT,
            {
                "werewolf_target": self.state.night.werewolf_target,
                "heal_target": self.state.night.heal_target,
                "poison_target": self.state.night.poison_target,
                "seer_target": self.state.night.seer_target,
                "deaths": list(resolution.deaths),
                "saved": resolution.saved,
            },
            is_private=True,
        )

        for player_id in resolution.deaths:
            self._eliminate(player_id, resolution.causes[player_id])

        if resolution.deaths:
            victims = ", ".join(str(pid) for pid in resolution.deaths)
            self.announce(f"Last night, player(s) {victims} died.")
        else:
            self.announce("🌅 It was a peaceful night. Nobody died.")

        await self.win_condition()

    # ------------------------------------------------------------------
    # Day
    # ------------------------------------------------------------------

    async def _run_day(self) -> None:
        for player in self.players:
            if not player.is_alive:
                continue

            result = await player.speak(self.build_context(player))
            if result is None or not result.speech.strip():
                self.logger.log_error("no_speech", "Player did not speak", player_id=player.id)
                self._log(f"🤐 Player {player.id} did not speak")
                continue

            self.add_speech(
                player.id, result.speech, SpeechKind.PLAYER,
                thinking=result.thinking, trace_id=result.trace_id,
            )

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------

    async def _run_voting(self) -> None:
        self.state.votes = {}

        for player in self.players:
            if not player.is_alive:
                continue

            self.announce(f"Player {player.id}, please vote.")
            result = await player.vote(self.build_context(player))
            if result is None:
                self.logger.log_error("no_vote", "Player did not vote", player_id=player.id)
                continue

            valid, error = validate_vote(player.id, result.target, self.state.get_alive_players())
            if not valid:
                self.logger.log_error("invalid_vote", error, player_id=player.id)
                self._log(f"⚠️  Player {player.id} vote rejected: {error}")
                continue

            self.cast_vote(player.id, result.target)
            self.transcript.add_vote(
                self.state.round_number, player.id, result.target, result.reason,
                thinking=result.thinking, trace_id=result.trace_id,
            )
            self.add_speech(
                player.id, f"I vote for player {result.target}.", SpeechKind.PLAYER,
                thinking=result.thinking, trace_id=result.trace_id,
            )

        await self._resolve_votes()

    def cast_vote(self, voter_id: int, target_id: int) -> None:
        """Record a vote for the current voting phase.

        Raises:
            InvalidActionError: Outside VOTING, or for a dead voter/target
        """
        if self.state.phase != GamePhase.VOTING:
            raise InvalidActionError("Votes can only be cast during the voting phase")
        valid, error = validate_vote(voter_id, target_id, self.state.get_alive_players())
        if not valid:
            raise InvalidActionError(error, details={"voter": voter_id, "target": target_id})

        self.state.record_vote(voter_id, target_id)
        self.logger.log_vote(voter_id, target_id)

    async def process_votes(self) -> VoteResult:
        """Resolve votes recorded with ``cast_vote`` during VOTING.

        Tallies the votes, eliminates the loser, clears the votes and checks
        the win condition, so the game may be ENDED afterwards.

        Raises:
            PhaseInProgressError: If another transition is still running
            InvalidActionError: Outside VOTING
        """
        if self.is_processing:
            raise PhaseInProgressError("A phase is already being processed")
        if self.state.phase != GamePhase.VOTING:
            raise InvalidActionError("Votes can only be processed during the voting phase")

        self.is_processing = True
        try:
            return await self._resolve_votes()
        finally:
            self.is_processing = False

    async def _resolve_votes(self) -> VoteResult:
        outcome = tally_votes(self.state.current_votes())
        self.logger.log(
            EventType.ELECTION_RESULT,
            {
                "votes": dict(self.state.votes),
                "vote_counts": dict(outcome.counts),
                "eliminated": outcome.eliminated,
                "tied": outcome.tied,
            },
        )
        self.state.votes = {}

        if outcome.eliminated is not None:
            self._eliminate(outcome.eliminated, DeathCause.VOTE)
            self.announce(f"Player {outcome.eliminated} was voted out!")
            await self.win_condition()
        elif outcome.tied:
            self.announce("🤝 The vote was tied. Nobody is eliminated.")
        else:
            self.announce("No votes were cast. Nobody is eliminated.")
        return outcome

    # ------------------------------------------------------------------
    # Deaths and the end of the game
    # ------------------------------------------------------------------

    def _eliminate(self, player_id: int, cause: DeathCause) -> None:
        player = self.state.players.get(player_id)
        if player is None or not player.kill():
            return

        self.transcript.mark_death(player_id, self.state.round_number, cause.value)
        self.transcript.add_event(
            "player_death",
            f"Player {player_id} died ({cause.value})",
            {"playerId": player_id, "reason": cause.value},
        )
        self.logger.log_elimination(player_id, player.role.value, cause.value)
        self._log(f"💀 Player {player_id} ({player.role.value}) died: {cause.value}")

    async def win_condition(self) -> WinCondition:
        """Evaluate the win condition from the current alive-role counts.

        The first time a winner is observed the game is forced to ENDED and
        the summary is finalized; later calls return the same outcome
        without finalizing again.
        """
        if self.summary is not None:
            return self.summary.win_condition
        if not self.roles_assigned or self.state.phase == GamePhase.PREPARING:
            return WinCondition.ONGOING

        condition, reason = check_win_condition(
            len(self.state.get_alive_werewolves()),
            len(self.state.get_alive_villagers()),
        )
        if condition != WinCondition.ONGOING:
            await self._finalize(condition, reason)
        return condition

    async def _finalize(self, condition: WinCondition, reason: str) -> None:
        winner = winning_team(condition)
        self.end_time = time.time()
        survivors = self.state.get_alive_players()

        self.state.phase = GamePhase.ENDED
        self.summary = GameSummary(
            game_id=self.game_id,
            winner=winner,
            win_condition=condition,
            reason=reason,
            surviving_players=survivors,
            num_rounds=self.state.round_number,
            duration_seconds=self.end_time - (self.start_time or self.end_time),
        )

        label = "Werewolves" if condition == WinCondition.WEREWOLVES_WIN else "Villagers"
        self.announce(f"🏁 Game over! {label} win: {reason}.")

        self.transcript.total_rounds = self.state.round_number
        self.transcript.finalize(winner, reason, survivors)
        self.logger.log(
            EventType.GAME_END,
            {
                "winner": winner.value,
                "reason": reason,
                "rounds": self.state.round_number,
                "survivors": survivors,
            },
        )

        if self.transcript_store is not None:
            try:
                await self.transcript_store.save(self.transcript)
            except TranscriptError as e:
                self.logger.log_error("transcript_save_failed", e.message, e.details)
                self._log(f"❌ Failed to save transcript: {e}")

    # ------------------------------------------------------------------
    # Speech and contexts
    # ------------------------------------------------------------------

    def announce(self, content: str) -> None:
        """Public system announcement."""
        self.add_speech(SYSTEM_SEAT, content, SpeechKind.SYSTEM)

    def add_speech(
        self,
        player_id: int,
        content: str,
        kind: SpeechKind = SpeechKind.PLAYER,
        thinking: Optional[str] = None,
        trace_id: Optional[str] = None,
    ) -> Speech:
        """Append to the speech log and notify listeners."""
        speech = Speech(
            player_id=player_id, content=content, kind=kind,
            thinking=thinking, trace_id=trace_id,
        )
        round_number = self.state.round_number
        self.state.speeches.add(round_number, speech)

        if kind == SpeechKind.PLAYER:
            self.transcript.add_speech(round_number, player_id, content, thinking, trace_id)
            self.logger.log(EventType.PLAYER_SPEAK, {"content": content}, player_id=player_id)
        elif kind == SpeechKind.SYSTEM:
            self.logger.log(EventType.ANNOUNCEMENT, {"content": content})

        if self.game_config.verbose:
            speaker = "📢" if player_id == SYSTEM_SEAT else f"💬 Player {player_id}:"
            print(f"  {speaker} {content}")

        for listener in self.speech_listeners:
            listener(round_number, speech)
        return speech

    def build_context(self, player: Player) -> PlayerContext:
        """Read-only snapshot for one seat's decision agent."""
        base = dict(
            player_id=player.id,
            round=self.state.round_number,
            current_phase=self.state.phase,
            alive_players=tuple(p.info() for p in self.state.players.values()),
            all_speeches=self.state.speeches.all(public_only=True),
            all_votes={r: list(votes) for r, votes in self.state.all_votes.items()},
        )

        match player.role:
            case Role.WEREWOLF:
                return WerewolfContext(
                    **base,
                    teammates=tuple(player.pack.teammates),
                    last_kill_target=self.state.last_werewolf_kill,
                )
            case Role.SEER:
                return SeerContext(**base, investigated_players=dict(player.notebook.investigations))
            case Role.WITCH:
                at_night = self.state.phase == GamePhase.NIGHT
                return WitchContext(
                    **base,
                    killed_tonight=self.state.night.werewolf_target if at_night else None,
                    heal_used=not player.potions.has_heal,
                    poison_used=not player.potions.has_poison,
                )
            case _:
                return PlayerContext(**base)

    def _log(self, message: str) -> None:
        if self.game_config.verbose:
            print(message)

    def __str__(self) -> str:
        return (
            f"GameMaster(game_id={self.game_id}, phase={self.state.phase.value}, "
            f"round={self.state.round_number}, alive={len(self.alive_players)}/{self.num_players})"
        )
