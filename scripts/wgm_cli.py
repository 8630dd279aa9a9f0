#!/usr/bin/env python3
"""Command-line interface for the Werewolf game master."""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from wgm.agents.baselines.random_agent import RandomAgent
from wgm.analysis.stats import summaries_frame, team_win_rates, win_rate_confidence_interval
from wgm.core.base_agent import BaseAgent
from wgm.core.exceptions import ConfigurationError, TranscriptError
from wgm.core.utils import format_duration, seed_everything
from wgm.engine.config import GameConfig
from wgm.engine.game_master import GameMaster
from wgm.logging.transcript import FileTranscriptStore, GameTranscript
from wgm.remote.agent import RemoteAgent
from wgm.remote.client import PlayerServiceClient, RemoteTranscriptStore


DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "werewolf.yaml"


def load_settings(config_path: Optional[str]) -> Dict[str, Any]:
    """Read the YAML file (if any) into a plain dict."""
    path = Path(config_path) if config_path else DEFAULT_CONFIG
    if not path.exists():
        if config_path:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}
    with open(path) as f:
        settings = yaml.safe_load(f) or {}
    if not isinstance(settings, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return settings


def build_config(settings: Dict[str, Any], args) -> GameConfig:
    """CLI flags override YAML values."""
    overrides = {
        "decision_timeout": args.timeout,
        "seed": args.seed,
        "log_dir": args.log_dir,
        "transcript_dir": args.output_dir,
    }
    merged = dict(settings)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    if args.quiet:
        merged["verbose"] = False
    if args.num_players is not None and args.num_players != settings.get("n_players"):
        # The YAML composition was written for a different table size
        merged.pop("role_counts", None)
    return GameConfig.from_dict(merged)


def create_agents(num_players: int, agent_type: str, seed: Optional[int],
                  client: Optional[PlayerServiceClient] = None) -> List[BaseAgent]:
    agents: List[BaseAgent] = []
    for seat in range(1, num_players + 1):
        if agent_type == "remote":
            agents.append(RemoteAgent(player_id=seat, client=client))
        else:
            agent_seed = None if seed is None else seed + seat
            agents.append(RandomAgent(player_id=seat, seed=agent_seed))
    return agents


async def run_games(args, settings: Dict[str, Any], config: GameConfig, num_players: int) -> List[GameTranscript]:
    agent_settings = settings.get("agent", {}) or {}
    agent_type = args.agent_type or agent_settings.get("type", "random")
    transcripts = []

    client = None
    if agent_type == "remote":
        client = PlayerServiceClient(
            base_url=args.service_url or agent_settings.get("service_url", "http://localhost:3001"),
            request_timeout=agent_settings.get("request_timeout", 60.0),
        )

    try:
        for i in range(args.num_games):
            seed = None if config.seed is None else config.seed + i
            if seed is not None:
                seed_everything(seed)
            game_config = replace(config, seed=seed)

            store = RemoteTranscriptStore(client) if client is not None else None
            game = GameMaster(
                create_agents(num_players, agent_type, seed, client),
                config=game_config,
                transcript_store=store,
            )

            print(f"\n🎲 Game {i + 1}/{args.num_games}: {game.game_id}")
            print("-" * 70)
            summary = await game.run_to_completion()

            if summary is None:
                print(f"⚠️  No winner after {game_config.max_rounds} rounds")
            else:
                print(f"🏆 Winner: {summary.winner.value} ({summary.reason})")
                print(f"   Rounds: {summary.num_rounds}, duration: {format_duration(summary.duration_seconds)}")
            transcripts.append(game.transcript)
    finally:
        if client is not None:
            await client.close()

    return transcripts


def cmd_run(args):
    """Run one or more games."""
    try:
        settings = load_settings(args.config)
        config = build_config(settings, args)
    except ConfigurationError as e:
        print(f"Error loading config: {e}")
        return 1

    num_players = args.num_players or settings.get("n_players", 6)

    print("\n🐺 Werewolf")
    print("=" * 70)
    print("Configuration:")
    print(f"  • Players: {num_players}")
    print(f"  • Games: {args.num_games}")
    print(f"  • Decision timeout: {config.decision_timeout}s")
    if config.transcript_dir:
        print(f"  • Transcripts: {config.transcript_dir}/")

    try:
        transcripts = asyncio.run(run_games(args, settings, config, num_players))
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
        return 1

    if len(transcripts) > 1:
        games = summaries_frame(transcripts)
        rates = team_win_rates(games)
        low, high = win_rate_confidence_interval(games)
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Werewolf win rate: {rates['werewolf']:.1%} (95% CI {low:.1%} - {high:.1%})")
        print(f"Villager win rate: {rates['villager']:.1%}")
        print(f"Average rounds: {games['rounds'].mean():.1f}")
    return 0


def cmd_logs(args):
    """List saved transcripts."""
    try:
        settings = load_settings(args.config)
    except ConfigurationError as e:
        print(f"Error loading config: {e}")
        return 1
    directory = args.output_dir or settings.get("transcript_dir")
    if not directory:
        print("Error: no transcript directory given (--output-dir or transcript_dir in config)")
        return 1

    store = FileTranscriptStore(Path(directory))
    if args.game_id:
        try:
            transcript = store.load(args.game_id)
        except TranscriptError as e:
            print(f"Error: {e}")
            return 1
        if transcript is None:
            print(f"Game log not found: {args.game_id}")
            return 1
        print(transcript.to_json())
        return 0

    summaries = store.list_summaries()
    if not summaries:
        print(f"No game logs in {directory}")
        return 0

    print(f"\n{'Game ID':<40} {'Started':<20} {'Rounds':>6}  Winner")
    print("=" * 80)
    for s in summaries:
        winner = s["winner"] or "-"
        print(f"{s['gameId']:<40} {s['startTime'][:19]:<20} {s['totalRounds']:>6}  {winner}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Werewolf Game Master - run and inspect Werewolf games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play one game with random agents
  python scripts/wgm_cli.py run

  # Play 20 seeded games with 8 players
  python scripts/wgm_cli.py run --num-games 20 --num-players 8 --seed 42 --quiet

  # Play against the player service
  python scripts/wgm_cli.py run --agent-type remote --service-url http://localhost:3001

  # List saved transcripts
  python scripts/wgm_cli.py logs --output-dir experiments/werewolf/transcripts
        """
    )
    parser.add_argument("--config", help=f"YAML config (default: {DEFAULT_CONFIG.name} if present)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_run = subparsers.add_parser("run", help="Run games")
    parser_run.add_argument("--num-games", type=int, default=1, help="Number of games (default: 1)")
    parser_run.add_argument("--num-players", type=int, help="Number of seats (default: from config or 6)")
    parser_run.add_argument("--agent-type", choices=["random", "remote"],
                            help="Agent type (default: from config or random)")
    parser_run.add_argument("--service-url", help="Player service URL for remote agents")
    parser_run.add_argument("--seed", type=int, help="Random seed")
    parser_run.add_argument("--timeout", type=float, help="Decision timeout in seconds")
    parser_run.add_argument("--log-dir", help="Directory for JSONL event logs")
    parser_run.add_argument("--output-dir", help="Directory for game transcripts")
    parser_run.add_argument("--quiet", action="store_true", help="Only print results")
    parser_run.set_defaults(func=cmd_run)

    parser_logs = subparsers.add_parser("logs", help="List saved transcripts")
    parser_logs.add_argument("game_id", nargs="?", help="Print one transcript")
    parser_logs.add_argument("--output-dir", help="Transcript directory")
    parser_logs.set_defaults(func=cmd_logs)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
