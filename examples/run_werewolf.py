"""Example: Run one Werewolf game with random agents and print the transcript."""

import asyncio
from pathlib import Path

from wgm.agents.baselines.random_agent import RandomAgent
from wgm.engine.config import GameConfig
from wgm.engine.game_master import GameMaster


async def main():
    """Run Werewolf game with random agents."""
    print("🐺 Werewolf")
    print("=" * 70)

    config_path = Path(__file__).parent.parent / "configs" / "werewolf.yaml"
    config = GameConfig.from_yaml(config_path)
    print(f"✅ Loaded config from {config_path.name}")

    n_players = sum(config.role_counts.values()) if config.role_counts else 6
    agents = [RandomAgent(player_id=seat, seed=seat) for seat in range(1, n_players + 1)]

    game = GameMaster(agents, config=config)
    game.assign_roles()

    print("\n👥 Roles:")
    for player in game.players:
        role_emoji = "🐺" if player.role.value == "werewolf" else "👤"
        print(f"  {role_emoji} Player {player.id}: {player.role.value}")

    print("\n▶️  Game will run automatically...")
    print("-" * 70)

    summary = await game.run_to_completion()

    print("\n" + "=" * 70)
    print("GAME OVER")
    print("=" * 70)
    if summary is None:
        print(f"No winner after {config.max_rounds} rounds")
    else:
        print(f"Winner: {summary.winner.value}")
        print(f"Reason: {summary.reason}")
        print(f"Rounds: {summary.num_rounds}")
        print(f"Survivors: {summary.surviving_players}")

    print("\n📜 Transcript:")
    print(game.transcript.to_json())


if __name__ == "__main__":
    asyncio.run(main())
