"""Game rules and logic for Werewolf.

Pure functions only: role assignment, night resolution, vote tallying and
win-condition evaluation. The orchestrator owns all state changes.
"""

import random
from typing import Dict, List, Optional, Sequence, Tuple

from wgm.core.types import (
    DeathCause,
    InvestigationResult,
    Role,
    Team,
    Vote,
    WinCondition,
)
from wgm.engine.types import NightIntentions, NightResolution, VoteResult, WitchPotions


# Ability roles are queried at night in this order; the witch must see the
# werewolf target before deciding.
NIGHT_ORDER: Tuple[Role, ...] = (Role.WEREWOLF, Role.SEER, Role.WITCH)


def assign_roles(
    n_players: int,
    role_counts: Dict[Role, int],
    rng: Optional[random.Random] = None,
) -> List[Role]:
    """Assign roles to players.

    Args:
        n_players: Number of seats
        role_counts: Role composition, must cover exactly n_players
        rng: Random generator (module-level random if None)

    Returns:
        List of roles, index i belongs to seat i + 1
    """
    roles = []
    # Werewolves first, then special roles, villagers fill the rest
    for role in (Role.WEREWOLF, Role.SEER, Role.WITCH, Role.VILLAGER):
        roles.extend([role] * role_counts.get(role, 0))

    if len(roles) != n_players:
        raise ValueError(f"Role counts cover {len(roles)} seats, expected {n_players}")

    (rng or random).shuffle(roles)
    return roles


def get_team_for_role(role: Role) -> Team:
    """Get the team for a given role."""
    if role == Role.WEREWOLF:
        return Team.WEREWOLVES
    return Team.VILLAGE


def has_night_ability(role: Role) -> bool:
    """Whether the role acts at night."""
    return role in NIGHT_ORDER


def investigate(target_id: int, target_role: Role) -> InvestigationResult:
    """Seer check: anything but a werewolf reads as good."""
    return InvestigationResult(target=target_id, is_good=target_role != Role.WEREWOLF)


def validate_night_action(
    action_type: str,
    target: Optional[int],
    alive_players: Sequence[int],
    actor_id: int
) -> Tuple[bool, str]:
    """Validate a night action.

    Args:
        action_type: Type of action ("kill", "investigate", "heal", "poison")
        target: Target player ID
        alive_players: List of alive player IDs
        actor_id: ID of the player taking the action

    Returns:
        Tuple of (is_valid, error_message)
    """
    if target is None:
        return False, "No target specified"

    if target not in alive_players:
        return False, f"Target {target} is not alive"

    if action_type in ("kill", "investigate") and target == actor_id:
        return False, f"Cannot {action_type} yourself"

    return True, ""


def validate_witch_action(
    heal_target: Optional[int],
    poison_target: Optional[int],
    potions: WitchPotions,
    alive_players: Sequence[int],
) -> Tuple[Optional[int], Optional[int], List[str]]:
    """Filter a witch declaration down to the potions that may be applied.

    Heal and poison on the same seat rejects the whole declaration. A spent
    potion, or one aimed at a dead seat, is dropped on its own.

    Returns:
        Tuple of (heal_target, poison_target, errors)
    """
    errors = []
    if heal_target is not None and heal_target == poison_target:
        errors.append(f"Cannot heal and poison player {heal_target} in the same night")
        return None, None, errors

    if heal_target is not None:
        if not potions.has_heal:
            errors.append("Heal potion already used")
            heal_target = None
        elif heal_target not in alive_players:
            errors.append(f"Heal target {heal_target} is not alive")
            heal_target = None

    if poison_target is not None:
        if not potions.has_poison:
            errors.append("Poison potion already used")
            poison_target = None
        elif poison_target not in alive_players:
            errors.append(f"Poison target {poison_target} is not alive")
            poison_target = None

    return heal_target, poison_target, errors


def resolve_night(intentions: NightIntentions) -> NightResolution:
    """Compute the night's deaths from the declared intentions.

    - heal == poison is an invalid declaration: the witch is treated as
      having abstained
    - a heal cancels only the werewolf attack on the same seat
    - poison always kills
    - a seat dies at most once
    """
    result = NightResolution()
    heal = intentions.heal_target
    poison = intentions.poison_target

    if heal is not None and heal == poison:
        result.witch_rejected = True
        heal = poison = None

    kill = intentions.werewolf_target
    if kill is not None:
        if heal is not None and heal == kill:
            result.saved = kill
        else:
            result.deaths.append(kill)
            result.causes[kill] = DeathCause.WEREWOLF_KILL

    if poison is not None:
        if poison not in result.causes:
            result.deaths.append(poison)
        result.causes[poison] = DeathCause.POISON

    return result


def count_votes(votes: Sequence[Vote]) -> Dict[int, int]:
    """Count votes per target, in first-vote order."""
    counts: Dict[int, int] = {}
    for vote in votes:
        counts[vote.target_id] = counts.get(vote.target_id, 0) + 1
    return counts


def tally_votes(votes: Sequence[Vote]) -> VoteResult:
    """Determine who gets eliminated by vote.

    The target with strictly the most votes is eliminated. Two or more
    targets sharing the maximum means no elimination.
    """
    counts = count_votes(votes)
    if not counts:
        return VoteResult()

    max_votes = max(counts.values())
    leaders = [pid for pid, count in counts.items() if count == max_votes]

    if len(leaders) > 1:
        return VoteResult(eliminated=None, counts=counts, max_votes=max_votes)

    return VoteResult(eliminated=leaders[0], counts=counts, max_votes=max_votes)


def validate_vote(
    voter_id: int,
    target_id: Optional[int],
    alive_players: Sequence[int]
) -> Tuple[bool, str]:
    """Validate a vote.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if voter_id not in alive_players:
        return False, f"Voter {voter_id} is not alive"

    if target_id is None:
        return False, "No target specified"

    if target_id not in alive_players:
        return False, f"Target {target_id} is not alive"

    if voter_id == target_id:
        return False, "Cannot vote for yourself"

    return True, ""


def check_win_condition(
    alive_werewolves: int,
    alive_villagers: int
) -> Tuple[WinCondition, str]:
    """Check if a team has won.

    Args:
        alive_werewolves: Number of alive werewolves
        alive_villagers: Number of alive non-werewolves

    Returns:
        Tuple of (win_condition, reason)
    """
    # Village wins if all werewolves are eliminated
    if alive_werewolves == 0:
        return WinCondition.VILLAGERS_WIN, "All werewolves eliminated"

    # Werewolves win if they equal or outnumber villagers
    if alive_werewolves >= alive_villagers:
        return WinCondition.WEREWOLVES_WIN, "Werewolves equal or outnumber villagers"

    return WinCondition.ONGOING, ""


def winning_team(condition: WinCondition) -> Optional[Team]:
    """Map a terminal win condition to the team that won."""
    if condition == WinCondition.WEREWOLVES_WIN:
        return Team.WEREWOLVES
    if condition == WinCondition.VILLAGERS_WIN:
        return Team.VILLAGE
    return None
