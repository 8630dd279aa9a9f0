"""Tests for the pure rule functions.

Covers:
- Role assignment from the role table (multiset and shuffle)
- Night resolution: heal cancels kill, poison is unconditional,
  heal/poison on the same seat is rejected, peaceful nights
- Witch declaration filtering (spent potions, dead targets)
- Vote tally: strict majority, tie means no elimination
- Win condition evaluation
"""

import random
from collections import Counter

import pytest

from wgm.core.exceptions import ConfigurationError
from wgm.core.types import DeathCause, Role, Team, Vote, WinCondition
from wgm.engine.config import DEFAULT_ROLE_TABLE, get_role_counts
from wgm.engine.rules import (
    NIGHT_ORDER,
    assign_roles,
    check_win_condition,
    count_votes,
    get_team_for_role,
    has_night_ability,
    investigate,
    resolve_night,
    tally_votes,
    validate_night_action,
    validate_vote,
    validate_witch_action,
    winning_team,
)
from wgm.engine.types import NightIntentions, WitchPotions


class TestRoleAssignment:

    @pytest.mark.parametrize("n_players", sorted(DEFAULT_ROLE_TABLE))
    def test_multiset_matches_table(self, n_players):
        counts = get_role_counts(n_players)
        roles = assign_roles(n_players, counts, random.Random(n_players))

        assert len(roles) == n_players
        assert Counter(roles) == Counter({r: c for r, c in counts.items() if c})

    def test_six_seat_table(self):
        assert get_role_counts(6) == {
            Role.WEREWOLF: 2, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 2,
        }

    def test_unsupported_seat_count(self):
        with pytest.raises(ConfigurationError):
            get_role_counts(3)

    def test_mismatched_counts_rejected(self):
        with pytest.raises(ValueError):
            assign_roles(5, {Role.WEREWOLF: 1, Role.VILLAGER: 2})

    def test_shuffle_is_not_identity(self):
        counts = get_role_counts(8)
        rng = random.Random(7)
        permutations = {tuple(assign_roles(8, counts, rng)) for _ in range(50)}

        assert len(permutations) > 1

    def test_seeded_rng_is_reproducible(self):
        counts = get_role_counts(9)
        assert assign_roles(9, counts, random.Random(3)) == assign_roles(9, counts, random.Random(3))


class TestRoleCapability:

    def test_night_order(self):
        assert NIGHT_ORDER == (Role.WEREWOLF, Role.SEER, Role.WITCH)

    def test_villager_has_no_ability(self):
        assert not has_night_ability(Role.VILLAGER)
        assert all(has_night_ability(r) for r in NIGHT_ORDER)

    def test_teams(self):
        assert get_team_for_role(Role.WEREWOLF) == Team.WEREWOLVES
        for role in (Role.VILLAGER, Role.SEER, Role.WITCH):
            assert get_team_for_role(role) == Team.VILLAGE

    def test_investigate(self):
        assert investigate(2, Role.WEREWOLF).is_good is False
        assert investigate(3, Role.WITCH).is_good is True
        assert investigate(3, Role.WITCH).target == 3


class TestResolveNight:

    def test_heal_cancels_kill(self):
        result = resolve_night(NightIntentions(werewolf_target=3, heal_target=3))

        assert result.deaths == []
        assert result.peaceful
        assert result.saved == 3

    def test_kill_and_poison_different_seats(self):
        result = resolve_night(NightIntentions(werewolf_target=3, poison_target=5))

        assert result.deaths == [3, 5]
        assert result.causes == {3: DeathCause.WEREWOLF_KILL, 5: DeathCause.POISON}

    def test_same_heal_and_poison_is_rejected(self):
        result = resolve_night(NightIntentions(werewolf_target=4, heal_target=4, poison_target=4))

        assert result.witch_rejected
        assert result.deaths == [4]
        assert result.causes[4] == DeathCause.WEREWOLF_KILL
        assert result.saved is None

    def test_poison_cannot_be_healed(self):
        result = resolve_night(NightIntentions(werewolf_target=2, heal_target=2, poison_target=6))

        assert result.deaths == [6]
        assert result.saved == 2

    def test_poison_on_kill_target_dies_once(self):
        result = resolve_night(NightIntentions(werewolf_target=5, poison_target=5))

        assert result.deaths == [5]
        assert result.causes[5] == DeathCause.POISON

    def test_no_kill_is_peaceful(self):
        result = resolve_night(NightIntentions())

        assert result.peaceful
        assert result.causes == {}

    def test_heal_on_other_seat_does_not_save(self):
        result = resolve_night(NightIntentions(werewolf_target=3, heal_target=6))

        assert result.deaths == [3]
        assert result.saved is None


class TestWitchValidation:

    def test_same_target_drops_both(self):
        heal, poison, errors = validate_witch_action(3, 3, WitchPotions(), [1, 2, 3, 4])

        assert (heal, poison) == (None, None)
        assert len(errors) == 1

    def test_spent_heal_is_refused(self):
        potions = WitchPotions(heal_used_on=2)
        heal, poison, errors = validate_witch_action(3, None, potions, [1, 2, 3])

        assert heal is None
        assert errors == ["Heal potion already used"]

    def test_spent_poison_keeps_heal(self):
        potions = WitchPotions(poison_used_on=1)
        heal, poison, errors = validate_witch_action(3, 2, potions, [2, 3, 4])

        assert heal == 3
        assert poison is None
        assert errors == ["Poison potion already used"]

    def test_dead_target_is_refused(self):
        heal, poison, errors = validate_witch_action(None, 9, WitchPotions(), [1, 2])

        assert poison is None
        assert errors


class TestNightActionValidation:

    def test_cannot_kill_self(self):
        valid, _ = validate_night_action("kill", 1, [1, 2, 3], actor_id=1)
        assert not valid

    def test_cannot_target_dead_seat(self):
        valid, error = validate_night_action("investigate", 4, [1, 2, 3], actor_id=3)
        assert not valid
        assert "not alive" in error

    def test_missing_target(self):
        valid, _ = validate_night_action("kill", None, [1, 2], actor_id=1)
        assert not valid


class TestVoteTally:

    def test_strict_majority_eliminates(self):
        votes = [Vote(1, 2), Vote(3, 2), Vote(2, 1)]
        result = tally_votes(votes)

        assert result.eliminated == 2
        assert result.counts == {2: 2, 1: 1}
        assert not result.tied

    def test_tie_eliminates_nobody(self):
        result = tally_votes([Vote(1, 2), Vote(3, 1)])

        assert result.eliminated is None
        assert result.tied
        assert result.max_votes == 1

    def test_no_votes(self):
        result = tally_votes([])

        assert result.eliminated is None
        assert result.no_votes
        assert not result.tied

    def test_count_votes(self):
        assert count_votes([Vote(1, 4), Vote(2, 4), Vote(3, 1)]) == {4: 2, 1: 1}

    def test_validate_vote(self):
        alive = [1, 2, 3]
        assert validate_vote(1, 2, alive) == (True, "")
        assert not validate_vote(1, 1, alive)[0]
        assert not validate_vote(4, 1, alive)[0]
        assert not validate_vote(1, 5, alive)[0]
        assert not validate_vote(1, None, alive)[0]


class TestWinCondition:

    def test_no_werewolves_villagers_win(self):
        condition, _ = check_win_condition(0, 3)
        assert condition == WinCondition.VILLAGERS_WIN

    def test_parity_werewolves_win(self):
        condition, _ = check_win_condition(2, 2)
        assert condition == WinCondition.WEREWOLVES_WIN

    def test_ongoing(self):
        condition, reason = check_win_condition(1, 3)
        assert condition == WinCondition.ONGOING
        assert reason == ""

    def test_everyone_dead_counts_as_village_win(self):
        condition, _ = check_win_condition(0, 0)
        assert condition == WinCondition.VILLAGERS_WIN

    def test_winning_team(self):
        assert winning_team(WinCondition.WEREWOLVES_WIN) == Team.WEREWOLVES
        assert winning_team(WinCondition.VILLAGERS_WIN) == Team.VILLAGE
        assert winning_team(WinCondition.ONGOING) is None
