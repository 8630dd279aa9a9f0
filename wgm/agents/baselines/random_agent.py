"""Random agent that chooses actions randomly."""

import random
from typing import Any, Dict, List, Optional

from wgm.core.base_agent import BaseAgent
from wgm.core.types import Role
from wgm.engine.types import (
    AbilityResponse,
    PlayerContext,
    SeerAbilityResponse,
    SpeechResponse,
    VoteResponse,
    WerewolfAbilityResponse,
    WitchAbilityResponse,
)


SPEECH_TEMPLATES = [
    "I have no strong read yet. Let's hear everyone out.",
    "Player {target} has been quiet. I'm watching them.",
    "I'm a simple villager. I think player {target} is suspicious.",
    "Let's not rush the vote today.",
]


class RandomAgent(BaseAgent):
    """Agent that chooses actions randomly.

    Useful as a baseline for evaluation. Only ever targets living seats
    other than itself, and never bites a fellow werewolf.
    """

    def __init__(
        self,
        player_id: int,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        heal_probability: float = 0.5,
        poison_probability: float = 0.2,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize random agent.

        Args:
            player_id: Unique identifier
            name: Agent name
            seed: Random seed for reproducibility
            heal_probability: Chance the witch saves tonight's victim
            poison_probability: Chance the witch poisons someone
            config: Additional configuration
        """
        super().__init__(player_id=player_id, name=name, config=config)
        self.rng = random.Random(seed)
        self.heal_probability = heal_probability
        self.poison_probability = poison_probability

    def _candidates(self, context: PlayerContext, exclude: Optional[List[int]] = None) -> List[int]:
        excluded = set(exclude or ()) | {context.player_id}
        return [pid for pid in context.living_ids() if pid not in excluded]

    async def speak(self, context: PlayerContext) -> Optional[SpeechResponse]:
        candidates = self._candidates(context) or [context.player_id]
        template = self.rng.choice(SPEECH_TEMPLATES)
        return SpeechResponse(speech=template.format(target=self.rng.choice(candidates)))

    async def vote(self, context: PlayerContext) -> Optional[VoteResponse]:
        exclude = self.teammates if self.role == Role.WEREWOLF else None
        candidates = self._candidates(context, exclude) or self._candidates(context)
        if not candidates:
            return None
        return VoteResponse(target=self.rng.choice(candidates), reason="random choice")

    async def use_ability(self, context: PlayerContext) -> Optional[AbilityResponse]:
        match self.role:
            case Role.WEREWOLF:
                candidates = self._candidates(context, self.teammates)
                if not candidates:
                    return WerewolfAbilityResponse(action="idle")
                return WerewolfAbilityResponse(action="kill", target=self.rng.choice(candidates))
            case Role.SEER:
                investigated = [r.target for r in getattr(context, "investigated_players", {}).values()]
                candidates = self._candidates(context, investigated) or self._candidates(context)
                if not candidates:
                    return None
                return SeerAbilityResponse(target=self.rng.choice(candidates))
            case Role.WITCH:
                return self._witch_decision(context)
            case _:
                return None

    def _witch_decision(self, context: PlayerContext) -> WitchAbilityResponse:
        killed = getattr(context, "killed_tonight", None)
        heal_target = None
        poison_target = None

        if killed is not None and not context.heal_used and self.rng.random() < self.heal_probability:
            heal_target = killed
        elif not context.poison_used and self.rng.random() < self.poison_probability:
            candidates = self._candidates(context, [killed] if killed else None)
            if candidates:
                poison_target = self.rng.choice(candidates)

        if heal_target is None and poison_target is None:
            return WitchAbilityResponse(action="idle")
        return WitchAbilityResponse(action="using", heal_target=heal_target, poison_target=poison_target)
