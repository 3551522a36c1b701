"""
Narrative lookups.

The engine treats text as an opaque collaborator keyed by personality code
and rarity. StaticNarrativeProvider is the built-in table-backed
implementation; every lookup is total over the 16 codes and falls back to a
stock entry for anything else.
"""

import random
from collections.abc import Callable, Sequence
from typing import Protocol

from pixelfate.models.card import Rarity
from pixelfate.models.outcome import ReforgeOutcome

DEFAULT_TITLE = "Wandering Stranger"
UNKNOWN_CODE = "UNKNOWN"


class NarrativeProvider(Protocol):
    """Text lookups consumed by the engine."""

    def narrative(self, code: str, rarity: Rarity) -> str: ...

    def title(self, code: str) -> str: ...

    def reaction(self, code: str, tier: int) -> str: ...

    def comment(self, is_upright: bool) -> str: ...

    def result_message(self, rarity: Rarity) -> str: ...

    def reforge_message(self, outcome: ReforgeOutcome) -> str: ...

    def idle_hint(self) -> str: ...


# =============================================================================
# TABLES
# =============================================================================

TITLES: dict[str, str] = {
    "INTJ": "Star-Track Architect",
    "INTP": "Relic Examiner",
    "ENTJ": "Imperial General",
    "ENTP": "Tide Gambler",
    "INFJ": "Shepherd of Hearts",
    "INFP": "Wishing-Star Poet",
    "ENFJ": "Mentor of Order",
    "ENFP": "Whimsical Voyager",
    "ISTJ": "Castle Steward",
    "ISFJ": "Gentle Warden",
    "ESTJ": "Workshop Overseer",
    "ESFJ": "Alliance Envoy",
    "ISTP": "Shadow Artificer",
    "ISFP": "Forest Painter",
    "ESTP": "Vanguard Breaker",
    "ESFP": "Troupe Starlet",
}

# code -> (Bronze, Silver, Gold)
NARRATIVES: dict[str, tuple[str, str, str]] = {
    "INTJ": (
        "Efficiency is the only truth; feelings are redundant variables.",
        "In my blueprint the future is already calculated. You need only keep pace.",
        "The blueprint of fate is sealed. At the edge of thought, will alone is law.",
    ),
    "INTP": (
        "Interesting. This theory has a flaw somewhere in its foundations.",
        "If the universe is a simulation, I am the one hunting for its source code.",
        "A logic singularity devours every fallacy. I glimpse truth beneath the system.",
    ),
    "ENTJ": (
        "Mediocrity is this world's plague. Only the strong define the rules.",
        "Do not speak of luck. It is an ornate excuse for failure.",
        "Order is rebuilt. From the summit of power I carve an iron covenant.",
    ),
    "ENTP": (
        "Why not try the opposite path? Convention is so sleepy.",
        "Logic is a tool for taking the world apart, and I love spare parts.",
        "The storm of wild ideas arrives. I unify every paradox at the singularity.",
    ),
    "INFJ": (
        "Every heart holds an abyss. I am only the one carrying the lamp.",
        "The threads of fate intertwine, and I can see where they end.",
        "The lamp-keeper witnesses souls in resonance, guiding all across fate.",
    ),
    "INFP": (
        "If dreams are truer than waking, where are we meant to wake?",
        "Every meteor is an untold secret; I weave them into verse.",
        "Starlit dreams echo through a pure utopia. Sing this solitary epic with me.",
    ),
    "ENFJ": (
        "Lonely crowds need light, and I will be the beam that guides them.",
        "Sincerity is the only shortcut to the soul. Let us build a better world.",
        "The radiant leader charts the stars, opening an age of light and redemption.",
    ),
    "ENFP": (
        "Hey! Something amazing is going to happen today, right?",
        "Isn't life one giant party? Let's set every dull moment alight!",
        "The miracle-maker never takes a final bow; every spark becomes a dream.",
    ),
    "ISTJ": (
        "Rules exist so that chaos does not swallow civilization. Follow procedure.",
        "Duty weighs more than freedom, but it is also more real. I will hold the line.",
        "Iron law is the bedrock of civilization; I guard tradition's final wall.",
    ),
    "ISFJ": (
        "Quietly protecting the people beside me is my dearest wish.",
        "Memories are gifts of time; I will keep them safe forever.",
        "The sanctuary opens. I am the vessel of memory and the shield of life.",
    ),
    "ESTJ": (
        "Efficiency, organization, execution. Anything else wastes life.",
        "Only a rigorous hierarchy lets a system reach its full strength.",
        "The god of efficiency descends upon the empire's frame. Loyalty is absolute.",
    ),
    "ESFJ": (
        "When everyone is well, all is well. Let us work for harmony together.",
        "Every need deserves to be heard; I will be the bridge between us.",
        "A bridge of harmony spans the stars, tying every hearth together.",
    ),
    "ISTP": (
        "Talking is useless. Fixing it by hand is faster.",
        "Machines have souls; they are more honest than people and easier to mend.",
        "A silent blade cuts an eternal instant, reaching the end of speed itself.",
    ),
    "ISFP": (
        "Colour is the language of the soul. Let me leave my mark on this blank page.",
        "I need no definition; I dance with the wind and find freedom in nature.",
        "The colour wanderer hears all things resonate and paints nature's rhythm.",
    ),
    "ESTP": (
        "Hesitate and you lose. Seize the chance and go, right now!",
        "Risk is the best seasoning. Without the thrill, what's the point?",
        "The thunder vanguard arrives, ruler of the wilds, disciple of victory.",
    ),
    "ESFP": (
        "Wherever the spotlight is, that's where I am! Let's celebrate!",
        "This moment's joy is forever. Forget tomorrow and burn bright now!",
        "The aurora dancer lights an eternal festival at the centre of the stage.",
    ),
    UNKNOWN_CODE: (
        "The gears of fate begin to turn; no one can foresee the end.",
        "Guided by starlight, we are crossing an uncrossable gulf.",
        "All things return to one. The answer you seek is carved into your soul.",
    ),
}

# code -> tier -> reactions
REACTIONS: dict[str, dict[int, tuple[str, ...]]] = {
    "INTJ": {
        1: ("Basic energy... barely usable.", "A mediocre card, but at least it points true."),
        2: ("Not bad. This power is worth using.", "Superior quality, exactly as planned."),
        3: ("The star-tracks align.", "The blueprint of fate unfolds!"),
    },
    "INTP": {
        1: ("Basic data. Analyzable.", "Mediocre, but a usable source."),
        2: ("An interesting structure, worth a closer look.", "A superior finding."),
        3: ("A logic singularity swallows all doubt.", "Truth has nowhere left to hide."),
    },
    "ENTJ": {
        1: ("A basic resource. It can be integrated.", "Mediocre, but it will serve me."),
        2: ("A superior tool, just right.", "Great power, worth mastering."),
        3: ("The summit of power lies underfoot.", "Order rebuilt; the map is mine."),
    },
    "ENTP": {
        1: ("Basic material for an experiment.", "Mediocre, but full of possibility."),
        2: ("A superior paradox, worth exploring.", "Strong logic, ripe for dismantling."),
        3: ("The storm tears up the rulebook.", "The singularity is here: paradox is truth."),
    },
    "INFJ": {
        1: ("A basic flow of energy...", "Mediocre, yet meaningful."),
        2: ("A superior insight; I can feel it.", "Strong resonance; fate is guiding us."),
        3: ("The lamp-keeper sees a soul awaken.", "Gentle and firm, we walk toward the light."),
    },
    "INFP": {
        1: ("A basic feeling...", "Mediocre, but true."),
        2: ("A superior beauty; I can feel it.", "Strong inspiration, worth weaving."),
        3: ("Starlit dreams echo in the soul.", "An epic of the solitary begins here."),
    },
    "ENFJ": {
        1: ("A basic connection...", "Mediocre, but a bridge can be built."),
        2: ("Superior harmony, worth guiding.", "Strong resonance that can gather others."),
        3: ("The radiant leader guides all beings.", "The world's resonance reaches its peak."),
    },
    "ENFP": {
        1: ("Basic possibilities...", "Mediocre but full of potential!"),
        2: ("Superior inspiration! Amazing!", "Strong energy, worth exploring!"),
        3: ("The miracle-maker never disappoints.", "The spark has lit a kaleidoscope."),
    },
    "ISTJ": {
        1: ("A basic structure...", "Mediocre, but within the rules."),
        2: ("Superior order, worth maintaining.", "A strong system to rely on."),
        3: ("Iron law tolerates no error.", "The covenant is in force."),
    },
    "ISFJ": {
        1: ("Basic protection...", "Mediocre, but it can shelter someone."),
        2: ("Superior care, worth giving.", "Strong protection to rely on."),
        3: ("The sanctuary is fully open.", "Memory will keep this warmth forever."),
    },
    "ESTJ": {
        1: ("Basic organization...", "Mediocre, but manageable."),
        2: ("Superior efficiency, worth executing.", "A strong system to optimize."),
        3: ("The system has reached peak condition.", "Only loyalty and order remain."),
    },
    "ESFJ": {
        1: ("Basic harmony...", "Mediocre, but something to build on."),
        2: ("Superior coordination, worth keeping.", "Strong unity to rely on."),
        3: ("A bridge to every lonely soul.", "Resonance lights the harbour of the heart."),
    },
    "ISTP": {
        1: ("A basic tool...", "Mediocre, but it works."),
        2: ("A superior mechanism, worth operating.", "A strong tool for repairs."),
        3: ("The silent blade is drawn.", "The machine's soul roars in the instant."),
    },
    "ISFP": {
        1: ("A basic colour...", "Mediocre, but expressive."),
        2: ("Superior beauty, worth creating.", "Strong inspiration to depict."),
        3: ("The colour wanderer strolls with nature.", "A silent symphony begins."),
    },
    "ESTP": {
        1: ("A basic move...", "Mediocre, but worth a try."),
        2: ("A superior thrill, worth the risk.", "Strong energy to conquer with."),
        3: ("The thunder vanguard declares victory.", "Conquest is the creed of the wild."),
    },
    "ESFP": {
        1: ("Basic fun...", "Mediocre, but enjoyable."),
        2: ("A superior celebration, count me in!", "Strong energy to share!"),
        3: ("The aurora dancer lights the festival.", "I am the centre of the stage."),
    },
}

REACTION_FALLBACK_CODE = "INTJ"

COMMENTS: dict[bool, tuple[str, ...]] = {
    True: (
        "Oh? Upright power. It heralds an inevitable awakening.",
        "I can feel this energy correcting our course.",
        "Perfect. This is exactly the opening I wanted.",
        "Light gathers; every step lands on a node of fate.",
    ),
    False: (
        "A reversed shadow... fate is telling a joke that isn't funny.",
        "A twisted omen. We will need more wisdom to calm these waves.",
        "Not smooth, but this is a chance to remake yourself.",
        "New life grows in chaos. Don't be fooled by the misalignment.",
    ),
}

RESULT_MESSAGES: dict[Rarity, str] = {
    Rarity.BRONZE: "Only passing dust. Pay it no mind.",
    Rarity.SILVER: "Getting better; the outline of fate grows clearer.",
    Rarity.GOLD: "Look! Even the stars are shining for you!",
}

REFORGE_MESSAGES: dict[ReforgeOutcome, str] = {
    ReforgeOutcome.UPGRADE: "An expected optimization. This is the perfect sigil.",
    ReforgeOutcome.NO_CHANGE: "Are the gears worn? Try again.",
    ReforgeOutcome.DOWNGRADE: "The soul-fire is locked; only the path of fate was rebuilt.",
    ReforgeOutcome.INSUFFICIENT_DUPLICATE: "Reforging needs a duplicate of the same card and tier...",
}

IDLE_HINTS: tuple[str, ...] = (
    "Hesitation is fate's greatest enemy.",
    "Time slips through your fingers like an hourglass.",
    "The star-tracks do not wait for the hesitant.",
    "What are you thinking? Fate is ready.",
    "The soul stands firm even as its path is reforged.",
    "The stars may shift, but the heart stays true.",
    "You are both the observer and the weaver of your fate.",
)


# =============================================================================
# PROVIDER
# =============================================================================


class StaticNarrativeProvider:
    """
    NarrativeProvider backed by the built-in tables.

    Args:
        choose: Picks one line from a sequence. Defaults to random.choice;
            tests pass a deterministic picker.
    """

    def __init__(self, choose: Callable[[Sequence[str]], str] | None = None) -> None:
        self._choose = choose or random.choice

    def narrative(self, code: str, rarity: Rarity) -> str:
        lines = NARRATIVES.get(code, NARRATIVES[UNKNOWN_CODE])
        return lines[_rarity_index(rarity)]

    def title(self, code: str) -> str:
        return TITLES.get(code, DEFAULT_TITLE)

    def reaction(self, code: str, tier: int) -> str:
        by_tier = REACTIONS.get(code, REACTIONS[REACTION_FALLBACK_CODE])
        return self._choose(by_tier.get(tier, by_tier[1]))

    def comment(self, is_upright: bool) -> str:
        return self._choose(COMMENTS[is_upright])

    def result_message(self, rarity: Rarity) -> str:
        return RESULT_MESSAGES[rarity]

    def reforge_message(self, outcome: ReforgeOutcome) -> str:
        return REFORGE_MESSAGES.get(outcome, "")

    def idle_hint(self) -> str:
        return self._choose(IDLE_HINTS)


def _rarity_index(rarity: Rarity) -> int:
    return (Rarity.BRONZE, Rarity.SILVER, Rarity.GOLD).index(rarity)
