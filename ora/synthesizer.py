"""
Rule-based answer synthesis for the simulated ORA API.

Answers are chosen from ordered `(predicate, handler)` tables. The first
rule whose predicate matches wins, both when picking the query intent and
when picking a sentence inside an intent. There is no scoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from vision.types import AnalysisResult

LUXURY_ITEMS = frozenset(
    [
        "watch", "analog watch", "timepiece", "wristwatch", "chronograph", "rolex", "omega",
        "patek philippe", "jewelry", "ring", "necklace", "bracelet", "diamond", "gold",
        "silver", "platinum", "sneakers", "shoes", "nike", "adidas", "jordan", "yeezy",
        "designer", "luxury", "fashion", "handbag", "purse", "wallet", "louis vuitton",
        "gucci", "prada", "chanel", "hermes",
    ]
)
LUXURY_LABEL_HINTS = ("watch", "jewelry", "fashion")
WATCH_NAMES = ("watch", "analog watch")
ANIMAL_CATEGORIES = ("animal", "mammal", "wildlife")
COLOR_WORDS = frozenset(
    [
        "red", "blue", "green", "yellow", "black", "white", "purple", "orange", "pink",
        "brown", "gray", "grey", "silver", "gold",
    ]
)

CAT_ANSWER = (
    "The image shows a cat. Cats are domestic felines known for their independent "
    "nature and grooming habits. They are popular pets worldwide."
)
DOG_ANSWER = (
    "The image shows a dog. Dogs are domesticated mammals known for their loyalty and "
    "companionship. They are one of the most popular pets globally."
)
NOTHING_IDENTIFIABLE = (
    "This image doesn't contain clearly identifiable objects or features that I can "
    "describe with confidence."
)


class SynthesizedAnswer(BaseModel):
    completion: str


@dataclass(frozen=True)
class Facts:
    """Lower-cased views of one analysis, derived per call."""

    analysis: AnalysisResult
    query: str
    main_labels: Tuple[str, ...]
    main_objects: Tuple[str, ...]
    entities: Tuple[str, ...]
    luxury: Tuple[str, ...]

    @classmethod
    def collect(cls, analysis: AnalysisResult, query: str) -> "Facts":
        main_labels = tuple(label.description.lower() for label in analysis.labels[:5])
        main_objects = tuple(obj.name.lower() for obj in analysis.objects)
        entities = main_labels + main_objects
        return cls(
            analysis=analysis,
            query=query.lower(),
            main_labels=main_labels,
            main_objects=main_objects,
            entities=entities,
            luxury=tuple(e for e in entities if e in LUXURY_ITEMS),
        )

    @property
    def text(self) -> str:
        return self.analysis.text

    @property
    def top_label(self) -> str:
        return self.main_labels[0] if self.main_labels else ""

    def labelled(self, *names: str) -> bool:
        return any(name in self.main_labels for name in names)

    def seen(self, *names: str) -> bool:
        """True when any name is a main label or an object."""
        return any(name in self.main_labels or name in self.main_objects for name in names)

    def object_names(self) -> str:
        return ", ".join(obj.name for obj in self.analysis.objects)


Predicate = Callable[[Facts], bool]
Handler = Callable[[Facts], str]
Rules = Sequence[Tuple[Predicate, Handler]]


def first_match(rules: Rules, facts: Facts) -> Optional[str]:
    for predicate, handler in rules:
        if predicate(facts):
            return handler(facts)
    return None


def query_mentions(*words: str) -> Predicate:
    return lambda f: any(word in f.query for word in words)


def always(_: Facts) -> bool:
    return True


def _a_top_label(f: Facts, otherwise: str) -> str:
    return f"a {f.top_label}" if f.top_label else otherwise


def _text_suffix(f: Facts, lead: str) -> str:
    return f'{lead}: "{f.text}".' if f.text else ""


# Luxury

def is_watch(f: Facts) -> bool:
    return f.seen(*WATCH_NAMES)


def watch_answer(f: Facts) -> str:
    details = [
        label.description
        for label in f.analysis.labels
        if label.description.lower() not in WATCH_NAMES
    ][:5]
    return (
        "This image shows a luxury timepiece. It appears to be an analog watch with the "
        f"following characteristics: {', '.join(details)}. Watches like this are precision "
        "instruments that combine craftsmanship with functionality, often serving as both a "
        "practical tool and a fashion statement or collectible item."
    )


def collectible_answer(f: Facts) -> str:
    return (
        f"This image shows a luxury collectible item: {', '.join(f.luxury)}. The item "
        f"features {', '.join(f.main_labels[:3])} design elements. Luxury items like this "
        "are often valued for their craftsmanship, brand prestige, and aesthetic appeal, "
        "making them desirable collectibles."
    )


LUXURY_RULES: Rules = [
    (is_watch, watch_answer),
    (always, collectible_answer),
]


def is_luxury(f: Facts) -> bool:
    return bool(f.luxury) or any(
        hint in label for label in f.main_labels for hint in LUXURY_LABEL_HINTS
    )


def luxury_answer(f: Facts) -> str:
    return first_match(LUXURY_RULES, f)


# Animals

def wildlife_answer(f: Facts) -> str:
    kind = next((label for label in f.main_labels if label not in ANIMAL_CATEGORIES), None)
    return (
        f"The image appears to show a {kind or 'wild animal'}. I can see characteristics "
        f"typical of {kind or 'wildlife'} in the image."
    )


ANIMAL_RULES: Rules = [
    (lambda f: "cat" in f.entities, lambda f: CAT_ANSWER),
    (lambda f: "dog" in f.entities, lambda f: DOG_ANSWER),
    (lambda f: f.labelled(*ANIMAL_CATEGORIES), wildlife_answer),
    (
        always,
        lambda f: "I don't see any animals in this image. The image appears to show "
        + _a_top_label(f, "a scene without animals")
        + ".",
    ),
]


# Objects

def listed_objects_answer(f: Facts) -> str:
    return (
        f"The main objects in this image are: {f.object_names()}. The image primarily "
        f"shows {f.top_label or 'a scene'} with {len(f.analysis.objects)} identifiable objects."
    )


def labels_only_answer(f: Facts) -> str:
    return (
        f"This image shows {f.main_labels[0]} with features including "
        f"{', '.join(f.main_labels[1:4])}. "
        + _text_suffix(f, "There is also text visible")
    )


OBJECT_RULES: Rules = [
    (lambda f: bool(f.analysis.objects), listed_objects_answer),
    (lambda f: bool(f.main_labels), labels_only_answer),
    (always, lambda f: "The image doesn't contain clearly defined objects. It appears to be a scene."),
]


# Colors

def _color_labels(f: Facts) -> List[str]:
    return [label for label in f.main_labels if label in COLOR_WORDS]


COLOR_RULES: Rules = [
    (
        lambda f: bool(_color_labels(f)),
        lambda f: f"The dominant colors in this image appear to be {', '.join(_color_labels(f))}.",
    ),
    (
        lambda f: f.seen("sky"),
        lambda f: "The image contains sky which appears blue, and likely has other natural "
        "colors typical of an outdoor scene.",
    ),
    (
        lambda f: f.labelled("landscape", "nature"),
        lambda f: "The image shows a natural landscape with typical earth tones, greens from "
        "vegetation, and blues from the sky.",
    ),
    (
        always,
        lambda f: "I cannot specifically identify the colors in this image, but it appears to show "
        + _a_top_label(f, "a scene")
        + " with its typical coloration.",
    ),
]


# Text

TEXT_RULES: Rules = [
    (lambda f: bool(f.text), lambda f: f'The text in the image reads: "{f.text}"'),
    (always, lambda f: "There is no visible text in this image."),
]


# Location

def _room_kind(f: Facts) -> str:
    for room in ("kitchen", "bedroom", "office"):
        if f.labelled(room):
            return room
    return "room or building interior"


LOCATION_RULES: Rules = [
    (
        lambda f: f.labelled("landscape", "nature", "outdoor"),
        lambda f: "This appears to be an outdoor natural setting. Based on the visible elements like "
        + ("trees" if f.labelled("tree") else "natural features")
        + ", it's likely a park, forest, or natural landscape area.",
    ),
    (
        lambda f: f.labelled("indoor", "room"),
        lambda f: f"This appears to be an indoor setting, possibly a {_room_kind(f)}.",
    ),
    (
        lambda f: f.labelled("urban", "city"),
        lambda f: "This appears to be an urban setting, possibly in a city or town environment.",
    ),
    (
        always,
        lambda f: "I cannot determine the specific location from this image. It appears to show "
        + _a_top_label(f, "a scene")
        + ".",
    ),
]


# Default description

def _top_labels(f: Facts) -> List[str]:
    return [label for label in f.main_labels[:5] if label]


def described_objects_answer(f: Facts) -> str:
    return (
        f"This image shows {f.object_names()}. The key features include "
        f"{', '.join(_top_labels(f))}. "
        + _text_suffix(f, "There is also some text visible")
    )


def described_labels_answer(f: Facts) -> str:
    top = _top_labels(f)
    return (
        f"This image shows {top[0]} with features including {', '.join(top[1:])}. "
        + _text_suffix(f, "There is also some text visible")
    )


DEFAULT_RULES: Rules = [
    (lambda f: bool(f.luxury), luxury_answer),
    (
        lambda f: f.seen("cat"),
        lambda f: "This image shows a cat. It appears to be a domestic feline, commonly kept as "
        "a pet. Cats are known for their independent nature, agility, and grooming habits.",
    ),
    (
        lambda f: f.seen("dog"),
        lambda f: "This image shows a dog. Dogs are domesticated mammals that have been bred for "
        "various tasks such as hunting, herding, protection, and companionship.",
    ),
    (
        lambda f: f.seen("person"),
        lambda f: "This image shows a person. I can see a human figure in the frame, though I "
        "cannot identify specific individuals.",
    ),
    (
        lambda f: f.seen("food"),
        lambda f: "This image shows food. It appears to be a prepared dish or meal, though I "
        "cannot identify the specific cuisine or ingredients in detail.",
    ),
    (
        lambda f: f.seen("car"),
        lambda f: "This image shows a car. It's a motor vehicle designed for transportation on "
        "roads, typically with four wheels.",
    ),
    (
        lambda f: len(f.text) > 10,
        lambda f: f'This image contains text that reads: "{f.text}". It appears to be a document '
        "or text-containing image.",
    ),
    (
        lambda f: f.labelled("landscape", "nature"),
        lambda f: "This image depicts a landscape photo featuring trees and sky with clouds. It's "
        "a natural outdoor scene showing elements of nature.",
    ),
    (lambda f: bool(f.analysis.objects), described_objects_answer),
    (lambda f: bool(_top_labels(f)), described_labels_answer),
    (always, lambda f: NOTHING_IDENTIFIABLE),
]


# Intents, in priority order

INTENT_RULES: Rules = [
    (is_luxury, luxury_answer),
    (query_mentions("animal", "pet"), lambda f: first_match(ANIMAL_RULES, f)),
    (
        query_mentions("object", "thing", "what is", "what's in", "show me"),
        lambda f: first_match(OBJECT_RULES, f),
    ),
    (query_mentions("color", "colour"), lambda f: first_match(COLOR_RULES, f)),
    (query_mentions("text", "say", "write", "read"), lambda f: first_match(TEXT_RULES, f)),
    (query_mentions("where", "location"), lambda f: first_match(LOCATION_RULES, f)),
    (always, lambda f: first_match(DEFAULT_RULES, f)),
]


def synthesize(analysis: AnalysisResult, query: str) -> SynthesizedAnswer:
    """Answer `query` about `analysis` with a canned sentence."""
    facts = Facts.collect(analysis, query)
    return SynthesizedAnswer(completion=first_match(INTENT_RULES, facts))
