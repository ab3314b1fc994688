from __future__ import annotations

import itertools
import random
from collections.abc import Collection
from dataclasses import dataclass, replace

from .types import ALL_ATTRIBUTES, ATTRIBUTE_VALUES, DEFAULT_ATTRIBUTES, AttributeName, Card


@dataclass
class CardIdGenerator:
    """Monotonic id source. One per round so replays produce identical ids."""

    counter: int = 0

    def next_id(self, card: Card | None = None) -> str:
        self.counter += 1
        if card is None:
            return f"card-{self.counter}"
        parts = [card.shape, card.color, str(card.number), card.shading]
        if card.background != "white":
            parts.append(card.background)
        return "-".join(parts) + f"-{self.counter}"


def create_deck(
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
    ids: CardIdGenerator | None = None,
) -> list[Card]:
    """Every combination of the active attributes, inactive ones fixed to their first value."""
    ids = ids or CardIdGenerator()
    axes: list[tuple[object, ...]] = []
    for attr in ALL_ATTRIBUTES:
        values = ATTRIBUTE_VALUES[attr]
        axes.append(values if attr in active_attributes else values[:1])

    deck: list[Card] = []
    for shape, color, number, shading, background in itertools.product(*axes):
        proto = Card(
            id="",
            shape=shape,  # type: ignore[arg-type]
            color=color,  # type: ignore[arg-type]
            number=number,  # type: ignore[arg-type]
            shading=shading,  # type: ignore[arg-type]
            background=background,  # type: ignore[arg-type]
        )
        deck.append(replace(proto, id=ids.next_id(proto)))
    return deck


def shuffled_deck(
    rng: random.Random,
    active_attributes: Collection[AttributeName] = DEFAULT_ATTRIBUTES,
    ids: CardIdGenerator | None = None,
) -> list[Card]:
    deck = create_deck(active_attributes, ids)
    rng.shuffle(deck)
    return deck
