"""
MemoryMatch - Deck and board rules.

A deck holds every symbol of the chosen difficulty twice, shuffled. The
board flips at most two cards at a time; the game mode decides when a
face-up pair is resolved (matched pairs stay up, others flip back).
"""
from dataclasses import dataclass
from random import Random
from typing import List, Optional, Tuple

from models import Difficulty

LOGOS = [
    'argus', 'bitronics', 'hermes', 'kronos',
    'novatech', 'orion', 'w3ts', 'server',
]

DEVICES = [
    'HERMES2000', 'KRONOS2P', 'KRONOS2R', 'KRONOS3R',
    'ORIONIO', 'ORIONLX', 'ORIONLX+', 'ORIONLXM',
    'ORIONMX', 'ORIONMX2S', 'ORIONMX4S', 'ORIONSX',
]

Pair = Tuple[int, int]


def symbols_for(difficulty: Difficulty) -> List[str]:
    """EASY: 6 logos, HARD: all 8 logos, INSANE: 12 devices."""
    if difficulty is Difficulty.EASY:
        return LOGOS[:6]
    if difficulty is Difficulty.HARD:
        return list(LOGOS)
    return list(DEVICES)


@dataclass
class Card:
    id: int
    symbol: str
    flipped: bool = False
    matched: bool = False

    @property
    def face_up(self) -> bool:
        return self.flipped or self.matched


def build_deck(difficulty: Difficulty, rng: Random) -> List[Card]:
    """Two cards per symbol, shuffled with rng, ids in deck order."""
    symbols = symbols_for(difficulty) * 2
    rng.shuffle(symbols)
    return [Card(id=index, symbol=symbol) for index, symbol in enumerate(symbols)]


class MemoryBoard:
    """Cards plus the face-up selection and the move counter."""

    def __init__(self, cards: List[Card]):
        self.cards = cards
        self.selected: List[int] = []
        self.moves = 0

    @classmethod
    def deal(cls, difficulty: Difficulty, rng: Random) -> 'MemoryBoard':
        return cls(build_deck(difficulty, rng))

    @property
    def pairs(self) -> int:
        return len(self.cards) // 2

    @property
    def matched_pairs(self) -> int:
        return sum(1 for card in self.cards if card.matched) // 2

    @property
    def all_matched(self) -> bool:
        return bool(self.cards) and all(card.matched for card in self.cards)

    def flip(self, index: int) -> Optional[Pair]:
        """Turn a card face up.

        Ignored when the index is out of range, the card is matched or
        already flipped, or two cards are already up.

        Returns:
            The face-up pair when this was the second card, else None
        """
        if not 0 <= index < len(self.cards) or len(self.selected) >= 2:
            return None
        card = self.cards[index]
        if card.matched or card.flipped:
            return None

        card.flipped = True
        self.selected.append(index)
        if len(self.selected) < 2:
            return None
        self.moves += 1
        return self.selected[0], self.selected[1]

    def is_match(self, pair: Pair) -> bool:
        first, second = pair
        return self.cards[first].symbol == self.cards[second].symbol

    def resolve_match(self, pair: Pair) -> None:
        """Mark a matching pair as matched and free the selection."""
        for index in pair:
            self.cards[index].matched = True
        self.selected = []

    def hide_pair(self, pair: Pair) -> None:
        """Flip a mismatched pair back and free the selection."""
        for index in pair:
            self.cards[index].flipped = False
        self.selected = []
