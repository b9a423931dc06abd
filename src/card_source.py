"""
Card Source for the CardParty game

Handles loading and validation of the YAML card pack and supplies black
cards and player hands from it without duplicates inside a draw.
"""

import yaml
import random
from typing import Dict, List, Optional, Any, Iterable
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


class ContentValidationError(Exception):
    """Raised when YAML content validation fails."""
    pass


class CardPoolExhaustedError(Exception):
    """Raised when the white card pool cannot supply a full hand."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"Cannot draw {requested} cards, only {available} left in the pool")


@dataclass
class CardPack:
    """Black prompt cards and white answer cards; ids are list positions."""
    black: List[str]
    white: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'black': list(self.black),
            'white': list(self.white)
        }

    @classmethod
    def from_yaml(cls, yaml_file_path: str) -> 'CardPack':
        """
        Load a card pack from a YAML file.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ContentValidationError: If YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        try:
            with open(yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)

            validate_card_pack(data)
            pack = cls(
                black=[card.strip() for card in data['black']],
                white=[card.strip() for card in data['white']]
            )
            logger.info(f"Loaded {len(pack.black)} black and {len(pack.white)} white cards from {yaml_file_path}")
            return pack

        except FileNotFoundError:
            logger.error(f"YAML file not found: {yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            raise
        except ContentValidationError as e:
            logger.error(f"Content validation error: {e}")
            raise


def validate_card_pack(data: Any) -> None:
    """
    Validate the structure of loaded YAML data.

    Args:
        data: Parsed YAML data to validate

    Raises:
        ContentValidationError: If structure is invalid
    """
    if not isinstance(data, dict):
        raise ContentValidationError("YAML root must be a dictionary")

    for key in ('black', 'white'):
        if key not in data:
            raise ContentValidationError(f"YAML must contain '{key}' key")

        cards = data[key]
        if not isinstance(cards, list):
            raise ContentValidationError(f"'{key}' must be a list")

        if len(cards) == 0:
            raise ContentValidationError(f"'{key}' list cannot be empty")

        for i, card in enumerate(cards):
            if not isinstance(card, str):
                raise ContentValidationError(f"{key} card {i} must be a string")
            if not card.strip():
                raise ContentValidationError(f"{key} card {i} cannot be empty")


class CardSource:
    """Deals cards from one card pack for a single game session."""

    def __init__(self, pack: CardPack, rng: Optional[random.Random] = None):
        """
        Initialize the card source with a freshly shuffled white pile.

        Args:
            pack: Card pack to deal from
            rng: Optional random generator (seeded in tests)
        """
        self.pack = pack
        self._rng = rng or random.Random()
        self._draw_pile: List[int] = list(range(len(pack.white)))
        self._rng.shuffle(self._draw_pile)
        self._discard_pile: List[int] = []
        self._last_black_card: Optional[int] = None

    def draw_black_card(self) -> int:
        """
        Pick the black card for a new round.

        Never returns the previous black card while the pack has more than one.
        """
        candidates = range(len(self.pack.black))
        if self._last_black_card is not None and len(self.pack.black) > 1:
            candidates = [card for card in candidates if card != self._last_black_card]

        card = self._rng.choice(list(candidates))
        self._last_black_card = card
        return card

    def draw_hand(self, count: int) -> List[int]:
        """
        Remove ``count`` distinct white cards from the pool.

        When the draw pile runs short the discard pile is shuffled back into it.
        If that is still not enough nothing is drawn and CardPoolExhaustedError
        is raised.
        """
        if count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {count}")

        if len(self._draw_pile) < count and self._discard_pile:
            self._reshuffle_discards()

        if len(self._draw_pile) < count:
            raise CardPoolExhaustedError(count, len(self._draw_pile))

        hand = self._draw_pile[:count]
        del self._draw_pile[:count]
        return hand

    def discard(self, cards: Iterable[int]) -> None:
        """Hand cards back so they can be dealt again after a reshuffle."""
        for card in cards:
            if card in self._discard_pile or card in self._draw_pile:
                continue
            self._discard_pile.append(card)

    def remaining(self) -> int:
        """Cards that can still be dealt, discards included."""
        return len(self._draw_pile) + len(self._discard_pile)

    def _reshuffle_discards(self):
        self._rng.shuffle(self._discard_pile)
        self._draw_pile.extend(self._discard_pile)
        logger.debug(f"Reshuffled {len(self._discard_pile)} discarded cards into the draw pile")
        self._discard_pile = []
