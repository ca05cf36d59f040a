"""Deck composition rules."""

DECK_SIZE = 10
# Largest value a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1

MISSING_NAME = "Deck name is required"
INVALID_CARD_LIST = "Card list is invalid"
WRONG_DECK_SIZE = f"A deck must contain exactly {DECK_SIZE} cards"
UNKNOWN_CARDS = "One or more cards are invalid"


def check_card_list(cards) -> str | None:
    """Return an error message when ``cards`` cannot form a deck, else None.

    Only the shape is checked here: a list of exactly DECK_SIZE integers.
    Whether the pokedex numbers exist is decided against the database.
    """
    if not isinstance(cards, list):
        return INVALID_CARD_LIST
    if any(isinstance(card, bool) or not isinstance(card, int) for card in cards):
        return INVALID_CARD_LIST
    if any(not -MAX_ID - 1 <= card <= MAX_ID for card in cards):
        return INVALID_CARD_LIST
    if len(cards) != DECK_SIZE:
        return WRONG_DECK_SIZE
    return None


def all_cards_found(requested: list[int], found_count: int) -> bool:
    """Duplicated numbers collapse to one card, so they fail this check too."""
    return len(requested) == DECK_SIZE and found_count == DECK_SIZE
