"""Draw probabilities computed from the cards left in a shoe."""

from blackjack.cards import Shoe
from blackjack.hand import BLACKJACK, Hand, hand_value


def bust_probability(hand: Hand, shoe: Shoe) -> float:
    """
    Probability that the next card drawn from the shoe busts the hand.

    Every undrawn card is equally likely, so this is an exact count over
    the shoe's remaining cards rather than an infinite-deck estimate.

    Args:
        hand: Hand that would take the card
        shoe: Shoe the card would come from

    Returns:
        Probability (0-1); 0.0 when the shoe is empty
    """
    remaining = shoe.available_cards()
    if not remaining:
        return 0.0

    busting = sum(
        1 for card in remaining
        if hand_value([*hand.cards, card]) > BLACKJACK
    )
    return busting / len(remaining)


def dealer_upcard_value(hand: Hand) -> int:
    """Value of the dealer's face-up card alone."""
    return hand_value(hand.cards[:1])
