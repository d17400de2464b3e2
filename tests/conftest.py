"""Pytest fixtures for blackjack tests."""

import pytest
from random import Random

from blackjack.cards import Shoe
from blackjack.hand import Hand
from blackjack.player import Player
from blackjack.game import EventEmitter, Round

from helpers import hand_of, stacked


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A single-deck shoe."""
    return Shoe(num_decks=1, rng=rng)


@pytest.fixture
def player():
    return Player("Tester")


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def make_round(player, events):
    """Factory for a round whose shoe deals the given cards first (player, player, dealer, dealer, ...)."""

    def make(*codes: str) -> Round:
        return Round(player, stacked(*codes), events=events)

    return make


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s with a 100 wager."""
    return hand_of("8S", "8H", wager=100)


@pytest.fixture
def bust_hand():
    """A busted hand (10-9-K = 29)."""
    return hand_of("10S", "9H", "KC", wager=100)
