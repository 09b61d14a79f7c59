from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard
from studydeck.models.preference import Preference

__all__ = ["Deck", "Flashcard", "Preference"]
