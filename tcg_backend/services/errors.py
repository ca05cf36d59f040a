class ServiceError(Exception):
    """Base for errors the routers turn into HTTP responses."""


class ConflictError(ServiceError):
    pass


class InvalidCardsError(ServiceError):
    pass


class DeckNotFoundError(ServiceError):
    def __init__(self, deck_id: int):
        super().__init__(f"Deck {deck_id} not found")
        self.deck_id = deck_id


class DeckForbiddenError(ServiceError):
    def __init__(self, deck_id: int, user_id: int):
        super().__init__(f"Deck {deck_id} does not belong to user {user_id}")
        self.deck_id = deck_id
        self.user_id = user_id
