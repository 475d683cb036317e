"""Engine errors. Every rejected call raises one of these; the caller's snapshot stays valid."""


class BadugiError(Exception):
    code = "BADUGI_ERROR"

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class PlayerNotFound(BadugiError):
    code = "PLAYER_NOT_FOUND"


class InsufficientCards(BadugiError):
    code = "INSUFFICIENT_CARDS"


class InvalidAction(BadugiError):
    code = "INVALID_ACTION"


class NoExchangeBudget(BadugiError):
    code = "NO_EXCHANGE_BUDGET"
