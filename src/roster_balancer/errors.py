"""Exceptions raised by the balancer."""


class InvariantViolation(RuntimeError):
    """A distribution run reached a state that valid input cannot produce.

    Raised for programming errors such as a candidate with no active role or
    an offset outside the pool. Callers should let it abort the run.
    """


class PlayerNotFoundError(LookupError):
    """No stored player has the requested uuid."""

    def __init__(self, uuid: str):
        super().__init__(f"Player not found: {uuid}")
        self.uuid = uuid
