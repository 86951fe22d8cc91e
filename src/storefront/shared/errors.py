"""Application errors that have no Protean counterpart."""


class ConflictError(Exception):
    """A uniqueness guard fired: duplicate catalogue field or a write race.

    Clients may retry the request as an update.
    """

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field
