"""Error types raised by board generation."""


class ValidationError(ValueError):
    """A generation request is out of range or malformed.

    Always recoverable by the caller correcting the request; never retried.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self):
        return {"error": self.message, "field": self.field}


class GenerationError(RuntimeError):
    """The route search exhausted its attempt budget.

    Transient: a fresh call with new randomness is expected to succeed.
    """
