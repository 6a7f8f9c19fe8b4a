"""Error types shared by services, adapters and the HTTP layer."""


class InputValidationError(ValueError):
    """Raised when a request is malformed or missing required data."""


class RecordNotFoundError(LookupError):
    """Raised when a record id is unknown."""

    def __init__(self, entity: str, record_id: int) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ProviderError(RuntimeError):
    """Raised when an AI provider call fails."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ProviderShapeError(ProviderError):
    """Raised when a provider response cannot be decoded into the expected shape."""


class ImageProcessingError(RuntimeError):
    """Raised when an image scan cannot be completed."""

    user_message = "Could not process image. Please try again with a clearer photo."
