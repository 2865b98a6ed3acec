from typing import Optional

class RegistrationError(Exception):
    """base class for exceptions in the registration client."""
    pass

class InvalidArgumentError(RegistrationError, ValueError):
    """raised when a required identifier is empty or missing."""
    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Argument '{name}' cannot be null or empty")

class MalformedDocumentError(RegistrationError):
    """raised when a successful registry response is not a JSON object."""
    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Malformed registry document at {uri}: {reason}")
