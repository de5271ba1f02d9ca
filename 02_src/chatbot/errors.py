"""Exception types shared across the chat bot."""


class ChatbotError(Exception):
    """Base class for chat bot errors."""


class BackendError(ChatbotError):
    """A generation backend failed to produce a result."""


class TextBackendError(BackendError):
    """Text completion request failed."""


class ImageBackendError(BackendError):
    """Image generation request failed."""


class SessionStateError(ChatbotError):
    """A session handle was used after release, or for history of an offline chat."""
