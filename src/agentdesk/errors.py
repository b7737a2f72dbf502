"""Exception types raised by agentdesk services."""


class AgentDeskError(Exception):
    """Base class for agentdesk errors."""


class ValidationError(AgentDeskError, ValueError):
    """A write request is missing required fields or carries bad values."""


class NotFoundError(AgentDeskError, LookupError):
    """The requested record or file does not exist."""
