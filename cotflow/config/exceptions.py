"""Error surface shared by the dispatcher and both runners."""


class AgentError(Exception):
    """Base exception for agent execution errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AgentError):
    """Agent or tool type does not exist."""

    pass


class InvalidArgumentError(AgentError):
    """Agent definition or request parameters are not usable."""

    pass


class ExecutionTimeoutError(AgentError):
    """A lookup, model call or tool call exceeded its time budget."""

    pass


class InternalError(AgentError):
    """Unexpected failure reported by a collaborator."""

    pass
