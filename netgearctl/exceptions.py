"""Exception hierarchy for switch monitoring and control."""


class SwitchError(Exception):
    """Base exception for all switch errors."""


class ConnectionFailedError(SwitchError):
    """The CLI channel could not be established or was lost mid-exchange."""


class AuthenticationError(ConnectionFailedError):
    """Login was rejected or the login prompts never appeared."""


class CommandTimeoutError(SwitchError):
    """No configured terminator appeared before the exchange timed out."""

    def __init__(self, message: str, partial_output: str = ""):
        self.partial_output = partial_output
        super().__init__(message)


class EscalationError(SwitchError):
    """The session connected but did not reach privileged mode."""


class PortError(SwitchError):
    """The device rejected a port configuration command."""
