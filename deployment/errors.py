class DeploymentError(Exception):
    """Base class for every failure of the Rfa / Staking deployment."""


class NoSignerAvailable(DeploymentError):
    """Raised when no account is configured for the target network"""


class DeploymentFailed(DeploymentError):
    """Raised when a deployment transaction is rejected or never confirmed"""


class InitializationFailed(DeploymentError):
    """Raised when the proxy initializer cannot be encoded or reverts"""


class DeploymentAborted(DeploymentError):
    """Raised when the user declines an interactive confirmation"""
