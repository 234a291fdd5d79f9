"""Error taxonomy for site provisioning.

Every failure is fatal: library code raises one of these and the CLI
entry point turns it into a FAIL line and a non-zero exit.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for all provisioning failures."""


class ConfigurationError(ProvisionError):
    """The request could not be resolved (bad site name, no valet tld)."""


class FilesystemError(ProvisionError):
    """The project directory could not be created."""


class DelegatedCommandError(ProvisionError):
    """A WP-CLI invocation exited non-zero."""

    def __init__(self, command: str, return_code: int, stderr: str) -> None:
        self.command = command
        self.return_code = return_code
        self.stderr = stderr
        text = stderr.strip() or f"wp {command} exited with status {return_code}"
        super().__init__(text)


class RegistryError(ProvisionError):
    """The plugin registry response was missing or unparsable."""


class InstallationError(ProvisionError):
    """A post-install check failed."""


class ProxyToolError(ProvisionError):
    """The valet executable exited non-zero."""

    def __init__(self, command: str, output: str) -> None:
        self.command = command
        self.output = output
        super().__init__(
            f'There was a problem running "valet {command}"\nError: {output}'
        )
