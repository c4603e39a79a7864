"""
Transport exceptions.

Every transport implementation raises these exceptions so the fetcher
layer can translate them without knowing the wire protocol.
"""


class TransportError(Exception):
    """Base exception for all transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Cannot open or close a session with the remote endpoint."""

    pass


class AuthenticationError(TransportConnectionError):
    """Endpoint rejected the supplied credentials."""

    pass


class AuthorizationError(TransportError):
    """Caller is not allowed to read the requested resource."""

    pass


class ResourceDoesNotExistError(TransportError):
    """Requested resource does not exist on the endpoint."""

    pass


class TransferFailedError(TransportError):
    """Transfer failed for any other reason."""

    pass
