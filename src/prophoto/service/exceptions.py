"""Exceptions raised by the transformation service."""


class TransformError(RuntimeError):
    """Base exception for a transform that did not produce an image."""
    pass


class GenerationFailedError(TransformError):
    """The model answered, but no response part carried image data."""
    pass


class ServiceError(TransformError):
    """
    The model call itself failed (network, auth, quota, malformed response,
    missing API key). The original exception is chained as ``__cause__``.
    """
    pass
