"""
Error types raised by the image editor.

Classes:
    ImageEditError: Base class for every editor failure
    LoadError: Input could not be read or decoded
    OperationError: A transform precondition failed, or output could not be written
"""


class ImageEditError(Exception):
    """Base class for image editor errors. ``str(err)`` is the message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LoadError(ImageEditError):
    pass


class OperationError(ImageEditError):
    pass
