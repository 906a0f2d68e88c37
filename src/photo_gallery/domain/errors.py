"""Error taxonomy for gallery operations."""


class GalleryError(Exception):
    """Base class for gallery failures."""


class CaptureError(GalleryError):
    """Raised when the camera capture is denied, cancelled or unavailable."""


class FileIOError(GalleryError):
    """Raised when reading, writing or deleting a stored file fails."""


class FileMissingError(FileIOError):
    """Raised when a stored file does not exist."""


class PersistenceError(GalleryError):
    """Raised when the key-value store is unavailable."""


class SerializationError(GalleryError):
    """Raised when the persisted gallery blob cannot be parsed."""
