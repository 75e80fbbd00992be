class BuilderError(Exception):
    """Base class for errors surfaced by a builder session."""


class SaveFailed(BuilderError):
    """An explicit save (manual save or template change) did not persist."""


class UploadRejected(BuilderError):
    """The file failed local validation; nothing was sent."""


class UploadFailed(BuilderError):
    """The uploader raised; local content was left untouched."""
