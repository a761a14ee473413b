"""Error types raised while extracting media from a device mount."""


class ExtractionError(Exception):
    """Base error for the extractor."""


class ConfigurationError(ExtractionError):
    pass


class TraversalError(ExtractionError):
    """A directory or file on the mount could not be read."""

    def __init__(self, path, cause):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"for file {self.path!r}: {cause}")


class TransferFailed(ExtractionError):
    """A copy or move did not complete, including refusals to clobber."""

    def __init__(self, source, destination, output):
        self.source = str(source)
        self.destination = str(destination)
        self.output = output
        super().__init__(f"{self.source} -> {self.destination}: {output}")
