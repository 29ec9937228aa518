class ResizerError(Exception):
    """Base class for every fatal iresizer error."""


class InvalidInputPathError(ResizerError):
    """Input is neither an existing file nor an existing directory."""


class InvalidSizeFormatError(ResizerError):
    """Size string is neither PERCENT% nor WIDTHxHEIGHT."""


class InvalidDimensionError(ResizerError):
    """A width or height is not a usable pixel count."""


class DecodeFailureError(ResizerError):
    pass


class EncodeFailureError(ResizerError):
    pass


class FilesystemFailureError(ResizerError):
    pass
