"""Exception types raised by the compiler and the VGM tools."""


class VgmckError(Exception):
    """Base class for every error raised by this package."""


class ParseError(VgmckError):
    """An MML source line could not be understood."""

    def __init__(self, line: int, message: str) -> None:
        super().__init__(f"Parse error at line {line}: {message}")
        self.line = line
        self.message = message


class VgmParseError(VgmckError):
    """A VGM file is malformed or truncated."""

    def __init__(self, message: str) -> None:
        super().__init__(f"VGM parse error: {message}")
        self.message = message


class UnknownChipError(VgmckError):
    """A chip name does not match any supported sound chip."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown chip: {name}")
        self.name = name


class UndeclaredChannelError(VgmckError):
    """A channel letter is used before any chip declared it."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"Channel '{channel}' not declared before use")
        self.channel = channel


class InvalidChannelError(VgmckError):
    """A character is not a valid channel letter."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"Invalid channel: '{channel}'")
        self.channel = channel


class EnvelopeError(VgmckError):
    """A macro envelope definition is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Envelope error: {message}")
        self.message = message


class SampleError(VgmckError):
    """Sample data could not be loaded or read."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Sample error: {message}")
        self.message = message