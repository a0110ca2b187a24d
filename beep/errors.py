# Exception hierarchy for beep.


class BeepError(Exception):
    """Base class for all errors raised by beep."""


class ArgParseError(BeepError):
    """Invalid command line arguments."""

    def __init__(self, message, usage=""):
        super().__init__(message)
        self.usage = usage


class ConfigError(BeepError):
    pass


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested configuration file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when a configuration file is not valid YAML or fails validation."""


class ChannelError(BeepError):
    """A single dispatch channel failed. Never aborts sibling channels."""


class AudioDeviceError(ChannelError):
    pass


class NetworkError(ChannelError):
    pass


class HttpStatusError(ChannelError):

    def __init__(self, status_code, url):
        super().__init__("{} returned HTTP {}".format(url, status_code))
        self.status_code = status_code
        self.url = url


class SoundFileNotFoundError(ChannelError):
    pass


class SoundDecodeError(ChannelError):
    pass
