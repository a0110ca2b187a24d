# Typed view of the beep YAML configuration file and the loader reading it.

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

import yaml

from beep.errors import ConfigNotFoundError, ConfigParseError


logger = logging.getLogger("eventLogger")

CONFIG_FILE_NAME = "beep.yaml"
WEBHOOK_METHODS = ("GET", "POST", "PUT", "PATCH")
DEFAULT_WEBHOOK_METHOD = "POST"

SAMPLE_CONFIG = """\
# Modern Beep Configuration (~/.config/beep.yaml)
# Pushover notifications
pushover:
  api_token: "your_api_token_here"
  user_key: "your_user_key_here"
  device: "optional_device_name"

# HTTP Webhook
webhook:
  url: "https://example.com/notifications"
  method: "POST"  # optional, defaults to POST
  headers:        # optional headers
    Authorization: "Bearer your_token"
    Content-Type: "application/json"

# Sound file playback
sound:
  file: "/path/to/notification.wav"        # local file
  url: "https://example.com/sound.mp3"     # or remote URL, used instead of file when both are set
"""


@dataclass(frozen=True)
class PushoverConfig:
    api_token: str
    user_key: str
    device: Optional[str] = None


@dataclass(frozen=True)
class WebhookConfig:
    url: str
    method: str = DEFAULT_WEBHOOK_METHOD
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SoundConfig:
    file: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class BeepConfig:
    """Parsed configuration. Sections missing from the file are None."""

    pushover: Optional[PushoverConfig] = None
    webhook: Optional[WebhookConfig] = None
    sound: Optional[SoundConfig] = None
    verbose: Optional[bool] = None

    @classmethod
    def from_dict(cls, data):
        """Validate a dict read from YAML and build a BeepConfig from it.
        Raises AssertionError on invalid values.
        """
        if data is None:
            return cls()

        assert isinstance(data, dict), "Top level of the configuration must be a mapping"
        _warn_unknown_keys("", data, ("pushover", "webhook", "sound", "verbose"))

        verbose = data.get("verbose")
        assert verbose is None or isinstance(verbose, bool), "verbose must be true or false"

        return cls(
            pushover=_parse_pushover(data.get("pushover")),
            webhook=_parse_webhook(data.get("webhook")),
            sound=_parse_sound(data.get("sound")),
            verbose=verbose
        )


def _warn_unknown_keys(section, data, known):
    for key in data:
        if key not in known:
            logger.warning("Ignoring unknown configuration key %s%s", section, key)


def _optional_str(section, data, key):
    value = data.get(key)
    if value is None:
        return None
    assert isinstance(value, (str, int, float)), "{}.{} must be a string".format(section, key)
    value = str(value).strip()
    return value or None


def _parse_pushover(data):
    if data is None:
        return None
    assert isinstance(data, dict), "pushover must be a mapping"
    _warn_unknown_keys("pushover.", data, ("api_token", "user_key", "device"))

    api_token = _optional_str("pushover", data, "api_token")
    user_key = _optional_str("pushover", data, "user_key")
    if not (api_token and user_key):
        logger.warning("pushover section needs both api_token and user_key, ignoring it")
        return None

    return PushoverConfig(
        api_token=api_token,
        user_key=user_key,
        device=_optional_str("pushover", data, "device")
    )


def _parse_webhook(data):
    if data is None:
        return None
    assert isinstance(data, dict), "webhook must be a mapping"
    _warn_unknown_keys("webhook.", data, ("url", "method", "headers"))

    url = _optional_str("webhook", data, "url")
    if not url:
        logger.warning("webhook section has no url, ignoring it")
        return None

    method = (_optional_str("webhook", data, "method") or DEFAULT_WEBHOOK_METHOD).upper()
    assert method in WEBHOOK_METHODS, "Unsupported webhook method {}, use one of {}".format(
        method, ", ".join(WEBHOOK_METHODS))

    headers = data.get("headers") or {}
    assert isinstance(headers, dict), "webhook.headers must be a mapping"
    headers = {str(k): str(v) for k, v in headers.items()}

    return WebhookConfig(url=url, method=method, headers=headers)


def _parse_sound(data):
    if data is None:
        return None
    assert isinstance(data, dict), "sound must be a mapping"
    _warn_unknown_keys("sound.", data, ("file", "url"))

    file_ = _optional_str("sound", data, "file")
    url = _optional_str("sound", data, "url")
    if not (file_ or url):
        return None

    if file_ and url:
        logger.debug("Both sound.file and sound.url set, using url %s", url)

    return SoundConfig(file=file_, url=url)


def get_default_config_path():
    """Path to the configuration file used when --config is not given:
    ~/.config/beep.yaml, or beep.yaml in the working directory when no
    home directory is available.
    """
    home = os.path.expanduser("~")
    if home == "~":
        return CONFIG_FILE_NAME
    return os.path.join(home, ".config", CONFIG_FILE_NAME)


def read_config_file(path):
    """Read and validate a single configuration file.
    Raises ConfigParseError on invalid YAML or schema violations.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError("Couldn't parse configuration file {}: {}".format(path, e)) from e
    except OSError as e:
        raise ConfigParseError("Couldn't read configuration file {}: {}".format(path, e)) from e

    try:
        return BeepConfig.from_dict(data)
    except AssertionError as e:
        msg = "Couldn't validate configuration file {}.\nError received was: {}.\
        \nRun beep --sample-config for reference.".format(path, e)
        raise ConfigParseError(msg) from e


def load_config(config_path=None):
    """Load the configuration.
    params
        config_path (str): path given with --config, or None to use the default location.
    Return:
        a BeepConfig, empty when the default file does not exist or is broken.
    """
    if config_path is not None:
        if not os.path.isfile(config_path):
            raise ConfigNotFoundError("No configuration file found at {}".format(config_path))
        logger.info("Using config file %s", os.path.normpath(config_path))
        return read_config_file(config_path)

    path = get_default_config_path()
    if not os.path.isfile(path):
        logger.debug("No configuration file at %s", path)
        return BeepConfig()

    logger.info("Using config file %s", os.path.normpath(path))
    try:
        return read_config_file(path)
    except ConfigParseError as e:
        logger.warning("%s\nContinuing without configuration.", e)
        return BeepConfig()


def sample_config():
    """The BeepConfig the --sample-config template describes."""
    return BeepConfig(
        pushover=PushoverConfig(
            api_token="your_api_token_here",
            user_key="your_user_key_here",
            device="optional_device_name"
        ),
        webhook=WebhookConfig(
            url="https://example.com/notifications",
            method="POST",
            headers={
                "Authorization": "Bearer your_token",
                "Content-Type": "application/json"
            }
        ),
        sound=SoundConfig(
            file="/path/to/notification.wav",
            url="https://example.com/sound.mp3"
        )
    )
