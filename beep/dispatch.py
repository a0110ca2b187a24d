# Decide which channels fire for an invocation and run them.

import logging
from dataclasses import dataclass
from typing import Optional

from beep.bpconfig import PushoverConfig, WebhookConfig
from beep.errors import ChannelError
from beep.handlers import pushover, sound, tone, webhook


event_logger = logging.getLogger("eventLogger")


@dataclass(frozen=True)
class ToneRequest:
    frequency: int
    length: int
    repeats: int
    delay: int


@dataclass(frozen=True)
class NotificationRequest:
    config: PushoverConfig
    message: str
    title: Optional[str] = None
    priority: Optional[int] = None


@dataclass(frozen=True)
class WebhookRequest:
    config: WebhookConfig
    data: str


@dataclass(frozen=True)
class SoundRequest:
    """Exactly one of file and url is set."""

    file: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class DispatchPlan:
    """Per channel parameters, None for channels that don't run."""

    tone: Optional[ToneRequest] = None
    notification: Optional[NotificationRequest] = None
    webhook: Optional[WebhookRequest] = None
    sound: Optional[SoundRequest] = None

    @property
    def run_tone(self):
        return self.tone is not None

    @property
    def run_notification(self):
        return self.notification is not None

    @property
    def run_webhook(self):
        return self.webhook is not None

    @property
    def run_sound(self):
        return self.sound is not None

    def planned(self):
        """Names of the channels that will run."""
        return [name for name in CHANNEL_ORDER if getattr(self, name) is not None]


@dataclass(frozen=True)
class ChannelResult:
    name: str
    ok: bool
    message: str


# Remote channels first so that a long tone doesn't delay notifications
CHANNEL_ORDER = ("notification", "webhook", "sound", "tone")


def should_play_tone(options):
    return options.play_sound_locally


def should_notify(options, config):
    return config.pushover is not None and bool(options.data)


def should_call_webhook(options, config):
    return config.webhook is not None and bool(config.webhook.url) and bool(options.data)


def should_play_sound(config):
    return config.sound is not None and bool(config.sound.url or config.sound.file)


def plan_dispatch(options, config):
    """Compute the DispatchPlan for resolved options and the loaded configuration.
    Args:
        options (EffectiveOptions): resolved command line options
        config (BeepConfig): configuration sections
    """
    plan = {}

    if should_play_tone(options):
        plan["tone"] = ToneRequest(
            frequency=options.frequency,
            length=options.length,
            repeats=options.repeats,
            delay=options.delay
        )

    if should_notify(options, config):
        plan["notification"] = NotificationRequest(
            config=config.pushover,
            message=options.data,
            title=options.title,
            priority=options.priority
        )

    if should_call_webhook(options, config):
        plan["webhook"] = WebhookRequest(config=config.webhook, data=options.data)

    if should_play_sound(config):
        # A url takes precedence, the file is then never touched
        if config.sound.url:
            plan["sound"] = SoundRequest(url=config.sound.url)
        else:
            plan["sound"] = SoundRequest(file=config.sound.file)

    return DispatchPlan(**plan)


class Dispatcher:
    """Runs every channel of a DispatchPlan, isolating failures per channel."""

    CHANNELS = {
        "tone": tone.ToneChannel,
        "notification": pushover.PushoverChannel,
        "webhook": webhook.WebhookChannel,
        "sound": sound.SoundChannel
    }

    def __init__(self, plan, channels=None):
        self.plan = plan
        self.channels = channels or self.CHANNELS

    def run_channel(self, name):
        class_ = self.channels[name]
        channel = class_(getattr(self.plan, name))
        try:
            message = channel.run()
        except ChannelError as e:
            event_logger.error("%s failed: %s", name, e)
            return ChannelResult(name, False, str(e))

        event_logger.debug("%s: %s", name, message)
        return ChannelResult(name, True, message)

    def run(self):
        """Run all planned channels.
        Return:
            list of ChannelResults in execution order
        """
        return [self.run_channel(name) for name in self.plan.planned()]


def exit_status(plan, results):
    """Process exit status: 1 only when the tone was the only thing to do and
    it failed. Remote failures are reported but never fail the process.
    """
    if plan.planned() != ["tone"]:
        return 0

    tone_result = results[0]
    return 0 if tone_result.ok else 1
