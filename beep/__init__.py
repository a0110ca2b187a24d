"""beep - play a tone and send push notifications, webhooks and sounds."""

__version__ = "0.1.0"
