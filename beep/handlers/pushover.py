# Client for sending push notifications via Pushover.
# https://pushover.net/api

import logging

import requests

from beep import bpchannel
from beep.errors import HttpStatusError, NetworkError


event_logger = logging.getLogger("eventLogger")

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"
REQUEST_TIMEOUT = 10


class PushoverChannel(bpchannel.BeepChannel):
    """Send the -D message as a Pushover notification. request is a
    dispatch.NotificationRequest.
    """

    name = "notification"

    def build_params(self):
        """Build the request parameters. Pushover messages are text, so a
        JSON message is passed on as it was written instead of being
        re-encoded.
        """
        config = self.request.config
        params = {
            "token": config.api_token,
            "user": config.user_key,
            "message": self.request.message
        }

        if self.request.title:
            params["title"] = self.request.title

        if config.device:
            params["device"] = config.device

        if self.request.priority is not None:
            params["priority"] = self.request.priority

        return params

    def run(self):
        try:
            r = requests.post(PUSHOVER_URL, data=self.build_params(), timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise NetworkError("Couldn't reach Pushover: {}".format(e)) from e

        if not r.ok:
            event_logger.debug("Pushover response: %s %s", r.status_code, r.text)
            raise HttpStatusError(r.status_code, PUSHOVER_URL)

        return "Pushover notification sent"
