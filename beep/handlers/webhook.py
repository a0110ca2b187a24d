import logging

import requests

from beep import bpchannel, utils
from beep.errors import HttpStatusError, NetworkError


event_logger = logging.getLogger("eventLogger")

REQUEST_TIMEOUT = 10


class WebhookChannel(bpchannel.BeepChannel):
    """Send the -D message to a configured HTTP endpoint. The body is the
    message itself: decoded JSON is sent as a JSON document, anything else
    as plain text. request is a dispatch.WebhookRequest.
    """

    name = "webhook"

    def build_kwargs(self):
        """Keyword arguments for requests.request."""
        config = self.request.config
        payload = utils.parse_payload(self.request.data)

        kwargs = {"headers": dict(config.headers), "timeout": REQUEST_TIMEOUT}
        if payload.is_json:
            kwargs["json"] = payload.body
        else:
            kwargs["data"] = payload.body.encode("utf-8")

        return kwargs

    def run(self):
        config = self.request.config
        try:
            r = requests.request(config.method, config.url, **self.build_kwargs())
        except requests.exceptions.RequestException as e:
            raise NetworkError("Couldn't reach {}: {}".format(config.url, e)) from e

        if not r.ok:
            event_logger.debug("Webhook response: %s %s", r.status_code, r.text)
            raise HttpStatusError(r.status_code, config.url)

        return "Webhook sent to {}".format(config.url)
