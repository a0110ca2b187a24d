# Playback of a configured notification sound, either a local file or
# a file downloaded from a URL.

import io
import os.path
import logging
from urllib.parse import urlparse

import pydub
import requests
from pydub.exceptions import CouldntDecodeError

from beep import bpchannel
from beep.errors import HttpStatusError, NetworkError, SoundDecodeError, SoundFileNotFoundError


event_logger = logging.getLogger("eventLogger")

REQUEST_TIMEOUT = 10


def format_from_url(url):
    """Audio format named by the url's file extension, eg. mp3, or None."""
    ext = os.path.splitext(urlparse(url).path)[1]
    return ext[1:].lower() or None


class SoundChannel(bpchannel.BeepChannel):
    """Play the sound named in the sound section. request is a
    dispatch.SoundRequest holding exactly one of file or url.
    """

    name = "sound"

    def decode(self, source, name, format=None):
        # Anything but wav goes through ffprobe/ffmpeg, which raise OSError when missing
        try:
            return pydub.AudioSegment.from_file(source, format=format)
        except (CouldntDecodeError, OSError) as e:
            raise SoundDecodeError("Couldn't decode {}: {}".format(name, e)) from e

    def load_file(self, path):
        if not os.path.isfile(path):
            raise SoundFileNotFoundError("Sound file {} does not exist".format(path))
        return self.decode(path, path)

    def load_url(self, url):
        """Download a sound file and decode it in memory."""
        try:
            r = requests.get(url, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise NetworkError("Couldn't download {}: {}".format(url, e)) from e

        if not r.ok:
            event_logger.debug("Download of %s returned %s", url, r.status_code)
            raise HttpStatusError(r.status_code, url)

        return self.decode(io.BytesIO(r.content), url, format=format_from_url(url))

    def run(self):
        if self.request.url:
            audio = self.load_url(self.request.url)
            self.play(audio)
            return "Played sound from URL: {}".format(self.request.url)

        audio = self.load_file(self.request.file)
        self.play(audio)
        return "Played sound file: {}".format(self.request.file)
