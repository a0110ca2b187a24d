import sys
import time
import logging

from pydub.generators import Sine

from beep import bpchannel, utils
from beep.errors import AudioDeviceError


event_logger = logging.getLogger("eventLogger")

# Roughly 0.3 of full scale
TONE_VOLUME_DBFS = -10.5


class ToneChannel(bpchannel.BeepChannel):
    """Synthesizes a sine wave beep and plays it locally. request is a
    dispatch.ToneRequest.
    """

    name = "tone"

    def build(self):
        """Create the tone as pydub.AudioSegment."""
        generator = Sine(self.request.frequency)
        return generator.to_audio_segment(duration=self.request.length, volume=TONE_VOLUME_DBFS)

    def run(self):
        event_logger.debug("Playing tone %s Hz, %s ms", self.request.frequency, self.request.length)
        audio = self.build()
        error = None
        for i in range(self.request.repeats):
            if i > 0:
                time.sleep(self.request.delay / 1000)
            try:
                self.play(audio)
            except AudioDeviceError as e:
                # Fall back to the terminal bell for this repeat
                sys.stdout.write("\a")
                sys.stdout.flush()
                error = e

        if error is not None:
            raise error

        return utils.format_tone(
            self.request.frequency,
            self.request.length,
            self.request.repeats,
            self.request.delay
        )
