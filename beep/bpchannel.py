import pydub.playback

from beep.errors import AudioDeviceError


class BeepChannel:
    """Base class for dispatch channels. A channel is built from the parameters
    the dispatch plan computed for it and performs its side effect in run().
    """

    name = None

    def __init__(self, request):
        self.request = request

    def run(self):
        """Perform the channel's action. To be implemented in subclass.
        Implementations raise a ChannelError subclass on failure and return a
        short success message for verbose output.
        """
        raise NotImplementedError

    def play(self, audio):
        """Play audio content through the default output device.
        Args:
            audio (pydub.AudioSegment): content to be played
        """
        # pydub picks simpleaudio, pyaudio or ffplay, each failing differently
        try:
            pydub.playback.play(audio)
        except Exception as e:
            raise AudioDeviceError("Couldn't play audio: {}".format(e)) from e
