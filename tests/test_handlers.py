import pytest
import requests
from unittest.mock import patch, Mock

from pydub.exceptions import CouldntDecodeError

from beep import dispatch
from beep.bpconfig import PushoverConfig, WebhookConfig
from beep.errors import (
    AudioDeviceError,
    HttpStatusError,
    NetworkError,
    SoundDecodeError,
    SoundFileNotFoundError
)
from beep.handlers import pushover, sound, tone, webhook


def ok_response():
    response = Mock()
    response.ok = True
    response.status_code = 200
    return response


def failed_response(status_code=500):
    response = Mock()
    response.ok = False
    response.status_code = status_code
    response.text = "Something went wrong"
    return response


# Tone

@patch("pydub.playback.play")
def test_tone_played_with_requested_parameters(mock_play):
    """Is the tone played once per repeat with the requested length?"""
    channel = tone.ToneChannel(dispatch.ToneRequest(frequency=440, length=150, repeats=3, delay=0))

    message = channel.run()

    assert mock_play.call_count == 3
    audio = mock_play.call_args[0][0]
    assert len(audio) == 150
    assert message == "Beep 440 Hz for 150 ms, 3 times with 0 ms delay"

@patch("time.sleep")
@patch("pydub.playback.play")
def test_tone_delay_only_between_repeats(mock_play, mock_sleep):
    channel = tone.ToneChannel(dispatch.ToneRequest(frequency=1000, length=10, repeats=3, delay=250))
    channel.run()

    assert mock_sleep.call_count == 2
    mock_sleep.assert_called_with(0.25)

@patch("pydub.playback.play")
def test_tone_failure_rings_terminal_bell(mock_play, capsys):
    """Is the terminal bell written and AudioDeviceError raised when playback fails?"""
    mock_play.side_effect = OSError("no audio device")
    channel = tone.ToneChannel(dispatch.ToneRequest(frequency=1000, length=10, repeats=1, delay=0))

    with pytest.raises(AudioDeviceError):
        channel.run()

    assert capsys.readouterr().out == "\a"

@patch("time.sleep")
@patch("pydub.playback.play")
def test_tone_failure_rings_bell_for_every_repeat(mock_play, mock_sleep, capsys):
    """Does every repeat still ring the bell when the audio device keeps failing?"""
    mock_play.side_effect = OSError("no audio device")
    channel = tone.ToneChannel(dispatch.ToneRequest(frequency=1000, length=10, repeats=3, delay=100))

    with pytest.raises(AudioDeviceError):
        channel.run()

    assert capsys.readouterr().out == "\a\a\a"
    assert mock_play.call_count == 3
    assert mock_sleep.call_count == 2


# Pushover

PUSHOVER = PushoverConfig(api_token="token", user_key="user", device="phone")


@patch("requests.post")
def test_pushover_plain_text_sent_as_form(mock_post):
    mock_post.return_value = ok_response()
    request = dispatch.NotificationRequest(PUSHOVER, "build done", title="CI", priority=1)

    pushover.PushoverChannel(request).run()

    mock_post.assert_called_once_with(
        pushover.PUSHOVER_URL,
        data={
            "token": "token",
            "user": "user",
            "message": "build done",
            "title": "CI",
            "device": "phone",
            "priority": 1
        },
        timeout=pushover.REQUEST_TIMEOUT
    )

@patch("requests.post")
def test_pushover_json_message_not_reencoded(mock_post):
    """Is a JSON message form encoded like any other message, with its text unchanged?"""
    mock_post.return_value = ok_response()
    request = dispatch.NotificationRequest(PushoverConfig("token", "user"), '{"a":1}')

    pushover.PushoverChannel(request).run()

    kwargs = mock_post.call_args[1]
    assert kwargs["data"] == {"token": "token", "user": "user", "message": '{"a":1}'}
    assert "json" not in kwargs

@patch("requests.post")
def test_pushover_failures(mock_post):
    request = dispatch.NotificationRequest(PUSHOVER, "hello")

    mock_post.side_effect = requests.exceptions.ConnectionError("Network error")
    with pytest.raises(NetworkError):
        pushover.PushoverChannel(request).run()

    mock_post.side_effect = None
    mock_post.return_value = failed_response(400)
    with pytest.raises(HttpStatusError) as e:
        pushover.PushoverChannel(request).run()
    assert e.value.status_code == 400


# Webhook

WEBHOOK = WebhookConfig(url="https://hooks.example.com/beep", method="PATCH",
                        headers={"Authorization": "Bearer abc"})


@patch("requests.request")
def test_webhook_json_body(mock_request):
    """Is valid JSON data forwarded as a structured JSON body?"""
    mock_request.return_value = ok_response()

    message = webhook.WebhookChannel(dispatch.WebhookRequest(WEBHOOK, '{"a": [1, 2]}')).run()

    mock_request.assert_called_once_with(
        "PATCH",
        "https://hooks.example.com/beep",
        headers={"Authorization": "Bearer abc"},
        timeout=webhook.REQUEST_TIMEOUT,
        json={"a": [1, 2]}
    )
    assert message == "Webhook sent to https://hooks.example.com/beep"

@patch("requests.request")
def test_webhook_text_body(mock_request):
    mock_request.return_value = ok_response()
    config = WebhookConfig(url="https://hooks.example.com/beep")

    webhook.WebhookChannel(dispatch.WebhookRequest(config, "plain text")).run()

    args, kwargs = mock_request.call_args
    assert args == ("POST", "https://hooks.example.com/beep")
    assert kwargs["data"] == b"plain text"
    assert "json" not in kwargs

@patch("requests.request")
def test_webhook_connection_refused(mock_request):
    mock_request.side_effect = requests.exceptions.ConnectionError("Connection refused")
    with pytest.raises(NetworkError):
        webhook.WebhookChannel(dispatch.WebhookRequest(WEBHOOK, "hi")).run()

@patch("requests.request")
def test_webhook_error_status(mock_request):
    mock_request.return_value = failed_response(503)
    with pytest.raises(HttpStatusError) as e:
        webhook.WebhookChannel(dispatch.WebhookRequest(WEBHOOK, "hi")).run()
    assert e.value.status_code == 503


# Sound

@patch("pydub.playback.play")
@patch("pydub.AudioSegment.from_file")
@patch("requests.get")
def test_sound_url_played(mock_get, mock_from_file, mock_play):
    mock_get.return_value = ok_response()
    mock_get.return_value.content = b"mp3 bytes"

    message = sound.SoundChannel(dispatch.SoundRequest(url="https://example.com/a.mp3")).run()

    mock_get.assert_called_once_with("https://example.com/a.mp3", timeout=sound.REQUEST_TIMEOUT)
    assert mock_from_file.call_args[0][0].read() == b"mp3 bytes"
    assert mock_from_file.call_args[1] == {"format": "mp3"}
    mock_play.assert_called_once_with(mock_from_file.return_value)
    assert message == "Played sound from URL: https://example.com/a.mp3"

@patch("pydub.playback.play")
@patch("pydub.AudioSegment.from_file")
@patch("os.path.isfile")
def test_sound_file_played(mock_isfile, mock_from_file, mock_play):
    mock_isfile.return_value = True

    message = sound.SoundChannel(dispatch.SoundRequest(file="/tmp/ding.wav")).run()

    mock_from_file.assert_called_once_with("/tmp/ding.wav", format=None)
    mock_play.assert_called_once_with(mock_from_file.return_value)
    assert message == "Played sound file: /tmp/ding.wav"

def test_missing_sound_file():
    with pytest.raises(SoundFileNotFoundError):
        sound.SoundChannel(dispatch.SoundRequest(file="/no/such/file.wav")).run()

@patch("pydub.AudioSegment.from_file")
@patch("requests.get")
def test_undecodable_sound(mock_get, mock_from_file):
    mock_get.return_value = ok_response()
    mock_get.return_value.content = b"not audio"
    mock_from_file.side_effect = CouldntDecodeError("bad data")

    with pytest.raises(SoundDecodeError):
        sound.SoundChannel(dispatch.SoundRequest(url="https://example.com/a.mp3")).run()

@patch("os.path.isfile")
@patch("pydub.AudioSegment.from_file")
def test_missing_ffmpeg_is_a_decode_error(mock_from_file, mock_isfile):
    """Is a missing ffprobe/ffmpeg binary reported as a sound failure?"""
    mock_isfile.return_value = True
    mock_from_file.side_effect = FileNotFoundError(2, "No such file or directory", "ffprobe")

    with pytest.raises(SoundDecodeError):
        sound.SoundChannel(dispatch.SoundRequest(file="/tmp/ding.mp3")).run()

@patch("pydub.AudioSegment.from_file")
@patch("requests.get")
def test_missing_ffmpeg_for_downloaded_sound(mock_get, mock_from_file):
    mock_get.return_value = ok_response()
    mock_get.return_value.content = b"mp3 bytes"
    mock_from_file.side_effect = FileNotFoundError(2, "No such file or directory", "ffmpeg")

    with pytest.raises(SoundDecodeError):
        sound.SoundChannel(dispatch.SoundRequest(url="https://example.com/a.mp3")).run()

def test_format_from_url():
    assert sound.format_from_url("https://example.com/sounds/Ding.MP3?x=1") == "mp3"
    assert sound.format_from_url("https://example.com/sounds/ding") is None

@patch("requests.get")
def test_sound_download_failures(mock_get):
    request = dispatch.SoundRequest(url="https://example.com/a.mp3")

    mock_get.side_effect = requests.exceptions.Timeout("timed out")
    with pytest.raises(NetworkError):
        sound.SoundChannel(request).run()

    mock_get.side_effect = None
    mock_get.return_value = failed_response(404)
    with pytest.raises(HttpStatusError):
        sound.SoundChannel(request).run()
