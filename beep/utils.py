import json
import os.path
from collections import namedtuple


BASE = os.path.dirname(__file__)

# body is the parsed JSON value when is_json is True, otherwise the raw text
Payload = namedtuple("Payload", ["body", "is_json"])


def parse_payload(data):
    """Decide whether a -D message is JSON or plain text.
    Args:
        data (str): the message as given on the command line
    Return:
        Payload whose body is the decoded JSON value if data is valid JSON,
        otherwise the unmodified string.
    """
    try:
        return Payload(json.loads(data), True)
    except ValueError:
        return Payload(data, False)


def format_tone(frequency, length, repeats, delay):
    """Human readable description of tone parameters for verbose output."""
    s = "Beep {} Hz for {} ms".format(frequency, length)
    if repeats > 1:
        s += ", {} times with {} ms delay".format(repeats, delay)
    return s
