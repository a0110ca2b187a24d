# Merge command line flags with the configuration file into one set of options.

from dataclasses import dataclass
from typing import Optional


DEFAULT_FREQUENCY = 1000
DEFAULT_LENGTH = 200
DEFAULT_REPEATS = 1
DEFAULT_DELAY = 100
DEFAULT_VERBOSE = False


@dataclass(frozen=True)
class EffectiveOptions:
    frequency: int = DEFAULT_FREQUENCY
    length: int = DEFAULT_LENGTH
    repeats: int = DEFAULT_REPEATS
    delay: int = DEFAULT_DELAY
    data: Optional[str] = None
    title: Optional[str] = None
    priority: Optional[int] = None
    play_sound_locally: bool = True
    config_path: Optional[str] = None
    verbose: bool = DEFAULT_VERBOSE

    def __post_init__(self):
        if self.frequency <= 0:
            raise ValueError("frequency must be positive, got {}".format(self.frequency))
        if self.length <= 0:
            raise ValueError("length must be positive, got {}".format(self.length))
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1, got {}".format(self.repeats))
        if self.delay < 0:
            raise ValueError("delay can't be negative, got {}".format(self.delay))
        if self.priority is not None and not -2 <= self.priority <= 2:
            raise ValueError("priority must be between -2 and 2, got {}".format(self.priority))


def first_set(*values):
    """Return the first value that is not None. Used as an override chain
    with the most specific source first: CLI flag, config file, default.
    """
    for value in values:
        if value is not None:
            return value
    return None


def resolve_options(args, config):
    """Build EffectiveOptions from parsed command line arguments and a BeepConfig.
    Args:
        args (argparse.Namespace): parsed arguments. Flags the user did not pass are None.
        config (BeepConfig): the loaded configuration, empty when no file was read.
    """
    return EffectiveOptions(
        frequency=first_set(args.frequency, DEFAULT_FREQUENCY),
        length=first_set(args.length, DEFAULT_LENGTH),
        repeats=first_set(args.repeats, DEFAULT_REPEATS),
        delay=first_set(args.delay, DEFAULT_DELAY),
        data=args.data,
        title=args.title,
        priority=args.priority,
        play_sound_locally=not args.no_sound,
        config_path=args.config,
        verbose=first_set(args.verbose, config.verbose, DEFAULT_VERBOSE)
    )
