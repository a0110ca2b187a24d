#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Entrypoint for beep: play a tone and send the configured notifications.

import argparse
import os
import sys
import logging
import logging.config

from beep import bpconfig, dispatch, options, utils
from beep.errors import ArgParseError, ConfigError


error_logger = logging.getLogger("errorLogger")
event_logger = logging.getLogger("eventLogger")


class BeepArgumentParser(argparse.ArgumentParser):
    """ArgumentParser raising ArgParseError instead of exiting, so that main
    decides on the exit status.
    """

    def error(self, message):
        raise ArgParseError(message, self.format_usage())


def positive_int(value):
    n = _int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer, got {}".format(value))
    return n


def non_negative_int(value):
    n = _int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("can't be negative, got {}".format(value))
    return n


def priority(value):
    n = _int(value)
    if not -2 <= n <= 2:
        raise argparse.ArgumentTypeError("must be between -2 and 2, got {}".format(value))
    return n


def _int(value):
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid integer value: {!r}".format(value))


def build_parser():
    # Tone flags default to None so options.resolve_options can tell whether they were given
    parser = BeepArgumentParser(prog="beep", description="Modern beep alternative with notifications")
    parser.add_argument("-f", "--frequency", type=positive_int, metavar="HZ",
                        help="frequency in Hz (default {})".format(options.DEFAULT_FREQUENCY))
    parser.add_argument("-l", "--length", type=positive_int, metavar="MS",
                        help="length in milliseconds (default {})".format(options.DEFAULT_LENGTH))
    parser.add_argument("-r", "--repeats", type=positive_int, metavar="N",
                        help="number of repetitions (default {})".format(options.DEFAULT_REPEATS))
    parser.add_argument("-d", "--delay", type=non_negative_int, metavar="MS",
                        help="delay between repetitions in ms (default {})".format(options.DEFAULT_DELAY))
    parser.add_argument("-D", "--data",
                        help="message to send, JSON or plain text")
    parser.add_argument("-t", "--title",
                        help="notification title")
    parser.add_argument("-p", "--priority", type=priority,
                        help="Pushover priority: -2, -1, 0, 1 or 2")
    parser.add_argument("--no-sound", action="store_true",
                        help="don't play the tone locally")
    parser.add_argument("-c", "--config", metavar="PATH",
                        help="path to configuration file (default {})".format(bpconfig.get_default_config_path()))
    parser.add_argument("--sample-config", action="store_true",
                        help="print a sample configuration file and exit")
    parser.add_argument("-v", "--verbose", action=argparse.BooleanOptionalAction, default=None,
                        help="verbose output, --no-verbose overrides verbose: true in the config")
    return parser


def setup_logging(verbose=False):
    logging.config.fileConfig(os.path.join(utils.BASE, "logging.conf"), disable_existing_loggers=False)
    if verbose:
        event_logger.setLevel(logging.DEBUG)
        for handler in event_logger.handlers:
            handler.setLevel(logging.DEBUG)


def report(plan, results):
    """Print one line per attempted channel plus the tone parameters."""
    if plan.run_tone:
        tone = plan.tone
        print("🔊 " + utils.format_tone(tone.frequency, tone.length, tone.repeats, tone.delay))

    for result in results:
        if result.ok:
            print("✓ {}".format(result.message))
        else:
            print("✗ {} failed: {}".format(result.name, result.message))

    if not results:
        print("Nothing to do")


def run(argv=None):
    """Parse arguments, load the configuration and dispatch. Returns the exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgParseError as e:
        sys.stderr.write(e.usage)
        sys.stderr.write("{}: error: {}\n".format(parser.prog, e))
        return 2

    if args.sample_config:
        print(bpconfig.SAMPLE_CONFIG)
        return 0

    setup_logging(args.verbose)

    try:
        config = bpconfig.load_config(args.config)
    except ConfigError as e:
        error_logger.error(str(e))
        return 1

    opts = options.resolve_options(args, config)
    if opts.verbose and not args.verbose:
        setup_logging(verbose=True)

    plan = dispatch.plan_dispatch(opts, config)
    event_logger.debug("Planned channels: %s", ", ".join(plan.planned()) or "none")

    results = dispatch.Dispatcher(plan).run()
    if opts.verbose:
        report(plan, results)

    return dispatch.exit_status(plan, results)


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
