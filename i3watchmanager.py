import sys
import signal
import logging
import argparse

import i3ipc

from i3watch import Watcher, WatchError, Interrupted, get_version, load_config, __version__

logger = logging.getLogger("i3watch")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="i3watch",
        description="Run commands and scripts on i3 window manager events.",
    )
    parser.add_argument("-c", "--config", help="Config file to use instead of the search path")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the config and list its handlers without connecting to i3",
    )
    parser.add_argument("--version", action="version", version=f"i3watch {__version__}")
    return parser.parse_args(argv)


def config_logger(debug=False, quiet=False):
    level = logging.DEBUG if debug else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(format="%(message)s")
    logger.setLevel(level)


def raise_interrupt(signum, frame):
    raise Interrupted(signal.Signals(signum).name)


def setup_signals():
    """Install interrupt handlers, returning the previous ones."""
    previous = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, raise_interrupt)
    return previous


def restore_signals(previous):
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def main(argv=None):
    args = parse_args(argv)
    config_logger(args.debug, args.quiet)

    try:
        if args.check:
            config = load_config(args.config)
            Watcher(config).log_handlers()
            return 0

        version = get_version(connect=i3ipc.Connection)
        print(f"i3: {version.human_readable}")

        config = load_config(args.config)
        logger.debug(f"Using {config}")

        watcher = Watcher(config, connect=i3ipc.Connection)
        previous = setup_signals()
        try:
            return watcher.run()
        finally:
            restore_signals(previous)
    except KeyboardInterrupt:
        logger.info("exit: SIGINT")
        return 0
    except Interrupted as e:
        logger.info(f"exit: {e.signame}")
        return 0
    except WatchError as e:
        logger.error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
