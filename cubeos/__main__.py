import argparse
import sys

from .logging_config import setup_logging


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="cubeos", description="Draggable twisty-puzzle home screen")
    parser.add_argument("--assets", help="directory holding the face images (<name><n>.png)")
    parser.add_argument("--debug", action="store_true", help="log every drag and settle")
    parser.add_argument("--log-file", help="also append the log to this file")
    args = parser.parse_args(argv)

    setup_logging(args.debug, args.log_file)

    # Imported late so --help works without a display
    from .app import App

    try:
        App(args.assets).run()
    except KeyboardInterrupt:
        print("\nProgram interrupted by user.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
