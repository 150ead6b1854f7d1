import sys
import logging
import argparse

from soundmush import __version__, PROG_NAME, SoundMushError
from soundmush.wav import frame, DEFAULT_FORMAT
from soundmush.streams import read_input, resolve_output, write_output

logger = logging.getLogger(__name__)


def _build_parser():
    parser = argparse.ArgumentParser(prog=PROG_NAME,
                                     description="Wrap any file in a WAV header, "
                                     "treating its bytes as 8-bit mono audio samples")
    parser.add_argument('-i', '--input', default=None, dest='input_file',
                        help="What file to process (default: read from a pipe "
                        "on standard input)")
    parser.add_argument('-o', '--output', default=None, dest='output_file',
                        help="Where to write the result (default: write to a "
                        "pipe on standard output)")
    parser.add_argument('-v', '--verbose', action='store_true', dest='verbose',
                        help="Accepted for compatibility; has no effect")
    parser.add_argument('--version', action='version',
                        version="%s %s" % (PROG_NAME, __version__))
    return parser

def _setup_logging():
    logging.basicConfig(stream=sys.stderr,
                        level=logging.WARNING,
                        format="%(name)s: %(levelname)s: %(message)s")

def main(argv=None, stdin=None, stdout=None):
    args = _build_parser().parse_args(argv)
    _setup_logging()

    try:
        # Fail on a missing output before blocking on standard input
        output_file = resolve_output(args.output_file, stdout)
        payload = read_input(args.input_file, stdin)
        container = frame(payload, DEFAULT_FORMAT)
        logger.debug("framed %d bytes as %s", len(payload), DEFAULT_FORMAT)
        write_output(container, output_file, stdout)
    except SoundMushError as e:
        logger.debug("conversion failed", exc_info=True)
        sys.stderr.write("%s: error: %s\n" % (PROG_NAME, e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
