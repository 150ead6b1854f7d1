"""
Input source and output sink handling for the sound-mush command line tool.

A named file always takes priority. When no file is named, the matching
standard stream is used, but only if it is not attached to a terminal.
"""

import os
import sys
import logging

from soundmush import SoundMushError

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"
STDOUT_NAME = "<stdout>"


class IoOpenError(SoundMushError):
    """
    Raised when an input or output file cannot be opened or created, or when
    no usable input source / output sink was given
    """
    pass

class IoReadError(SoundMushError):
    """
    Raised when reading the input fails before all bytes have been read
    """
    pass

class IoWriteError(SoundMushError):
    """
    Raised when writing the output fails
    """
    pass


def _is_interactive(stream):
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        # Closed or detached streams cannot be read from either
        return True

def _binary(stream):
    # Text-mode standard streams wrap a binary buffer
    return getattr(stream, "buffer", stream)


def read_input(path=None, stdin=None):
    """
    Read the entire input, either from the named file or from standard input.

    :param str path: Input filename, or None to use standard input
    :param stdin: Stream to use in place of sys.stdin
    :return: all input bytes
    :rtype: bytes
    :raises IoOpenError: if the file cannot be opened, or if no file was given\
        and standard input is a terminal
    :raises IoReadError: if reading fails partway
    """
    if path is not None:
        try:
            fh = open(path, "rb")
        except OSError as e:
            raise IoOpenError("could not open %s: %s" % (path, e.strerror or e)) from e

        with fh:
            data = _read_all(fh, path)

        logger.debug("read %d bytes from %s", len(data), path)
        return data

    if stdin is None:
        stdin = sys.stdin

    if stdin is None or _is_interactive(stdin):
        raise IoOpenError("no input file given (use -i/--input, or pipe data "
                          "to standard input)")

    data = _read_all(_binary(stdin), STDIN_NAME)
    logger.debug("read %d bytes from %s", len(data), STDIN_NAME)
    return data

def _read_all(fh, name):
    try:
        data = fh.read()
    except OSError as e:
        raise IoReadError("could not read %s: %s" % (name, e.strerror or e)) from e

    if isinstance(data, str):
        raise IoReadError("could not read %s: stream is not in binary mode" % name)

    return data

def resolve_output(path=None, stdout=None):
    """
    Decide where the output will be written, without opening anything.

    :param str path: Output filename, or None to use standard output
    :param stdout: Stream to use in place of sys.stdout
    :return: the output filename, or None for standard output
    :raises IoOpenError: if no file was given and standard output is a terminal
    """
    if path is not None:
        return path

    if stdout is None:
        stdout = sys.stdout

    if stdout is None or _is_interactive(stdout):
        raise IoOpenError("no output file given (use -o/--output, or redirect "
                          "standard output)")

    return None

def write_output(data, path=None, stdout=None):
    """
    Write the complete output, either to the named file or to standard output.
    If writing to a named file fails, the partially written file is removed.

    :param bytes data: Bytes to write
    :param str path: Output filename, or None to use standard output
    :param stdout: Stream to use in place of sys.stdout
    :raises IoOpenError: if the file cannot be created, or if no file was given\
        and standard output is a terminal
    :raises IoWriteError: if writing fails
    """
    path = resolve_output(path, stdout)

    if path is None:
        if stdout is None:
            stdout = sys.stdout

        sink = _binary(stdout)
        try:
            sink.write(data)
            sink.flush()
        except OSError as e:
            if stdout is sys.stdout:
                _discard_stdout(stdout)
            raise IoWriteError("could not write %s: %s" % (STDOUT_NAME, e.strerror or e)) from e

        logger.debug("wrote %d bytes to %s", len(data), STDOUT_NAME)
        return

    try:
        fh = open(path, "wb")
    except OSError as e:
        raise IoOpenError("could not create %s: %s" % (path, e.strerror or e)) from e

    try:
        with fh:
            fh.write(data)
    except OSError as e:
        _remove_partial(path)
        raise IoWriteError("could not write %s: %s" % (path, e.strerror or e)) from e

    logger.debug("wrote %d bytes to %s", len(data), path)

def _discard_stdout(stream):
    # Unflushed data would be written again at interpreter exit and fail
    # the same way, so point the descriptor at devnull
    try:
        fd = stream.fileno()
    except (OSError, ValueError, AttributeError):
        return

    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)

def _remove_partial(path):
    try:
        os.remove(path)
    except OSError as e:
        logger.debug("could not remove partial output %s: %s", path, e)
