"""Manages the setup of logging for buildfuncs. Library code only ever
gets module loggers; this is for the application embedding it (or tests)
to call once."""

import logging
import sys

from buildfuncs import output


def setup_loggers(config, verbose=False, err_out=sys.stderr):
    """Setup the loggers for buildfuncs. This will include:

    - A log file, if one is configured.
    - A stream to err_out, if verbose or if nothing else would log.
    - The yapsy logger, which always reports to err_out.

    :param buildfuncs.config.FuncConfig config: The configuration.
    :param bool verbose: When verbose, setup the root logger to print to
        err_out as well.
    :param IO[str] err_out: Where to log errors meant for the terminal. This
        exists primarily for testing.
    :return: False if the configured log file couldn't be used.
    """

    root_logger = logging.getLogger()
    level = getattr(logging, config.log_level.upper())
    formatter = logging.Formatter(config.log_format, style='{')
    ok = True

    if config.log_file is not None:
        try:
            config.log_file.touch()
        except (PermissionError, FileNotFoundError) as err:
            output.fprint("Could not write to buildfuncs log at '{}': {}"
                          .format(config.log_file, err),
                          color=output.YELLOW,
                          file=err_out)
            ok = False
        else:
            file_handler = logging.FileHandler(
                filename=config.log_file.as_posix())
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)

    # The root logger should pass all messages, even if the handlers
    # filter them.
    root_logger.setLevel(logging.DEBUG)

    # We need to know immediately when yapsy encounters errors.
    yapsy_logger = logging.getLogger('yapsy')
    yapsy_handler = logging.StreamHandler(stream=err_out)
    yapsy_handler.setFormatter(
        logging.Formatter("\x1b[31m{asctime} {message}\x1b[0m", style='{'))
    yapsy_logger.setLevel(logging.INFO)
    yapsy_logger.addHandler(yapsy_handler)

    # Add a stream to err_out if we're in verbose mode, or if no other
    # handler is defined.
    if verbose or not root_logger.handlers:
        verbose_handler = logging.StreamHandler(err_out)
        verbose_handler.setLevel(logging.DEBUG if verbose else level)
        verbose_handler.setFormatter(formatter)
        root_logger.addHandler(verbose_handler)

    return ok
