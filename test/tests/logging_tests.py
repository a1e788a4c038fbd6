"""Test logger setup and what gets logged."""

import io
import logging

from buildfuncs import config
from buildfuncs import log_setup
from buildfuncs.unittest import FuncTestCase


class LoggingTests(FuncTestCase):
    """Check logging setup."""

    def set_up(self):
        super().set_up()

        root = logging.getLogger()
        self._root_handlers = list(root.handlers)
        self._root_level = root.level
        self._yapsy_handlers = list(logging.getLogger('yapsy').handlers)

    def tear_down(self):
        for name, handlers in (('', self._root_handlers),
                               ('yapsy', self._yapsy_handlers)):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                if handler not in handlers:
                    logger.removeHandler(handler)
                    handler.close()
        logging.getLogger().setLevel(self._root_level)

        super().tear_down()

    def test_log_file(self):
        """Function failures end up in the configured log file."""

        cfg = config.FuncConfig()
        cfg.log_file = self.tmp_dir/'funcs.log'
        cfg.log_level = 'info'

        err_out = io.StringIO()
        self.assertTrue(log_setup.setup_loggers(cfg, err_out=err_out))

        self.call('target', 'get-current-target')

        for handler in logging.getLogger().handlers:
            handler.flush()

        with cfg.log_file.open() as log_file:
            log_text = log_file.read()

        self.assertIn('InvalidState', log_text)
        self.assertIn('No target is being executed.', log_text)
        self.assertIn('buildfuncs.dispatch', log_text)

    def test_bad_log_file(self):
        """An unusable log file is reported, not raised."""

        cfg = config.FuncConfig()
        cfg.log_file = self.tmp_dir/'no'/'such'/'dir'/'funcs.log'

        err_out = io.StringIO()
        self.assertFalse(log_setup.setup_loggers(cfg, verbose=True,
                                                 err_out=err_out))
        self.assertIn('Could not write to buildfuncs log', err_out.getvalue())

        logging.getLogger('buildfuncs.test').warning("Verbose message.")
        self.assertIn('Verbose message.', err_out.getvalue())
