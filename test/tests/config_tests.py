"""Test loading the buildfuncs configuration."""

import io
import os
from pathlib import Path
from unittest import mock

import yaml

from buildfuncs import config
from buildfuncs import function_sets
from buildfuncs import registry
from buildfuncs.context import ProjectContext
from buildfuncs.errors import ConfigError
from buildfuncs.unittest import FuncTestCase


class ConfigTests(FuncTestCase):
    """Check config parsing and discovery."""

    CONFIG_DIR = FuncTestCase.TEST_DATA_ROOT/'configs'

    def test_defaults(self):
        """Empty configs are all defaults."""

        for text in ('', '---\n', 'probing_paths:\n'):
            cfg = config.load_config(io.StringIO(text))
            self.assertEqual(cfg, config.FuncConfig())

        cfg = config.FuncConfig()
        self.assertEqual(cfg.probing_paths, [])
        self.assertEqual(cfg['log_level'], 'info')
        self.assertIn('log_format', cfg)
        self.assertIsNone(cfg.log_file)

    def test_load(self):
        """Values are checked and relative paths resolved."""

        cfg = config.find_config(self.CONFIG_DIR/'buildfuncs.yaml')
        base = self.CONFIG_DIR.resolve()

        self.assertEqual(cfg.probing_paths,
                         [base/'lib'/'net-4.0',
                          Path('/opt/frameworks/shared')])
        self.assertEqual(cfg.disable_namespaces, ['platform'])
        self.assertEqual(cfg.log_level, 'debug')
        self.assertEqual(cfg.log_file, base/'buildfuncs.log')
        self.assertEqual(cfg.config_file, base/'buildfuncs.yaml')

    def test_bad_configs(self):
        """Bad configs raise ConfigErrors that say what's wrong."""

        bad = [
            'probing_paths: 5',
            'probing_paths: [a, [b]]',
            'log_level: loud',
            'log_format: [a]',
            'unknown_key: 1',
            '- a list',
        ]

        for text in bad:
            with self.assertRaises(ConfigError, msg=text):
                config.load_config(io.StringIO(text))

        with self.assertRaises(ConfigError) as ctx:
            config.load_config(io.StringIO('probing_paths: [a\n'))
        self.assertIsInstance(ctx.exception.prior_error, yaml.YAMLError)

        with self.assertRaises(ConfigError) as ctx:
            config.find_config(self.CONFIG_DIR/'bad_key.yaml')
        self.assertIn('probe_paths', ctx.exception.pformat())

        with self.assertRaises(ConfigError):
            config.find_config(self.CONFIG_DIR/'missing.yaml')

    def test_single_string_list(self):
        """A single string is a list of one."""

        cfg = config.load_config(io.StringIO('disable_namespaces: nant'))
        self.assertEqual(cfg.disable_namespaces, ['nant'])

    def test_env_config(self):
        """The config file and directory can come from the environment."""

        cfg_path = self.CONFIG_DIR/'buildfuncs.yaml'

        with mock.patch.dict(os.environ,
                             {'BUILDFUNCS_CONFIG_FILE': str(cfg_path)}):
            cfg = config.find_config()
        self.assertEqual(cfg.config_file, cfg_path.resolve())

        with mock.patch.dict(os.environ,
                             {'BUILDFUNCS_CONFIG_DIR': str(self.CONFIG_DIR)}):
            self.assertEqual(config.config_search_dirs()[-1],
                             self.CONFIG_DIR.resolve())

        err_out = io.StringIO()
        with mock.patch.dict(os.environ, {'BUILDFUNCS_CONFIG_DIR':
                                          str(self.tmp_dir/'nope')}), \
                mock.patch('sys.stderr', err_out):
            dirs = config.config_search_dirs()

        self.assertNotIn(self.tmp_dir/'nope', dirs)
        self.assertIn('BUILDFUNCS_CONFIG_DIR', err_out.getvalue())

    def test_config_use(self):
        """The config feeds the project context and core registration."""

        cfg = config.find_config(self.CONFIG_DIR/'buildfuncs.yaml')

        project = ProjectContext.from_config(cfg, self.tmp_dir, name='Acme')
        self.assertEqual(project.probing_paths, cfg.probing_paths)
        self.assertEqual(project.name, 'Acme')

        reg = registry.FunctionRegistry()
        function_sets.register_core_sets(reg,
                                         disabled=cfg.disable_namespaces)
        self.assertNotIn('platform', reg)
        self.assertIn('nant', reg)
