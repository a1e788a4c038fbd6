"""This module defines the configuration for buildfuncs.

The configuration is a small YAML file, ``buildfuncs.yaml``. It says where to
probe for framework provided files, which function namespaces to leave out,
and how to log. Every key is optional."""

import getpass
import os
import sys
from pathlib import Path
from typing import List, Union

import yaml

from buildfuncs import output
from buildfuncs.errors import ConfigError

CONFIG_NAME = 'buildfuncs.yaml'

# Figure out what directories we'll search for the configuration.
CONFIG_SEARCH_DIRS = [Path('./').resolve()]

try:
    USER_HOME_DIR = (Path('~')/'.buildfuncs').expanduser()
except (OSError, RuntimeError):
    USER_HOME_DIR = Path('/tmp')/getpass.getuser()/'.buildfuncs'

CONFIG_SEARCH_DIRS.append(USER_HOME_DIR)

LOG_FORMAT = "{asctime} {levelname} {name}: {message}"

LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


class FuncConfig:
    """Define types and attributes for buildfuncs config options. Keys can
    be accessed as attributes or items."""

    def __init__(self):
        """Predefine all the config keys and their defaults."""

        self.probing_paths: List[Path] = []
        self.disable_namespaces: List[str] = []
        self.log_level: str = 'info'
        self.log_format: str = LOG_FORMAT
        self.log_file: Union[Path, None] = None
        # Where the configuration was loaded from, if anywhere.
        self.config_file: Union[Path, None] = None

    def __getitem__(self, key):
        if key not in self.__dict__:
            raise KeyError("FuncConfig does not contain key {}.".format(key))

        return self.__dict__[key]

    def __contains__(self, key):
        return key in self.__dict__

    def keys(self):
        """Produce an iterable of the keys."""

        return self.__dict__.keys()

    def as_dict(self) -> dict:
        """Return keys and values as a standard dictionary."""

        return dict(self.__dict__)

    def __eq__(self, other):
        if not isinstance(other, FuncConfig):
            return False

        return self.as_dict() == other.as_dict()


def _str_list(key, value) -> List[str]:
    """Check that the value is a list of strings. A single string is
    treated as a list of one."""

    if isinstance(value, str):
        value = [value]

    if not isinstance(value, list) or not all(isinstance(item, str)
                                              for item in value):
        raise ConfigError(
            "Config key '{}' must be a list of strings, got {!r}."
            .format(key, value))

    return value


def _str(key, value) -> str:
    if not isinstance(value, str):
        raise ConfigError("Config key '{}' must be a string, got {!r}."
                          .format(key, value))
    return value


def load_config(stream, base_dir: Path = None) -> FuncConfig:
    """Load a configuration from the given YAML text stream.

    :param stream: An open file (or string) of YAML.
    :param base_dir: Relative paths in the config are relative to this.
        Defaults to the current directory.
    :raises ConfigError: On bad YAML, unknown keys, or bad values.
    """

    if base_dir is None:
        base_dir = Path('./').resolve()

    try:
        raw = yaml.safe_load(stream)
    except yaml.YAMLError as err:
        raise ConfigError("Could not parse buildfuncs config.",
                          prior_error=err)

    config = FuncConfig()

    if raw is None:
        return config

    if not isinstance(raw, dict):
        raise ConfigError(
            "The buildfuncs config must be a mapping of keys to values, "
            "got {}.".format(type(raw).__name__))

    for key, value in raw.items():
        if value is None:
            continue

        if key == 'probing_paths':
            config.probing_paths = [
                base_dir/path for path in _str_list(key, value)]
        elif key == 'disable_namespaces':
            config.disable_namespaces = _str_list(key, value)
        elif key == 'log_level':
            level = _str(key, value).lower()
            if level not in LOG_LEVELS:
                raise ConfigError(
                    "Invalid log_level '{}'. Must be one of {}."
                    .format(value, LOG_LEVELS))
            config.log_level = level
        elif key == 'log_format':
            config.log_format = _str(key, value)
        elif key == 'log_file':
            config.log_file = base_dir/_str(key, value)
        else:
            raise ConfigError(
                "Unknown buildfuncs config key '{}'. Valid keys are: {}"
                .format(key, ', '.join(
                    k for k in FuncConfig().keys() if k != 'config_file')))

    return config


def config_search_dirs() -> List[Path]:
    """The directories to look for a config file in, in order. This
    includes the directory in the BUILDFUNCS_CONFIG_DIR environment
    variable, if it's valid."""

    search_dirs = list(CONFIG_SEARCH_DIRS)

    env_dir = os.environ.get('BUILDFUNCS_CONFIG_DIR')
    if env_dir is not None:
        env_dir = Path(env_dir)
        if env_dir.is_dir():
            search_dirs.append(env_dir.resolve())
        else:
            output.fprint(
                "Invalid path in env var BUILDFUNCS_CONFIG_DIR: '{}'. "
                "Ignoring.".format(env_dir),
                color=output.YELLOW, file=sys.stderr)

    return search_dirs


def find_config(target: Path = None) -> FuncConfig:
    """Find and load the buildfuncs configuration. Uses the given target
    file, or the file in the BUILDFUNCS_CONFIG_FILE environment variable,
    if either is given. Otherwise the first 'buildfuncs.yaml' found in the
    search directories is used. When there isn't one, the default
    configuration is returned.

    :raises ConfigError: When a config file is found but can't be loaded.
    """

    if target is None and os.environ.get('BUILDFUNCS_CONFIG_FILE'):
        target = Path(os.environ['BUILDFUNCS_CONFIG_FILE'])

    if target is not None:
        if not target.is_file():
            raise ConfigError(
                "Config file '{}' does not exist.".format(target))
        paths = [target]
    else:
        paths = [config_dir/CONFIG_NAME for config_dir in config_search_dirs()]

    for path in paths:
        if not path.is_file():
            continue

        path = path.resolve()
        try:
            with path.open() as config_file:
                config = load_config(config_file, base_dir=path.parent)
        except OSError as err:
            raise ConfigError("Could not read config file '{}'."
                              .format(path), prior_error=err)
        except ConfigError as err:
            raise ConfigError("Error in buildfuncs config at '{}'."
                              .format(path), prior_error=err)

        config.config_file = path
        return config

    return FuncConfig()
