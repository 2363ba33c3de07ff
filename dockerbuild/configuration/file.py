from __future__ import annotations

import os
import typing
from dataclasses import dataclass
from pathlib import Path

import yaml

from dockerbuild.exceptions import user as _user_exceptions
from dockerbuild.loggers import logger

WORKSPACE_CONFIG_ENV_VAR = "DOCKERBUILD_WORKSPACE_CONFIG"
WORKSPACE_CONFIG_FILE_NAME = "dockerbuild.yaml"


def bool_transformer(config_val: typing.Any):
    if type(config_val) is str:
        return True if config_val and not config_val.lower() in ["false", "0", "off", "no"] else False
    else:
        return config_val


@dataclass
class ConfigEntry(object):
    """
    Creates a record for the config entry.

    Args:
        section: section of ``settings`` the option should be found under
        option: the option str to lookup
        type_: Expected type of the value
    """

    section: str
    option: str
    type_: typing.Type = str
    default_val: typing.Any = None

    _default_transforms = {
        bool: bool_transformer,
        int: int,
    }

    @property
    def env_var(self) -> str:
        return f"DOCKERBUILD_{self.section.upper()}_{self.option.upper()}"

    def _transform(self, v: typing.Any) -> typing.Any:
        transform = self._default_transforms.get(self.type_)
        return transform(v) if transform else v

    def read_from_env(self) -> typing.Optional[typing.Any]:
        """
        Reads the config entry from environment variable, the structure of the env var is
        ``DOCKERBUILD_{SECTION}_{OPTION}`` all upper cased.
        """
        v = os.environ.get(self.env_var, None)
        if v is None:
            return None
        return self._transform(v)

    def read_from_file(self, cfg: typing.Optional[ConfigFile]) -> typing.Optional[typing.Any]:
        if not cfg:
            return None
        v = cfg.get(self)
        if v is None:
            return None
        return self._transform(v)

    def read(self, cfg: typing.Optional[ConfigFile] = None) -> typing.Optional[typing.Any]:
        """
        Reads the config Entry from the various sources in the following order,
         First try to read from environment, if not then try to read from the given config file, then the default.
        """
        from_env = self.read_from_env()
        if from_env is not None:
            return from_env
        from_file = self.read_from_file(cfg)
        if from_file is not None:
            return from_file
        return self.default_val


class ConfigFile(object):
    def __init__(self, location: typing.Union[str, os.PathLike]):
        """
        Load the workspace config from this location
        """
        self._location = Path(location)
        self._raw = self._read_yaml_config(self._location)

    @staticmethod
    def _read_yaml_config(location: Path) -> typing.Dict[str, typing.Any]:
        try:
            with open(location) as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise _user_exceptions.DockerBuildConfigException(location, "The file could not be read.") from e
        except yaml.YAMLError as e:
            raise _user_exceptions.DockerBuildConfigException(location, "The file is not valid YAML.") from e
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise _user_exceptions.DockerBuildConfigException(location, "The top level must be a mapping.")
        return raw

    def get(self, c: ConfigEntry) -> typing.Any:
        settings = self._raw.get("settings") or {}
        if not isinstance(settings, dict):
            return None
        section = settings.get(c.section) or {}
        if not isinstance(section, dict):
            return None
        return section.get(c.option)

    @property
    def location(self) -> Path:
        return self._location

    @property
    def root(self) -> Path:
        """Directory holding the config file. Spawned processes run here."""
        return self._location.absolute().parent

    @property
    def raw(self) -> typing.Dict[str, typing.Any]:
        return self._raw


def get_config_file(c: typing.Union[str, os.PathLike, ConfigFile, None]) -> typing.Optional[ConfigFile]:
    """
    Checks if the given argument is a file or a configFile and returns a loaded configFile else returns None
    """
    if c is None:
        env_location = os.environ.get(WORKSPACE_CONFIG_ENV_VAR)
        if env_location:
            logger.debug(f"Using configuration from ${WORKSPACE_CONFIG_ENV_VAR} {env_location}")
            return ConfigFile(env_location)

        # See if there's a config file in the current directory where Python is being run from
        current_location_config = Path(WORKSPACE_CONFIG_FILE_NAME)
        if current_location_config.exists():
            logger.debug(f"Using configuration from Python process root {current_location_config.absolute()}")
            return ConfigFile(current_location_config.absolute())

        # If not, then return None and let caller handle
        return None
    if isinstance(c, ConfigFile):
        return c
    return ConfigFile(c)
