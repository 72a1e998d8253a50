"""Configuration management for Sprig VCS.

Settings are looked up in layers, first hit wins:

1. ``SPRIG_<SECTION>_<KEY>`` environment variables
2. the repository file ``.sprig/config``
3. the user file ``~/.sprigconfig``

Both files are INI documents read with :mod:`configparser`.
"""

import configparser
import getpass
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .hash import DEFAULT_ALGORITHM, DEFAULT_COMMIT_ID_LENGTH

ENV_PREFIX = 'SPRIG'


def _read_ini(path: Optional[Path]) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path is not None and Path(path).exists():
        parser.read(path)
    return parser


class Config:
    """
    Layered view over the repository and user configuration files.

    Files are parsed lazily and cached for the lifetime of the instance;
    :meth:`set` writes through to disk and updates the cache.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.sprigconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: The repository's config file, or None outside a repository
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self._parsers: Dict[str, configparser.ConfigParser] = {}

    def _parser(self, scope: str) -> Optional[configparser.ConfigParser]:
        path = self._path_for(scope)
        if path is None:
            return None
        if scope not in self._parsers:
            self._parsers[scope] = _read_ini(path)
        return self._parsers[scope]

    def _path_for(self, scope: str) -> Optional[Path]:
        return self.GLOBAL_CONFIG_PATH if scope == 'global' else self.repo_config_path

    def _layers(self) -> List[configparser.ConfigParser]:
        """File layers, highest precedence first."""
        return [p for p in (self._parser('repo'), self._parser('global')) if p is not None]

    @staticmethod
    def env_name(section: str, key: str) -> str:
        """Environment variable that overrides section.key."""
        return f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look a value up through every layer.

        Args:
            section: Config section (e.g. 'user', 'core')
            key: Option name (e.g. 'name', 'commitidlength')
            fallback: Returned when no layer defines the option

        Returns:
            The first value found, or fallback
        """
        value = os.environ.get(self.env_name(section, key))
        if value is not None:
            return value

        for layer in self._layers():
            if layer.has_option(section, key):
                return layer.get(section, key)
        return fallback

    def get_int(self, section: str, key: str, fallback: int) -> int:
        """
        Integer variant of :meth:`get`.

        Raises:
            ValueError: If the stored value is not an integer
        """
        raw = self.get(section, key)
        if raw is None:
            return fallback
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{section}.{key} must be an integer, got {raw!r}")

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Write a value to the repository file, or to the user file.

        Raises:
            ValueError: If writing repository config outside a repository
        """
        scope = 'global' if global_config else 'repo'
        path = self._path_for(scope)
        if path is None:
            raise ValueError("No repository config path available")

        parser = self._parser(scope)
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as fh:
            parser.write(fh)

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """Every file-defined value as {section: {key: value}}; repository wins."""
        merged: Dict[str, Dict[str, str]] = {}
        for layer in reversed(self._layers()):
            for section in layer.sections():
                merged.setdefault(section, {}).update(layer.items(section))
        return merged

    @property
    def commit_id_length(self) -> int:
        """Width commit ids are truncated to (core.commitidlength)."""
        return self.get_int('core', 'commitidlength', DEFAULT_COMMIT_ID_LENGTH)

    @property
    def hash_algorithm(self) -> str:
        """hashlib algorithm used for content and commits (core.hashalgorithm)."""
        return self.get('core', 'hashalgorithm', DEFAULT_ALGORITHM)

    def get_author(self) -> str:
        """Author string, "Name <email>" or just the name when no email is set."""
        name = self.get('user', 'name') or getpass.getuser()
        email = self.get('user', 'email')
        if email:
            return f"{name} <{email}>"
        return name


def split_key(dotted: str) -> Tuple[str, str]:
    """
    Split 'section.key' into its parts.

    Raises:
        ValueError: If the key has no section
    """
    section, sep, key = dotted.partition('.')
    if not sep or not section or not key:
        raise ValueError(f"Key must be in 'section.key' form: {dotted}")
    return section, key
