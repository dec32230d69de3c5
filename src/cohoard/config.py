"""
Configuration loading and validation for the cohoard package.

The config is a people table: an ordered mapping from speaker key to ``User``.
It is read from YAML files (JSON documents are accepted too, being a YAML
subset) or from the JSON payload produced by the browser front-end.

Document shape::

    people:
      - key: EGGBUG
        name: egg bug!
        color: "#83254f"
        avatar: https://i.imgur.com/BBaogem.png
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import yaml

from cohoard.errors import ConfigError
from cohoard.logger import get_default_logger
from cohoard.models import User


logger = get_default_logger()


DEFAULT_CONFIG_PATH = Path("config.yaml")


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Args:
        file_path: Path to YAML file

    Returns:
        Dictionary with YAML contents (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ConfigError: If file is not valid YAML
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

    return config if config is not None else {}


class Config:
    """
    People table used to resolve speaker names to users.

    Iteration order is the order people were declared in.
    """

    def __init__(self, people: Optional[Iterable[User]] = None, source: str = "<users>"):
        self.people: Dict[str, User] = {}
        for index, user in enumerate(people or []):
            self.add_user(user, f"person entry {index} ({source})")

    def add_user(self, user: User, label: str = "user") -> bool:
        """
        Add a user under its ``key``.

        Users without a key are skipped with a warning; a duplicate key
        replaces the earlier user.

        Returns:
            True if the user was added
        """
        key = user.get("key")
        if not key:
            logger.warning(f"Skipping {label} without a key")
            return False

        if key in self.people:
            logger.warning(f"Duplicate person key '{key}' in {label}; later entry wins")
        self.people[key] = user
        return True

    @classmethod
    def empty(cls) -> "Config":
        """Config with no known people."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping, source: str = "<dict>") -> "Config":
        """
        Build a config from a ``{"people": [...]}`` document.

        Person entries without a key are skipped. Blank values are dropped so
        templates can fall back to their own defaults.

        Args:
            data: Parsed config document
            source: Where the document came from (for messages)

        Raises:
            ConfigError: If the document has the wrong structure
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Config must be a mapping with a 'people' list\nSource: {source}")

        people = data.get("people", [])
        if people is None:
            people = []
        if not isinstance(people, list):
            raise ConfigError(f"'people' must be a list of person entries\nSource: {source}")

        config = cls()
        for index, entry in enumerate(people):
            if not isinstance(entry, Mapping):
                raise ConfigError(
                    f"Person entry {index} must be a mapping, got {type(entry).__name__}\n"
                    f"Source: {source}"
                )

            fields = {
                str(k): str(v) for k, v in entry.items()
                if v is not None and str(v) != ""
            }
            config.add_user(User(fields), f"person entry {index} ({source})")

        logger.info(f"Loaded {len(config.people)} people from {source}")
        return config

    def get_user(self, name: str) -> User:
        """Resolve a speaker token, synthesizing a user when it is unknown."""
        user = self.people.get(name)
        if user is None:
            return User.synthetic(name)
        return user

    def users(self) -> List[User]:
        """All configured users, in declaration order."""
        return list(self.people.values())

    def to_dict(self) -> Dict[str, Any]:
        return {"people": [user.to_dict() for user in self.people.values()]}

    def __contains__(self, name: str) -> bool:
        return name in self.people

    def __iter__(self) -> Iterator[User]:
        return iter(self.people.values())

    def __len__(self) -> int:
        return len(self.people)


def load_config_json(text: str) -> Config:
    """
    Load a config from a JSON string.

    Raises:
        ConfigError: If the text is not valid JSON or has the wrong structure
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config JSON: {e}") from e
    return Config.from_dict(data, source="<json>")


def load_config(config_path: Union[str, Path, None] = None) -> Config:
    """
    Load a config file.

    Args:
        config_path: Path to config file (default: ./config.yaml)

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If config file not found
        ConfigError: If config is invalid

    Example:
        >>> config = load_config(Path("config.yaml"))
        >>> config.get_user("EGGBUG")["color"]
        '#83254f'
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    logger.info(f"Loading config from {path}")
    return Config.from_dict(load_yaml_file(path), source=str(path))
