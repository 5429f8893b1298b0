"""
Configuration for the editor-facing parts of comparse.

The combinators themselves take no configuration. These settings tune the
defaults cache and the headless completion logic, and can be loaded from a
mapping, a YAML file or the environment.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from attrs import evolve, fields, frozen

_TRUE_VALUES = {"1", "true", "yes", "on"}


@frozen
class EditorSettings:
    """
    Settings for completion and the defaults cache.

    Params:
        defaults_cache_timeout_seconds: How long fetched default values stay valid
        filter_space_completions: Hide a bare " " completion unless it is the only one
        check_invariants: Wrap command parsers in `check_invariants`
        completion_limit: Maximum number of extension steps `complete` takes
    """

    defaults_cache_timeout_seconds: float = 5 * 60
    filter_space_completions: bool = True
    check_invariants: bool = False
    completion_limit: int = 100

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "EditorSettings":
        """
        Create settings from a mapping, ignoring keys that are not settings.

        Params:
            config: Mapping of setting names to values

        Returns:
            EditorSettings with the given values applied over the defaults
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in config.items() if key in known})

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "EditorSettings":
        """
        Load settings from a YAML file.

        Example YAML:
            defaults_cache_timeout_seconds: 60
            filter_space_completions: false
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EditorSettings":
        """Create settings, enabling invariant checks if COMPARSE_CHECK_INVARIANTS is set."""
        environ = os.environ if environ is None else environ
        settings = cls()
        flag = environ.get("COMPARSE_CHECK_INVARIANTS", "")
        if flag.strip().lower() in _TRUE_VALUES:
            settings = evolve(settings, check_invariants=True)
        return settings
