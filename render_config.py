"""Render settings read from a YAML file.

Example ``sierpinski.yml``::

    width: 1920
    height: 1080
    dots: 5000000
    color: "#ff8800"
    output: wallpaper.png
    wallpaper: true

Any key can also be given on the command line, which takes precedence.
"""

import yaml
from betterconf import AbstractProvider, BetterconfError, Field, ImpossibleToCastError, VariableNotFoundError
from betterconf import betterconf, field
from betterconf import to_bool, to_int


class ConfigError(ValueError):
    pass


class YAMLProvider(AbstractProvider):
    """Serves values from a parsed YAML mapping as strings for the casters."""

    def __init__(self, settings=None):
        self._settings = dict(settings or {})

    @classmethod
    def from_path(cls, path):
        try:
            with open(path) as fh:
                data = yaml.safe_load(fh) or {}
        except OSError as e:
            raise ConfigError(f"Could not read config {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
        return cls(data)

    @property
    def settings(self):
        return dict(self._settings)

    def get(self, name):
        value = self._settings.get(name)
        if value is None:
            raise VariableNotFoundError(name)
        return str(value)


@betterconf(provider=YAMLProvider())
class RenderConfig:
    width = field("width", default=None, caster=to_int)
    height = field("height", default=None, caster=to_int)
    dots = field("dots", default=None, caster=to_int)
    output = field("output", default=None)
    image = field("image", default=None)
    color = field("color", default=None)
    wallpaper = field("wallpaper", default=False, caster=to_bool)
    seed = field("seed", default=None, caster=to_int)

    @classmethod
    def field_names(cls):
        return [name for name, value in vars(cls).items() if isinstance(value, Field)]

    @classmethod
    def from_mapping(cls, data):
        """Build a config from a plain dict; None values fall back to defaults."""
        unknown = sorted(set(data) - set(cls.field_names()))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        try:
            return cls(YAMLProvider(data))
        except ImpossibleToCastError as e:
            names = [k for k, v in data.items() if v is not None and str(v) == e.val]
            raise ConfigError(f"Bad value for '{', '.join(names) or '?'}': {e}") from e
        except BetterconfError as e:
            raise ConfigError(f"Bad config: {e}") from e

    def as_dict(self):
        return {name: getattr(self, name) for name in self.field_names()}

    def merged(self, overrides):
        """Copy of this config with every non-None override applied."""
        values = self.as_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return type(self).from_mapping(values)

    def default_output(self):
        return f"{self.width}x{self.height} - {self.dots}.png"

    def __eq__(self, other):
        if not isinstance(other, RenderConfig):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"RenderConfig({self.as_dict()})"


def load_config(path):
    """Return a RenderConfig from the YAML file at *path*."""
    return RenderConfig.from_mapping(YAMLProvider.from_path(path).settings)
