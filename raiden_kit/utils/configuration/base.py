from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

import structlog

from raiden_kit.exceptions.config import ConfigurationError

log = structlog.get_logger(__name__)


class ConfigMapping(Mapping):
    """Read-only view of a loaded YAML mapping.

    Subclasses expose their options as properties, built on :meth:`.option`,
    and check them in :meth:`.validate`.
    """

    CONFIGURATION_ERROR = ConfigurationError

    def __init__(self, loaded_yaml: Optional[Mapping]):
        self.dict = dict(loaded_yaml or {})

    def __getitem__(self, item):
        return self.dict[item]

    def __iter__(self):
        return iter(self.dict)

    def __len__(self):
        return len(self.dict)

    def __eq__(self, other):
        if isinstance(other, (dict, ConfigMapping)):
            return self.dict == dict(other)
        raise TypeError(f"Incomparable types! {self.__class__.__qualname__} and {type(other)}")

    def __repr__(self):
        return f"{self.__class__.__qualname__}({self.dict})"

    def option(self, key: str, default: Any = None, cast: Callable[[Any], Any] = None) -> Any:
        """Return the value of `key`, or `default` if it is not set.

        If `cast` is given, it is applied to the value (or the default).

        :raises ConfigurationError: if `cast` rejects the value.
        """
        value = self.dict.get(key, default)
        if cast is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            raise self.CONFIGURATION_ERROR(f"Invalid value for '{key}': {value!r}") from e

    @classmethod
    def assert_option(cls, expression, err: Optional[Union[str, Exception]] = None):
        """Wrap `assert` to raise a ConfigurationError instead of an AssertionError."""
        try:
            assert expression
        except AssertionError as e:
            if err is None or isinstance(err, str):
                raise cls.CONFIGURATION_ERROR(err) from e
            raise err from e

    def validate(self):
        """Validate the configuration.

        No-op by default.
        """
