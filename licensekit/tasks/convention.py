"""Lazily resolved properties with explicit-override precedence.

A :class:`ConventionProperty` is declared on a class like a dataclass field.
Each instance carries a :class:`ConventionMapping` that binds the property
to a fallback callable. Reading the attribute returns, in order:

1. the value last assigned to the attribute on the instance, if any
2. the fallback evaluated against the current state of whatever it closes
   over (usually a build-wide configuration object)
3. the declared default

Nothing is cached: a configuration object mutated after the task was created
is still observed on the next read, unless the task was explicitly assigned.

Example
-------
>>> class Task(ConventionAware):
...     header = ConventionProperty(default="LICENSE")
>>> settings = {"header": "A"}
>>> task = Task()
>>> task.convention_mapping.map("header", lambda: settings["header"])
>>> settings["header"] = "B"
>>> task.header
'B'
>>> task.header = "C"
>>> settings["header"] = "D"
>>> task.header
'C'
"""

from typing import Any, Callable, Dict, List, Optional

from ..exceptions import ConfigurationError

_MISSING = object()


class ConventionProperty:
    """Descriptor for an attribute resolved through a ConventionMapping.

    Parameters
    ----------
    default : Any, optional
        Value returned when neither an explicit value nor a fallback exists
    default_factory : Callable[[], Any], optional
        Factory for mutable defaults (lists, dicts, sets)
    """

    def __init__(
        self,
        default: Any = None,
        default_factory: Optional[Callable[[], Any]] = None,
    ):
        self.default = default
        self.default_factory = default_factory
        self.name: Optional[str] = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.convention_mapping.resolve(self.name, self)

    def __set__(self, obj, value):
        obj.convention_mapping.set_explicit(self.name, value)

    def __delete__(self, obj):
        obj.convention_mapping.clear_explicit(self.name)

    def make_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


class ConventionMapping:
    """Per-instance bindings of convention properties to fallbacks.

    Parameters
    ----------
    owner : object
        Instance whose class declares the convention properties
    """

    def __init__(self, owner: Any):
        self._owner_type = type(owner)
        self._fallbacks: Dict[str, Callable[[], Any]] = {}
        self._explicit: Dict[str, Any] = {}

    def properties(self) -> List[str]:
        """List declared convention property names, in declaration order."""
        names: List[str] = []
        for klass in reversed(self._owner_type.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, ConventionProperty) and name not in names:
                    names.append(name)
        return names

    def map(self, name: str, fallback: Callable[[], Any]) -> None:
        """Bind a property to a fallback, replacing any earlier binding.

        Raises
        ------
        ConfigurationError
            If ``name`` is not a declared convention property or the
            fallback is not callable
        """
        if name not in self.properties():
            raise ConfigurationError(
                f"Cannot map unknown property '{name}' on {self._owner_type.__name__}"
            )
        if not callable(fallback):
            raise ConfigurationError(
                f"Fallback for '{name}' on {self._owner_type.__name__} must be callable"
            )
        self._fallbacks[name] = fallback

    def map_all(self, fallbacks: Dict[str, Callable[[], Any]]) -> None:
        """Bind several properties at once."""
        for name, fallback in fallbacks.items():
            self.map(name, fallback)

    def is_explicit(self, name: str) -> bool:
        return name in self._explicit

    def set_explicit(self, name: str, value: Any) -> None:
        self._explicit[name] = value

    def clear_explicit(self, name: str) -> None:
        self._explicit.pop(name, None)

    def resolve(self, name: str, declared: Optional[ConventionProperty] = None) -> Any:
        """Resolve the current value of a property."""
        value = self._explicit.get(name, _MISSING)
        if value is not _MISSING:
            return value

        fallback = self._fallbacks.get(name)
        if fallback is not None:
            return fallback()

        if declared is None:
            declared = getattr(self._owner_type, name, None)
        if isinstance(declared, ConventionProperty):
            return declared.make_default()
        return None


class ConventionAware:
    """Mixin giving an object a lazily created ConventionMapping."""

    @property
    def convention_mapping(self) -> ConventionMapping:
        mapping = self.__dict__.get("_convention_mapping")
        if mapping is None:
            mapping = ConventionMapping(self)
            self.__dict__["_convention_mapping"] = mapping
        return mapping

    def convention_values(self) -> Dict[str, Any]:
        """Resolve every convention property now.

        Returns
        -------
        Dict[str, Any]
            Map of property name to currently resolved value
        """
        mapping = self.convention_mapping
        return {name: getattr(self, name) for name in mapping.properties()}
