"""Interface model consumed by the code printer."""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from . import naming

READ_ACCESS = frozenset({"read", "readwrite"})


@dataclass
class Arg:
    """A named, typed argument of a method, property, or signal."""

    name: str
    type: str


@dataclass
class Method:
    name: str
    in_args: List[Arg] = field(default_factory=list)
    out_args: List[Arg] = field(default_factory=list)
    identifier: str = ""

    def __post_init__(self) -> None:
        if not self.identifier:
            self.identifier = naming.member_identifier(self.name)
        self.in_args = _bind_args(self.in_args)
        self.out_args = _bind_args(self.out_args)


@dataclass
class Property:
    name: str
    type: str
    access: str = "read"
    identifier: str = ""
    arg: Arg = field(init=False)

    def __post_init__(self) -> None:
        if not self.identifier:
            self.identifier = naming.property_accessor(self.name)
        binding = naming.argument_identifier(naming.snake_case(self.name), 0)
        self.arg = Arg(name=binding, type=self.type)

    @property
    def readable(self) -> bool:
        return self.access in READ_ACCESS


@dataclass
class Signal:
    name: str
    args: List[Arg] = field(default_factory=list)
    identifier: str = ""

    def __post_init__(self) -> None:
        if not self.identifier:
            self.identifier = naming.member_identifier(self.name)
        self.args = _bind_args(self.args)


@dataclass
class Interface:
    """A D-Bus interface identified by its dot-separated qualified name."""

    name: str
    methods: List[Method] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    signals: List[Signal] = field(default_factory=list)
    identifier: str = ""
    factory: str = ""
    strip_prefix: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.identifier:
            self.identifier = naming.interface_identifier(self.name, self.strip_prefix)
        if not self.factory:
            self.factory = naming.factory_identifier(self.name, self.strip_prefix)
        # Methods and accessors share the proxy class namespace.
        taken = set(naming.PROXY_ATTRIBUTES)
        self.methods = [
            replace(method, identifier=naming.unique_identifier(method.identifier, taken))
            for method in self.methods
        ]
        self.properties = [
            replace(prop, identifier=naming.unique_identifier(prop.identifier, taken))
            if prop.readable
            else prop
            for prop in self.properties
        ]

    def event_type(self, signal: Signal) -> str:
        """Return the generated class name of ``signal``, qualified by this interface."""
        return self.identifier + signal.identifier[:1].upper() + signal.identifier[1:]


def _bind_args(args: List[Arg]) -> List[Arg]:
    return [
        replace(arg, name=naming.argument_identifier(arg.name, position))
        for position, arg in enumerate(args)
    ]
