"""
Wire names for enum-valued fields.

The service spells some enum values differently from their Python member
names. Each enum declares its overrides once, at class definition time,
with the ``wire_names`` decorator; members without an override travel
under their own name. Lookups are plain dict reads, no introspection.

Usage:
    @wire_names(JSON="json")
    class ResultFormat(Enum):
        JSON = auto()

    to_wire(ResultFormat.JSON)            # "json"
    from_wire(ResultFormat, "json")       # ResultFormat.JSON
"""

from enum import Enum
from typing import Annotated, TypeVar

from pydantic import BeforeValidator, PlainSerializer

E = TypeVar("E", bound=Enum)

# enum class -> {member: wire name}
_TO_WIRE: dict[type[Enum], dict[Enum, str]] = {}
# enum class -> {wire name: member}
_FROM_WIRE: dict[type[Enum], dict[str, Enum]] = {}


def wire_names(**overrides: str):
    """
    Class decorator registering the wire name of each enum member.

    Args:
        **overrides: member name -> wire name; unlisted members use their name

    Raises:
        ValueError: An override names a member that does not exist, or two
            members end up with the same wire name
    """

    def decorate(enum_cls: type[E]) -> type[E]:
        unknown = set(overrides) - set(enum_cls.__members__)
        if unknown:
            raise ValueError(
                f"{enum_cls.__name__} has no members named {sorted(unknown)}"
            )

        to_wire_table = {
            member: overrides.get(member.name, member.name) for member in enum_cls
        }
        from_wire_table = {name: member for member, name in to_wire_table.items()}
        if len(from_wire_table) != len(to_wire_table):
            raise ValueError(f"{enum_cls.__name__} has duplicate wire names")

        _TO_WIRE[enum_cls] = to_wire_table
        _FROM_WIRE[enum_cls] = from_wire_table
        return enum_cls

    return decorate


def to_wire(member: Enum) -> str:
    """Wire name of an enum member, falling back to the member's own name."""
    table = _TO_WIRE.get(type(member))
    if table is None:
        return member.name
    return table[member]


def from_wire(enum_cls: type[E], value: str) -> E:
    """
    Parse a wire name back into a member of ``enum_cls``.

    Raises:
        ValueError: ``value`` is not a wire name of ``enum_cls``
    """
    table = _FROM_WIRE.get(enum_cls)
    if table is None:
        try:
            return enum_cls[value]
        except KeyError:
            raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}") from None

    try:
        return table[value]  # type: ignore[return-value]
    except KeyError:
        raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}") from None


def wire_enum(enum_cls: type[E]):
    """
    Annotated pydantic type for an enum field that travels by wire name.

    Accepts either a member or its wire name on input and always
    serializes to the wire name.
    """

    def _parse(value: object) -> E:
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            return from_wire(enum_cls, value)
        raise ValueError(f"expected a {enum_cls.__name__} wire name, got {type(value).__name__}")

    return Annotated[
        enum_cls,
        BeforeValidator(_parse),
        PlainSerializer(to_wire, return_type=str),
    ]
