"""Behaviours: ordered mutation passes applied before rendering."""

from collections.abc import Iterable

from .base import Behaviour, BehaviourCollection, behaviour_name
from .inherit import inherit
from .links import add_link_information
from .paths import generate_paths
from .tags import filter_internal, ignore_tagged

DEFAULT_BEHAVIOURS: tuple[Behaviour, ...] = (
    generate_paths,
    add_link_information,
    inherit,
    ignore_tagged,
)


def build_behaviours(
    parse_private: bool = False,
    extra: Iterable[Behaviour] = (),
) -> list[Behaviour]:
    """Return the effective behaviour chain for a run.

    Caller-supplied behaviours follow the defaults. Unless private elements
    are requested, ``filter_internal`` closes the chain so it also sees the
    members that ``inherit`` copied in.
    """
    behaviours = [*DEFAULT_BEHAVIOURS, *extra]
    if not parse_private:
        behaviours.append(filter_internal)
    return behaviours


__all__ = [
    "Behaviour",
    "BehaviourCollection",
    "DEFAULT_BEHAVIOURS",
    "add_link_information",
    "behaviour_name",
    "build_behaviours",
    "filter_internal",
    "generate_paths",
    "ignore_tagged",
    "inherit",
]
