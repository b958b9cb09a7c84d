"""Built-in reference taxonomy.

Most closing keywords point from the closing item to the one it closes, so
they alias ``requires`` with the direction reversed: "fixes #1" written in #2
means #1 requires #2.
"""

from typing import Any

from .taxonomy import Taxonomy

DEFAULT_REFERENCE_TYPES: dict[str, dict[str, Any]] = {
    "default": {
        "alias": {"id": "refers"},
    },
    "refers": {
        "prefixes": ["refers", "refer", "reference"],
        "edge": {
            "color": {"color": "#848484", "opacity": 0.1},
            "length": 200,
        },
        "follow": False,
    },
    "requires": {
        "prefixes": ["requires", "depends on", "depends", "needs"],
        "edge": {"color": "red", "length": 50},
    },
    "required_by": {
        "prefixes": ["required by", "needed by"],
        "alias": {"id": "requires", "reverse": True},
    },
    "resolves": {
        "prefixes": ["resolve", "resolves", "resolved"],
        "alias": {"id": "requires", "reverse": True},
    },
    "closes": {
        "prefixes": ["close", "closes", "closed"],
        "alias": {"id": "requires", "reverse": True},
    },
    "fixes": {
        "prefixes": ["fixes", "fix", "fixed"],
        "alias": {"id": "requires", "reverse": True},
    },
    "part_of": {
        "prefixes": ["part of"],
        "alias": {"id": "requires", "reverse": True},
    },
    "superseded_by": {
        "prefixes": ["superseded by"],
        "alias": {"id": "requires"},
    },
}


def default_taxonomy() -> Taxonomy:
    """Return the built-in taxonomy."""
    return Taxonomy.from_mapping(DEFAULT_REFERENCE_TYPES)
