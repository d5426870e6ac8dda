"""
Target Resolution - Pure Functions

Turns an abstract Selection plus the configured channel offset into the
Eos command-line selection clause.
"""

from .model import Selection, SelectionKind
from .profiles import AllTarget, ProtocolProfile, DEFAULT_PROFILE

SELECT_ALL_CLAUSE = "Select_All"


def resolve(selection: Selection, offset: int, profile: ProtocolProfile = DEFAULT_PROFILE) -> str:
    """
    Build the selection clause for a command.

    Range bounds are emitted in the order given; Eos accepts a high-to-low
    Thru range as-is.

    Args:
        selection: Which channels to address
        offset: First real console channel (the `startChannel` parameter)
        profile: Dialect deciding how ALL is addressed

    Returns:
        Selection clause, e.g. "Chan 5", "Chan 1 Thru 8", "Select_All", "Group 1"

    Example:
        resolve(Selection.one(4), 1) -> "Chan 5"
        resolve(Selection.range(3, 0), 10) -> "Chan 13 Thru 10"
    """
    if selection.kind == SelectionKind.ONE:
        return f"Chan {offset + selection.id}"
    elif selection.kind == SelectionKind.RANGE:
        return f"Chan {offset + selection.start_id} Thru {offset + selection.end_id}"
    elif selection.kind == SelectionKind.ALL:
        if profile.all_target == AllTarget.GROUP:
            return f"Group {offset}"
        return SELECT_ALL_CLAUSE
    raise ValueError(f"Unknown selection kind: {selection.kind!r}")
