from enum import Enum


class OperatorGroup(str, Enum):
    """Descriptor keys holding per-field comparison values."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    LIKE = "like"
    IN = "in"
    GEO = "geo"


# Order in which groups are folded into the filter. ``eq`` assigns directly,
# so it must run before the operator groups that merge into a field clause.
GROUP_ORDER: tuple[OperatorGroup, ...] = tuple(OperatorGroup)
