"""Base schemas and enums for the GDM Risk Engine."""

from enum import Enum


class RiskLevel(str, Enum):
    """Gestational diabetes risk categories.

    Closed set: the interpreter bands, label lookups and presentation
    classes are all keyed exhaustively on these four members.
    """

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"
