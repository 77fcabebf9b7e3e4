"""Sprint timeline planning: dependency-aware, capacity-leveled delivery dates."""

__version__ = "0.1.0"
