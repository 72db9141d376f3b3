"""EventLink: NGO community events with capacity-limited volunteer registration."""

__version__ = "1.0.0"
