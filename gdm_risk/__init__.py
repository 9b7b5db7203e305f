"""GDM Risk Engine: gestational diabetes risk scoring."""

__version__ = "0.1.0"
