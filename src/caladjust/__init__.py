"""Weight-goal tracking and calorie target adjustment."""

__version__ = "0.1.0"
