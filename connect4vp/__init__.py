"""Connect Four played on a simulated CPU, block memory, interconnect and win detector."""

__version__ = "0.1.0"