"""Control logic, wire messages, sensor processing and on-board menu for an omni-drive soccer robot."""

__version__ = "0.1.0"