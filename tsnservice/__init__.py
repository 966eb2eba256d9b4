"""TSN configuration: gNMI updates, schema trees, MSTP tables, gate control lists and storage."""

__version__ = "0.1.0"