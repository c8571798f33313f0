"""
hwcheck - hardware and system health reporter.

Collects CPU, memory, storage, network, USB, PCI, motherboard and
battery information and renders it as a table, JSON or YAML.
"""

__version__ = "0.4.0"
