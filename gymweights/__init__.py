"""Track gym exercises, lifted weights and their history in a JSON file."""

__version__ = "0.1.0"
__all__ = ["catalog", "datacenter", "records", "samples"]