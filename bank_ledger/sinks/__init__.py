"""Output sinks for exporting ledger data."""

from bank_ledger.sinks.json_file import JsonFileSink
from bank_ledger.sinks.serialization import serialize_value, to_dict

__all__ = ["JsonFileSink", "serialize_value", "to_dict"]
