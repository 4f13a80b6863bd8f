"""
Trace recording and pretty printing for DSTU 7624 operations.

Contains:
- TraceRecorder: JSON Lines trace + compact verbose stdout, one entry per stage
- print_header / print_result: shared formatting helpers
"""

import json
from typing import Any, TextIO

from .utils import format_state_line


class TraceRecorder:
    """
    Records and outputs traces of block processing and key expansion.

    Supports:
    - JSON Lines file output  (when trace_file is set)
    - Compact verbose stdout  (when verbose is set)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Conventional keys: round, operation, state (list of words).
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, (bytes, bytearray)):
            return bytes(obj).hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        """Compact verbose line: round, operation, state words."""
        round_num = record.get("round", "?")
        operation = record.get("operation", "unknown")

        if "state" in record:
            state_hex = format_state_line(record["state"])
            print(f"R{round_num:<3} {operation:14s} STATE:{state_hex}")
        else:
            print(f"R{round_num:<3} {operation}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(label: str, output_hex: str, passed: bool | None = None) -> None:
    """Print final block result, with optional verification status."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {output_hex}")

    if passed is not None:
        status = "PASS" if passed else "FAIL"
        marker = "[OK]" if passed else "[ERROR]"
        print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
