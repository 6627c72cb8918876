"""
Logger utility for the Banker's Algorithm simulator.

Provides console logging with verbosity levels and an optional log file.
"""

from typing import List, Optional, Sequence
from datetime import datetime


class SimulatorLogger:
    """
    Logger for safety checks and request decisions.

    Format: "P1 requests [1, 0, 2] - APPROVED (reason)"
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose (debug) output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Banker Session Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_safety(self, is_safe: bool, safe_sequence: List[int]) -> None:
        """Log the verdict of a safety check."""
        if is_safe:
            seq_str = " -> ".join(f"P{i}" for i in safe_sequence) or "(no processes)"
            self.log(f"Safety check: SAFE (sequence: {seq_str})")
        else:
            self.log("Safety check: UNSAFE (no safe sequence exists)")

    def log_trace_step(
        self,
        iteration: int,
        description: str,
        work: List[int],
        finish: List[bool]
    ) -> None:
        """Log one step of a safety trace."""
        finish_str = ", ".join("T" if f else "F" for f in finish)
        self.log(f"  [{iteration}] {description}")
        self.log(f"      Work={work} Finish=[{finish_str}]")

    def log_request(
        self,
        process_index: int,
        request: Sequence[int],
        approved: bool,
        reason: str
    ) -> None:
        """
        Log a request decision.

        Args:
            process_index: Requesting process
            request: Requested units per resource type
            approved: Whether request was approved
            reason: Reason for decision
        """
        status = "APPROVED" if approved else "DENIED"
        self.log(f"P{process_index} requests {list(request)} - {status} ({reason})")

    def log_commit(self, process_index: int, request: Sequence[int], available: List[int]) -> None:
        """Log a committed request and the resulting Available vector."""
        self.log(f"P{process_index} COMMITTED {list(request)} - Available now: {available}")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
