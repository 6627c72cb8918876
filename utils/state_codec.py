"""
State Codec for the Banker's Algorithm core.

Serializes an AllocationState to a plain structured form (and JSON text),
and rebuilds a state from one. Also writes a row-labeled CSV variant for
spreadsheet tooling; CSV is export-only.
"""

import csv
import io
import json
from typing import Any, Dict, List

import numpy as np

from models.allocation_state import AllocationState
from models.errors import BankerError, MalformedStateError


# Aliases accepted on import for exports written by older front-ends
_LEGACY_KEYS = {
    'processCount': 'processes',
    'resourceCount': 'resources',
}


def export_state(state: AllocationState) -> Dict[str, Any]:
    """
    Serialize state to the structured form.

    Need is included for convenience; import always recomputes it.

    Returns:
        Dictionary of plain ints and lists
    """
    return {
        'processCount': state.num_processes,
        'resourceCount': state.num_resources,
        'available': state.available_vector.tolist(),
        'max': state.max_demand_matrix.tolist(),
        'allocation': state.allocation_matrix.tolist(),
        'need': state.need_matrix.tolist(),
    }


def import_state(data: Dict[str, Any]) -> AllocationState:
    """
    Build a new state from the structured form.

    Any 'need' field in the input is ignored and Need is recomputed
    from Max and Allocation.

    Args:
        data: Structured form as produced by export_state()

    Returns:
        New AllocationState

    Raises:
        MalformedStateError: If fields are missing, shapes are inconsistent,
            or values are non-integer or negative
    """
    if not isinstance(data, dict):
        raise MalformedStateError(f"State must be an object, got {type(data).__name__}")

    num_processes = _read_count(data, 'processCount')
    num_resources = _read_count(data, 'resourceCount')

    for key in ('available', 'max', 'allocation'):
        if key not in data:
            raise MalformedStateError(f"State missing '{key}' field")

    available = _read_vector(data['available'], num_resources, 'available')
    max_demand = _read_matrix(data['max'], num_processes, num_resources, 'max')
    allocation = _read_matrix(data['allocation'], num_processes, num_resources, 'allocation')

    state = AllocationState()
    try:
        state.load(num_processes, num_resources, available, max_demand, allocation)
    except (BankerError, ValueError) as e:
        raise MalformedStateError(str(e))
    return state


def export_json(state: AllocationState, indent: int = 2) -> str:
    """Serialize state to JSON text."""
    return json.dumps(export_state(state), indent=indent)


def import_json(text: str) -> AllocationState:
    """
    Build a new state from JSON text.

    Raises:
        MalformedStateError: If the text is not valid JSON or the state is malformed
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStateError(f"Invalid JSON: {e}")
    return import_state(data)


def export_csv(state: AllocationState) -> str:
    """
    Write state as a row-labeled table.

    Format:
        Matrix,Process,R0,R1,...
        Available,-,...
        Max,P0,...         (one row per process)
        Allocation,P0,...
        Need,P0,...
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')

    writer.writerow(['Matrix', 'Process'] + [f"R{j}" for j in range(state.num_resources)])
    writer.writerow(['Available', '-'] + state.available_vector.tolist())

    for label, matrix in (
        ('Max', state.max_demand_matrix),
        ('Allocation', state.allocation_matrix),
        ('Need', state.need_matrix),
    ):
        for i in range(state.num_processes):
            writer.writerow([label, f"P{i}"] + matrix[i].tolist())

    return buffer.getvalue()


def _is_count(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _read_count(data: Dict[str, Any], key: str) -> int:
    if key in data:
        value = data[key]
    elif _LEGACY_KEYS[key] in data:
        value = data[_LEGACY_KEYS[key]]
    else:
        raise MalformedStateError(f"State missing '{key}' field")

    if not _is_count(value) or value < 0:
        raise MalformedStateError(f"'{key}' must be a non-negative integer, got {value!r}")
    return int(value)


def _read_vector(values, length: int, label: str) -> List[int]:
    if not isinstance(values, (list, tuple)):
        raise MalformedStateError(f"'{label}' must be a list, got {type(values).__name__}")
    if len(values) != length:
        raise MalformedStateError(f"'{label}' has length {len(values)}, expected {length}")

    for j, value in enumerate(values):
        if not _is_count(value):
            raise MalformedStateError(f"'{label}[{j}]' must be an integer, got {value!r}")
        if value < 0:
            raise MalformedStateError(f"'{label}[{j}]' cannot be negative ({value})")
    return [int(v) for v in values]


def _read_matrix(rows, num_rows: int, num_cols: int, label: str) -> List[List[int]]:
    if not isinstance(rows, (list, tuple)):
        raise MalformedStateError(f"'{label}' must be a list of rows, got {type(rows).__name__}")
    if len(rows) != num_rows:
        raise MalformedStateError(
            f"'{label}' has {len(rows)} rows, expected {num_rows} (processCount)"
        )
    return [_read_vector(row, num_cols, f"{label}[{i}]") for i, row in enumerate(rows)]
