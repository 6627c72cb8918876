"""
Scenario Loader for the Banker's Algorithm simulator.

Loads and validates JSON preset files. A scenario carries a name, an optional
description and the structured-form fields of utils.state_codec.
"""

import json
from typing import List, Tuple
from pathlib import Path

from models.allocation_state import AllocationState
from models.errors import MalformedStateError
from utils.state_codec import import_state


DEFAULT_SCENARIO_DIR = Path(__file__).resolve().parent.parent / "scenarios"


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


def load_scenario(file_path: str) -> Tuple[AllocationState, str]:
    """
    Load scenario from JSON file.

    Need is always recomputed from Max and Allocation, never read from the file.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Tuple of (AllocationState, scenario name)

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    try:
        state = import_state(data)
    except MalformedStateError as e:
        raise ScenarioLoadError(f"Invalid scenario state: {e}")

    _validate_allocations(state)

    name = data.get('name') or Path(file_path).stem
    return state, name


def _validate_allocations(state: AllocationState) -> None:
    """
    Validate that no process holds more than its declared maximum.

    Critical validation: Allocation[i][j] <= Max[i][j] for all i, j

    Raises:
        ScenarioLoadError: If any allocation exceeds max
    """
    for i in range(state.num_processes):
        for j in range(state.num_resources):
            alloc = state.allocation_matrix[i][j]
            max_d = state.max_demand_matrix[i][j]
            if alloc > max_d:
                raise ScenarioLoadError(
                    f"Process P{i}: allocation[{j}] ({alloc}) "
                    f"exceeds max[{j}] ({max_d})"
                )


def find_scenario(name: str, directory: Path = DEFAULT_SCENARIO_DIR) -> Path:
    """
    Resolve a preset name to its scenario file.

    Raises:
        ScenarioLoadError: If no scenario with that name exists
    """
    path = Path(directory) / f"{name}.json"
    if not path.is_file():
        available = ", ".join(list_scenarios(directory)) or "none"
        raise ScenarioLoadError(f"Unknown scenario '{name}' (available: {available})")
    return path


def list_scenarios(directory: Path = DEFAULT_SCENARIO_DIR) -> List[str]:
    """List preset names in a scenario directory, sorted."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob("*.json"))


def get_scenario_description(file_path: str) -> str:
    """
    Get description from scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present or unreadable
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
