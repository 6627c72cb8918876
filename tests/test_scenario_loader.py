"""
Scenario Loader tests - bundled presets and validation.
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.safety import check_safety
from utils.scenario_loader import (
    DEFAULT_SCENARIO_DIR,
    ScenarioLoadError,
    find_scenario,
    get_scenario_description,
    list_scenarios,
    load_scenario,
)


def _write(tmp_path: Path, name: str, data) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding='utf-8')
    return path


def test_bundled_presets_are_listed():
    names = list_scenarios()
    for expected in ('safe_state_example', 'unsafe_state_example', 'banking_safe_loans'):
        assert expected in names
    assert names == sorted(names)


def test_load_safe_preset():
    state, name = load_scenario(str(find_scenario('safe_state_example')))

    assert name == "Safe State Example 1"
    assert state.num_processes == 5
    assert state.need_matrix[0].tolist() == [7, 4, 3]
    assert check_safety(state).safe_sequence == [1, 3, 0, 2, 4]


def test_load_unsafe_preset():
    state, _ = load_scenario(str(find_scenario('unsafe_state_example')))
    assert not check_safety(state).is_safe


def test_load_banking_preset():
    state, _ = load_scenario(str(find_scenario('banking_safe_loans')))
    result = check_safety(state)
    assert result.is_safe
    assert result.safe_sequence == [0, 1, 2, 3]


def test_need_in_file_is_ignored(tmp_path):
    path = _write(tmp_path, "custom.json", {
        'processCount': 1, 'resourceCount': 1,
        'available': [1], 'max': [[3]], 'allocation': [[1]], 'need': [[50]],
    })
    state, name = load_scenario(str(path))

    assert name == "custom"
    assert state.need_matrix.tolist() == [[2]]


def test_missing_file():
    with pytest.raises(ScenarioLoadError):
        load_scenario("/nonexistent/scenario.json")


def test_invalid_json(tmp_path):
    with pytest.raises(ScenarioLoadError):
        load_scenario(str(_write(tmp_path, "bad.json", "{oops")))


def test_malformed_state(tmp_path):
    path = _write(tmp_path, "short.json", {
        'processCount': 2, 'resourceCount': 1,
        'available': [1], 'max': [[3]], 'allocation': [[1]],
    })
    with pytest.raises(ScenarioLoadError):
        load_scenario(str(path))


def test_allocation_above_max_is_rejected(tmp_path):
    path = _write(tmp_path, "greedy.json", {
        'processCount': 1, 'resourceCount': 2,
        'available': [0, 0], 'max': [[1, 1]], 'allocation': [[1, 2]],
    })
    with pytest.raises(ScenarioLoadError, match="exceeds max"):
        load_scenario(str(path))


def test_find_unknown_scenario(tmp_path):
    with pytest.raises(ScenarioLoadError, match="Unknown scenario"):
        find_scenario('missing', tmp_path)


def test_list_scenarios_in_missing_directory(tmp_path):
    assert list_scenarios(tmp_path / "nope") == []


def test_scenario_description():
    path = DEFAULT_SCENARIO_DIR / "unsafe_state_example.json"
    assert "Unsafe" in get_scenario_description(str(path))
    assert get_scenario_description("/nonexistent.json") == ''
