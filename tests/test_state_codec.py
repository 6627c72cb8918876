"""
State Codec tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.allocation_state import AllocationState
from models.errors import MalformedStateError
from utils.state_codec import (
    export_csv,
    export_json,
    export_state,
    import_json,
    import_state,
)


def _small_state() -> AllocationState:
    state = AllocationState()
    state.load(2, 2, available=[1, 2], max_demand=[[3, 2], [1, 1]], allocation=[[1, 0], [0, 1]])
    return state


def _valid_payload() -> dict:
    return {
        'processCount': 2,
        'resourceCount': 2,
        'available': [1, 2],
        'max': [[3, 2], [1, 1]],
        'allocation': [[1, 0], [0, 1]],
    }


def test_export_structured_form():
    data = export_state(_small_state())

    assert data == {
        'processCount': 2,
        'resourceCount': 2,
        'available': [1, 2],
        'max': [[3, 2], [1, 1]],
        'allocation': [[1, 0], [0, 1]],
        'need': [[2, 2], [1, 0]],
    }
    assert type(data['available'][0]) is int


def test_round_trip_recomputes_tampered_need():
    state = _small_state()
    data = export_state(state)
    data['need'] = [[99, 99], [99, 99]]

    restored = import_state(data)

    assert restored.matches(state)
    assert restored.need_matrix.tolist() == [[2, 2], [1, 0]]


def test_import_without_need_field():
    restored = import_state(_valid_payload())
    assert restored.need_matrix.tolist() == [[2, 2], [1, 0]]


def test_json_round_trip():
    state = _small_state()
    text = export_json(state)

    assert json.loads(text)['processCount'] == 2
    assert import_json(text).matches(state)


def test_import_accepts_legacy_count_keys():
    payload = _valid_payload()
    payload['processes'] = payload.pop('processCount')
    payload['resources'] = payload.pop('resourceCount')

    assert import_state(payload).num_processes == 2


def test_empty_state_round_trip():
    state = AllocationState(0, 0)
    assert import_state(export_state(state)).matches(state)


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop('processCount'),
    lambda d: d.pop('available'),
    lambda d: d.pop('max'),
    lambda d: d.pop('allocation'),
    lambda d: d.update(processCount=3),
    lambda d: d.update(resourceCount=-1),
    lambda d: d.update(resourceCount=2.0),
    lambda d: d.update(processCount=True),
    lambda d: d.update(available=[1, 2, 3]),
    lambda d: d.update(available="12"),
    lambda d: d.update(max=[[3, 2]]),
    lambda d: d.update(max=[[3, 2], [1]]),
    lambda d: d.update(allocation=[[1, 0], [0, 1.5]]),
    lambda d: d.update(allocation=[[1, 0], [0, -1]]),
    lambda d: d.update(available=[1, None]),
    lambda d: d.update(max=[[3, True], [1, 1]]),
])
def test_malformed_payloads_are_rejected(mutate):
    payload = _valid_payload()
    mutate(payload)
    with pytest.raises(MalformedStateError):
        import_state(payload)


def test_non_object_payload_is_rejected():
    with pytest.raises(MalformedStateError):
        import_state([1, 2, 3])


def test_invalid_json_is_rejected():
    with pytest.raises(MalformedStateError):
        import_json("{not json")


def test_import_does_not_enforce_allocation_below_max():
    payload = _valid_payload()
    payload['allocation'] = [[4, 0], [0, 1]]
    state = import_state(payload)
    assert state.need_matrix[0].tolist() == [-1, 2]


def test_export_csv():
    assert export_csv(_small_state()) == (
        "Matrix,Process,R0,R1\n"
        "Available,-,1,2\n"
        "Max,P0,3,2\n"
        "Max,P1,1,1\n"
        "Allocation,P0,1,0\n"
        "Allocation,P1,0,1\n"
        "Need,P0,2,2\n"
        "Need,P1,1,0\n"
    )
