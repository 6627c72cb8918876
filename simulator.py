#!/usr/bin/env python3
"""
Banker's Algorithm Simulator
Main entry point for checking allocation states and evaluating requests.

Loads a scenario, runs the safety algorithm (optionally step by step),
evaluates resource requests and optionally commits the approved ones.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from models.allocation_state import AllocationState
from models.errors import BankerError
from algorithms.safety import check_safety
from algorithms.avoidance import commit_request, evaluate_request
from analysis.events import EventLog, EventType, SessionEvent
from utils.logger import SimulatorLogger
from utils.scenario_loader import (
    DEFAULT_SCENARIO_DIR,
    ScenarioLoadError,
    find_scenario,
    get_scenario_description,
    list_scenarios,
    load_scenario,
)
from utils.state_codec import export_csv, export_json


def run_session(
    state: AllocationState,
    logger: SimulatorLogger,
    requests: Sequence[Tuple[int, List[int]]] = (),
    commit: bool = False,
    trace: bool = False,
    export_format: Optional[str] = None,
    output_path: Optional[str] = None
) -> EventLog:
    """
    Run a session against a loaded state.

    Order of operations:
    1. Display the initial state
    2. Safety check (with trace if requested)
    3. Evaluate each request in order; with commit, approved requests are
       applied before the next one is evaluated
    4. Export the final state if requested

    Args:
        state: Live allocation state (mutated only when commit is True)
        logger: Logger instance
        requests: (process_index, request vector) pairs
        commit: Apply approved requests to the live state
        trace: Log the safety algorithm step by step
        export_format: 'json' or 'csv' to export the final state
        output_path: Write the export here instead of logging it

    Returns:
        EventLog containing all session events
    """
    event_log = EventLog()

    _display_state(state, logger)

    result = check_safety(state, trace=trace)
    if trace:
        logger.log("\nSafety Algorithm Trace:")
        for step in result.steps:
            logger.log_trace_step(step.iteration, step.description, step.work, step.finish)
    logger.log_safety(result.is_safe, result.safe_sequence)
    event_log.add(SessionEvent(
        event_type=EventType.SAFETY_CHECK,
        message="SAFE" if result.is_safe else "UNSAFE"
    ))

    for process_index, request in requests:
        try:
            if commit:
                outcome = commit_request(state, process_index, request)
            else:
                outcome = evaluate_request(state, process_index, request)
        except (BankerError, ValueError) as e:
            logger.log(f"P{process_index} requests {list(request)} - SKIPPED as invalid ({e})", "warning")
            event_log.add(SessionEvent(
                event_type=EventType.ERROR,
                process_index=process_index,
                request=list(request),
                message=str(e)
            ))
            continue

        reason = outcome.reason.value
        logger.log_request(process_index, request, outcome.approved, outcome.message)
        if outcome.approved:
            seq_str = " -> ".join(f"P{i}" for i in outcome.safe_sequence)
            logger.log(f"  Safe sequence after grant: {seq_str}", "debug")

        event_log.add(SessionEvent(
            event_type=EventType.APPROVAL if outcome.approved else EventType.DENIAL,
            process_index=process_index,
            request=list(request),
            reason=reason,
            message=outcome.message
        ))

        if commit and outcome.approved:
            logger.log_commit(process_index, request, state.available_vector.tolist())
            event_log.add(SessionEvent(
                event_type=EventType.COMMIT,
                process_index=process_index,
                request=list(request)
            ))

    if commit and event_log.get_events_by_type(EventType.COMMIT):
        if logger.verbose:
            _display_state(state, logger)
        final = check_safety(state)
        logger.log("\nAfter commits:")
        logger.log_safety(final.is_safe, final.safe_sequence)

    if export_format:
        _export(state, export_format, output_path, logger)

    _display_statistics(event_log, logger)
    if logger.verbose:
        logger.log("\nSession Events:")
        logger.log(event_log.display())
    return event_log


def parse_request_arg(text: str) -> Tuple[int, List[int]]:
    """
    Parse a request argument of the form "P:v0,v1,...".

    Examples:
        "1:1,0,2" -> (1, [1, 0, 2])
        "0:" -> (0, []) for a zero-resource system
    """
    process_part, sep, values_part = text.partition(':')
    if not sep:
        raise argparse.ArgumentTypeError(
            f"Invalid request '{text}': expected PROCESS:v0,v1,..."
        )
    try:
        process_index = int(process_part)
        values = [int(v) for v in values_part.split(',')] if values_part.strip() else []
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid request '{text}': process and values must be integers"
        )
    return process_index, values


def _export(state: AllocationState, export_format: str, output_path: Optional[str], logger: SimulatorLogger) -> None:
    """Export state as JSON or CSV to a file or the log."""
    content = export_json(state) if export_format == 'json' else export_csv(state)

    if output_path:
        Path(output_path).write_text(content, encoding='utf-8')
        logger.log(f"\nExported state ({export_format}) to {output_path}")
    else:
        logger.log(f"\nExported state ({export_format}):")
        logger.log(content.rstrip("\n"))


def _display_state(state: AllocationState, logger: SimulatorLogger) -> None:
    """Display the four matrices of the state."""
    header = "     " + " ".join(f"R{j:2}" for j in range(state.num_resources))

    logger.log("\n" + "="*60)
    logger.log(f"ALLOCATION STATE ({state.num_processes} processes, {state.num_resources} resources)")
    logger.log("="*60)

    logger.log("\nAvailable Resources:")
    logger.log("  [" + ", ".join(f"R{j}:{v:2}" for j, v in enumerate(state.available_vector)) + "]")

    for title, matrix in (
        ("Max Matrix", state.max_demand_matrix),
        ("Allocation Matrix", state.allocation_matrix),
        ("Need Matrix (Max - Allocation)", state.need_matrix),
    ):
        logger.log(f"\n{title}:")
        logger.log(header)
        for i in range(state.num_processes):
            logger.log(f"  P{i}: " + " ".join(f"{v:3}" for v in matrix[i]))

    logger.log("\n" + "="*60)


def _display_statistics(event_log: EventLog, logger: SimulatorLogger) -> None:
    """Display final session statistics."""
    approvals = len(event_log.get_events_by_type(EventType.APPROVAL))
    denials = len(event_log.get_events_by_type(EventType.DENIAL))
    commits = len(event_log.get_events_by_type(EventType.COMMIT))
    errors = len(event_log.get_events_by_type(EventType.ERROR))

    logger.log("\nSession Statistics:")
    logger.log(f"  Approved Requests: {approvals}")
    logger.log(f"  Denied Requests: {denials}")
    logger.log(f"  Committed Requests: {commits}")
    logger.log(f"  Invalid Requests: {errors}")


def _list_scenarios(directory: Path) -> None:
    names = list_scenarios(directory)
    if not names:
        print(f"No scenarios found in {directory}")
        return
    print(f"Scenarios in {directory}:")
    for name in names:
        description = get_scenario_description(str(Path(directory) / f"{name}.json"))
        print(f"  {name:24} {description}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(
        description="Banker's Algorithm Simulator"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '--scenario',
        type=str,
        help='Path to scenario JSON file'
    )
    source.add_argument(
        '--preset',
        type=str,
        help='Name of a scenario in the scenario directory'
    )
    source.add_argument(
        '--list-scenarios',
        action='store_true',
        help='List available preset scenarios and exit'
    )
    parser.add_argument(
        '--scenario-dir',
        type=Path,
        default=DEFAULT_SCENARIO_DIR,
        help='Directory searched by --preset (default: bundled scenarios)'
    )
    parser.add_argument(
        '--trace',
        action='store_true',
        help='Show the safety algorithm step by step'
    )
    parser.add_argument(
        '--request',
        type=parse_request_arg,
        action='append',
        default=[],
        metavar='P:v0,v1,...',
        help='Resource request to evaluate (repeatable)'
    )
    parser.add_argument(
        '--commit',
        action='store_true',
        help='Apply approved requests to the state, in order'
    )
    parser.add_argument(
        '--export',
        choices=['json', 'csv'],
        help='Export the final state'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Write the export to this file (requires --export)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Mirror log output to this file'
    )

    args = parser.parse_args(argv)

    if args.output and not args.export:
        parser.error('--output requires --export')

    if args.list_scenarios:
        _list_scenarios(args.scenario_dir)
        return 0

    if not args.scenario and not args.preset:
        parser.error('one of --scenario, --preset or --list-scenarios is required')

    logger = SimulatorLogger(verbose=args.verbose, log_file=args.log_file)
    try:
        path = args.scenario or find_scenario(args.preset, args.scenario_dir)
        state, name = load_scenario(str(path))
    except ScenarioLoadError as e:
        logger.log(f"Failed to load scenario: {e}", "error")
        logger.close()
        return 1

    logger.log(f"Scenario: {name}")
    run_session(
        state,
        logger,
        requests=args.request,
        commit=args.commit,
        trace=args.trace,
        export_format=args.export,
        output_path=args.output
    )
    logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
