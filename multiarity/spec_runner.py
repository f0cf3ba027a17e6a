#!/usr/bin/env python3
"""
Spec Runner

Reads YAML scenario files, calls registered multi-arity functions,
checks what they emitted, returned or raised.

    fn: hello/foo
    tests:
      - name: no_args_greets_world
        call: apply
        args: []
        expect:
          emitted: [["Hello ", "World"]]
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass
from pathlib import Path
import math
import sys

import yaml

from .errors import JSError, JSTypeError
from .io_adapter import get_adapter, set_adapter, use_mock
from .printing import RecordingSink, default_print_fn, get_print_fn, set_print_fn
from .registry import Registry, get_registry


@dataclass
class CaseResult:
    name: str
    passed: bool
    expected: Any
    actual: Any
    error: Optional[str] = None


def load_yaml(path: str) -> Dict:
    """Load YAML file"""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def run_spec_file(spec_path: str, registry: Optional[Registry] = None) -> List[CaseResult]:
    """Run all cases defined in a scenario file"""
    try:
        spec = load_yaml(spec_path) or {}
    except (OSError, yaml.YAMLError) as e:
        get_adapter().log("error", "could not load spec", {"path": spec_path, "error": str(e)})
        return [CaseResult(
            name=f"load:{spec_path}",
            passed=False,
            expected="valid YAML",
            actual=None,
            error=str(e)
        )]

    get_adapter().log("info", "running spec", {"path": spec_path})
    return run_spec(spec, registry)


def run_spec(spec: Dict[str, Any], registry: Optional[Registry] = None) -> List[CaseResult]:
    """Run all cases of an already loaded scenario"""
    registry = registry or get_registry()
    fn_name = spec.get("fn", "unknown")

    try:
        fn = registry.resolve(fn_name)
    except KeyError as e:
        return [CaseResult(
            name=f"resolve:{fn_name}",
            passed=False,
            expected="registered function",
            actual=None,
            error=str(e)
        )]

    return [run_case(fn_name, fn, case) for case in spec.get("tests", [])]


def run_case(fn_name: str, fn, case: Dict) -> CaseResult:
    """Run a single case against a fresh mock adapter and recording sink"""
    name = f"{fn_name}::{case.get('name', 'unnamed')}"
    call = case.get("call", "apply")
    args = case.get("args") or []
    expected = case.get("expect") or {}

    previous_adapter = get_adapter()
    previous_sink = get_print_fn()

    mock = use_mock(mock_env=case.get("env", {}))
    sink = RecordingSink(forward=default_print_fn)
    set_print_fn(sink)

    outcome: Dict[str, Any] = {}
    try:
        entry = fn.apply if call == "apply" else getattr(fn, call)
        outcome["value"] = entry(*args)
    except (JSError, JSTypeError) as e:
        outcome["error"] = str(e)
    except Exception as e:
        return CaseResult(
            name=name,
            passed=False,
            expected=expected,
            actual=None,
            error=f"{type(e).__name__}: {e}"
        )
    finally:
        set_print_fn(previous_sink)
        set_adapter(previous_adapter)

    outcome["emitted"] = [list(values) for values in sink.calls]
    outcome["stdout"] = mock.stdout_buffer

    passed, error = check_expectation(outcome, expected)
    return CaseResult(
        name=name,
        passed=passed,
        expected=expected,
        actual=outcome,
        error=error
    )


def check_expectation(outcome: Dict[str, Any], expected: Dict) -> Tuple[bool, Optional[str]]:
    """Check a call's outcome against the case's expect block"""
    if "error" in outcome and "error" not in expected:
        return False, f"Unexpected error: {outcome['error']}"

    if "error" in expected:
        if "error" not in outcome:
            return False, f"Expected error {expected['error']!r}, call succeeded"
        if outcome["error"] != expected["error"]:
            return False, f"Expected error {expected['error']!r}, got {outcome['error']!r}"

    for key in ("emitted", "value", "stdout"):
        if key not in expected:
            continue
        passed, err = match_value(outcome.get(key), expected[key])
        if not passed:
            return False, f"{key}: {err}"

    return True, None


def match_value(actual: Any, expected: Any) -> Tuple[bool, Optional[str]]:
    """Match actual against expected, recursing into lists and dicts"""

    # NaN never equals itself
    if isinstance(expected, float) and math.isnan(expected):
        if isinstance(actual, float) and math.isnan(actual):
            return True, None
        return False, f"Expected NaN, got {actual!r}"

    if isinstance(expected, dict) and isinstance(actual, dict):
        for key, exp_val in expected.items():
            if key not in actual:
                return False, f"Missing key: {key}"
            passed, err = match_value(actual[key], exp_val)
            if not passed:
                return False, f"Key '{key}': {err}"
        return True, None

    if isinstance(expected, list) and isinstance(actual, (list, tuple)):
        if len(expected) != len(actual):
            return False, f"List length: expected {len(expected)}, got {len(actual)}"
        for i, (exp, act) in enumerate(zip(expected, actual)):
            passed, err = match_value(act, exp)
            if not passed:
                return False, f"Index {i}: {err}"
        return True, None

    if actual == expected:
        return True, None

    return False, f"Expected {expected!r}, got {actual!r}"


def print_results(results: List[CaseResult], verbose: bool = False) -> bool:
    """Print case results, return True when all passed"""
    out = get_adapter().stdout
    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed

    out(f"\n{'='*60}")
    out(f"  TEST RESULTS: {passed} passed, {failed} failed")
    out('='*60)

    for r in results:
        status = "✓" if r.passed else "✗"
        out(f"\n  [{status}] {r.name}")

        if not r.passed or verbose:
            out(f"      Expected: {r.expected}")
            out(f"      Actual:   {r.actual}")
            if r.error:
                out(f"      Error:    {r.error}")

    out("")
    return failed == 0


def collect_results(spec_path: str) -> List[CaseResult]:
    """Results for one file, or every *.yaml under a directory"""
    path = Path(spec_path)
    if not path.is_dir():
        return run_spec_file(str(path))

    results = []
    for yaml_file in sorted(path.rglob("*.yaml")):
        results.extend(run_spec_file(str(yaml_file)))
    return results


# =============================================================================
# CLI
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    verbose = False
    for flag in ("-v", "--verbose"):
        if flag in args:
            args.remove(flag)
            verbose = True

    if len(args) > 1:
        get_adapter().stderr("Usage: multiarity-specs [-v] <spec.yaml | spec_dir>")
        return 2

    spec_path = args[0] if args else "specs"
    success = print_results(collect_results(spec_path), verbose=verbose)
    return 0 if success else 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
