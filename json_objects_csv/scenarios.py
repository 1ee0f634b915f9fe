"""Scenario definitions for JSON to CSV conversion.

This module defines inputs that exercise the tricky parts of turning
heterogeneous, nested JSON objects into one rectangular CSV: nesting,
arrays, empty containers, key order and flattened key collisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Type

from .errors import Json2CsvError, KeyCollisionError
from .flattener import FlattenConfig, Surrounded

DROP_EMPTY = FlattenConfig(preserve_empty_arrays=False, preserve_empty_objects=False)


@dataclass(frozen=True)
class Scenario:
    """A conversion scenario.

    Attributes
    ----------
    name : str
        Unique identifier for the scenario.
    description : str
        Human-readable description of what the scenario tests.
    input : str
        JSON documents, one after the other.
    expected : Sequence[str]
        Expected CSV lines (without line terminators).
    config : FlattenConfig, optional
        Flattening configuration (default: ``FlattenConfig()``).
    delimiter : str, optional
        CSV delimiter (default: ",").
    error : Type[Json2CsvError] | None, optional
        Expected error instead of output (default: None).
    """

    name: str
    description: str
    input: str
    expected: Sequence[str] = ()
    config: FlattenConfig = field(default_factory=FlattenConfig)
    delimiter: str = ","
    error: Optional[Type[Json2CsvError]] = None


def get_scenarios() -> List[Scenario]:
    """Get all available conversion scenarios.

    Returns
    -------
    List[Scenario]
        List of scenario definitions.
    """
    return [
        Scenario(
            name="nested_objects",
            description="Nested objects and arrays flattened with dots.",
            input='{"a": {"b": 1}}{"c": [2]}',
            expected=["a.b,c.0", "1,", ",2"],
        ),
        Scenario(
            name="key_order",
            description="Headers are sorted whatever the key order of the input.",
            input='{"b": 3, "a": 1}{"a": 4, "b": 2}',
            expected=["a,b", "1,3", "4,2"],
        ),
        Scenario(
            name="surrounded_arrays",
            description="Array indices wrapped in brackets, empty containers dropped.",
            input='{"a": {"b": 1}} {"c": [2]} {"d": []} {"e": {}}',
            expected=["a.b,c[0]", "1,", ",2", ",", ","],
            config=FlattenConfig(
                array_formatting=Surrounded("[", "]"),
                preserve_empty_arrays=False,
                preserve_empty_objects=False,
            ),
        ),
        Scenario(
            name="preserved_empty",
            description="Empty arrays and objects keep an empty column.",
            input='{"a": {"b": 1}} {"c": [2]} {"d": []} {"e": {}}',
            expected=["a.b;c.0;d;e", "1;;;", ";2;;", ";;;", ";;;"],
            delimiter=";",
        ),
        Scenario(
            name="mixed_types",
            description="Strings, numbers, booleans and nulls.",
            input='{"s": "text, quoted \\"x\\"", "i": 42, "f": 3.14, "t": true, "n": null}',
            expected=["f,i,n,s,t", '3.14,42,,"text, quoted ""x""",true'],
        ),
        Scenario(
            name="duplicate_keys",
            description="The last occurrence of a repeated key wins.",
            input='{"a": 1, "a": 2}',
            expected=["a", "2"],
        ),
        Scenario(
            name="no_headers",
            description="Objects without any retained key give an empty CSV.",
            input='{"a": []} {"b": {}} {}',
            config=DROP_EMPTY,
        ),
        Scenario(
            name="collision_across_objects",
            description="A nested key and a dotted key flatten to the same header.",
            input='{"a": {"b": 1}} {"a.b": 2}',
            error=KeyCollisionError,
        ),
        Scenario(
            name="collision_in_object",
            description="An array index and a bracketed key flatten to the same header.",
            input='{"a[0]": 1, "a": [2]}',
            config=FlattenConfig(array_formatting=Surrounded("[", "]")),
            error=KeyCollisionError,
        ),
    ]
