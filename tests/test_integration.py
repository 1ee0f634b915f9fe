"""Integration tests for file conversion workflows.

These tests verify end-to-end workflows including:
- JSON documents on disk to CSV and back
- Large streamed inputs
- Heterogeneous objects producing a rectangular CSV
"""

from __future__ import annotations

import io
import json
from pathlib import Path

from json_objects_csv.converter import Json2Csv
from json_objects_csv.csv_io import convert_file, make_csv_writer, read_csv
from json_objects_csv.flattener import FlattenConfig, Surrounded
from json_objects_csv.scenarios import get_scenarios


class TestFileConversion:
    """Integration tests for JSON file to CSV file conversion."""

    def test_write_and_read_csv(self, tmp_path: Path) -> None:
        """Test converting heterogeneous objects and reading them back."""
        objects = [
            {"a": 1, "b": "x", "c": 3.14},
            {"a": 2, "b": "y", "c": 2.71},
            {"a": 3, "b": "z", "d": {"e": "extra"}},
        ]
        source = tmp_path / "in.json"
        source.write_text("\n".join(json.dumps(obj) for obj in objects), encoding="utf-8")
        output = tmp_path / "test.csv"

        convert_file(source, output)

        records = read_csv(output)
        assert len(records) == 3
        assert list(records[0]) == ["a", "b", "c", "d.e"]
        assert records[0]["a"] == "1"  # CSV reads as strings
        assert records[0]["d.e"] == ""
        assert records[2]["d.e"] == "extra"

    def test_special_characters(self, tmp_path: Path) -> None:
        """Test CSV with special characters and commas."""
        obj = {"name": "John, Doe", "quote": 'He said "Hello"', "newline": "line1\nline2"}
        source = tmp_path / "in.json"
        source.write_text(json.dumps(obj), encoding="utf-8")
        output = tmp_path / "special.csv"

        convert_file(source, output)

        records = read_csv(output)
        assert records == [obj]

    def test_all_scenarios_to_csv(self, tmp_path: Path) -> None:
        """Test that every successful scenario can be written to disk."""
        for scenario in get_scenarios():
            if scenario.error is not None:
                continue
            scenario_dir = tmp_path / scenario.name
            scenario_dir.mkdir(parents=True, exist_ok=True)
            source = scenario_dir / "input.json"
            source.write_text(scenario.input, encoding="utf-8")
            output = scenario_dir / "output.csv"

            convert_file(source, output, scenario.config, delimiter=scenario.delimiter)

            assert output.read_text(encoding="utf-8").splitlines() == list(scenario.expected)


class TestLargeInputs:
    """Tests with inputs larger than the decoder's read size."""

    def test_streamed_matches_array(self) -> None:
        objects = [
            {"id": i, "user": {"name": f"user{i}", "tags": ["t"] * (i % 4)}, "flag": i % 2 == 0}
            for i in range(5000)
        ]
        config = FlattenConfig(array_formatting=Surrounded("[", "]"), preserve_empty_arrays=False)
        data = "".join(json.dumps(obj) for obj in objects).encode("utf-8")

        from_reader = io.StringIO()
        rows = Json2Csv(config).convert_from_reader(io.BytesIO(data), make_csv_writer(from_reader))
        from_array = io.StringIO()
        Json2Csv(config).convert_from_array(objects, make_csv_writer(from_array))

        assert rows == 5000
        assert from_reader.getvalue() == from_array.getvalue()
        header = from_reader.getvalue().split("\n", 1)[0]
        assert header == "flag,id,user.name,user.tags[0],user.tags[1],user.tags[2]"
