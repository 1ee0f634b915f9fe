"""Run scenario definitions and write outputs to out/scenarios."""

from __future__ import annotations

from pathlib import Path

from json_objects_csv.csv_io import convert_file
from json_objects_csv.scenarios import get_scenarios


def main() -> None:
    out_dir = Path("out/scenarios")
    out_dir.mkdir(parents=True, exist_ok=True)

    for scenario in get_scenarios():
        scenario_dir = out_dir / scenario.name
        scenario_dir.mkdir(parents=True, exist_ok=True)

        input_path = scenario_dir / "input.json"
        input_path.write_text(scenario.input, encoding="utf-8")

        output_path = scenario_dir / "output.csv"
        if scenario.error is not None:
            try:
                convert_file(input_path, output_path, scenario.config, delimiter=scenario.delimiter)
            except scenario.error as exc:
                print(f"{scenario.name}: expected failure: {exc}")
                continue
            print(f"{scenario.name}: conversion unexpectedly succeeded")
            continue

        count = convert_file(input_path, output_path, scenario.config, delimiter=scenario.delimiter)
        print(f"{scenario.name}: wrote {count} row(s) to {output_path}")


if __name__ == "__main__":
    main()
