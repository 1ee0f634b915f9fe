import io

import pytest

from json_objects_csv.converter import Json2Csv
from json_objects_csv.csv_io import make_csv_writer
from json_objects_csv.json_stream import iter_json_values
from json_objects_csv.scenarios import get_scenarios


def test_scenarios_have_names() -> None:
    scenarios = get_scenarios()
    assert scenarios
    assert all(scenario.name for scenario in scenarios)
    assert len({scenario.name for scenario in scenarios}) == len(scenarios)


@pytest.mark.parametrize("scenario", get_scenarios(), ids=lambda s: s.name)
def test_scenario_output(scenario) -> None:
    data = scenario.input.encode("utf-8")
    for convert in ("convert_from_reader", "convert_from_array"):
        source = data if convert == "convert_from_reader" else list(iter_json_values(data))
        out = io.StringIO()
        writer = make_csv_writer(out, scenario.delimiter)
        if scenario.error is not None:
            with pytest.raises(scenario.error):
                getattr(Json2Csv(scenario.config), convert)(source, writer)
            continue
        getattr(Json2Csv(scenario.config), convert)(source, writer)
        expected = "".join(f"{line}\n" for line in scenario.expected)
        assert out.getvalue() == expected
