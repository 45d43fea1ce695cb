"""Run scenario definitions and write outputs to out/scenarios."""

from __future__ import annotations

import json
from pathlib import Path

from json_table.csv_io import write_csv
from json_table.importer import flatten_to_table
from json_table.scenarios import get_scenarios


def main() -> None:
    out_dir = Path("out/scenarios")
    out_dir.mkdir(parents=True, exist_ok=True)

    for scenario in get_scenarios():
        scenario_dir = out_dir / scenario.name
        scenario_dir.mkdir(parents=True, exist_ok=True)

        input_path = scenario_dir / "input.json"
        input_path.write_text(json.dumps(scenario.data, indent=2), encoding="utf-8")

        rows = flatten_to_table(scenario.data, scenario.query, scenario.options)

        output_path = scenario_dir / "output.csv"
        write_csv(rows, output_path)

        status = ""
        if scenario.expected is not None:
            status = " (matches expected)" if rows == scenario.expected else " (DIFFERS from expected)"
        print(f"{scenario.name}: wrote {output_path}{status}")


if __name__ == "__main__":
    main()
