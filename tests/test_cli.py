"""Tests for the json-table command-line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from json_table.cli import main
from json_table.csv_io import read_csv
from json_table.errors import TransportError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("QUERY", "OPTIONS", "MAX_DEPTH"):
        monkeypatch.delenv(f"JSON_TABLE_{name}", raising=False)


@pytest.fixture
def people_file(tmp_path: Path) -> Path:
    path = tmp_path / "people.json"
    path.write_text(
        json.dumps({"people": [{"name": "Ada", "age": 36}, {"name": "Linus", "langs": ["c"]}]}),
        encoding="utf-8",
    )
    return path


def test_cli_writes_csv(tmp_path: Path, people_file: Path) -> None:
    """Test converting a file to CSV."""
    output = tmp_path / "out.csv"
    assert main(["--input", str(people_file), "--output", str(output)]) == 0
    assert read_csv(output) == [
        ["Name", "Age", "Langs"],
        ["Ada", "36", ""],
        ["Linus", "", "c"],
    ]


def test_cli_writes_json_with_query_and_options(tmp_path: Path, people_file: Path) -> None:
    """Test JSON output honours --query and --options."""
    output = tmp_path / "out.json"
    code = main(
        [
            "--input",
            str(people_file),
            "--output",
            str(output),
            "--query",
            "/people/name",
            "--options",
            "rawHeaders",
        ]
    )
    assert code == 0
    assert json.loads(output.read_text(encoding="utf-8")) == [
        ["/people/name"],
        ["Ada"],
        ["Linus"],
    ]


def test_cli_stdout(people_file: Path, capsys: pytest.CaptureFixture) -> None:
    """Test CSV goes to stdout without --output."""
    assert main(["--input", str(people_file), "--options", "noHeaders"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Ada,36,", "Linus,,c"]


def test_cli_strict_query(tmp_path: Path) -> None:
    """Test --strict-query switches to segment matching."""
    source = tmp_path / "in.json"
    source.write_text('{"a": 1, "ab": 2}', encoding="utf-8")
    output = tmp_path / "out.csv"
    main(["--input", str(source), "--output", str(output), "--query", "/a", "--options", "rawHeaders"])
    assert read_csv(output)[0] == ["/a", "/ab"]
    main(["--input", str(source), "--output", str(output), "--query", "/a", "--strict-query", "--options", "rawHeaders"])
    assert read_csv(output)[0] == ["/a"]


def test_cli_config_file(tmp_path: Path, people_file: Path) -> None:
    """Test settings are read from a YAML config."""
    config = tmp_path / "json-table.yml"
    config.write_text("query: /people/age\noptions: rawHeaders\n", encoding="utf-8")
    output = tmp_path / "out.csv"
    assert main(["--input", str(people_file), "--output", str(output), "--config", str(config)]) == 0
    assert read_csv(output) == [["/people/age"], ["36"]]


def test_cli_missing_config(tmp_path: Path, people_file: Path) -> None:
    """Test a missing config file exits with an error message."""
    with pytest.raises(SystemExit, match="config not found"):
        main(["--input", str(people_file), "--config", str(tmp_path / "missing.yml")])


def test_cli_error_table_exit_code(tmp_path: Path) -> None:
    """Test invalid JSON produces the error table and exit code 1."""
    source = tmp_path / "bad.json"
    source.write_text("{nope", encoding="utf-8")
    output = tmp_path / "out.csv"
    assert main(["--input", str(source), "--output", str(output)]) == 1
    rows = read_csv(output)
    assert rows[0] == ["Error"]
    assert len(rows) == 2


def test_cli_data_with_error_key_succeeds(tmp_path: Path) -> None:
    """Test a document whose only header is Error still exits 0."""
    source = tmp_path / "status.json"
    source.write_text('{"error": "none"}', encoding="utf-8")
    output = tmp_path / "out.csv"
    assert main(["--input", str(source), "--output", str(output)]) == 0
    assert read_csv(output) == [["Error"], ["none"]]


def test_cli_url_fetch_failure_exit_code(tmp_path: Path) -> None:
    """Test a failed fetch writes the error table and exits 1."""
    output = tmp_path / "out.csv"
    with patch("json_table.cli.fetch_json", side_effect=TransportError("Error getting data from x: HTTP 503")):
        assert main(["--url", "https://example.com", "--output", str(output)]) == 1
    assert read_csv(output) == [["Error"], ["Error getting data from x: HTTP 503"]]


def test_cli_url_passes_headers_and_auth() -> None:
    """Test --url forwards headers, basic auth and POST bodies."""
    with patch("json_table.cli.fetch_json") as mock_fetch:
        mock_fetch.return_value = {"ok": True}
        code = main(
            [
                "--url",
                "https://example.com/api",
                "--header",
                "Accept: application/json",
                "--user",
                "me:secret",
                "--post",
                "q=1",
                "--timeout",
                "4",
            ]
        )
    assert code == 0
    args, kwargs = mock_fetch.call_args
    assert args[0] == "https://example.com/api"
    assert kwargs["payload"] == "q=1"
    assert kwargs["timeout"] == 4.0
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["headers"]["Authorization"].startswith("Basic ")


def test_cli_bad_header() -> None:
    """Test malformed --header values are rejected."""
    with pytest.raises(SystemExit, match="NAME:VALUE"):
        main(["--url", "https://example.com", "--header", "novalue"])


def test_cli_requires_source() -> None:
    """Test either --input or --url is required."""
    with pytest.raises(SystemExit):
        main([])
