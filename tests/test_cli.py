"""
Tests for the command line driver. Each test runs main() against a small
JSON file and checks the printed output or the files written.
"""
import json
from datetime import timedelta

import pandas as pd
import pytest

from flightstats import config
from flightstats.cli import format_duration, main


def test_format_duration():
    """Durations print as H:MM, negatives with a leading minus."""
    assert format_duration(timedelta(hours=4)) == '4:00'
    assert format_duration(timedelta(hours=26, minutes=5)) == '26:05'
    assert format_duration(timedelta(minutes=-40)) == '-0:40'


def test_airline_command(flights_json, capsys):
    """Total and average for one airline, matched case-insensitively."""
    assert main(['--file', flights_json, 'airline', 'lufthansa']) == 0
    out = capsys.readouterr().out
    assert 'Total flight time for lufthansa: 4:00' in out
    assert 'Average flight time for lufthansa: 2:00' in out


def test_summary_command(flights_json, capsys):
    """The summary lists every airline and the overall average."""
    assert main(['--file', flights_json, 'summary']) == 0
    out = capsys.readouterr().out
    assert 'Lufthansa: 4:00' in out
    assert 'Royal Jordanian: 4:30' in out
    assert 'Average flight time across all airlines: 2.83 hours' in out


def test_route_command_exact_and_contains(flights_json, capsys):
    """Exact airport matching and the --contains substring mode."""
    assert main(['--file', flights_json, 'route', 'frankfurt', 'HALLE']) == 0
    assert 'Flights from frankfurt to HALLE: 2' in capsys.readouterr().out

    assert main(['--file', flights_json, 'route', 'queen', 'hal', '--contains']) == 0
    out = capsys.readouterr().out
    assert '130' in out
    assert '1 flight(s)' in out


def test_before_command(flights_json, capsys):
    """Only the 00:45 departure is before 01:00."""
    assert main(['--file', flights_json, 'before', '01:00']) == 0
    out = capsys.readouterr().out
    assert '130' in out
    assert '1 flight(s)' in out


def test_before_command_rejects_bad_time(flights_json):
    """An invalid time of day is an argparse usage error."""
    with pytest.raises(SystemExit):
        main(['--file', flights_json, 'before', 'midnight'])


def test_sort_command(flights_json, capsys):
    """Sorting by duration lists the shortest flight first."""
    assert main(['--file', flights_json, 'sort', 'duration', '--limit', '1']) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith('401')
    assert out[-1] == '3 flight(s)'


def test_export_command(flights_json, tmp_path, capsys):
    """Export writes one CSV row per projected flight."""
    output = tmp_path / 'out' / 'flights.csv'
    assert main(['--file', flights_json, 'export', str(output)]) == 0
    df = pd.read_csv(output)
    assert len(df) == 3
    assert list(df['iata_code']) == ['LH400', 'LH401', 'RJ130']


def test_plot_command(flights_json, tmp_path):
    """Both charts are written as HTML files."""
    out_dir = tmp_path / 'plots'
    assert main(['--file', flights_json, 'plot', str(out_dir)]) == 0
    assert (out_dir / 'airline_totals.html').exists()
    assert (out_dir / 'duration_vs_volume.html').exists()


def test_missing_file_exits_with_error(tmp_path, capsys):
    """A missing input file prints an error and returns 1."""
    assert main(['--file', str(tmp_path / 'missing.json'), 'summary']) == 1
    assert 'Error:' in capsys.readouterr().err


def test_strict_mode_fails_on_missing_schedule(flights_json, capsys):
    """With --strict the record without an arrival aborts the run."""
    assert main(['--file', flights_json, '--strict', 'summary']) == 1
    assert 'no scheduled arrival' in capsys.readouterr().err


def test_overnight_flag(tmp_path, capsys):
    """--overnight turns a negative duration into a next-day arrival."""
    document = [{
        "flight": {"number": "7", "iata": "XY7"},
        "airline": {"name": "Night Air"},
        "departure": {"airport": "A", "scheduled": "2024-01-01T23:00:00"},
        "arrival": {"airport": "B", "scheduled": "2024-01-01T01:00:00"},
    }]
    path = tmp_path / 'night.json'
    path.write_text(json.dumps(document), encoding='utf-8')

    assert main(['--file', str(path), 'airline', 'night air']) == 0
    assert 'Total flight time for night air: -22:00' in capsys.readouterr().out

    assert main(['--file', str(path), '--overnight', 'airline', 'night air']) == 0
    assert 'Total flight time for night air: 2:00' in capsys.readouterr().out


@pytest.mark.parametrize('setting, value', [
    ('MISSING_SCHEDULE_POLICY', 'ignore'),
    ('LOG_LEVEL', 'LOUD'),
])
def test_bad_setting_exits_with_error(flights_json, monkeypatch, capsys, setting, value):
    """An unusable environment setting is reported like any other input error."""
    monkeypatch.setattr(config, setting, value)
    assert main(['--file', flights_json, 'summary']) == 1
    assert f'Error: {setting}' in capsys.readouterr().err
