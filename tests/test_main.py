import json
from datetime import date

import pytest
from PIL import Image

from calendar_logic import week_grid
from main import format_grid, main
from modifiers import Before

TODAY = date(2015, 9, 19)


def test_format_grid_marks_selected_and_disabled() -> None:
    anchor = date(2015, 9, 1)
    grid = week_grid(anchor, 0, False)
    text = format_grid(anchor, grid, {"selected": [date(2015, 9, 15)], "disabled": Before(date(2015, 9, 2))})
    lines = text.splitlines()
    assert lines[0].strip() == "September 2015"
    assert lines[1].split() == ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
    assert len(lines) == 2 + 5
    assert "15*" in lines[4]
    assert " 1x" in lines[2]
    assert "31x" in lines[2]  # Aug 31 padding is before the bound too
    assert " 2 " in lines[2]


def test_main_prints_month(capsys, tmp_path) -> None:
    settings = str(tmp_path / "settings.json")
    assert main(["2015-09", "--first-day", "1", "--settings", settings], today=TODAY) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1].split()[0] == "Mo"
    assert out[-1].split()[-1] == "4"  # grid ends on Sunday Oct 4


def test_main_uses_settings_file(capsys, tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"fixed_weeks": True, "first_day_of_week": 1}), encoding="utf-8")
    main(["2015-02", "--settings", str(path)], today=TODAY)
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2 + 6
    assert out[1].split()[0] == "Mo"


def test_main_saves_settings(tmp_path, capsys) -> None:
    path = tmp_path / "settings.json"
    main(["2015-09", "--first-day", "2", "--fixed-weeks", "--save-settings",
          "--settings", str(path)], today=TODAY)
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["first_day_of_week"] == 2
    assert stored["fixed_weeks"] is True


def test_main_defaults_to_current_month(capsys, tmp_path) -> None:
    main(["--settings", str(tmp_path / "none.json"), "--select", "2015-09-19"], today=TODAY)
    out = capsys.readouterr().out
    assert out.splitlines()[0].strip() == "September 2015"
    assert "19*" in out


def test_main_writes_png(tmp_path, capsys) -> None:
    png = tmp_path / "month.png"
    main(["2015-09", "--settings", str(tmp_path / "none.json"), "--png", str(png)], today=TODAY)
    with Image.open(png) as img:
        assert img.size == (7 * 32, 7 * 32)


@pytest.mark.parametrize("argv", [["2015/09"], ["--first-day", "7"], ["--select", "19-09-2015"]])
def test_main_rejects_bad_arguments(argv, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv, today=TODAY)
    assert exc.value.code == 2


def test_main_ignores_out_of_range_first_day_in_settings(capsys, tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"first_day_of_week": 9}), encoding="utf-8")
    main(["2015-09", "--settings", str(path)], today=TODAY)
    out = capsys.readouterr().out.splitlines()
    assert out[1].split()[0] == "Su"
    assert len(out) == 2 + 5
    assert all(len(row.split()) == 7 for row in out[2:])
