import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings", exc_type=ImportError)

from typer.testing import CliRunner

from remi.cli import app

runner = CliRunner()


@pytest.fixture
def invoke(tmp_path):
    base = ["--db", str(tmp_path / "nooks.db"), "--settings", str(tmp_path / "settings.json")]

    def _invoke(*args):
        return runner.invoke(app, [*base, *args])

    return _invoke


@pytest.fixture
def populated(invoke):
    for name in ("Gamma", "Alpha", "Beta"):
        assert invoke("create", name).exit_code == 0
    return invoke


def test_create_reports_new_nook(invoke):
    result = invoke("create", "Reading")

    assert result.exit_code == 0
    assert "Created nook 'Reading'" in result.output


def test_create_duplicate_selects_existing(populated):
    result = populated("create", "alpha")

    assert result.exit_code == 0
    assert "already exists" in result.output
    assert "Created" not in result.output


def test_list_is_sorted(populated):
    result = populated("list")

    assert result.exit_code == 0
    output = result.output
    assert output.index("Alpha") < output.index("Beta") < output.index("Gamma")


def test_list_empty(invoke):
    result = invoke("list")

    assert result.exit_code == 0
    assert "No nooks" in result.output


def test_list_filter(populated):
    result = populated("list", "--filter", "MM")

    assert "Gamma" in result.output
    assert "Alpha" not in result.output


def test_selection_persists_between_runs(populated):
    assert populated("select", "1").exit_code == 0
    assert "Alpha" in populated("current").output

    result = populated("next")
    assert "Selected 'Beta'" in result.output
    assert "Beta" in populated("current").output


def test_previous_wraps_around(populated):
    populated("select", "1")

    result = populated("previous")

    assert "Selected 'Gamma'" in result.output


def test_select_out_of_range(populated):
    result = populated("select", "9")

    assert result.exit_code == 1
    assert "No nook at position 9" in result.output


def test_current_without_selection(invoke):
    result = invoke("current")

    assert result.exit_code == 0
    assert "No nook selected" in result.output


def test_rename_and_delete(populated):
    result = populated("rename", "beta", "Bravo")
    assert result.exit_code == 0
    assert "Renamed 'Beta' to 'Bravo'" in result.output

    result = populated("delete", "Bravo")
    assert result.exit_code == 0
    assert "Bravo" not in populated("list").output


def test_rename_conflict_fails(populated):
    result = populated("rename", "Beta", "ALPHA")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_unknown_name_fails(populated):
    result = populated("delete", "Nope")

    assert result.exit_code == 1
    assert "No nook named 'Nope'" in result.output


def test_hotkeys_lists_bindings(invoke):
    result = invoke("hotkeys")

    assert result.exit_code == 0
    assert "Ctrl+Alt+1" in result.output
    assert "select #1" in result.output
