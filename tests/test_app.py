from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Run the Streamlit app from a scratch directory so its log file stays out of the repo."""
    monkeypatch.chdir(tmp_path)
    at = AppTest.from_file(APP_PATH, default_timeout=60)
    at.run()
    return at


def _level_labels(at):
    return [expander.label for expander in at.expander if expander.label.startswith("Level ")]


def test_synthetic_run_shows_levels(app):
    app.button(key="run_apriori").click().run()
    assert not app.exception
    assert _level_labels(app)


def test_switching_dataset_clears_previous_results(app, tmp_path):
    app.button(key="run_apriori").click().run()
    assert _level_labels(app)

    data_file = tmp_path / "pq.csv"
    data_file.write_text("p,q\np,q\n", encoding="utf-8")
    app.radio(key="data_source").set_value("File path").run()
    app.text_input(key="data_path").set_value(str(data_file)).run()

    assert not app.exception
    assert [metric.value for metric in app.metric] == ["2", "2"]
    assert _level_labels(app) == []


def test_results_for_new_file_after_rerun(app, tmp_path):
    data_file = tmp_path / "pq.csv"
    data_file.write_text("p,q\np,q\n", encoding="utf-8")
    app.button(key="run_apriori").click().run()
    app.radio(key="data_source").set_value("File path").run()
    app.text_input(key="data_path").set_value(str(data_file)).run()
    app.button(key="run_apriori").click().run()

    assert _level_labels(app) == ["Level 1: 2 frequent itemsets", "Level 2: 1 frequent itemsets"]
