import json

import pysos.cli as cli


def _write_points(path) -> None:
    path.write_text("1,1\n2,1\n1,2\n2,2\n5,8\n", encoding="utf-8")


def test_cli_prints_scores_sorted_by_descending_score(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)

    rc = cli.main(["--input", str(points), "--perplexity", "3", "--contamination", "0.2"])

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["n_points"] == 5
    assert payload["n_features"] == 2
    assert payload["config"]["perplexity"] == 3.0
    records = payload["scores"]
    assert [r["id"] for r in records][0] == 4
    assert records[0]["is_outlier"] is True
    assert all(a["score"] >= b["score"] for a, b in zip(records, records[1:]))
    assert payload["schema_version"] == 1


def test_cli_writes_report_with_config_and_top(tmp_path) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)
    config = tmp_path / "sos.json"
    config.write_text(json.dumps({"perplexity": 2, "max_iterations": 200}), encoding="utf-8")
    out = tmp_path / "out" / "report.json"

    rc = cli.main(
        [
            "--input",
            str(points),
            "--config",
            str(config),
            "--perplexity",
            "3",
            "--top",
            "2",
            "--output",
            str(out),
        ]
    )

    assert rc == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    # Explicit flags win over the config file.
    assert payload["config"]["perplexity"] == 3.0
    assert payload["config"]["max_iterations"] == 200
    assert len(payload["scores"]) == 2
    assert payload["scores"][0]["id"] == 4


def test_cli_evaluates_against_labels(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)
    labels = tmp_path / "labels.txt"
    labels.write_text("0\n0\n0\n0\n1\n", encoding="utf-8")

    rc = cli.main(["--input", str(points), "--perplexity", "3", "--labels", str(labels)])

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["evaluation"]["auroc"] == 1.0


def test_cli_reports_configuration_errors(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)

    # Default perplexity (30) is too large for five points.
    rc = cli.main(["--input", str(points)])

    assert rc == 1
    assert "perplexity" in capsys.readouterr().err


def test_cli_lists_registered_models(capsys) -> None:
    rc = cli.main(["--list-models"])

    assert rc == 0
    assert "sos" in capsys.readouterr().out.split()


def test_cli_rejects_unknown_model(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)

    rc = cli.main(["--input", str(points), "--perplexity", "3", "--model", "lof"])

    assert rc == 1
    assert "Unknown detector" in capsys.readouterr().err


def test_cli_saved_detector_labels_a_new_batch(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)
    saved = tmp_path / "models" / "sos.pkl"

    rc = cli.main(
        [
            "--input",
            str(points),
            "--perplexity",
            "3",
            "--contamination",
            "0.2",
            "--save-detector",
            str(saved),
        ]
    )
    assert rc == 0
    first = json.loads(capsys.readouterr().out)
    assert first["model"] == "sos"
    assert saved.is_file()

    batch = tmp_path / "batch.csv"
    batch.write_text("0,0\n1,0\n0,1\n1,1\n9,9\n", encoding="utf-8")
    rc = cli.main(["--input", str(batch), "--detector", str(saved)])

    assert rc == 0
    second = json.loads(capsys.readouterr().out)
    assert second["threshold"] == first["threshold"]
    assert second["config"]["perplexity"] == 3.0
    assert second["config"]["contamination"] == 0.2
    assert second["scores"][0]["id"] == 4
    assert second["scores"][0]["is_outlier"] is True


def test_cli_saved_detector_refuses_tuning_flags(tmp_path, capsys) -> None:
    points = tmp_path / "points.csv"
    _write_points(points)
    saved = tmp_path / "sos.pkl"
    assert cli.main(["--input", str(points), "--perplexity", "3", "--save-detector", str(saved)]) == 0
    capsys.readouterr()

    rc = cli.main(["--input", str(points), "--detector", str(saved), "--perplexity", "2"])

    assert rc == 1
    assert "--detector cannot be combined with --perplexity" in capsys.readouterr().err
