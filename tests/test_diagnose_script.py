import json

from scripts import diagnose_seeds


def test_diagnose_reports_clean_seeds(capsys):
    code = diagnose_seeds.main(["--shape", "rectangular", "--spread", "packed", "--width", "80", "--height", "50", "42", "7"])
    out = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in out["results"]] == [42, 7]
    for r in out["results"]:
        assert r["ok"], r
        assert all(v == 0 for v in r["issues"].values())
        assert r["record"].startswith(f"{r['seed']},50,80,")
    assert code == 0
