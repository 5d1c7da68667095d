import json

from factories import make_company, make_passenger, make_trip

from turismoflow.application.run_route_plan import main
from turismoflow.infrastructure.company_profile_store import CompanyProfileStore
from turismoflow.infrastructure.record_loader import dump_trip


def _write_trips(path, trips):
    path.write_text(json.dumps([dump_trip(t, include_passengers=True) for t in trips]), encoding="utf-8")


def test_prints_manifest_in_pickup_order(tmp_path, capsys):
    trips_path = tmp_path / "trips.json"
    _write_trips(trips_path, [make_trip("t1", passengers=[
        make_passenger("B", name="Bruno", at=(0.0, 3.0), location="Hotel B"),
        make_passenger("A", name="Ana", at=(0.0, 1.0), location="Hotel A", phone="+55 85 1111"),
        make_passenger("X", name="Overbooked", at=(0.0, 0.5), is_overbooked=True),
    ])])
    company_path = tmp_path / "company.json"
    CompanyProfileStore(company_path).save(make_company(at=(0.0, 0.0)))

    code = main(["--trips", str(trips_path), "--trip-id", "t1", "--company", str(company_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert out.index("Ana") < out.index("Bruno")
    assert "Overbooked" not in out
    assert "https://wa.me/55851111" in out
    assert "&destination=Hotel%20B&waypoints=Hotel%20A" in out
    assert "Pendentes:  2" in out


def test_missing_file_or_trip_exits_1(tmp_path, capsys):
    assert main(["--trips", str(tmp_path / "none.json"), "--trip-id", "t1"]) == 1

    trips_path = tmp_path / "trips.json"
    _write_trips(trips_path, [make_trip("t1")])
    assert main(["--trips", str(trips_path), "--trip-id", "t2"]) == 1
    assert "t2" in capsys.readouterr().out
