from factories import make_company

from turismoflow.infrastructure.company_profile_store import CompanyProfileStore


def test_load_missing_file_returns_none(tmp_path):
    assert CompanyProfileStore(tmp_path / "company.json").load() is None


def test_save_then_load(tmp_path):
    store = CompanyProfileStore(tmp_path / "cfg" / "company.json")
    profile = make_company(at=(-3.7, -38.5))

    store.save(profile)

    assert store.load() == profile
    assert not (tmp_path / "cfg" / "company.json.tmp").exists()
