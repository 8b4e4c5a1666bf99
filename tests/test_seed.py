from pathlib import Path

import pytest

from app.db.seed import load_seed_yaml, seed_all

SEED_PATH = Path(__file__).resolve().parents[1] / "app" / "db" / "seed_data.yaml"


def test_seed_from_bundled_yaml(session, queries):
    created = seed_all(session=session, seed_path=SEED_PATH)

    assert created == {"customers": 1, "orders": 3}
    assert {c.email: c.order_count for c in queries.list_customers()} == {
        "amina@example.com": 2,
        "prospect@example.com": 0,
        "youssef@example.com": 1,
    }
    assert len(queries.list_orders()) == 3


def test_seed_can_be_run_twice(session, queries):
    seed_all(session=session, seed_path=SEED_PATH)
    again = seed_all(session=session, seed_path=SEED_PATH)

    assert again == {"customers": 0, "orders": 0}
    assert len(queries.list_orders()) == 3
    assert len(queries.list_customers()) == 3


def test_seed_skips_existing_customer(session, queries, tmp_path, consistency):
    consistency.create_customer("zoe@example.com")
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text("customers:\n  - zoe@example.com\n  - neo@example.com\n", encoding="utf-8")

    assert seed_all(session=session, seed_path=seed_file) == {"customers": 1, "orders": 0}
    assert [c.email for c in queries.list_customers()] == ["neo@example.com", "zoe@example.com"]


def test_load_seed_yaml_rejects_non_mapping_root(tmp_path):
    seed_file = tmp_path / "seed.yaml"
    seed_file.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_seed_yaml(seed_file)


def test_load_seed_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_yaml(tmp_path / "absent.yaml")
