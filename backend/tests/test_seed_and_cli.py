"""
Tests for seed data and the command-line interface.
"""

from typer.testing import CliRunner

from cli import app as cli_app
from rest_api.models import Division, KaratMaster
from rest_api.seed import SEED_DIVISIONS, SEED_KARATS, seed
from rest_api.services.domain import KaratService


runner = CliRunner()


class TestSeed:
    """Reference data seeding."""

    def test_seed_creates_divisions_and_karats(self, db_session):
        divisions, created = seed(db_session)

        expected = sum(len(rows) for rows in SEED_KARATS.values())
        assert divisions == len(SEED_DIVISIONS)
        assert created == expected
        assert db_session.query(KaratMaster).count() == expected

        gold = db_session.query(Division).filter_by(code="GOLD").one()
        codes = [k.code for k in KaratService(db_session).list_by_division(gold.id)]
        assert codes == sorted(code for code, *_ in SEED_KARATS["GOLD"])

    def test_seed_is_idempotent(self, db_session):
        seed(db_session)
        divisions, created = seed(db_session)

        assert created == 0
        assert db_session.query(Division).count() == len(SEED_DIVISIONS)


class TestCli:
    """Commands that need no database."""

    def test_version(self):
        result = runner.invoke(cli_app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bulk_status_rejects_unknown_status(self):
        result = runner.invoke(cli_app, ["bulk-status", "archived", "1", "2"])
        assert result.exit_code == 1
        assert "Status must be either" in result.output
