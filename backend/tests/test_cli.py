"""Management CLI tests."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from stepwise import cli
from stepwise.database import Base
from stepwise.models.wizard import Wizard


@pytest.mark.unit
class TestCli:
    def test_list_wizards(self, capsys):
        cli.list_wizards()

        out = capsys.readouterr().out
        assert "onboarding" in out
        assert "/wizard/onboarding" in out

    def test_purge_stale_deletes_old_wizards(self, tmp_path, capsys):
        url = f"sqlite:///{tmp_path / 'wizards.db'}"
        engine = create_engine(url)
        Base.metadata.create_all(engine)
        old = datetime.utcnow() - timedelta(days=60)
        with Session(engine) as session:
            session.add_all([
                Wizard(wizard_type="onboarding", data={}, created_at=old, updated_at=old),
                Wizard(wizard_type="onboarding", data={"a": 1}),
            ])
            session.commit()

        assert cli.purge_stale(30, url=url) == 1

        with Session(engine) as session:
            remaining = session.execute(select(Wizard)).scalars().all()
        assert [w.data for w in remaining] == [{"a": 1}]
        assert "Purged 1 wizard(s)" in capsys.readouterr().out
        engine.dispose()
