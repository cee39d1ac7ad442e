"""
Tests d'intégration de l'inventaire SQLAlchemy avec SQLite en mémoire.

Ces tests vérifient que le mapping ORM fonctionne correctement :
- Sauvegarder et recharger une Machine
- Les mutations de stock survivent à un commit
- Le Unit of Work annule ce qui n'est pas commité
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from vending.adapters import orm, repository
from vending.domain import events
from vending.domain.model import Machine, UnknownMachine
from vending.service_layer import bootstrap, unit_of_work


@pytest.fixture
def session_factory():
    """Crée une fabrique de sessions SQLite en mémoire avec les tables."""
    engine = create_engine("sqlite:///:memory:")
    orm.metadata.create_all(engine)
    return sessionmaker(bind=engine)


class TestSqlAlchemyInventory:
    def test_sauvegarder_et_recharger_une_machine(self, session_factory):
        session = session_factory()
        repo = repository.SqlAlchemyInventory(session)
        repo.add(Machine("001", 7))
        session.commit()

        rechargée = repository.SqlAlchemyInventory(session_factory()).get("001")
        assert rechargée is not None
        assert rechargée.stock_level == 7

    def test_get_retourne_none_si_inexistante(self, session_factory):
        repo = repository.SqlAlchemyInventory(session_factory())
        assert repo.get("INEXISTANTE") is None
        assert not repo.exists("INEXISTANTE")

    def test_reduce_stock_persisté(self, session_factory):
        session = session_factory()
        repo = repository.SqlAlchemyInventory(session)
        repo.add(Machine("001", 10))
        session.commit()

        repo.reduce_stock("001", 12)
        session.commit()

        assert repository.SqlAlchemyInventory(session_factory()).get_stock("001") == -2

    def test_machine_inconnue(self, session_factory):
        repo = repository.SqlAlchemyInventory(session_factory())
        with pytest.raises(UnknownMachine):
            repo.refill_stock("999", 3)

    def test_all_machines(self, session_factory):
        session = session_factory()
        repo = repository.SqlAlchemyInventory(session)
        for machine_id in ("002", "001"):
            repo.add(Machine(machine_id))
        session.commit()

        assert [m.id for m in repo.all_machines()] == ["001", "002"]


class TestSqlAlchemyUnitOfWork:
    def test_rollback_sans_commit(self, session_factory):
        uow = unit_of_work.SqlAlchemyUnitOfWork(session_factory)
        with uow:
            uow.machines.add(Machine("001"))
            uow.commit()

        with uow:
            uow.machines.reduce_stock("001", 5)

        with uow:
            assert uow.machines.get_stock("001") == 10

    def test_bus_complet_sur_sqlite(self, session_factory):
        uow = unit_of_work.SqlAlchemyUnitOfWork(session_factory)
        bus = bootstrap.bootstrap(
            start_orm=False, uow=uow, machine_ids=["001", "002"], initial_stock=10
        )
        alertes = []
        bus.subscribe(events.LowStockWarning.kind, alertes.append)

        bus.run_batch([events.Sale(8, "001"), events.Refill(4, "002")])

        with uow:
            assert uow.machines.get_stock("001") == 2
            assert uow.machines.get_stock("002") == 14
        assert alertes == [events.LowStockWarning(2, "001")]

    def test_bootstrap_ne_réinitialise_pas_les_machines_existantes(self, session_factory):
        uow = unit_of_work.SqlAlchemyUnitOfWork(session_factory)
        with uow:
            uow.machines.add(Machine("001", 4))
            uow.commit()

        bootstrap.bootstrap(start_orm=False, uow=uow, machine_ids=["001"], initial_stock=10)

        with uow:
            assert uow.machines.get_stock("001") == 4
