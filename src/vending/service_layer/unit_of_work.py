"""
Pattern Unit of Work.

Le Unit of Work (UoW) délimite une transaction autour de l'inventaire.
Les handlers l'utilisent comme context manager :
    with uow:
        # ... opérations sur uow.machines ...
        uow.commit()

Sans commit(), la sortie du bloc annule les modifications.
"""

from __future__ import annotations

import abc

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from vending import config
from vending.adapters import orm, repository


def default_session_factory() -> sessionmaker:
    """Crée l'engine configuré et s'assure que les tables existent."""
    engine = create_engine(config.get_db_uri())
    orm.metadata.create_all(engine)
    return sessionmaker(bind=engine)


class AbstractUnitOfWork(abc.ABC):
    """
    Interface abstraite du Unit of Work.

    Fournit l'inventaire `machines` et gère commit/rollback.
    Le rollback est automatique si commit() n'est pas appelé.
    """

    machines: repository.AbstractInventory

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args: object) -> None:
        self.rollback()

    def commit(self) -> None:
        self._commit()

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work sur un inventaire en mémoire.

    Les mutations s'appliquent directement aux objets Machine :
    commit et rollback n'ont rien à faire. L'attribut `committed`
    permet aux tests de vérifier que le commit a été demandé.
    """

    def __init__(self, machines: repository.InMemoryInventory | None = None):
        self.machines = machines or repository.InMemoryInventory()
        self.committed = False

    def _commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        pass


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    Implémentation concrète du UoW avec SQLAlchemy.

    Crée une session à l'entrée du context manager,
    la ferme à la sortie. Rollback automatique si pas de commit.
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory or default_session_factory()

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.session: Session = self.session_factory()
        self.machines = repository.SqlAlchemyInventory(self.session)
        return super().__enter__()

    def __exit__(self, *args: object) -> None:
        super().__exit__(*args)
        self.session.close()

    def _commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
