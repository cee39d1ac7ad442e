"""
Pattern Repository appliqué à l'inventaire des machines.

L'inventaire expose une interface de type collection (add, get, list)
ainsi que les opérations de stock utilisées par les handlers.

Le pattern Template Method est utilisé : les opérations de stock
sont écrites une seule fois dans la classe abstraite, les sous-classes
ne fournissent que l'accès brut aux machines (_add, _get, _list).
"""

from __future__ import annotations

import abc

from sqlalchemy.orm import Session

from vending.domain import model


class AbstractInventory(abc.ABC):
    """Interface abstraite de l'inventaire."""

    def add(self, machine: model.Machine) -> None:
        self._add(machine)

    def get(self, machine_id: str) -> model.Machine | None:
        return self._get(machine_id)

    def all_machines(self) -> list[model.Machine]:
        """Toutes les machines, triées par identifiant."""
        return sorted(self._list(), key=lambda machine: machine.id)

    def exists(self, machine_id: str) -> bool:
        return self._get(machine_id) is not None

    def get_stock(self, machine_id: str) -> int:
        return self._require(machine_id).stock_level

    def reduce_stock(self, machine_id: str, amount: int) -> None:
        """Retire `amount` du stock, sans plancher à zéro."""
        machine = self._require(machine_id)
        machine.stock_level -= amount

    def refill_stock(self, machine_id: str, amount: int) -> None:
        """Ajoute `amount` au stock, sans plafond."""
        machine = self._require(machine_id)
        machine.stock_level += amount

    def _require(self, machine_id: str) -> model.Machine:
        machine = self._get(machine_id)
        if machine is None:
            raise model.UnknownMachine(f"Machine inconnue : {machine_id}")
        return machine

    @abc.abstractmethod
    def _add(self, machine: model.Machine) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, machine_id: str) -> model.Machine | None:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> list[model.Machine]:
        raise NotImplementedError


class InMemoryInventory(AbstractInventory):
    """
    Inventaire en mémoire, indexé par identifiant de machine.

    C'est le comportement de référence : l'état vit le temps du processus.
    """

    def __init__(self, machines: list[model.Machine] | None = None):
        self._machines = {machine.id: machine for machine in machines or []}

    def _add(self, machine: model.Machine) -> None:
        self._machines[machine.id] = machine

    def _get(self, machine_id: str) -> model.Machine | None:
        return self._machines.get(machine_id)

    def _list(self) -> list[model.Machine]:
        return list(self._machines.values())


class SqlAlchemyInventory(AbstractInventory):
    """Implémentation concrète de l'inventaire avec SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    def _add(self, machine: model.Machine) -> None:
        self.session.add(machine)

    def _get(self, machine_id: str) -> model.Machine | None:
        return self.session.get(model.Machine, machine_id)

    def _list(self) -> list[model.Machine]:
        return self.session.query(model.Machine).all()
