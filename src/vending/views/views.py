"""
Views (lecture) sur l'état des machines.

Fonctions de lecture pure : elles ne publient aucun event et ne
modifient rien, elles renvoient des structures prêtes à sérialiser.
"""

from __future__ import annotations

from vending.service_layer import unit_of_work


def stock_levels(uow: unit_of_work.AbstractUnitOfWork) -> dict[str, int]:
    """Niveau de stock de chaque machine, indexé par identifiant."""
    with uow:
        return {machine.id: machine.stock_level for machine in uow.machines.all_machines()}


def machine_stock(machine_id: str, uow: unit_of_work.AbstractUnitOfWork) -> dict | None:
    with uow:
        machine = uow.machines.get(machine_id)
        if machine is None:
            return None
        return dict(machine_id=machine.id, stock_level=machine.stock_level)
