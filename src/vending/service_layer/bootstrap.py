"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le message bus avec toutes ses dépendances,
crée les machines manquantes, et abonne un handler par type d'event.

C'est le seul endroit de l'application qui connaît les
implémentations concrètes de chaque abstraction.
"""

from __future__ import annotations

from typing import Any

from vending import config
from vending.adapters import notifications, orm
from vending.domain import events, model
from vending.service_layer import handlers, messagebus, unit_of_work


def bootstrap(
    start_orm: bool = True,
    uow: unit_of_work.AbstractUnitOfWork | None = None,
    notifications_adapter: notifications.AbstractNotifications | None = None,
    machine_ids: list[str] | None = None,
    initial_stock: int | None = None,
    **extra_dependencies: Any,
) -> messagebus.MessageBus:
    """
    Construit et retourne un MessageBus configuré.

    En production, utilise SQLAlchemy et la configuration d'environnement.
    En test ou en simulation, on injecte un InMemoryUnitOfWork et des fakes.
    """
    if start_orm:
        orm.start_mappers()

    if uow is None:
        uow = unit_of_work.SqlAlchemyUnitOfWork()

    if notifications_adapter is None:
        smtp_settings = config.get_smtp_settings()
        if smtp_settings is None:
            notifications_adapter = notifications.LoggingNotifications()
        else:
            notifications_adapter = notifications.EmailNotifications(**smtp_settings)

    if machine_ids is None:
        machine_ids = config.get_machine_ids()
    if initial_stock is None:
        initial_stock = config.get_initial_stock()
    _seed_machines(uow, machine_ids, initial_stock)

    dependencies: dict[str, Any] = {
        "notifications": notifications_adapter,
        "threshold": config.get_low_stock_threshold(),
        "destination": config.get_alert_email(),
        **extra_dependencies,
    }

    return messagebus.MessageBus(
        uow=uow,
        event_handlers=EVENT_HANDLERS,
        dependencies=dependencies,
    )


def _seed_machines(
    uow: unit_of_work.AbstractUnitOfWork, machine_ids: list[str], initial_stock: int
) -> None:
    """Crée les machines absentes ; celles qui existent gardent leur stock."""
    with uow:
        for machine_id in machine_ids:
            if not uow.machines.exists(machine_id):
                uow.machines.add(model.Machine(machine_id, stock_level=initial_stock))
        uow.commit()


# --- Routage des events vers les handlers ---

EVENT_HANDLERS: dict[str, list] = {
    events.Sale.kind: [handlers.handle_sale],
    events.Refill.kind: [handlers.handle_refill],
    events.LowStockWarning.kind: [handlers.handle_low_stock_warning],
    events.StockOk.kind: [handlers.handle_stock_ok],
}
