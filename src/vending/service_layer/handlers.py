"""
Handlers des events de stock.

- handle_sale / handle_refill : modifient le stock et peuvent émettre
  un event dérivé au franchissement du seuil d'alerte
- handle_low_stock_warning / handle_stock_ok : handlers terminaux,
  ils observent et notifient sans rien modifier

Le franchissement est détecté sur front : une vente qui laisse le
stock sous le seuil n'émet rien de plus qu'une seule alerte.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vending.domain import events, model

if TYPE_CHECKING:
    from vending.adapters.notifications import AbstractNotifications
    from vending.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def handle_sale(
    event: events.Sale,
    pending: list[events.Event],
    uow: AbstractUnitOfWork,
    threshold: int = model.LOW_STOCK_WARNING_THRESHOLD,
) -> None:
    """
    Décrémente le stock de la machine vendue.

    Émet LowStockWarning si le stock passe sous le seuil.
    Une machine inconnue est journalisée, sans mutation.
    """
    with uow:
        try:
            before = uow.machines.get_stock(event.machine_id)
            uow.machines.reduce_stock(event.machine_id, event.quantity)
        except model.UnknownMachine:
            logger.error("Vente sur une machine inconnue : %s", event.machine_id)
            return
        after = uow.machines.get_stock(event.machine_id)
        uow.commit()

    if model.crossed_below(before, after, threshold):
        pending.append(events.LowStockWarning(remaining=after, machine_id=event.machine_id))


def handle_refill(
    event: events.Refill,
    pending: list[events.Event],
    uow: AbstractUnitOfWork,
    threshold: int = model.LOW_STOCK_WARNING_THRESHOLD,
) -> None:
    """
    Incrémente le stock de la machine réapprovisionnée.

    Émet StockOk si le stock repasse au niveau du seuil ou au-dessus.
    """
    with uow:
        try:
            before = uow.machines.get_stock(event.machine_id)
            uow.machines.refill_stock(event.machine_id, event.amount)
        except model.UnknownMachine:
            logger.error("Réapprovisionnement d'une machine inconnue : %s", event.machine_id)
            return
        after = uow.machines.get_stock(event.machine_id)
        uow.commit()

    if model.crossed_above(before, after, threshold):
        pending.append(events.StockOk(remaining=after, machine_id=event.machine_id))


def handle_low_stock_warning(
    event: events.LowStockWarning,
    notifications: AbstractNotifications,
    destination: str,
) -> None:
    logger.warning(
        "Stock bas sur la machine %s : %d restant(s)", event.machine_id, event.remaining
    )
    notifications.send(
        destination=destination,
        message=f"Stock bas sur la machine {event.machine_id} : {event.remaining} restant(s)",
    )


def handle_stock_ok(
    event: events.StockOk,
    notifications: AbstractNotifications,
    destination: str,
) -> None:
    logger.info(
        "Stock rétabli sur la machine %s : %d en stock", event.machine_id, event.remaining
    )
    notifications.send(
        destination=destination,
        message=f"Stock rétabli sur la machine {event.machine_id} : {event.remaining} en stock",
    )
