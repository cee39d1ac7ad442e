"""
Simulation en ligne de commande.

Génère un lot d'events aléatoires (ventes de 1 ou 2 produits,
réapprovisionnements de 3 ou 5), le fait traiter par un bus en
mémoire, puis affiche l'état des machines.

    vending-simulate --events 5 --seed 42
"""

from __future__ import annotations

import argparse
import logging
import random

from vending.domain import events
from vending.service_layer import bootstrap, handlers, unit_of_work

logger = logging.getLogger(__name__)

MACHINE_IDS = ["001", "002", "003"]


def random_machine(rng: random.Random) -> str:
    return rng.choice(MACHINE_IDS)


def random_event(rng: random.Random) -> events.Event:
    if rng.random() < 0.5:
        return events.Sale(quantity=rng.choice([1, 2]), machine_id=random_machine(rng))
    return events.Refill(amount=rng.choice([3, 5]), machine_id=random_machine(rng))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Simulation d'events de distributeurs")
    parser.add_argument("--events", type=int, default=5, help="taille du lot aléatoire")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="logs de debug")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    rng = random.Random(args.seed)
    bus = bootstrap.bootstrap(
        start_orm=False,
        uow=unit_of_work.InMemoryUnitOfWork(),
        machine_ids=MACHINE_IDS,
    )

    batch = [random_event(rng) for _ in range(args.events)]
    logger.info("Début de la simulation : %d event(s)", len(batch))
    bus.run_batch(batch)

    for machine in bus.uow.machines.all_machines():
        logger.info("Machine %s : stock %d", machine.id, machine.stock_level)

    bus.unsubscribe(events.Sale.kind, handlers.handle_sale)
    logger.info("Fin de la simulation")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
