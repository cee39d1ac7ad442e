"""Tests du générateur d'events aléatoires et de la simulation CLI."""

import logging
import random

from vending.domain import events
from vending.entrypoints import simulation


class TestGénérateur:
    def test_payloads_possibles(self):
        rng = random.Random(0)
        for _ in range(200):
            event = simulation.random_event(rng)
            assert event.machine_id in {"001", "002", "003"}
            if isinstance(event, events.Sale):
                assert event.quantity in {1, 2}
            else:
                assert isinstance(event, events.Refill)
                assert event.amount in {3, 5}

    def test_reproductible_avec_une_graine(self):
        rng1, rng2 = random.Random(42), random.Random(42)
        lot1 = [simulation.random_event(rng1) for _ in range(5)]
        lot2 = [simulation.random_event(rng2) for _ in range(5)]
        assert lot1 == lot2


class TestMain:
    def test_simulation_complète(self, caplog):
        with caplog.at_level(logging.INFO, logger="vending.entrypoints.simulation"):
            code = simulation.main(["--events", "10", "--seed", "7"])

        assert code == 0
        assert "Machine 001" in caplog.text
        assert "Fin de la simulation" in caplog.text
