"""
Events du domaine.

Les events représentent des faits qui se sont produits sur une machine.
Ils sont immuables et portent un type (`kind`) qui sert de clé
de routage dans le message bus.

Le payload vient en premier, l'identifiant de machine en second :
Sale(8, "001") signifie « 8 produits vendus sur la machine 001 ».
"""

from dataclasses import dataclass
from typing import ClassVar


class Event:
    """Classe de base pour tous les events du domaine."""

    kind: ClassVar[str]
    machine_id: str


def _check_unsigned(value: object, label: str) -> None:
    """Un bool est un int en Python : on le refuse explicitement."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{label} doit être un entier positif ou nul : {value!r}")


@dataclass(frozen=True)
class Sale(Event):
    """Des produits ont été vendus sur une machine."""

    kind: ClassVar[str] = "sale"

    quantity: int
    machine_id: str

    def __post_init__(self) -> None:
        _check_unsigned(self.quantity, "La quantité vendue")


@dataclass(frozen=True)
class Refill(Event):
    """Une machine a été réapprovisionnée."""

    kind: ClassVar[str] = "refill"

    amount: int
    machine_id: str

    def __post_init__(self) -> None:
        _check_unsigned(self.amount, "La quantité de réapprovisionnement")


@dataclass(frozen=True)
class LowStockWarning(Event):
    """Le stock d'une machine vient de passer sous le seuil d'alerte."""

    kind: ClassVar[str] = "low_stock_warning"

    remaining: int
    machine_id: str


@dataclass(frozen=True)
class StockOk(Event):
    """Le stock d'une machine vient de repasser au-dessus du seuil d'alerte."""

    kind: ClassVar[str] = "stock_level_ok"

    remaining: int
    machine_id: str
