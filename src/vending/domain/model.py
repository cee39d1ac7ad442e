"""
Modèle de domaine pour le stock des distributeurs.

Une Machine est l'unité d'inventaire : elle a une identité stable
et un niveau de stock mutable. Les règles de franchissement du
seuil d'alerte vivent aussi ici, indépendamment du message bus.
"""

from __future__ import annotations

DEFAULT_STOCK_LEVEL = 10
LOW_STOCK_WARNING_THRESHOLD = 3


class UnknownMachine(Exception):
    """Levée quand un identifiant de machine n'existe pas dans l'inventaire."""
    pass


class Machine:
    """
    Entité représentant un distributeur.

    L'égalité et le hash sont basés sur l'identifiant, pas sur le stock.
    Le stock n'est ni borné à zéro ni plafonné : une vente plus grande
    que le stock disponible le rend négatif.
    """

    def __init__(self, id: str, stock_level: int = DEFAULT_STOCK_LEVEL):
        self.id = id
        self.stock_level = stock_level

    def __repr__(self) -> str:
        return f"<Machine {self.id} stock={self.stock_level}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def crossed_below(before: int, after: int, threshold: int) -> bool:
    """Vrai seulement au passage de >= seuil à < seuil (front descendant)."""
    return before >= threshold and after < threshold


def crossed_above(before: int, after: int, threshold: int) -> bool:
    """Vrai seulement au passage de < seuil à >= seuil (front montant)."""
    return before < threshold and after >= threshold
