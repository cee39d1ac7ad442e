"""
Configuration de l'application.

Toutes les valeurs sont lues depuis les variables d'environnement,
avec une valeur par défaut raisonnable pour le développement local.
Seul le bootstrap consulte ce module.
"""

from __future__ import annotations

import os


def get_db_uri() -> str:
    return os.environ.get("VENDING_DB_URI", "sqlite:///vending.db")


def get_machine_ids() -> list[str]:
    """Identifiants des machines créées au démarrage (séparés par des virgules)."""
    raw = os.environ.get("VENDING_MACHINE_IDS", "001,002,003")
    return [machine_id.strip() for machine_id in raw.split(",") if machine_id.strip()]


def get_initial_stock() -> int:
    return int(os.environ.get("VENDING_INITIAL_STOCK", 10))


def get_low_stock_threshold() -> int:
    return int(os.environ.get("VENDING_LOW_STOCK_THRESHOLD", 3))


def get_smtp_settings() -> dict | None:
    """
    Paramètres SMTP pour les alertes de stock.

    Retourne None si aucun hôte n'est configuré : les alertes
    sont alors simplement journalisées.
    """
    host = os.environ.get("VENDING_SMTP_HOST")
    if not host:
        return None
    port = int(os.environ.get("VENDING_SMTP_PORT", 587))
    return dict(smtp_host=host, smtp_port=port)


def get_alert_email() -> str:
    return os.environ.get("VENDING_ALERT_EMAIL", "stock@example.com")
