"""
Configuration partagée pour les tests.

Le mapping ORM est démarré une seule fois pour toute la session de tests.
Les tests unitaires n'en dépendent pas : une Machine mappée se comporte
comme un objet ordinaire tant qu'elle n'est attachée à aucune session.
"""

import pytest

from vending.adapters import orm


@pytest.fixture(scope="session", autouse=True)
def mappers():
    """Démarre le mapping ORM une fois pour toute la session."""
    orm.start_mappers()
