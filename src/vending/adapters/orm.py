"""
Mapping ORM avec SQLAlchemy (classical mapping).

La table est définie séparément, puis la classe Machine du domaine
est mappée dessus. Le modèle reste ainsi ignorant de la persistance.
"""

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.orm import registry

from vending.domain import model

metadata = MetaData()
mapper_registry = registry(metadata=metadata)

machines = Table(
    "machines",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("stock_level", Integer, nullable=False),
)

_mappers_started = False


def start_mappers() -> None:
    """
    Mappe Machine sur la table `machines`.

    Un mapper ne peut être déclaré qu'une fois par classe :
    les appels suivants sont sans effet.
    """
    global _mappers_started
    if _mappers_started:
        return
    mapper_registry.map_imperatively(model.Machine, machines)
    _mappers_started = True
