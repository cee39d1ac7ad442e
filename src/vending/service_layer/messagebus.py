"""
Message Bus.

Le message bus associe un type d'event (`kind`) à une liste ordonnée
de handlers, et distribue chaque event publié à tous ses handlers.

Fonctionnement de run_batch :
1. Le lot initial d'events forme la file d'attente
2. Le bus retire l'event en tête de file et le publie
3. Chaque handler peut ajouter des events dérivés en fin de file
4. On recommence jusqu'à ce que la file soit vide

Les events dérivés sont donc traités après ceux déjà en attente
(parcours en largeur), jamais immédiatement après leur cause.

Un handler qui lève une exception interrompt la publication et le lot :
aucune isolation entre handlers. Les trous de configuration (aucun
abonné, désabonnement introuvable) sont seulement journalisés.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable

from vending.domain import events
from vending.service_layer import unit_of_work

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Registre d'abonnements et boucle de distribution.

    Le bus est construit par l'appelant (voir bootstrap) qui en reste
    propriétaire. Les dépendances (uow, notifications, seuil...) sont
    transmises aux handlers par introspection de leurs signatures.
    """

    def __init__(
        self,
        uow: unit_of_work.AbstractUnitOfWork,
        event_handlers: dict[str, list[Callable]] | None = None,
        dependencies: dict[str, Any] | None = None,
    ):
        self.uow = uow
        # Copie : subscribe/unsubscribe ne doivent pas modifier la table de routage fournie.
        self.event_handlers: dict[str, list[Callable]] = {
            kind: list(handlers) for kind, handlers in (event_handlers or {}).items()
        }
        self.dependencies = dependencies or {}

    def subscribe(self, kind: str, handler: Callable) -> None:
        """Ajoute un handler en fin de liste ; les doublons sont autorisés."""
        self.event_handlers.setdefault(kind, []).append(handler)

    def unsubscribe(self, kind: str, handler: Callable) -> None:
        """
        Retire toutes les occurrences de `handler` pour ce type d'event.

        La comparaison se fait par identité : deux handlers égaux mais
        distincts restent désabonnables indépendamment.
        """
        handlers = self.event_handlers.get(kind)
        if handlers is None:
            logger.warning("Désabonnement impossible : aucun abonnement pour %r", kind)
            return
        self.event_handlers[kind] = [h for h in handlers if h is not handler]

    def publish(
        self,
        event: events.Event,
        pending: list[events.Event] | None = None,
    ) -> None:
        """
        Distribue un event à ses handlers, dans l'ordre d'abonnement.

        `pending` est la file partagée où les handlers déposent les
        events dérivés. Sans file, les events dérivés sont perdus.
        """
        handlers = self.event_handlers.get(event.kind)
        if not handlers:
            logger.warning("Aucun abonné pour l'event %s", event)
            return
        if pending is None:
            pending = []
        for handler in list(handlers):
            logger.debug("Traitement de l'event %s avec %s", event, handler)
            self._call_handler(handler, event, pending)

    def run_batch(self, batch: Iterable[events.Event]) -> None:
        """
        Traite un lot d'events et tous les events qui en découlent.

        La file est une copie du lot : l'itérable de l'appelant n'est
        pas modifié. Elle est vidée en FIFO, les handlers y ajoutant
        leurs events dérivés en fin de file.
        """
        queue = list(batch)
        while queue:
            event = queue.pop(0)
            self.publish(event, queue)

    def _call_handler(
        self,
        handler: Callable,
        event: events.Event,
        pending: list[events.Event],
    ) -> Any:
        """
        Appelle un handler en injectant les dépendances nécessaires.

        Le premier paramètre est toujours l'event, passé en positional.
        Les suivants sont résolus par nom : `pending` reçoit la file
        partagée, `uow` le Unit of Work du bus, les autres sont cherchés
        dans le dictionnaire de dépendances (sinon leur défaut s'applique).
        """
        params = list(inspect.signature(handler).parameters)[1:]
        kwargs: dict[str, Any] = {}
        for name in params:
            if name == "pending":
                kwargs[name] = pending
            elif name == "uow":
                kwargs[name] = self.uow
            elif name in self.dependencies:
                kwargs[name] = self.dependencies[name]

        return handler(event, **kwargs)
