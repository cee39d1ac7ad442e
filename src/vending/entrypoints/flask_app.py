"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle convertit le JSON reçu
en events, les confie au message bus, et renvoie l'état des stocks.

L'API ne contient aucune logique métier. Le bus est construit au
premier appel, pour que l'import du module n'ouvre aucune base.
"""

from __future__ import annotations

from flask import Flask, jsonify, request

from vending.domain import events
from vending.service_layer import bootstrap, messagebus
from vending.views import views


app = Flask(__name__)
bus: messagebus.MessageBus | None = None

EVENT_TYPES: dict[str, type[events.Event]] = {
    cls.kind: cls
    for cls in (events.Sale, events.Refill, events.LowStockWarning, events.StockOk)
}


def get_bus() -> messagebus.MessageBus:
    global bus
    if bus is None:
        bus = bootstrap.bootstrap()
    return bus


def _event_from_json(data: dict) -> events.Event:
    """Construit un event à partir de { kind, machine_id, <payload> }."""
    payload = dict(data)
    kind = payload.pop("kind", None)
    event_type = EVENT_TYPES.get(kind)
    if event_type is None:
        raise ValueError(f"Type d'event inconnu : {kind}")
    return event_type(**payload)


@app.route("/events", methods=["POST"])
def events_endpoint():
    """
    POST /events
    Body JSON : { events: [ { kind, machine_id, quantity | amount | remaining }, ... ] }

    Traite le lot d'events (et leurs events dérivés) puis
    retourne le stock de chaque machine.
    """
    data = request.get_json(silent=True) or {}
    try:
        batch = [_event_from_json(item) for item in data["events"]]
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"message": f"Lot d'events invalide : {e}"}), 400

    current_bus = get_bus()
    current_bus.run_batch(batch)
    return jsonify(views.stock_levels(current_bus.uow)), 200


@app.route("/machines", methods=["GET"])
def machines_endpoint():
    """GET /machines : stock de toutes les machines."""
    return jsonify(views.stock_levels(get_bus().uow)), 200


@app.route("/machines/<machine_id>", methods=["GET"])
def machine_endpoint(machine_id: str):
    """GET /machines/<machine_id> : stock d'une machine."""
    result = views.machine_stock(machine_id, get_bus().uow)
    if result is None:
        return "not found", 404
    return jsonify(result), 200
