import logging
import os
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from models import InvalidReceiptError, parse_receipt
from scoring import calculate_points
from store import ReceiptNotFoundError, ReceiptStore

HOST = os.environ.get("RECEIPT_PROCESSOR_HOST", "0.0.0.0")
PORT = int(os.environ.get("RECEIPT_PROCESSOR_PORT", "5000"))
INVALID_RECEIPT_DESCRIPTION = "The receipt is invalid"
RECEIPT_NOT_FOUND_DESCRIPTION = "No receipt found for that id"

receipts_blueprint = Blueprint("receipts", __name__)


def get_store() -> ReceiptStore:
    return current_app.extensions["receipt_store"]


@receipts_blueprint.errorhandler(InvalidReceiptError)
def handle_invalid_receipt(error: InvalidReceiptError):
    current_app.logger.warning("Rejected receipt: %s", error)
    return jsonify({"description": INVALID_RECEIPT_DESCRIPTION}), 400


@receipts_blueprint.errorhandler(ReceiptNotFoundError)
def handle_receipt_not_found(error: ReceiptNotFoundError):
    current_app.logger.info("No receipt found for id %s", error)
    # unknown ids are a 400, not a 404
    return jsonify({"description": RECEIPT_NOT_FOUND_DESCRIPTION}), 400


@receipts_blueprint.route('/receipts/process', methods=['POST'])
def process_receipt():
    """
    Router for receipt processing requests. The input JSON is validated and the
    receipt is kept in the application's store under a freshly generated id,
    which is returned to the user. Points are calculated on lookup.

    Returns:
        400 Error if input JSON is invalid
        200 OK and generated receipt id if input JSON is valid
    """
    receipt = parse_receipt(request.get_json(force=True, silent=True))
    receipt_id = get_store().put(receipt)
    current_app.logger.info("Stored receipt %s from %s", receipt_id, receipt.retailer)
    return jsonify({"id": receipt_id})


@receipts_blueprint.route('/receipts/<receipt_id>/points', methods=['GET'])
def get_points(receipt_id):
    """
    Router for receipt points requests. The input receipt id is used to look up
    its receipt in the application's store and the receipt is scored.

    Returns:
        400 Error if the receipt id is not found
        200 OK and the calculated points for the receipt if receipt id is present
    """
    receipt = get_store().get(receipt_id)
    return jsonify({"points": calculate_points(receipt)})


def create_app(store: Optional[ReceiptStore] = None) -> Flask:
    app = Flask(__name__)
    app.extensions["receipt_store"] = store if store is not None else ReceiptStore()
    app.register_blueprint(receipts_blueprint)
    return app


flask_app = create_app()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    flask_app.logger.setLevel(logging.INFO)
    flask_app.run(host=HOST, port=PORT, threaded=True)
    # threaded=True lets Flask handle requests concurrently, the store is locked per operation
