import logging
import random

from flask import Flask, jsonify, request, send_file

from config import Config
from errors import PersistenceError, ValidationError
from exports import XLSX_MIMETYPE, build_pdf, build_xlsx, report_filename
from logging_config import setup_logging
from models import CATEGORIES, DONORS, MUTABLE_FIELDS, TRANSACTION_TYPES, db
from seed_fake_data import seed_if_empty
from store import TransactionStore
from views import DashboardState, FilterState, current_month, today

logger = logging.getLogger(__name__)


# ============
# Utils
# ============

def transaction_fields(data):
    """Presence-only validation: every field must be there and truthy."""
    if not isinstance(data, dict) or not all(data.get(f) for f in MUTABLE_FIELDS):
        raise ValidationError("Missing required fields")
    return {f: data[f] for f in MUTABLE_FIELDS}


def filters_from_args(args):
    """Missing date/month args fall back to today and the current month."""
    try:
        return FilterState(
            mode=args.get("mode", "all"),
            search=args.get("search", ""),
            date=args.get("date") or today(),
            month=args.get("month") or current_month(),
            donor=args.get("donor") or None,
            description=args.get("description", ""),
            category=args.get("category") or None,
        )
    except ValueError as exc:
        raise ValidationError("Invalid filter") from exc


def state_from_args(store, args):
    state = DashboardState(transactions=store.list(), filters=filters_from_args(args))
    state.set_page(args.get("page", 1, type=int) or 1)
    return state


# ============
# Routes
# ============

def register_routes(app, store):

    @app.route("/")
    def home():
        return "Ledger API running!"

    @app.route("/api/transactions", methods=["GET"])
    def list_transactions():
        try:
            return jsonify(store.list())
        except PersistenceError:
            return jsonify({"error": "Failed to fetch transactions"}), 500

    @app.route("/api/transactions", methods=["POST"])
    def create_transaction():
        clean = transaction_fields(request.get_json(silent=True))
        try:
            txn = store.create(**clean)
        except PersistenceError:
            return jsonify({"error": "Failed to add transaction"}), 500
        return jsonify(txn), 201

    @app.route("/api/transactions/<int:id>", methods=["PUT"])
    def update_transaction(id):
        clean = transaction_fields(request.get_json(silent=True))
        try:
            txn = store.update(id, **clean)
        except PersistenceError:
            return jsonify({"error": "Failed to update transaction"}), 500
        # unknown ids are a silent no-op
        return jsonify(txn)

    @app.route("/api/transactions/<int:id>", methods=["DELETE"])
    def delete_transaction(id):
        try:
            store.delete(id)
        except PersistenceError:
            return jsonify({"error": "Failed to delete transaction"}), 500
        return "", 204

    @app.route("/api/options", methods=["GET"])
    def options():
        return jsonify({
            "categories": CATEGORIES,
            "donors": DONORS,
            "types": list(TRANSACTION_TYPES),
        })

    @app.route("/api/summary", methods=["GET"])
    def summary():
        state = state_from_args(store, request.args)
        return jsonify(state.summary())

    @app.route("/api/export_xlsx", methods=["GET"])
    def export_xlsx():
        filters = filters_from_args(request.args)
        xlsx_buffer = build_xlsx(store.list(), filters)
        return send_file(
            xlsx_buffer,
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=report_filename("xlsx"),
        )

    @app.route("/api/export_pdf", methods=["GET"])
    def export_pdf():
        state = state_from_args(store, request.args)
        pdf_buffer = build_pdf(state.filtered, state.filters.label())
        return send_file(
            pdf_buffer,
            mimetype="application/pdf",
            as_attachment=True,
            download_name=report_filename("pdf"),
        )

    @app.route("/docs", methods=["GET"])
    def docs():
        doc = {
            "API Documentation": {
                "GET /api/transactions": "List all transactions, newest first",
                "POST /api/transactions": "Create a transaction",
                "PUT /api/transactions/<id>": "Replace all fields of a transaction",
                "DELETE /api/transactions/<id>": "Delete a transaction",
                "GET /api/options": "Suggested categories, donor names and transaction types",
                "GET /api/summary": "Filtered page, totals, monthly chart, expense categories, recent activity",
                "GET /api/export_xlsx": "Export the ledger as a multi-sheet XLSX workbook",
                "GET /api/export_pdf": "Export a PDF summary of the filtered ledger",
            },
            "Filters": "mode=all|date|month|description, search, date=YYYY-MM-DD, month=YYYY-MM, "
                       "donor, description, category, page",
            "Notes": "Body fields: date, description, category, amount, type (income|expense).",
        }
        return jsonify(doc)


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        logger.info("rejected request %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc):
        return jsonify({"error": "Failed to fetch transactions"}), 500


# ================
# Config & DB Setup
# ================

def create_app(config_object=None, store=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    setup_logging(app.config["LOG_LEVEL"])

    db.init_app(app)
    store = store or TransactionStore(db)
    app.extensions["transaction_store"] = store

    with app.app_context():
        db.create_all()
        if app.config["SEED_ON_STARTUP"]:
            seed_if_empty(store, random.Random(app.config["SEED_RANDOM_SEED"]))

    register_routes(app, store)
    register_error_handlers(app)
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
