import json
import logging

from ariadne import graphql_sync
from ariadne.explorer import ExplorerGraphiQL
from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS

from quotes_api.graphql_api import schema as default_schema

logger = logging.getLogger(__name__)

explorer_html = ExplorerGraphiQL(title="Quotes API").html(None)


def _query_data_from_args(args):
    """Build the GraphQL operation payload from GET query-string arguments."""
    data = {"query": args.get("query")}
    if args.get("variables"):
        data["variables"] = json.loads(args["variables"])
    if args.get("operationName"):
        data["operationName"] = args["operationName"]
    return data


def create_app(settings, db, schema=None):
    """Create the Flask application serving GraphQL over ``db``."""
    schema = schema or default_schema

    static_folder = None
    if settings.static_folder is not None:
        if settings.static_folder.is_dir():
            static_folder = str(settings.static_folder)
        else:
            logger.warning(f"Static folder {settings.static_folder} not found, static mount disabled")

    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app.config["DEBUG"] = settings.debug
    app.config["GRAPHIQL"] = settings.graphiql

    CORS(app, resources={r"/*": {"origins": settings.allowed_origins}})

    def execute(data):
        success, result = graphql_sync(
            schema,
            data,
            context_value={"db": db, "request": request},
            debug=app.debug,
        )
        return jsonify(result), 200 if success else 400

    @app.route("/graphql", methods=["GET"])
    def graphql_get():
        if "query" not in request.args:
            if app.config["GRAPHIQL"]:
                return explorer_html, 200
            return jsonify({"errors": [{"message": "Must provide query string."}]}), 400
        try:
            data = _query_data_from_args(request.args)
        except ValueError:
            return jsonify({"errors": [{"message": "Variables are invalid JSON."}]}), 400
        return execute(data)

    @app.route("/graphql", methods=["POST"])
    def graphql_post():
        return execute(request.get_json(silent=True))

    @app.route("/")
    def index():
        if app.static_folder:
            return send_from_directory(app.static_folder, "index.html")
        return "Welcome to the Quotes API!"

    @app.route("/health")
    def health_check():
        """A simple health check route."""
        return {"status": "OK"}

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({"error": "Method not allowed"}), 405, {"Allow": ", ".join(error.valid_methods or [])}

    @app.errorhandler(500)
    def internal_error(error):
        logger.error('Server Error: %s', error)
        return jsonify({"error": "Internal server error"}), 500

    return app
