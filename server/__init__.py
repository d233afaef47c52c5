"""
HTTP service for document analysis and analysis history
"""

import os
from dataclasses import replace
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from flasgger import Swagger, swag_from

from document_geometry import DocumentAnalyzer, ImageDecodeError
from history import AnalysisStore, StoreError
from .uploads import save_upload, remove_upload


SWAGGER_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "swagger")

MEGABYTE = (2 ** 10) ** 2

swagger_config = {
    "specs_route": "/docs/",
    "specs": [
        {
            "endpoint": 'apispec_1',
            "route": '/docs-json',
            "rule_filter": lambda rule: True,  # all in
            "model_filter": lambda tag: True,  # all in
        }
    ],
}


def _spec(name: str) -> str:
    return os.path.join(SWAGGER_FOLDER, name)


def create_app(
    store: Optional[AnalysisStore] = None,
    analyzer: Optional[DocumentAnalyzer] = None,
    upload_folder: Optional[str] = None
) -> Flask:
    """
    Build the Flask application.

    Args:
        store: History store (opened at constants.DATABASE_PATH if omitted)
        analyzer: Analyzer instance (default configuration if omitted)
        upload_folder: Where uploads are kept while being analyzed

    Returns:
        Configured Flask app
    """
    if store is None or upload_folder is None:
        import constants
        store = store or AnalysisStore(constants.DATABASE_PATH)
        upload_folder = upload_folder or constants.UPLOAD_FOLDER

    analyzer = analyzer or DocumentAnalyzer()

    app = Flask(__name__)

    # Set the maximum file size to 50MB
    app.config['MAX_CONTENT_LENGTH'] = 50 * MEGABYTE
    app.config['UPLOAD_FOLDER'] = upload_folder

    # Enable CORS for all routes
    CORS(app)
    Swagger(app, config=swagger_config, merge=True)

    @app.errorhandler(StoreError)
    def handle_store_error(e):
        return jsonify(message=str(e)), 500

    @app.route('/is-available', methods=['GET'])
    @swag_from(_spec("is-available.yml"))
    def is_available():
        return jsonify(isAvailable=True), 200

    @app.route('/analyze', methods=['POST'])
    @swag_from(_spec("analyze.yml"))
    def analyze():
        save = request.args.get('save', default="true").lower() == "true"
        file = request.files.get('file')

        if file is None or not file.filename:
            return jsonify(message="No file"), 400

        path = save_upload(file, app.config['UPLOAD_FOLDER'])
        try:
            result = analyzer.analyze_file(path)
        except ImageDecodeError as e:
            return jsonify(message=str(e)), 422
        finally:
            remove_upload(path)

        # Report the client's file name, not the temporary upload path
        result = replace(result, source_image_path=os.path.basename(file.filename))

        if not save:
            return jsonify(result.to_dict()), 200

        record_id = store.create(result)
        return jsonify(result.with_id(record_id).to_dict()), 201

    @app.route('/documents', methods=['GET'])
    @swag_from(_spec("documents.yml"))
    def list_documents():
        return jsonify([item.to_dict() for item in store.list_all()]), 200

    @app.route('/documents', methods=['DELETE'])
    @swag_from(_spec("clear-documents.yml"))
    def clear_documents():
        removed = store.clear()
        return jsonify(deleted=removed), 200

    @app.route('/documents/<int:record_id>', methods=['GET'])
    @swag_from(_spec("document.yml"))
    def get_document(record_id: int):
        item = store.get(record_id)
        if item is None:
            return jsonify(message="Document not found"), 404
        return jsonify(item.to_dict()), 200

    @app.route('/documents/<int:record_id>', methods=['DELETE'])
    @swag_from(_spec("delete-document.yml"))
    def delete_document(record_id: int):
        if not store.delete(record_id):
            return jsonify(message="Document not found"), 404
        return jsonify(deleted=1), 200

    return app
