"""Simple Flask JSON API for D365 label lookup."""

import logging
import os

from flask import Flask, jsonify, request

from d365_labels.config import LabelConfig
from d365_labels.domain.enums import LabelStatus
from d365_labels.resolution.label_resolver import LabelResolver

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None) -> bool:
    return (value or '').strip().lower() in ('1', 'true', 'yes')


def create_app(resolver: LabelResolver | None = None) -> Flask:
    """Build the app around ``resolver`` (configured from env by default)."""
    app = Flask(__name__)
    resolver = resolver or LabelResolver(LabelConfig.from_env())
    app.config['LABEL_RESOLVER'] = resolver

    @app.route('/api/labels/<reference>')
    def get_label(reference: str):
        """Resolve one label reference."""
        language = request.args.get('language') or None
        include_description = _parse_bool(request.args.get('includeDescription'))
        result = resolver.resolve_one(reference, language)
        status = 503 if result.status is LabelStatus.NOT_CONFIGURED else 200
        return jsonify(result.to_dict(include_description=include_description)), status

    @app.route('/api/labels/batch', methods=['POST'])
    def get_labels_batch():
        """Resolve many label references in one request."""
        body = request.get_json(silent=True) or {}
        label_ids = body.get('labelIds')
        if label_ids is None:
            return jsonify({'error': 'labelIds parameter is required'}), 400
        if not isinstance(label_ids, list) or not all(isinstance(x, str) for x in label_ids):
            return jsonify({'error': 'labelIds must be an array of strings'}), 400
        if not label_ids:
            return jsonify({'error': 'labelIds must not be empty'}), 400

        batch = resolver.resolve_batch(label_ids, body.get('language') or None)
        return jsonify(batch.to_dict(label_ids)), 503 if batch.error else 200

    @app.route('/api/label-files/<package>/<model>')
    def list_label_files(package: str, model: str):
        """List label file ids of a model for a language."""
        language = request.args.get('language') or resolver.config.default_language
        listing = resolver.list_available_label_files(package, model, language)
        if listing.error:
            return jsonify({'error': listing.error}), 503
        return jsonify({'language': language, 'labelFiles': listing.items})

    @app.route('/api/label-files/<package>/<model>/<file_id>/languages')
    def list_label_languages(package: str, model: str, file_id: str):
        """List languages a model ships for one label file."""
        listing = resolver.list_available_languages(package, model, file_id)
        if listing.error:
            return jsonify({'error': listing.error}), 503
        return jsonify({'labelFileId': file_id, 'languages': listing.items})

    @app.route('/api/labels/cache', methods=['DELETE'])
    def clear_cache():
        """Drop parsed label files so disk edits are picked up."""
        return jsonify({'cleared': resolver.clear_cache()})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True, port=int(os.environ.get('PORT', 5002)))
