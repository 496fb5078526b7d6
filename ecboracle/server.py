"""
Vulnerable encryption service.

Wraps an oracle in a small HTTP API; every request is answered with
AES-ECB(prefix || data || secret) under a key the client never sees.
"""

import base64
import binascii
import logging
import threading

from flask import Flask, jsonify, request

log = logging.getLogger(__name__)

HOST, PORT = "localhost", 1337


def create_app(oracle):
    """Flask app serving `oracle` on /api/encrypt"""
    app = Flask(__name__)
    stats = {"queries": 0}
    lock = threading.Lock()

    @app.route('/api/encrypt', methods=['POST'])
    def encrypt():
        """
        Encrypt attacker data
        Request: {"data": "base64"}
        Response: {"ciphertext": "base64"}
        """
        payload = request.get_json(silent=True)
        if not payload or 'data' not in payload:
            return jsonify({"error": "Missing 'data' field"}), 400

        try:
            data = base64.b64decode(payload['data'], validate=True)
        except (binascii.Error, TypeError, ValueError):
            return jsonify({"error": "'data' must be base64"}), 400

        with lock:
            stats["queries"] += 1
            query = stats["queries"]
        ciphertext = oracle(data)
        log.debug("query %d: %d bytes in, %d bytes out", query, len(data), len(ciphertext))

        return jsonify({"ciphertext": base64.b64encode(ciphertext).decode()})

    @app.route('/status', methods=['GET'])
    def status():
        return jsonify({
            "status": "running",
            "queries": stats["queries"],
            "service": "ECB Encryption Oracle"
        })

    return app
