"""
Noteful Backend — Middleware Package
======================================

Middleware Chain (request order):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body carry it.
"""
