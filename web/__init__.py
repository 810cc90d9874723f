"""
Web application package for the mini-shogi engine.

Provides a FastAPI-based JSON API for querying legal moves, validating
played moves and asking the engine for its move.
"""
