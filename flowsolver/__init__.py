"""flowsolver — sequential multi-pair grid routing for flow-style puzzles.

Subpackages:
  solver   Grid model, search engine, sequential router, serialization.
  web      FastAPI server exposing solve runs as JSON.
"""
