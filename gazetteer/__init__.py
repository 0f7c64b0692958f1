# =============================================================================
# gazetteer/__init__.py
# =============================================================================
# This package contains ALL translation logic for the CHGIS gazetteer tools.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other MCP framework.
#   Validation, query building, extraction and rendering are plain Python
#   functions over plain dataclasses; the only side effect lives in
#   gazetteer/http.py, and the dispatcher receives it as a collaborator.
#
# THE PIPELINE (one tool call):
#   dispatcher → validation → query → http (GET) → extract → render → text
# =============================================================================
