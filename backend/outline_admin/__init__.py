"""OUTLINE admin console: GPS art course catalog curation."""

__version__ = "0.1.0"
