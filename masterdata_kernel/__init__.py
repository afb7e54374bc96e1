"""
Master-data kernel.

Field types, record schema descriptors, record collections, typed
exceptions, structured logging and the SQLAlchemy base shared by the
ingestion and export packages.
"""

__version__ = "0.1.0"
