"""
masterdata_ingestion -- sheet sources and the row-to-record binding engine.

Data flows one way: sheet -> RowMapper -> FieldBinder -> coerce -> record.
Nothing here writes to a destination; the export package owns persistence.
"""
