"""Domain layer: columns, schemas, rows and the error taxonomy."""
