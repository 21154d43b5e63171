"""REST clients for the catalog and lookup-tables services."""
