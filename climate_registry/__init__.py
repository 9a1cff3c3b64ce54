"""Climate-finance project registry: persistence and approval workflow."""
