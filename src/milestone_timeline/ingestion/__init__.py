"""Note source adapters."""
