"""Identity, storage, remote gateway and list reconciliation services."""
