"""Host integrations for the editing engine."""
