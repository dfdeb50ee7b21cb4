"""Provider packages consumed by the engine."""
