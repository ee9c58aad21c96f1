"""Provider engine: growth policy, generations and change notifications."""
