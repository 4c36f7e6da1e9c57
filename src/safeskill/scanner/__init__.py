"""Rule-matching engine and scoring model."""
