"""Output layer — CLI results rendered as text, Rich tables or JSON."""
