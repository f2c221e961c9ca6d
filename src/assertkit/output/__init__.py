"""Output layer — failure text formatting and Rich terminal rendering."""
