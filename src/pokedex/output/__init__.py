"""Output layer: turns a ServiceResult into text for the terminal."""
