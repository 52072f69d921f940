"""Cart services and storage collaborators."""
