"""Domain modules: books, processing history and vectors."""
