"""Infrastructure layer — file I/O for raw documents."""
