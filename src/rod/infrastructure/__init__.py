"""Infrastructure layer — override file and terminal I/O."""
