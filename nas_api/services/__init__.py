"""Identity core, path policy, and the file and share collaborators."""
