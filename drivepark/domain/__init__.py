"""Domain vocabulary shared by the web front-end and the backend."""
