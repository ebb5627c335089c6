import os


def ensure_dir(path):
    """Create `path` and any missing parents; an existing directory is fine."""
    os.makedirs(path, exist_ok=True)
