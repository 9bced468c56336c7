from typing import Optional
import os

def relativize(root_dir: Optional[str], path: str) -> str:
    """Display form of ``path``: relative to ``root_dir`` when one is configured."""
    if not root_dir:
        return path
    try:
        return os.path.relpath(path, root_dir)
    except ValueError:
        # Different drives on Windows.
        return path
