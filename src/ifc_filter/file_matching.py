import logging
import hashlib
from pathlib import Path


def match_pattern_in_dir(dir: str, glob_pattern: str) -> list[Path]:
    """Search the given dir using the given "glob" pattern, return matched files in sorted order."""
    matches = Path(dir).glob(glob_pattern)
    return sorted(match for match in matches if match.is_file())


def hash_contents(path: Path, algorithm: str = "sha256") -> str:
    """Hash the file contents at the given path, return hex-encoded digest prefixed with the algorithm name."""
    logging.info(f"Computing content hash ({algorithm}) for file: {Path(path).as_posix()}")
    with open(path, "rb") as f:
        digest = hashlib.file_digest(f, algorithm)
    return f"{digest.name}:{digest.hexdigest()}"


def hash_existing(paths: list[str], algorithm: str = "sha256") -> dict[str, str]:
    """Hash each of the given paths that exists as a file, skip the rest."""
    return {path: hash_contents(Path(path), algorithm) for path in paths if Path(path).is_file()}
