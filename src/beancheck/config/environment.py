"""
Environment Variable Handling.

Loads a ``.env`` file with python-dotenv so ``BEANCHECK_*`` overrides can
live next to a project's test configuration.
"""

from pathlib import Path

from dotenv import load_dotenv

# Track whether dotenv has been loaded
_dotenv_loaded: bool = False


def ensure_dotenv_loaded(env_file: str = ".env") -> bool:
    """Ensure .env file is loaded into os.environ.

    Existing environment variables win over values from the file.

    Args:
        env_file: Path to .env file (relative or absolute)

    Returns:
        True if a .env file was found and loaded, False otherwise
    """
    global _dotenv_loaded

    if _dotenv_loaded:
        return True

    for env_path in (Path(env_file), Path.cwd() / env_file):
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            _dotenv_loaded = True
            return True

    # No .env file found, that's okay - use defaults
    _dotenv_loaded = True
    return False


def reset_environment() -> None:
    """Forget that .env was loaded. Useful for testing."""
    global _dotenv_loaded
    _dotenv_loaded = False
