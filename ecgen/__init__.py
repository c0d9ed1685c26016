"""ecgen - generates C error-code enums and their message tables."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ecgen")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True

from ecgen.compiler.facade import generate  # noqa: E402
from ecgen.compiler.pipeline import generate_source  # noqa: E402

__all__ = ["generate", "generate_source", "__version__"]
