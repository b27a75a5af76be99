import os
from pathlib import Path

from pydantic import BaseModel

from chunkwire.errors import ConfigurationError


class Settings(BaseModel):
    """Runtime settings for the codemod runner.

    Build from the environment with :meth:`from_env`:

    - ``CHUNKWIRE_CODEMODS_DIR``: directory holding ``<codemod>.js`` files.
      No codemods ship with the package, so this is required before
      running :func:`chunkwire.codemod.transform`.
    - ``CHUNKWIRE_NPX``: launcher used to invoke ``jscodeshift``
    - ``CHUNKWIRE_PARSER``: parser passed to ``jscodeshift``
    """

    codemods_dir: Path | None = None
    npx_command: str = "npx"
    parser: str = "tsx"

    @classmethod
    def from_env(cls) -> "Settings":
        codemods_dir = os.getenv("CHUNKWIRE_CODEMODS_DIR")
        return cls(
            codemods_dir=Path(codemods_dir) if codemods_dir else None,
            npx_command=os.getenv("CHUNKWIRE_NPX", "npx"),
            parser=os.getenv("CHUNKWIRE_PARSER", "tsx"),
        )

    def codemod_path(self, codemod: str) -> Path:
        """Absolute path of ``<codemods_dir>/<codemod>.js``.

        Raises:
            ConfigurationError: If no codemods directory is configured.
        """
        if self.codemods_dir is None:
            raise ConfigurationError(
                "No codemods directory configured. "
                "Set CHUNKWIRE_CODEMODS_DIR or pass Settings(codemods_dir=...)"
            )
        return (self.codemods_dir / f"{codemod}.js").resolve()
