"""Run jscodeshift codemods over a source tree.

The engine runs as a subprocess.  Files it fails to parse do not abort
the run; they are scraped from its output and returned as
:class:`~chunkwire.errors.TransformError` records.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from pydantic import BaseModel

from chunkwire.config import Settings
from chunkwire.errors import CodemodExecutionError, TransformError

logger = logging.getLogger(__name__)

IGNORE_PATTERNS = [
    "**/node_modules/**",
    "**/.*/**",
    "**/dist/**",
    "**/build/**",
    "**/*.min.js",
    "**/*.bundle.js",
]

_ERROR_RE = re.compile(r"ERR (.+) Transformation error")
_SYNTAX_ERROR_RE = re.compile(r"SyntaxError: .+")


class TransformOptions(BaseModel):
    """Flags forwarded to jscodeshift.

    Args:
        dry: Do not write changes to disk.
        print: Print transformed files to stdout.
        verbose: Ask jscodeshift for verbose output.
        jscodeshift: One extra raw argument appended to the command.
    """

    dry: bool = False
    print: bool = False
    verbose: bool = False
    jscodeshift: str | None = None


def build_command(
    codemod_path: str | Path,
    target_path: str | Path,
    options: TransformOptions,
    settings: Settings | None = None,
) -> list[str]:
    settings = settings or Settings()
    command = [
        settings.npx_command,
        "jscodeshift",
        "-t",
        str(codemod_path),
        str(target_path),
        "--parser",
        settings.parser,
        *[f"--ignore-pattern={pattern}" for pattern in IGNORE_PATTERNS],
    ]

    if options.dry:
        command.append("--dry")
    if options.print:
        command.append("--print")
    if options.verbose:
        command.append("--verbose")
    if options.jscodeshift:
        command.append(options.jscodeshift)

    return command


def parse_errors(transform: str, output: str) -> list[TransformError]:
    """Pair each ``ERR <file> Transformation error`` line with a summary.

    Error markers and ``SyntaxError:`` lines are scanned independently:
    the n-th marker gets the n-th syntax error, wherever it appears.
    A marker with no syntax error left is dropped.  When a file fails
    with something other than a syntax error the pairs shift, so a
    summary can end up attached to the wrong file.
    """
    errors: list[TransformError] = []
    syntax_errors = _SYNTAX_ERROR_RE.finditer(output)

    for match in _ERROR_RE.finditer(output):
        syntax_error = next(syntax_errors, None)
        if syntax_error is None:
            continue
        errors.append(TransformError(
            transform=transform,
            filename=match.group(1),
            summary=syntax_error.group(0),
        ))

    return errors


def transform(
    codemod: str,
    source: str | Path,
    options: TransformOptions | None = None,
    log_status: bool = True,
    settings: Settings | None = None,
) -> list[TransformError]:
    """Apply *codemod* to every file under *source*.

    Args:
        codemod: Codemod name; resolved to ``<codemods_dir>/<codemod>.js``.
        source: File or directory to transform.
        options: Flags forwarded to jscodeshift.
        log_status: Log the run and each collected error.
        settings: Runner settings, read from the environment by default.

    Returns:
        One record per file the engine failed to transform.

    Raises:
        ConfigurationError: If no codemods directory is configured.
        CodemodExecutionError: If the engine cannot start or exits non-zero.
    """
    options = options or TransformOptions()
    settings = settings or Settings.from_env()

    if log_status:
        logger.info(f"Applying codemod '{codemod}': {source}")

    codemod_path = settings.codemod_path(codemod)
    target_path = Path(source).resolve()
    command = build_command(codemod_path, target_path, options, settings)

    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise CodemodExecutionError(command, e.returncode, e.output or "") from e
    except FileNotFoundError as e:
        raise CodemodExecutionError(command, None) from e

    errors = parse_errors(codemod, proc.stdout)
    if log_status:
        for err in errors:
            logger.error(
                f"Error applying codemod [codemod={err.transform}, "
                f"path={err.filename}, summary={err.summary}]"
            )
    return errors
