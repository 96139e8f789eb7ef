from __future__ import annotations


class SetupError(Exception):
    """Base exception class for all mcp-setup errors.

    Every failure the setup workflow knows how to describe derives from this
    class, so the CLI can catch them at a single boundary while unexpected
    system exceptions propagate with a traceback.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            await run_setup(project_dir=Path.cwd())
        except SetupError as e:
            logger.error("setup_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the SetupError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
