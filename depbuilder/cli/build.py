"""Build command implementation."""

import logging
import time

from depbuilder.cli.common import prepare
from depbuilder.errors import BuilderError, CleanupError, InstallError

logger = logging.getLogger("depbuilder.cli.build")


def build_command(args) -> int:
    """Execute build command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    start_time = time.time()
    try:
        module, builder = prepare(args)
        builder.build(module, force=getattr(args, "force", False))
    except CleanupError as e:
        logger.error("Cleanup failed, build not attempted: %s", e)
        return 1
    except InstallError as e:
        logger.error("Install failed: %s", e)
        if e.stderr:
            logger.debug("Install stderr:\n%s", e.stderr)
        return 1
    except (BuilderError, FileNotFoundError, KeyError, ValueError) as e:
        logger.error("Build failed: %s", e)
        return 1

    logger.info("Built %s in %.2fs", module.name, time.time() - start_time)
    return 0
